"""Session tokens and password hashing.

Access and refresh tokens are HS256 JWTs whose subject is the user id.
Passwords are bcrypt hashes with the cost factor from settings.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

import bcrypt
from jose import JWTError, jwt

from devportal.config import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    pass


class TokenInvalidError(TokenError):
    pass


def _encode(
    subject: Union[str, int],
    token_type: str,
    lifetime: timedelta,
    additional_claims: Optional[dict[str, Any]] = None,
) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(subject),
        "type": token_type,
        "iat": now,
        "nbf": now,
        "exp": now + lifetime,
    }
    if additional_claims:
        claims.update(additional_claims)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    subject: Union[str, int],
    additional_claims: Optional[dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a short-lived access token.

    Args:
        subject: User id.
        additional_claims: Extra claims, e.g. ``{"role": "admin"}``.
        expires_delta: Override for the configured lifetime.
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return _encode(subject, ACCESS_TOKEN_TYPE, lifetime, additional_claims)


def create_refresh_token(
    subject: Union[str, int],
    additional_claims: Optional[dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a long-lived token that can only be exchanged for a new pair."""
    lifetime = expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days)
    return _encode(subject, REFRESH_TOKEN_TYPE, lifetime, additional_claims)


def create_token_pair(
    subject: Union[str, int],
    additional_claims: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Create an access/refresh pair shaped like ``TokenResponse``."""
    return {
        "access_token": create_access_token(subject, additional_claims),
        "refresh_token": create_refresh_token(subject, additional_claims),
        "token_type": "bearer",
        "expires_in": settings.jwt_access_token_expire_minutes * 60,
    }


def decode_token(token: str, verify_exp: bool = True) -> dict[str, Any]:
    """Decode a token and check its signature.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is malformed or badly signed.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": verify_exp},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except JWTError as e:
        raise TokenInvalidError(f"Invalid token: {e}")


def verify_token(token: str, token_type: Optional[str] = None) -> dict[str, Any]:
    """Decode a token and, if given, require a specific ``type`` claim."""
    payload = decode_token(token)
    if token_type and payload.get("type") != token_type:
        raise TokenInvalidError(
            f"Invalid token type. Expected {token_type}, got {payload.get('type')}"
        )
    if not payload.get("sub"):
        raise TokenInvalidError("Token missing subject claim")
    return payload


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a password against a stored hash; accounts without a hash never match."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False
