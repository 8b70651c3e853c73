"""Authentication dependencies for FastAPI endpoints.

Every per-user operation takes its user from ``get_current_user``; the id
is never read from the request body or query.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.auth.jwt import (
    ACCESS_TOKEN_TYPE,
    TokenError,
    TokenExpiredError,
    verify_token,
)
from devportal.database import get_db
from devportal.middleware.error_handler import ForbiddenException, UnauthorizedException
from devportal.models import User, UserRole

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    scheme_name="JWT",
    auto_error=False,
)


async def _load_user(db: AsyncSession, token: str) -> User:
    try:
        payload = verify_token(token, token_type=ACCESS_TOKEN_TYPE)
    except TokenExpiredError:
        raise UnauthorizedException("Token has expired")
    except TokenError:
        raise UnauthorizedException("Could not validate credentials")

    try:
        user_id = int(payload["sub"])
    except ValueError:
        raise UnauthorizedException("Could not validate credentials")

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        logger.info(f"Rejected token for missing or inactive user {user_id}")
        raise UnauthorizedException("Could not validate credentials")
    return user


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the bearer token to an active user, or fail with 401."""
    if not token:
        raise UnauthorizedException()
    return await _load_user(db, token)


async def get_optional_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[User]:
    """Like ``get_current_user`` but returns None for anonymous or bad tokens.

    Used by the read-only content endpoints, which work without a session
    and only add favorite flags and stored keys when one is present.
    """
    if not token:
        return None
    try:
        return await _load_user(db, token)
    except UnauthorizedException:
        return None


def require_role(*allowed_roles: UserRole):
    """Dependency factory restricting an endpoint to the given roles.

    Example:
        @router.post("/agents", dependencies=[Depends(require_role(UserRole.ADMIN))])
    """

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed_roles:
            raise ForbiddenException(
                "Access denied",
                required_role=",".join(role.value for role in allowed_roles),
            )
        return current_user

    return role_checker


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
AdminUser = Annotated[User, Depends(require_role(UserRole.ADMIN))]
