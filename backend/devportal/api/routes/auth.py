"""Authentication routes: registration, password login, token refresh."""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.auth import CurrentUser, create_token_pair, hash_password, verify_password, verify_token
from devportal.auth.jwt import REFRESH_TOKEN_TYPE, TokenError
from devportal.database import get_db
from devportal.middleware.error_handler import ConflictException, UnauthorizedException
from devportal.models import User
from devportal.schemas.auth import (
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

PASSWORD_LOGIN = "password"


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(**create_token_pair(user.id, {"role": user.role.value}))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Create a password account."""
    email = payload.email.lower()
    if await db.scalar(select(User.id).where(User.email == email)):
        raise ConflictException("Email already registered", conflicting_field="email")

    user = User(
        email=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
        login_method=PASSWORD_LOGIN,
    )
    db.add(user)
    await db.commit()
    logger.info(f"Registered user {user.id}")
    return user


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Exchange email and password for an access/refresh token pair."""
    user = await db.scalar(select(User).where(User.email == payload.email.lower()))
    if user is None or not user.is_active or not verify_password(payload.password, user.password_hash):
        raise UnauthorizedException("Incorrect email or password")

    user.last_signed_in = datetime.now(timezone.utc)
    user.login_method = PASSWORD_LOGIN
    await db.commit()
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    payload: RefreshTokenRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    try:
        claims = verify_token(payload.refresh_token, token_type=REFRESH_TOKEN_TYPE)
        user_id = int(claims["sub"])
    except (TokenError, ValueError):
        raise UnauthorizedException("Invalid refresh token")

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("Invalid refresh token")
    return _issue_tokens(user)


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUser) -> User:
    return current_user
