"""Authentication module for DevPortal.

JWT session tokens, bcrypt password hashing and the FastAPI dependencies
that turn a bearer token into a ``User``.
"""

from devportal.auth.dependencies import (
    AdminUser,
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_optional_user,
    require_role,
)
from devportal.auth.jwt import (
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
    hash_password,
    verify_password,
    verify_token,
)

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "create_token_pair",
    "verify_token",
    "decode_token",
    "hash_password",
    "verify_password",
    "get_current_user",
    "get_optional_user",
    "require_role",
    "CurrentUser",
    "OptionalUser",
    "AdminUser",
]
