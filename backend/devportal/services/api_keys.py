"""Encrypted storage of users' third-party API keys.

Secrets are encrypted with Fernet. The key comes from
``API_KEY_ENCRYPTION_KEY`` when set; otherwise it is derived from the JWT
secret with PBKDF2, so rotating the JWT secret makes stored keys
unreadable.
"""

import base64
import hashlib
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.config import settings
from devportal.middleware.error_handler import NotFoundException
from devportal.models import ApiKey
from devportal.schemas.api_keys import ApiKeyCreate, ApiKeyResponse

logger = logging.getLogger(__name__)

_KDF_ITERATIONS = 100_000


@lru_cache()
def get_fernet() -> Fernet:
    if settings.api_key_encryption_key:
        return Fernet(settings.api_key_encryption_key.encode())
    salt = hashlib.sha256(f"{settings.app_name}-api-keys-v1".encode()).digest()
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=_KDF_ITERATIONS,
    )
    return Fernet(base64.urlsafe_b64encode(kdf.derive(settings.jwt_secret_key.encode())))


def encrypt_secret(secret: str) -> str:
    return get_fernet().encrypt(secret.encode()).decode()


def decrypt_secret(token: str) -> str:
    return get_fernet().decrypt(token.encode()).decode()


def mask_secret(last_four: str) -> str:
    return f"****{last_four}"


def to_response(api_key: ApiKey) -> ApiKeyResponse:
    return ApiKeyResponse(
        id=api_key.id,
        provider=api_key.provider,
        key_name=api_key.key_name,
        masked_key=mask_secret(api_key.last_four),
        is_active=api_key.is_active,
        last_used=api_key.last_used,
        created_at=api_key.created_at,
    )


class ApiKeyService:
    """Per-user key operations; every query is scoped to ``user_id``."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_keys(self, user_id: int) -> list[ApiKey]:
        result = await self.db.execute(
            select(ApiKey)
            .where(ApiKey.user_id == user_id)
            .order_by(ApiKey.provider, ApiKey.created_at.desc(), ApiKey.id.desc())
        )
        return list(result.scalars().all())

    async def create_key(self, user_id: int, payload: ApiKeyCreate) -> ApiKey:
        api_key = ApiKey(
            user_id=user_id,
            provider=payload.provider,
            key_name=payload.key_name,
            encrypted_key=encrypt_secret(payload.secret),
            last_four=payload.secret[-4:],
        )
        self.db.add(api_key)
        await self.db.commit()
        logger.info(f"Stored {payload.provider} key {api_key.id} for user {user_id}")
        return api_key

    async def delete_key(self, user_id: int, key_id: int) -> None:
        api_key = await self.db.scalar(
            select(ApiKey).where(ApiKey.id == key_id, ApiKey.user_id == user_id)
        )
        if api_key is None:
            raise NotFoundException("API key not found", resource_type="api_key", resource_id=key_id)
        await self.db.delete(api_key)
        await self.db.commit()

    async def resolve_secret(self, user_id: int, provider: str) -> Optional[str]:
        """Plaintext of the newest active key for ``provider``, or None.

        Marks the key as used. A key that no longer decrypts is skipped.
        """
        result = await self.db.execute(
            select(ApiKey)
            .where(
                ApiKey.user_id == user_id,
                ApiKey.provider == provider.lower(),
                ApiKey.is_active.is_(True),
            )
            .order_by(ApiKey.created_at.desc(), ApiKey.id.desc())
        )
        for api_key in result.scalars():
            try:
                secret = decrypt_secret(api_key.encrypted_key)
            except InvalidToken:
                logger.warning(f"API key {api_key.id} could not be decrypted; skipping")
                continue
            api_key.last_used = datetime.now(timezone.utc)
            await self.db.commit()
            return secret
        return None
