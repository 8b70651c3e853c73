"""Stored API key schemas. Secrets are accepted but never returned."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import BaseSchema


class ApiKeyCreate(BaseSchema):
    provider: str = Field(..., min_length=1, max_length=50, description="e.g. github, bedrock, vercel")
    key_name: str = Field(..., min_length=1, max_length=255)
    secret: str = Field(..., min_length=10, description="The raw key, stored encrypted")

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        return v.lower()


class ApiKeyResponse(BaseSchema):
    id: int
    provider: str
    key_name: str
    masked_key: str
    is_active: bool
    last_used: Optional[datetime] = None
    created_at: Optional[datetime] = None
