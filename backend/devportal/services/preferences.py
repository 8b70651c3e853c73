"""Dashboard preferences: one JSON document per user, merged over defaults."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.models import UserPreferences
from devportal.schemas.preferences import UserPreferenceSettings, UserPreferenceUpdate

logger = logging.getLogger(__name__)


class PreferencesService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _row(self, user_id: int):
        return await self.db.scalar(
            select(UserPreferences).where(UserPreferences.user_id == user_id)
        )

    async def get(self, user_id: int) -> UserPreferenceSettings:
        """Stored preferences, with defaults for anything never set."""
        row = await self._row(user_id)
        stored = row.preferences if row is not None else {}
        known = {key: value for key, value in stored.items() if key in UserPreferenceSettings.model_fields}
        return UserPreferenceSettings.model_validate(known)

    async def update(self, user_id: int, changes: UserPreferenceUpdate) -> UserPreferenceSettings:
        """Merge the provided fields into the stored document."""
        current = await self.get(user_id)
        merged = current.model_copy(update=changes.model_dump(exclude_unset=True, exclude_none=True))
        document = merged.model_dump(mode="json")

        row = await self._row(user_id)
        if row is None:
            self.db.add(UserPreferences(user_id=user_id, preferences=document))
        else:
            # new dict so the JSON column registers the change
            row.preferences = document
        await self.db.commit()
        logger.info(f"Updated preferences for user {user_id}")
        return merged

    async def card_order(self, user_id: int) -> list[str]:
        return (await self.get(user_id)).card_order
