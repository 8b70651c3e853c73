"""Per-user favorites.

Every method takes the owning ``user_id`` explicitly; routes pass the id
of the authenticated user and nothing else. Database failures are logged
and reported through the ``success``/``error`` fields of the result
rather than raised, so a broken favorites table never blanks the
dashboard.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.models import FavoriteContentType, UserFavorite
from devportal.schemas.common import SuccessResponse
from devportal.schemas.favorites import (
    CreateUserFavorite,
    FavoriteCountResponse,
    FavoriteListResponse,
    FavoriteStatusResponse,
    GetUserFavorites,
    ToggleFavoriteResponse,
    UserFavoriteResponse,
)

logger = logging.getLogger(__name__)

ALREADY_FAVORITED = "Already added to favorites"

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class FavoritesStore:
    """Favorites operations bound to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _values(self, user_id: int, favorite: CreateUserFavorite) -> dict:
        return {
            "user_id": user_id,
            "content_id": favorite.content_id,
            "content_type": favorite.content_type,
            "content_title": favorite.content_title,
            "content_url": favorite.content_url,
            "content_description": favorite.content_description or None,
            "content_image": favorite.content_image or None,
            "tags": favorite.tags or None,
        }

    async def _insert_if_absent(self, values: dict) -> bool:
        """Insert one favorite row; False if the (user, content) pair already exists."""
        dialect = self.db.get_bind().dialect.name
        dialect_insert = _UPSERT_INSERTS.get(dialect)

        if dialect_insert is not None:
            stmt = (
                dialect_insert(UserFavorite)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["user_id", "content_id"])
                .returning(UserFavorite.id)
            )
            inserted_id = (await self.db.execute(stmt)).scalar_one_or_none()
            await self.db.commit()
            return inserted_id is not None

        try:
            await self.db.execute(insert(UserFavorite).values(**values))
            await self.db.commit()
            return True
        except IntegrityError:
            await self.db.rollback()
            return False

    async def add_favorite(self, user_id: int, favorite: CreateUserFavorite) -> SuccessResponse:
        """Favorite a content item.

        A second add of the same ``content_id`` is not an error: it reports
        ``success=False`` with ``"Already added to favorites"`` and leaves
        the existing row untouched.
        """
        try:
            created = await self._insert_if_absent(self._values(user_id, favorite))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to add favorite {favorite.content_id} for user {user_id}: {e}")
            return SuccessResponse(success=False, error=str(e))

        if not created:
            return SuccessResponse(success=False, error=ALREADY_FAVORITED)
        logger.info(f"User {user_id} favorited {favorite.content_id}")
        return SuccessResponse(success=True, message="Added to favorites")

    async def _delete(self, user_id: int, content_id: str, message: str) -> SuccessResponse:
        try:
            await self.db.execute(
                delete(UserFavorite).where(
                    UserFavorite.user_id == user_id,
                    UserFavorite.content_id == content_id,
                )
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to remove favorite {content_id} for user {user_id}: {e}")
            return SuccessResponse(success=False, error=str(e))
        return SuccessResponse(success=True, message=message)

    async def remove_favorite(self, user_id: int, content_id: str) -> SuccessResponse:
        """Unfavorite; succeeds whether or not the row existed."""
        return await self._delete(user_id, content_id, "Removed from favorites")

    async def delete_favorite(self, user_id: int, content_id: str) -> SuccessResponse:
        return await self._delete(user_id, content_id, "Deleted from favorites")

    async def favorited_ids(self, user_id: int) -> set[str]:
        """Ids of everything the user has favorited, read fresh on every call."""
        result = await self.db.execute(
            select(UserFavorite.content_id).where(UserFavorite.user_id == user_id)
        )
        return set(result.scalars().all())

    async def toggle_favorite(self, user_id: int, favorite: CreateUserFavorite) -> ToggleFavoriteResponse:
        """Flip the favorite state of ``favorite.content_id`` and report the new state."""
        try:
            current = await self.favorited_ids(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read favorites for user {user_id}: {e}")
            return ToggleFavoriteResponse(success=False, is_favorited=False, error=str(e))

        if favorite.content_id in current:
            result = await self.remove_favorite(user_id, favorite.content_id)
            return ToggleFavoriteResponse(
                success=result.success,
                is_favorited=not result.success,
                message=result.message,
                error=result.error,
            )

        result = await self.add_favorite(user_id, favorite)
        return ToggleFavoriteResponse(
            success=result.success,
            # a concurrent add that won the race still leaves it favorited
            is_favorited=result.success or result.error == ALREADY_FAVORITED,
            message=result.message,
            error=result.error,
        )

    async def list_favorites(self, user_id: int, query: Optional[GetUserFavorites] = None) -> FavoriteListResponse:
        """One page of the user's favorites, oldest first."""
        query = query or GetUserFavorites()
        stmt = select(UserFavorite).where(UserFavorite.user_id == user_id)
        if query.content_type is not None:
            stmt = stmt.where(UserFavorite.content_type == query.content_type)
        stmt = (
            stmt.order_by(UserFavorite.created_at, UserFavorite.id)
            .limit(query.limit)
            .offset(query.offset)
        )
        try:
            rows = (await self.db.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list favorites for user {user_id}: {e}")
            return FavoriteListResponse(success=False, error=str(e))

        data = [UserFavoriteResponse.model_validate(row) for row in rows]
        return FavoriteListResponse(success=True, data=data, count=len(data))

    async def is_favorited(self, user_id: int, content_id: str) -> FavoriteStatusResponse:
        try:
            found = await self.db.scalar(
                select(UserFavorite.id).where(
                    UserFavorite.user_id == user_id,
                    UserFavorite.content_id == content_id,
                ).limit(1)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to check favorite {content_id} for user {user_id}: {e}")
            return FavoriteStatusResponse(success=False, is_favorited=False)
        return FavoriteStatusResponse(success=True, is_favorited=found is not None)

    async def count_favorites(self, user_id: int) -> FavoriteCountResponse:
        """Total number of favorites, ignoring type filters and paging."""
        try:
            count = await self.db.scalar(
                select(func.count(UserFavorite.id)).where(UserFavorite.user_id == user_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to count favorites for user {user_id}: {e}")
            return FavoriteCountResponse(success=False, count=0)
        return FavoriteCountResponse(success=True, count=count or 0)


def favorite_from_card(card) -> CreateUserFavorite:
    """Favorite payload snapshotting a normalized content card."""
    return CreateUserFavorite(
        content_id=card.id,
        content_type=FavoriteContentType.from_source(card.source),
        content_title=card.title,
        content_url=card.url,
        content_description=card.description,
        tags=list(card.tags) or None,
    )
