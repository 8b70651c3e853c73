"""Favorites routes. The owner is always the authenticated caller."""

from typing import Annotated, Optional

from fastapi import APIRouter, Query

from devportal.api.dependencies import FavoritesDep
from devportal.auth import CurrentUser
from devportal.models.enums import FavoriteContentType
from devportal.schemas.common import SuccessResponse
from devportal.schemas.favorites import (
    CreateUserFavorite,
    DeleteUserFavorite,
    FavoriteCountResponse,
    FavoriteListResponse,
    FavoriteStatusResponse,
    GetUserFavorites,
    ToggleFavoriteResponse,
)

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse)
async def get_my_favorites(
    user: CurrentUser,
    store: FavoritesDep,
    content_type: Optional[FavoriteContentType] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> FavoriteListResponse:
    query = GetUserFavorites(content_type=content_type, limit=limit, offset=offset)
    return await store.list_favorites(user.id, query)


@router.post("", response_model=SuccessResponse)
async def add_favorite(
    payload: CreateUserFavorite,
    user: CurrentUser,
    store: FavoritesDep,
) -> SuccessResponse:
    return await store.add_favorite(user.id, payload)


@router.post("/toggle", response_model=ToggleFavoriteResponse)
async def toggle_favorite(
    payload: CreateUserFavorite,
    user: CurrentUser,
    store: FavoritesDep,
) -> ToggleFavoriteResponse:
    return await store.toggle_favorite(user.id, payload)


@router.get("/count", response_model=FavoriteCountResponse)
async def get_favorite_count(user: CurrentUser, store: FavoritesDep) -> FavoriteCountResponse:
    return await store.count_favorites(user.id)


@router.get("/{content_id}/status", response_model=FavoriteStatusResponse)
async def is_favorited(content_id: str, user: CurrentUser, store: FavoritesDep) -> FavoriteStatusResponse:
    return await store.is_favorited(user.id, content_id)


@router.delete("/{content_id}", response_model=SuccessResponse)
async def remove_favorite(content_id: str, user: CurrentUser, store: FavoritesDep) -> SuccessResponse:
    return await store.remove_favorite(user.id, content_id)


@router.post("/delete", response_model=SuccessResponse)
async def delete_favorite(
    payload: DeleteUserFavorite,
    user: CurrentUser,
    store: FavoritesDep,
) -> SuccessResponse:
    return await store.delete_favorite(user.id, payload.content_id)
