"""Dashboard preferences of the signed-in user."""

from fastapi import APIRouter

from devportal.api.dependencies import PreferencesDep
from devportal.auth import CurrentUser
from devportal.schemas.preferences import UserPreferenceSettings, UserPreferenceUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=UserPreferenceSettings)
async def get_preferences(user: CurrentUser, preferences: PreferencesDep) -> UserPreferenceSettings:
    return await preferences.get(user.id)


@router.patch("", response_model=UserPreferenceSettings)
async def update_preferences(
    payload: UserPreferenceUpdate,
    user: CurrentUser,
    preferences: PreferencesDep,
) -> UserPreferenceSettings:
    return await preferences.update(user.id, payload)
