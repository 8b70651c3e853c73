"""Stored third-party API keys. Listings only ever show the last four characters."""

from fastapi import APIRouter, status

from devportal.api.dependencies import ApiKeysDep
from devportal.auth import CurrentUser
from devportal.schemas.api_keys import ApiKeyCreate, ApiKeyResponse
from devportal.schemas.common import SuccessResponse
from devportal.services.api_keys import to_response

router = APIRouter(prefix="/api-keys", tags=["api-keys"])


@router.get("", response_model=list[ApiKeyResponse])
async def list_api_keys(user: CurrentUser, api_keys: ApiKeysDep) -> list[ApiKeyResponse]:
    return [to_response(key) for key in await api_keys.list_keys(user.id)]


@router.post("", response_model=ApiKeyResponse, status_code=status.HTTP_201_CREATED)
async def create_api_key(
    payload: ApiKeyCreate,
    user: CurrentUser,
    api_keys: ApiKeysDep,
) -> ApiKeyResponse:
    return to_response(await api_keys.create_key(user.id, payload))


@router.delete("/{key_id}", response_model=SuccessResponse)
async def delete_api_key(key_id: int, user: CurrentUser, api_keys: ApiKeysDep) -> SuccessResponse:
    await api_keys.delete_key(user.id, key_id)
    return SuccessResponse(success=True, message="API key deleted")
