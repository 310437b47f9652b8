from fastapi import APIRouter

from app.api.deps import SettingsStoreDep
from app.exceptions import ExternalServiceError, NotFoundError
from app.schemas.settings import (
    SettingResponse,
    SettingsState,
    SettingsUpdateResult,
    SettingUpdate,
)

router = APIRouter()


@router.get("", response_model=SettingsState)
async def fetch_settings(store: SettingsStoreDep):
    """Reload all settings from the remote table and return the store state.

    A failed load is reported in `error`; the previously cached settings are kept.
    """
    await store.fetch_settings()
    return store.snapshot()


@router.delete("/error", response_model=SettingsState)
async def clear_settings_error(store: SettingsStoreDep):
    """Clear the store's last error."""
    store.clear_error()
    return store.snapshot()


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(key: str, store: SettingsStoreDep):
    """Read one setting from the cache. Does not reload."""
    if not store.has_setting(key):
        raise NotFoundError("Setting", key)
    return SettingResponse(key=key, value=store.get_setting(key))


@router.put("/{key}", response_model=SettingsUpdateResult)
async def update_setting(key: str, body: SettingUpdate, store: SettingsStoreDep):
    """Create or overwrite a setting."""
    success = await store.update_setting(key, body.value)
    if not success:
        raise ExternalServiceError("Settings", store.error or "update failed")

    state = store.snapshot()
    return SettingsUpdateResult(success=True, **state.model_dump())
