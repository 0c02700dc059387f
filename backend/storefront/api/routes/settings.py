from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.db_errors import raise_http_for_store_error
from storefront.core.deps import get_current_admin, get_settings_store
from storefront.core.errors import (
    SettingsValidationError,
    StoreReadError,
    StoreWriteError,
)
from storefront.schemas.settings import SettingOut, SettingUpdate, SettingUpdateOut
from storefront.services.settings_store import SettingsStore

router = APIRouter(prefix="/admin/settings", tags=["settings"])


@router.get("", response_model=List[SettingOut])
async def list_settings(
    store: SettingsStore = Depends(get_settings_store),
) -> List[SettingOut]:
    try:
        values = await store.read()
    except StoreReadError as exc:
        raise_http_for_store_error(exc, "Failed to load settings")
    return [SettingOut(key=key, value=value) for key, value in values.items()]


@router.put("", response_model=SettingUpdateOut)
async def update_setting(
    payload: SettingUpdate,
    store: SettingsStore = Depends(get_settings_store),
    admin: str = Depends(get_current_admin),
) -> SettingUpdateOut:
    try:
        await store.write(payload.key, payload.value)
    except SettingsValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except StoreWriteError as exc:
        raise_http_for_store_error(exc, "Failed to update setting")
    return SettingUpdateOut(success=True)
