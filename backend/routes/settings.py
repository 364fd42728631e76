"""
MedDent API - Routes Settings

Admin:  GET /settings, GET/PUT/DELETE /settings/{key}, POST /settings/bulk
Public: GET /settings/public/config (typed site configuration)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from config import get_db, now_iso
from models import SettingsBulkUpdate, SettingUpsert, build_site_config
from routes.auth import get_current_admin
from services.settings import bulk_upsert_settings, get_settings_map, upsert_setting

logger = logging.getLogger("settings")

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("")
async def list_settings(admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    return {"settings": await get_settings_map(db)}


@router.get("/public/config")
async def get_public_config(db=Depends(get_db)):
    """Settings the public site renders, typed and defaulted"""
    site_config, _ = build_site_config(await get_settings_map(db))
    return {"data": site_config.model_dump()}


@router.post("/bulk")
async def bulk_update_settings(
    data: SettingsBulkUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    count = await bulk_upsert_settings(db, data.settings)
    logger.info(f"[SETTINGS] {count} keys updated by {admin.get('email')}")
    return {"success": True, "updated": count, "updated_at": now_iso()}


@router.get("/{key}")
async def get_setting(key: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    doc = await db.site_settings.find_one({"key": key}, {"_id": 0})
    if not doc:
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"key": doc["key"], "value": doc.get("value")}


@router.put("/{key}")
async def put_setting(
    key: str,
    data: SettingUpsert,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    if not key.strip():
        raise HTTPException(status_code=400, detail="Key is required")

    doc = await upsert_setting(db, key, data.value)
    logger.info(f"[SETTINGS] {key} updated by {admin.get('email')}")
    return {"success": True, "key": doc["key"], "value": doc.get("value")}


@router.delete("/{key}")
async def delete_setting(key: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.site_settings.delete_one({"key": key})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Setting not found")
    logger.info(f"[SETTINGS] {key} deleted by {admin.get('email')}")
    return {"success": True}
