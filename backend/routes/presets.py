"""
MedDent API - Routes Configuration presets

A preset is a named snapshot of every site setting. Applying it writes
the snapshot back verbatim; keys added after the snapshot are left alone.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException

from config import get_db, now_iso
from models import PresetCreate, PresetUpdate
from routes.auth import get_current_admin
from services.settings import bulk_upsert_settings, get_settings_map

logger = logging.getLogger("presets")

router = APIRouter(prefix="/presets", tags=["Presets"])


@router.get("")
async def list_presets(admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    presets = await db.configuration_presets.find({}, {"_id": 0}).sort("created_at", -1).to_list(200)
    return {"data": presets}


@router.get("/{preset_id}")
async def get_preset(preset_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    preset = await db.configuration_presets.find_one({"id": preset_id}, {"_id": 0})
    if not preset:
        raise HTTPException(status_code=404, detail="Preset not found")
    return {"data": preset}


@router.post("", status_code=201)
async def create_preset(data: PresetCreate, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    """Snapshot the current settings under a name"""
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    preset = {
        "id": str(uuid.uuid4()),
        "name": name,
        "description": data.description or "",
        "settings": await get_settings_map(db),
        "created_at": now_iso(),
        "updated_at": now_iso()
    }
    await db.configuration_presets.insert_one(preset)
    preset.pop("_id", None)

    logger.info(f"[PRESET] Created '{name}' ({len(preset['settings'])} keys) by {admin.get('email')}")
    return {"success": True, "data": preset}


@router.post("/{preset_id}/apply")
async def apply_preset(preset_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    preset = await db.configuration_presets.find_one({"id": preset_id}, {"_id": 0})
    if not preset:
        raise HTTPException(status_code=404, detail="Preset not found")

    count = await bulk_upsert_settings(db, preset.get("settings") or {})
    logger.info(f"[PRESET] Applied '{preset['name']}' ({count} keys) by {admin.get('email')}")
    return {"success": True, "applied": count}


@router.put("/{preset_id}")
async def update_preset(
    preset_id: str,
    data: PresetUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    update = {}
    if data.name is not None:
        if not data.name.strip():
            raise HTTPException(status_code=400, detail="Name is required")
        update["name"] = data.name.strip()
    if data.description is not None:
        update["description"] = data.description
    update["updated_at"] = now_iso()

    result = await db.configuration_presets.update_one({"id": preset_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Preset not found")

    preset = await db.configuration_presets.find_one({"id": preset_id}, {"_id": 0})
    return {"success": True, "data": preset}


@router.delete("/{preset_id}")
async def delete_preset(preset_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.configuration_presets.delete_one({"id": preset_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Preset not found")
    return {"success": True}
