"""
MedDent API - Routes Section backgrounds
One document per page section, keyed by section_name.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from config import get_db, now_iso
from models.content import SectionBackgroundUpdate
from routes.auth import get_current_admin

logger = logging.getLogger("content")

router = APIRouter(prefix="/section-backgrounds", tags=["Section backgrounds"])


@router.get("")
async def list_backgrounds(db=Depends(get_db)):
    backgrounds = await db.section_backgrounds.find({}, {"_id": 0}).sort("section_name", 1).to_list(100)
    return {"data": backgrounds}


@router.get("/{section_name}")
async def get_background(section_name: str, db=Depends(get_db)):
    """Unknown sections are not an error: the page renders without a background"""
    background = await db.section_backgrounds.find_one({"section_name": section_name}, {"_id": 0})
    return {"data": background}


@router.put("/{section_name}")
async def put_background(
    section_name: str,
    data: SectionBackgroundUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    now = now_iso()
    update = data.model_dump(exclude_unset=True)
    update["updated_at"] = now

    await db.section_backgrounds.update_one(
        {"section_name": section_name},
        {"$set": update, "$setOnInsert": {"section_name": section_name, "created_at": now}},
        upsert=True
    )
    background = await db.section_backgrounds.find_one({"section_name": section_name}, {"_id": 0})
    logger.info(f"[CONTENT] Background '{section_name}' updated by {admin.get('email')}")
    return {"success": True, "data": background}


@router.delete("/{section_name}")
async def delete_background(section_name: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.section_backgrounds.delete_one({"section_name": section_name})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Section background not found")
    return {"success": True}
