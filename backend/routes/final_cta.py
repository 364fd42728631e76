"""
MedDent API - Routes Final CTA (singleton)
"""

import logging
import uuid

from fastapi import APIRouter, Depends

from config import get_db, now_iso
from models.content import DEFAULT_FINAL_CTA, FinalCTAUpdate
from routes.auth import get_current_admin

logger = logging.getLogger("content")

router = APIRouter(prefix="/final-cta", tags=["Final CTA"])


async def get_or_create_final_cta(db) -> dict:
    cta = await db.final_cta.find_one({}, {"_id": 0})
    if cta:
        return cta

    cta = {
        "id": str(uuid.uuid4()),
        **DEFAULT_FINAL_CTA,
        "created_at": now_iso(),
        "updated_at": now_iso()
    }
    await db.final_cta.insert_one(cta)
    cta.pop("_id", None)
    logger.info("[CONTENT] Final CTA created with defaults")
    return cta


@router.get("")
async def get_final_cta(db=Depends(get_db)):
    return {"data": await get_or_create_final_cta(db)}


@router.put("")
async def update_final_cta(data: FinalCTAUpdate, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    cta = await get_or_create_final_cta(db)

    update = data.model_dump(exclude_unset=True)
    update["updated_at"] = now_iso()
    await db.final_cta.update_one({"id": cta["id"]}, {"$set": update})

    cta = await db.final_cta.find_one({"id": cta["id"]}, {"_id": 0})
    logger.info(f"[CONTENT] Final CTA updated by {admin.get('email')}")
    return {"success": True, "data": cta}
