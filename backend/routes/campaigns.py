"""
MedDent API - Routes Campaigns
Campaign links (?source=<unique_code>) and their click counter.

Public:  GET /campaigns/{code}, POST /campaigns/increment-click
Staff:   GET /campaigns (with submissions + conversion rate)
Admin:   POST / PUT / DELETE
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException

from config import get_db, now_iso
from models import CampaignCreate, CampaignUpdate, ClickIncrement
from routes.auth import get_current_admin
from routes.crm_auth import require_staff
from services.campaigns import campaign_stats, find_campaign_by_code, increment_click

logger = logging.getLogger("campaigns")

router = APIRouter(prefix="/campaigns", tags=["Campaigns"])


@router.get("")
async def list_campaigns(identity: dict = Depends(require_staff), db=Depends(get_db)):
    return {"data": await campaign_stats(db)}


@router.post("/increment-click")
async def increment_campaign_click(data: ClickIncrement, db=Depends(get_db)):
    """
    click_count += 1 for an active, unexpired campaign.
    404 when the code is unknown, inactive or expired.
    """
    campaign = await increment_click(db, data.code.strip())
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return {"success": True}


@router.get("/{code}")
async def get_campaign_by_code(code: str, db=Depends(get_db)):
    campaign = await find_campaign_by_code(db, code)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return {"data": campaign}


@router.post("", status_code=201)
async def create_campaign(data: CampaignCreate, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    existing = await db.campaign_links.find_one({"unique_code": data.unique_code})
    if existing:
        raise HTTPException(status_code=400, detail=f"Code '{data.unique_code}' already in use")

    campaign = {
        "id": str(uuid.uuid4()),
        "campaign_name": data.campaign_name,
        "unique_code": data.unique_code,
        "is_active": data.is_active,
        "expiry_date": data.expiry_date,
        "click_count": 0,
        "created_at": now_iso(),
        "updated_at": now_iso()
    }
    await db.campaign_links.insert_one(campaign)
    campaign.pop("_id", None)

    logger.info(f"[CAMPAIGN] Created {data.unique_code} by {admin.get('email')}")
    return {"success": True, "data": campaign}


@router.put("/{campaign_id}")
async def update_campaign(
    campaign_id: str,
    data: CampaignUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    update = data.model_dump(exclude_unset=True)

    if "campaign_name" in update and not (update["campaign_name"] or "").strip():
        raise HTTPException(status_code=400, detail="campaign_name cannot be empty")
    if update.get("unique_code"):
        clash = await db.campaign_links.find_one({"unique_code": update["unique_code"], "id": {"$ne": campaign_id}})
        if clash:
            raise HTTPException(status_code=400, detail=f"Code '{update['unique_code']}' already in use")
    elif "unique_code" in update:
        update.pop("unique_code")

    update["updated_at"] = now_iso()
    result = await db.campaign_links.update_one({"id": campaign_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Not found")

    campaign = await db.campaign_links.find_one({"id": campaign_id}, {"_id": 0})
    return {"success": True, "data": campaign}


@router.delete("/{campaign_id}")
async def delete_campaign(campaign_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.campaign_links.delete_one({"id": campaign_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Not found")
    logger.info(f"[CAMPAIGN] Deleted {campaign_id} by {admin.get('email')}")
    return {"success": True}
