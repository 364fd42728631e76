"""
MedDent API - Campaign service

Server-side half of campaign attribution:
- active / expiry checks on a campaign link
- atomic click increment (never read-then-write)
- conversion rate per campaign (submissions / clicks)
"""

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional

from pymongo import ReturnDocument

from config import now_iso, parse_iso, utc_now

logger = logging.getLogger("campaigns")


def is_campaign_expired(campaign: Dict, now: Optional[datetime] = None) -> bool:
    """expiry_date set and strictly in the past"""
    expiry = parse_iso(campaign.get("expiry_date"))
    if expiry is None:
        return False
    return expiry < (now or utc_now())


def _not_expired_filter(now_str: str) -> Dict:
    return {"$or": [{"expiry_date": None}, {"expiry_date": {"$gte": now_str}}]}


async def find_campaign_by_code(db, code: str) -> Optional[Dict]:
    return await db.campaign_links.find_one({"unique_code": code}, {"_id": 0})


async def increment_click(db, code: str) -> Optional[Dict]:
    """
    click_count += 1 in a single atomic update.

    The filter carries the eligibility predicate (code, is_active, not
    expired), so a campaign deactivated or expired between the visitor's
    lookup and this call is left untouched. Returns the updated campaign
    or None when nothing matched.
    """
    if not code:
        return None
    now_str = now_iso()
    campaign = await db.campaign_links.find_one_and_update(
        {"unique_code": code, "is_active": True, **_not_expired_filter(now_str)},
        {"$inc": {"click_count": 1}, "$set": {"updated_at": now_str}},
        projection={"_id": 0},
        return_document=ReturnDocument.AFTER,
    )
    if campaign:
        logger.info(f"[CAMPAIGN] click code={code} count={campaign.get('click_count')}")
    return campaign


def conversion_rate(submissions: int, clicks: int) -> int:
    """submissions / clicks * 100 to the nearest integer, 0 without clicks"""
    if not clicks or clicks <= 0:
        return 0
    return int(math.floor(submissions / clicks * 100 + 0.5))


async def count_submissions_by_source(db) -> Dict[str, int]:
    counts = {}
    pipeline = [{"$group": {"_id": "$source", "count": {"$sum": 1}}}]
    rows = await db.consultation_forms.aggregate(pipeline).to_list(1000)
    for row in rows:
        counts[row["_id"]] = row["count"]
    return counts


async def campaign_stats(db) -> List[Dict]:
    """All campaigns, newest first, with submission_count and conversion_rate"""
    campaigns = await db.campaign_links.find({}, {"_id": 0}).sort("created_at", -1).to_list(1000)
    submissions = await count_submissions_by_source(db)

    for campaign in campaigns:
        count = submissions.get(campaign.get("unique_code"), 0)
        campaign["submission_count"] = count
        campaign["conversion_rate"] = conversion_rate(count, campaign.get("click_count", 0))
        campaign["is_expired"] = is_campaign_expired(campaign)

    return campaigns
