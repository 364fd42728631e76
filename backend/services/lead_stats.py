"""
MedDent API - CRM dashboard aggregation

Derived on every read from consultation_forms + campaign_links; nothing
is materialized.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from config import CLINIC_TIMEZONE, DIRECT_VISIT, utc_now
from models.consultation import VALID_LEAD_STATUSES


def local_midnight(now: datetime, tz=CLINIC_TIMEZONE) -> datetime:
    """Start of the current wall-clock day in tz, as an aware UTC datetime"""
    local_now = now.astimezone(tz)
    midnight = tz.localize(local_now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0))
    return midnight.astimezone(now.tzinfo)


def source_breakdown(leads: List[Dict]) -> List[Dict]:
    """Lead count and share per source, biggest first"""
    counts = {}
    for lead in leads:
        source = lead.get("source") or DIRECT_VISIT
        counts[source] = counts.get(source, 0) + 1

    total = len(leads)
    rows = [
        {
            "source": source,
            "count": count,
            "percentage": round(count / total * 100, 1) if total > 0 else 0,
        }
        for source, count in counts.items()
    ]
    rows.sort(key=lambda r: (-r["count"], r["source"]))
    return rows


async def build_dashboard(db, now: Optional[datetime] = None) -> Dict:
    now = now or utc_now()
    today_start = local_midnight(now).isoformat()
    week_start = (now - timedelta(days=7)).isoformat()

    projection = {"_id": 0, "id": 1, "full_name": 1, "phone": 1, "source": 1, "lead_status": 1, "created_at": 1}
    leads = await db.consultation_forms.find({}, projection).sort("created_at", -1).to_list(100000)
    campaigns = await db.campaign_links.find({}, {"_id": 0, "is_active": 1, "click_count": 1}).to_list(1000)

    total_submissions = len(leads)
    today_submissions = sum(1 for f in leads if f.get("created_at", "") >= today_start)
    week_submissions = sum(1 for f in leads if f.get("created_at", "") >= week_start)
    active_campaigns = sum(1 for c in campaigns if c.get("is_active"))
    total_clicks = sum(c.get("click_count", 0) or 0 for c in campaigns)
    overall_rate = round(total_submissions / total_clicks * 100, 1) if total_clicks > 0 else 0

    status_counts = {status: 0 for status in VALID_LEAD_STATUSES}
    for lead in leads:
        status = lead.get("lead_status")
        status_counts[status] = status_counts.get(status, 0) + 1

    recent = [
        {
            "id": f.get("id"),
            "full_name": f.get("full_name"),
            "phone": f.get("phone"),
            "source": f.get("source") or DIRECT_VISIT,
            "created_at": f.get("created_at"),
        }
        for f in leads[:5]
    ]

    return {
        "total_submissions": total_submissions,
        "today_submissions": today_submissions,
        "week_submissions": week_submissions,
        "active_campaigns": active_campaigns,
        "total_clicks": total_clicks,
        "conversion_rate": overall_rate,
        "status_counts": status_counts,
        "recent_submissions": recent,
        "source_breakdown": source_breakdown(leads),
    }
