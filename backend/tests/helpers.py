"""Shared test helpers"""

import asyncio
import uuid

from config import now_iso


def _db_op(coro):
    """Run async DB operation in a fresh event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def insert_campaign(db, code, **fields):
    doc = {
        "id": str(uuid.uuid4()),
        "campaign_name": fields.pop("campaign_name", f"Campaign {code}"),
        "unique_code": code,
        "is_active": True,
        "expiry_date": None,
        "click_count": 0,
        "created_at": now_iso(),
        "updated_at": now_iso(),
    }
    doc.update(fields)
    _db_op(db.campaign_links.insert_one(doc))
    doc.pop("_id", None)
    return doc


def insert_lead(db, **fields):
    doc = {
        "id": str(uuid.uuid4()),
        "full_name": "Test Patient",
        "phone": "+998901234567",
        "source": "Direct Visit",
        "lead_status": "Yangi",
        "notes": "",
        "time_spent_seconds": 0,
        "created_at": now_iso(),
        "updated_at": now_iso(),
    }
    doc.update(fields)
    _db_op(db.consultation_forms.insert_one(doc))
    doc.pop("_id", None)
    return doc


def get_campaign(db, code):
    return _db_op(db.campaign_links.find_one({"unique_code": code}, {"_id": 0}))
