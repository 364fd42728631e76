"""
MedDent API - Service Settings

Site settings are key/value documents in site_settings (one doc per key,
value is any JSON). Presets snapshot the whole map and apply it back.
"""

import logging
from typing import Any, Dict

from pymongo import UpdateOne

from config import now_iso

logger = logging.getLogger("settings")


async def get_settings_map(db) -> Dict[str, Any]:
    """All settings as {key: value}"""
    docs = await db.site_settings.find({}, {"_id": 0}).to_list(1000)
    return {d["key"]: d.get("value") for d in docs}


async def upsert_setting(db, key: str, value: Any) -> Dict:
    now = now_iso()
    await db.site_settings.update_one(
        {"key": key},
        {
            "$set": {"value": value, "updated_at": now},
            "$setOnInsert": {"key": key, "created_at": now}
        },
        upsert=True
    )
    return await db.site_settings.find_one({"key": key}, {"_id": 0})


async def bulk_upsert_settings(db, settings: Dict[str, Any]) -> int:
    """
    Upsert every key in one bulk_write.
    Returns the number of keys written.
    """
    if not settings:
        return 0

    now = now_iso()
    operations = [
        UpdateOne(
            {"key": key},
            {
                "$set": {"value": value, "updated_at": now},
                "$setOnInsert": {"key": key, "created_at": now}
            },
            upsert=True
        )
        for key, value in settings.items()
    ]
    await db.site_settings.bulk_write(operations, ordered=False)
    logger.info(f"[SETTINGS] Bulk upsert {len(operations)} keys")
    return len(operations)
