"""
MedDent API - Seed data
Creates the first admin account; nothing else is seeded.
"""

import logging
import uuid
from typing import Optional

from config import ADMIN_SEED_EMAIL, ADMIN_SEED_PASSWORD, hash_password, now_iso

logger = logging.getLogger("seed")


async def seed_admin(
    db,
    email: Optional[str] = None,
    password: Optional[str] = None,
    reset_password: bool = False,
) -> str:
    """
    Ensure an admin account exists.
    Returns "created", "reset" or "exists".
    """
    email = (email or ADMIN_SEED_EMAIL).lower().strip()
    password = password or ADMIN_SEED_PASSWORD

    existing = await db.admin_users.find_one({"email": email})
    if existing:
        if not reset_password:
            return "exists"
        await db.admin_users.update_one(
            {"email": email},
            {"$set": {"password_hash": hash_password(password), "is_active": True, "updated_at": now_iso()}}
        )
        logger.info(f"[SEED] Admin password reset for {email}")
        return "reset"

    await db.admin_users.insert_one({
        "id": str(uuid.uuid4()),
        "email": email,
        "password_hash": hash_password(password),
        "is_active": True,
        "last_login": None,
        "created_at": now_iso(),
        "updated_at": now_iso()
    })
    logger.info(f"[SEED] Admin created {email}")
    return "created"


async def create_indexes(db):
    await db.campaign_links.create_index("unique_code", unique=True)
    await db.site_settings.create_index("key", unique=True)
    await db.admin_users.create_index("email", unique=True)
    await db.crm_users.create_index("username", unique=True)
    await db.crm_sessions.create_index("token")
    await db.crm_sessions.create_index("expires_at")
    await db.section_backgrounds.create_index("section_name", unique=True)
    await db.consultation_forms.create_index("created_at")
    await db.consultation_forms.create_index("source")
    await db.appointments.create_index("created_at")
