"""
MedDent - Seed admin account
Run:   python scripts/seed_admin.py
Reset: python scripts/seed_admin.py --reset-password
Credentials come from ADMIN_SEED_EMAIL / ADMIN_SEED_PASSWORD (backend/.env).
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import ADMIN_SEED_EMAIL, client, db  # noqa: E402
from services.seed import create_indexes, seed_admin  # noqa: E402


async def main():
    reset = "--reset-password" in sys.argv

    await create_indexes(db)
    outcome = await seed_admin(db, reset_password=reset)

    if outcome == "created":
        print(f"Admin created: {ADMIN_SEED_EMAIL}")
    elif outcome == "reset":
        print(f"Admin password reset: {ADMIN_SEED_EMAIL}")
    else:
        print(f"Admin already exists: {ADMIN_SEED_EMAIL} (use --reset-password to reset)")

    client.close()


if __name__ == "__main__":
    asyncio.run(main())
