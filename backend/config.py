"""
MedDent API - Configuration and shared helpers
"""

import os
import logging
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import bcrypt
import pytz
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

logger = logging.getLogger("config")

# Load .env
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# MongoDB
MONGO_URL = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
DB_NAME = os.environ.get('DB_NAME', 'meddent')

client = AsyncIOMotorClient(MONGO_URL)
db = client[DB_NAME]

# Admin credentials (JWT)
JWT_SECRET = os.environ.get('JWT_SECRET')
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable is required")
if len(JWT_SECRET) < 32:
    logger.warning("[CONFIG] JWT_SECRET should be at least 32 characters long")

JWT_ALGORITHM = "HS256"
ADMIN_TOKEN_HOURS = 24

# CRM sessions (opaque tokens)
CRM_SESSION_HOURS = 8

# Uploads
UPLOAD_DIR = os.environ.get('UPLOAD_DIR', './uploads')
MAX_FILE_SIZE = int(os.environ.get('MAX_FILE_SIZE', 10485760))
ALLOWED_FILE_TYPES = [
    t.strip() for t in
    os.environ.get('ALLOWED_FILE_TYPES', 'image/jpeg,image/jpg,image/png,image/webp').split(',')
    if t.strip()
]

# Runtime
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'production')
RUN_SEED_ON_START = os.environ.get('RUN_SEED_ON_START', 'false').lower() == 'true'
ADMIN_SEED_EMAIL = os.environ.get('ADMIN_SEED_EMAIL', 'admin@meddent.uz')
ADMIN_SEED_PASSWORD = os.environ.get('ADMIN_SEED_PASSWORD', 'Admin123!')
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

# Wall-clock zone used for "today" counters on the CRM dashboard
CLINIC_TIMEZONE = pytz.timezone(os.environ.get('CLINIC_TIMEZONE', 'Asia/Tashkent'))

DIRECT_VISIT = "Direct Visit"


def get_db():
    """FastAPI dependency returning the shared database handle"""
    return db


# ==================== HELPERS ====================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Current UTC time as ISO-8601"""
    return utc_now().isoformat()


def parse_iso(value) -> Optional[datetime]:
    """
    Parse an ISO date or datetime string into an aware UTC datetime.
    Naive values are taken as UTC. Returns None for empty input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def generate_token() -> str:
    """Secure opaque session token"""
    return secrets.token_urlsafe(32)


def hash_password(password: str) -> str:
    """bcrypt hash of a password"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        logger.warning("[AUTH] Stored password hash is malformed")
        return False
