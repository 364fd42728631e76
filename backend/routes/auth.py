"""
MedDent API - Routes Auth (admin panel)
Login / Session / Logout. Admin credential = JWT valid 24h.
"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import (
    ADMIN_TOKEN_HOURS,
    JWT_ALGORITHM,
    JWT_SECRET,
    get_db,
    now_iso,
    utc_now,
    verify_password,
)
from models import AdminLogin

logger = logging.getLogger("auth")

router = APIRouter(prefix="/auth", tags=["Auth"])
security = HTTPBearer(auto_error=False)


# ==================== HELPERS ====================

def create_admin_token(admin: dict) -> str:
    expires = utc_now() + timedelta(hours=ADMIN_TOKEN_HOURS)
    payload = {"sub": admin["id"], "email": admin["email"], "exp": expires}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


async def resolve_admin(db, token: str) -> Optional[dict]:
    """Active admin for a JWT, or None if the token is malformed/expired/unknown"""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None

    admin_id = payload.get("sub")
    if not admin_id:
        return None

    admin = await db.admin_users.find_one({"id": admin_id}, {"_id": 0, "password_hash": 0})
    if not admin or not admin.get("is_active", True):
        return None
    return admin


async def get_current_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db=Depends(get_db),
):
    """Admin identity from the bearer JWT"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    admin = await resolve_admin(db, credentials.credentials)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    request.state.identity = {"type": "admin", "id": admin["id"], "email": admin["email"]}
    return admin


# ==================== LOGIN / LOGOUT ====================

@router.post("/login")
async def login(data: AdminLogin, db=Depends(get_db)):
    """Admin login"""
    if not data.email or not data.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    email = data.email.lower().strip()
    admin = await db.admin_users.find_one({"email": email}, {"_id": 0})

    if not admin:
        logger.info(f"[AUTH] Failed admin login for {email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not admin.get("is_active", True):
        raise HTTPException(status_code=401, detail="Account is inactive")

    if not verify_password(data.password, admin.get("password_hash", "")):
        logger.info(f"[AUTH] Failed admin login for {email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    await db.admin_users.update_one(
        {"id": admin["id"]},
        {"$set": {"last_login": now_iso(), "updated_at": now_iso()}}
    )

    token = create_admin_token(admin)
    logger.info(f"[AUTH] Admin login {email}")

    return {
        "success": True,
        "token": token,
        "user": {"id": admin["id"], "email": admin["email"]}
    }


@router.get("/session")
async def get_session(admin: dict = Depends(get_current_admin)):
    return {"success": True, "user": {"id": admin["id"], "email": admin["email"]}}


@router.post("/logout")
async def logout(admin: dict = Depends(get_current_admin)):
    """Tokens are stateless; the client drops it"""
    return {"success": True, "message": "Logged out successfully"}
