"""
MedDent API - Routes CRM auth
Separate credential scheme for the CRM dashboard: username + password,
opaque session token stored in crm_sessions (8h).
Also: CRM user management (admin) and the staff dependency that accepts
either an admin JWT or a CRM session.
"""

import logging
import uuid
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials

from config import (
    CRM_SESSION_HOURS,
    generate_token,
    get_db,
    hash_password,
    now_iso,
    utc_now,
    verify_password,
)
from models import CRMLogin, CRMUserCreate, CRMUserUpdate
from routes.auth import get_current_admin, resolve_admin, security

logger = logging.getLogger("crm_auth")

router = APIRouter(tags=["CRM Auth"])

USER_PROJECTION = {"_id": 0, "password_hash": 0}


# ==================== HELPERS ====================

async def resolve_crm_user(db, token: str) -> Optional[dict]:
    session = await db.crm_sessions.find_one({
        "token": token,
        "expires_at": {"$gt": now_iso()}
    })
    if not session:
        return None

    user = await db.crm_users.find_one({"id": session["user_id"]}, USER_PROJECTION)
    if not user or not user.get("is_active", True):
        return None
    return user


async def get_current_crm_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db=Depends(get_db),
):
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await resolve_crm_user(db, credentials.credentials)
    if not user:
        raise HTTPException(status_code=401, detail="Session expired")

    request.state.identity = {"type": "crm", "id": user["id"], "username": user["username"]}
    return user


async def require_staff(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db=Depends(get_db),
):
    """Admin JWT or CRM session token"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    token = credentials.credentials

    admin = await resolve_admin(db, token)
    if admin:
        identity = {"type": "admin", "id": admin["id"], "email": admin["email"]}
        request.state.identity = identity
        return identity

    user = await resolve_crm_user(db, token)
    if user:
        identity = {"type": "crm", "id": user["id"], "username": user["username"]}
        request.state.identity = identity
        return identity

    raise HTTPException(status_code=401, detail="Invalid or expired credential")


# ==================== LOGIN / LOGOUT ====================

@router.post("/crm-login")
async def crm_login(data: CRMLogin, db=Depends(get_db)):
    username = data.username.strip()
    user = await db.crm_users.find_one({"username": username}, {"_id": 0})

    if not user or not verify_password(data.password, user.get("password_hash", "")):
        logger.info(f"[CRM_AUTH] Failed login for {username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    if not user.get("is_active", True):
        raise HTTPException(status_code=401, detail="Account is inactive")

    token = generate_token()
    expires_at = (utc_now() + timedelta(hours=CRM_SESSION_HOURS)).isoformat()

    await db.crm_sessions.insert_one({
        "token": token,
        "user_id": user["id"],
        "created_at": now_iso(),
        "expires_at": expires_at
    })
    await db.crm_users.update_one({"id": user["id"]}, {"$set": {"last_login": now_iso()}})

    logger.info(f"[CRM_AUTH] Login {username}")
    return {
        "success": True,
        "token": token,
        "expires_at": expires_at,
        "user": {"id": user["id"], "username": user["username"]}
    }


@router.post("/crm-logout")
async def crm_logout(
    user: dict = Depends(get_current_crm_user),
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db=Depends(get_db),
):
    await db.crm_sessions.delete_one({"token": credentials.credentials})
    return {"success": True}


@router.get("/crm-session")
async def crm_session(user: dict = Depends(get_current_crm_user)):
    return {"success": True, "user": {"id": user["id"], "username": user["username"]}}


# ==================== CRM USERS (admin) ====================

@router.get("/crm-users")
async def list_crm_users(admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    users = await db.crm_users.find({}, USER_PROJECTION).sort("created_at", -1).to_list(200)
    return {"data": users}


@router.post("/crm-users", status_code=201)
async def create_crm_user(data: CRMUserCreate, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    existing = await db.crm_users.find_one({"username": data.username})
    if existing:
        raise HTTPException(status_code=400, detail="Username already exists")

    user = {
        "id": str(uuid.uuid4()),
        "username": data.username,
        "password_hash": hash_password(data.password),
        "is_active": data.is_active,
        "last_login": None,
        "created_at": now_iso(),
        "updated_at": now_iso()
    }
    await db.crm_users.insert_one(user)
    logger.info(f"[CRM_AUTH] CRM user created {data.username} by {admin.get('email')}")

    user.pop("_id", None)
    user.pop("password_hash", None)
    return {"success": True, "data": user}


@router.put("/crm-users/{user_id}")
async def update_crm_user(
    user_id: str,
    data: CRMUserUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    target = await db.crm_users.find_one({"id": user_id})
    if not target:
        raise HTTPException(status_code=404, detail="Not found")

    update = {}
    if data.username is not None:
        username = data.username.strip()
        clash = await db.crm_users.find_one({"username": username, "id": {"$ne": user_id}})
        if clash:
            raise HTTPException(status_code=400, detail="Username already exists")
        update["username"] = username
    if data.password is not None:
        update["password_hash"] = hash_password(data.password)
    if data.is_active is not None:
        update["is_active"] = data.is_active
    update["updated_at"] = now_iso()

    await db.crm_users.update_one({"id": user_id}, {"$set": update})

    # Deactivation or password change ends open sessions
    if data.is_active is False or data.password is not None:
        await db.crm_sessions.delete_many({"user_id": user_id})

    user = await db.crm_users.find_one({"id": user_id}, USER_PROJECTION)
    return {"success": True, "data": user}


@router.delete("/crm-users/{user_id}")
async def delete_crm_user(user_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.crm_users.delete_one({"id": user_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Not found")
    await db.crm_sessions.delete_many({"user_id": user_id})
    return {"success": True}
