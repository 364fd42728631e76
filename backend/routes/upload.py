"""
MedDent API - Routes Uploads (images for the CMS)
Files are written under UPLOAD_DIR/<type>/ and served by server.py at /uploads.
"""

import logging
import re
import secrets
import time
from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from pydantic import BaseModel

from config import ALLOWED_FILE_TYPES, MAX_FILE_SIZE, UPLOAD_DIR
from routes.auth import get_current_admin

logger = logging.getLogger("upload")

router = APIRouter(prefix="/upload", tags=["Upload"])

PUBLIC_PREFIX = "/uploads/"
TYPE_PATTERN = re.compile(r"^[a-z0-9_-]{1,32}$")

MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
}


class ImageDelete(BaseModel):
    url: str


def upload_root() -> Path:
    return Path(UPLOAD_DIR).resolve()


def resolve_upload_path(url: str) -> Path:
    """Filesystem path for a /uploads/... URL; 400 if it escapes UPLOAD_DIR"""
    if not url.startswith(PUBLIC_PREFIX):
        raise HTTPException(status_code=400, detail="Invalid file path")

    root = upload_root()
    path = (root / url[len(PUBLIC_PREFIX):]).resolve()
    if path == root or not path.is_relative_to(root):
        raise HTTPException(status_code=400, detail="Invalid file path")
    return path


@router.post("/image")
async def upload_image(
    request: Request,
    file: UploadFile = File(...),
    type: str = Form("general"),
    admin: dict = Depends(get_current_admin),
):
    if file.content_type not in ALLOWED_FILE_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"File type not allowed. Allowed: {', '.join(ALLOWED_FILE_TYPES)}"
        )

    folder = (type or "general").strip().lower()
    if not TYPE_PATTERN.match(folder):
        raise HTTPException(status_code=400, detail="Invalid upload type")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum: {MAX_FILE_SIZE // 1024 // 1024} MB"
        )

    ext = MIME_EXTENSIONS.get(file.content_type) or Path(file.filename or "").suffix.lower()
    filename = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{ext}"

    target_dir = upload_root() / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    with open(target_dir / filename, "wb") as f:
        f.write(content)

    url = f"{PUBLIC_PREFIX}{folder}/{filename}"
    logger.info(f"[UPLOAD] {url} ({len(content)} bytes) by {admin.get('email')}")

    return {
        "success": True,
        "url": url,
        "publicUrl": str(request.base_url).rstrip("/") + url
    }


@router.delete("/image")
async def delete_image(data: ImageDelete, admin: dict = Depends(get_current_admin)):
    path = resolve_upload_path(data.url)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    path.unlink()
    logger.info(f"[UPLOAD] Deleted {data.url} by {admin.get('email')}")
    return {"success": True}
