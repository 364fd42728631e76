"""
MedDent API - Backend

Start with:
    uvicorn server:app --host 0.0.0.0 --port 8001 --reload
"""

import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import CORS_ORIGINS, ENVIRONMENT, RUN_SEED_ON_START, UPLOAD_DIR, client, db

# Logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("meddent")

app = FastAPI(
    title="MedDent API",
    description="Dental clinic site: CMS, consultation leads and campaign attribution",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[SERVER] Unhandled error on {request.method} {request.url.path}")
    body = {"detail": "Internal server error"}
    if ENVIRONMENT == "development":
        body["message"] = str(exc)
    return JSONResponse(status_code=500, content=body)


# ==================== ROUTES ====================

from routes import (  # noqa: E402
    appointments,
    auth,
    campaigns,
    consultation_forms,
    content,
    crm,
    crm_auth,
    final_cta,
    presets,
    section_backgrounds,
    settings,
    upload,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(crm_auth.router)
api_router.include_router(campaigns.router)
api_router.include_router(consultation_forms.router)
api_router.include_router(crm.router)
api_router.include_router(settings.router)
api_router.include_router(presets.router)
for content_router in content.routers:
    api_router.include_router(content_router)
api_router.include_router(section_backgrounds.router)
api_router.include_router(final_cta.router)
api_router.include_router(appointments.router)
api_router.include_router(upload.router)

app.include_router(api_router)

Path(UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="uploads")


@app.get("/health")
async def health():
    return {"status": "ok", "environment": ENVIRONMENT}


# ==================== STARTUP / SHUTDOWN ====================

@app.on_event("startup")
async def startup():
    from services.seed import create_indexes, seed_admin

    await create_indexes(db)
    logger.info("[SERVER] MongoDB indexes ready")

    if RUN_SEED_ON_START or ENVIRONMENT == "development":
        outcome = await seed_admin(db)
        logger.info(f"[SERVER] Admin seed: {outcome}")

    logger.info(f"[SERVER] MedDent API started ({ENVIRONMENT})")


@app.on_event("shutdown")
async def shutdown_db_client():
    client.close()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
