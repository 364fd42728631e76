"""
MedDent API - Routes CRM dashboard
"""

from fastapi import APIRouter, Depends

from config import get_db
from routes.crm_auth import require_staff
from services.lead_stats import build_dashboard

router = APIRouter(prefix="/crm", tags=["CRM"])


@router.get("/dashboard")
async def get_dashboard(identity: dict = Depends(require_staff), db=Depends(get_db)):
    """Counters, conversion and source breakdown, computed on read"""
    return {"data": await build_dashboard(db)}
