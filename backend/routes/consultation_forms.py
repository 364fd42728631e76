"""
MedDent API - Routes Consultation forms (leads)

POST is public (the site's consultation modal). Everything else needs a
staff credential (admin JWT or CRM session).
"""

import csv
import io
import logging
import math
import re
import uuid
from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from config import DIRECT_VISIT, get_db, now_iso
from models import ConsultationFormCreate, ConsultationFormUpdate, LeadStatus
from routes.crm_auth import require_staff

logger = logging.getLogger("consultation_forms")

router = APIRouter(prefix="/consultation-forms", tags=["Consultation forms"])

MAX_PER_PAGE = 100

EXPORT_COLUMNS = [
    "created_at", "full_name", "phone", "source", "lead_status",
    "lives_in_tashkent", "last_dentist_visit", "current_problems",
    "previous_clinic_experience", "missing_teeth", "preferred_call_time",
    "time_spent_seconds", "notes",
]


def _parse_day(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{name} must be YYYY-MM-DD")


def build_lead_query(
    search: str = "",
    source_filter: str = "",
    status_filter: str = "",
    date_from: str = "",
    date_to: str = "",
) -> dict:
    query = {}

    if search:
        pattern = re.escape(search.strip())
        query["$or"] = [
            {"full_name": {"$regex": pattern, "$options": "i"}},
            {"phone": {"$regex": pattern, "$options": "i"}},
        ]

    if source_filter:
        query["source"] = source_filter

    if status_filter:
        query["lead_status"] = status_filter

    # Whole days: dateTo includes everything up to the end of that day
    if date_from or date_to:
        query["created_at"] = {}
        if date_from:
            query["created_at"]["$gte"] = _parse_day(date_from, "dateFrom").isoformat()
        if date_to:
            next_day = _parse_day(date_to, "dateTo") + timedelta(days=1)
            query["created_at"]["$lt"] = next_day.isoformat()

    return query


@router.post("", status_code=201)
async def create_form(data: ConsultationFormCreate, db=Depends(get_db)):
    """Public lead capture"""
    form = {
        "id": str(uuid.uuid4()),
        "full_name": data.full_name,
        "phone": data.phone,
        "lives_in_tashkent": data.lives_in_tashkent,
        "last_dentist_visit": data.last_dentist_visit,
        "current_problems": data.current_problems,
        "previous_clinic_experience": data.previous_clinic_experience,
        "missing_teeth": data.missing_teeth,
        "preferred_call_time": data.preferred_call_time,
        "source": (data.source or "").strip() or DIRECT_VISIT,
        "time_spent_seconds": data.time_spent_seconds,
        "lead_status": LeadStatus.NEW.value,
        "notes": "",
        "created_at": now_iso(),
        "updated_at": now_iso()
    }

    await db.consultation_forms.insert_one(form)
    logger.info(f"[LEAD] New consultation form id={form['id']} source={form['source']}")

    return {"success": True, "message": "Form submitted successfully", "id": form["id"]}


@router.get("")
async def list_forms(
    page: int = Query(1, ge=1),
    perPage: int = Query(10, ge=1),
    search: str = "",
    sourceFilter: str = "",
    statusFilter: str = "",
    dateFrom: str = "",
    dateTo: str = "",
    identity: dict = Depends(require_staff),
    db=Depends(get_db),
):
    per_page = min(perPage, MAX_PER_PAGE)
    query = build_lead_query(search, sourceFilter, statusFilter, dateFrom, dateTo)

    total_count = await db.consultation_forms.count_documents(query)
    forms = await db.consultation_forms.find(query, {"_id": 0}) \
        .sort("created_at", -1) \
        .skip((page - 1) * per_page) \
        .limit(per_page) \
        .to_list(per_page)

    return {
        "data": forms,
        "pagination": {
            "page": page,
            "perPage": per_page,
            "totalCount": total_count,
            "totalPages": math.ceil(total_count / per_page)
        }
    }


@router.get("/sources")
async def list_sources(identity: dict = Depends(require_staff), db=Depends(get_db)):
    sources = await db.consultation_forms.distinct("source")
    return {"sources": sorted(s for s in sources if s)}


@router.get("/export")
async def export_forms(
    search: str = "",
    sourceFilter: str = "",
    statusFilter: str = "",
    dateFrom: str = "",
    dateTo: str = "",
    identity: dict = Depends(require_staff),
    db=Depends(get_db),
):
    """CSV of the filtered leads, newest first"""
    query = build_lead_query(search, sourceFilter, statusFilter, dateFrom, dateTo)
    forms = await db.consultation_forms.find(query, {"_id": 0}).sort("created_at", -1).to_list(50000)

    buffer = io.StringIO()
    buffer.write("\ufeff")  # BOM for Excel
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for form in forms:
        writer.writerow({k: ("" if form.get(k) is None else form.get(k)) for k in EXPORT_COLUMNS})

    filename = f"consultation_forms_{date.today().isoformat()}.csv"
    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{form_id}")
async def get_form(form_id: str, identity: dict = Depends(require_staff), db=Depends(get_db)):
    form = await db.consultation_forms.find_one({"id": form_id}, {"_id": 0})
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return {"data": form}


@router.patch("/{form_id}")
async def update_form(
    form_id: str,
    data: ConsultationFormUpdate,
    identity: dict = Depends(require_staff),
    db=Depends(get_db),
):
    """Status and notes only; last write wins"""
    update = {}
    if data.lead_status is not None:
        update["lead_status"] = data.lead_status.value
    if data.notes is not None:
        update["notes"] = data.notes
    update["updated_at"] = now_iso()

    result = await db.consultation_forms.update_one({"id": form_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Form not found")

    form = await db.consultation_forms.find_one({"id": form_id}, {"_id": 0})
    logger.info(
        f"[LEAD] Updated id={form_id} status={form.get('lead_status')} "
        f"by {identity.get('email') or identity.get('username')}"
    )
    return {"success": True, "data": form}
