"""
MedDent API - Routes Appointments
Public booking (status always starts as pending); admin manages the rest.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from config import get_db, now_iso
from models.content import AppointmentCreate, AppointmentStatus, AppointmentUpdate
from routes.auth import get_current_admin

logger = logging.getLogger("appointments")

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("", status_code=201)
async def create_appointment(data: AppointmentCreate, db=Depends(get_db)):
    if not data.patient_name.strip() or not data.phone.strip():
        raise HTTPException(status_code=400, detail="patient_name and phone are required")

    appointment = data.model_dump(mode="json")
    appointment.update({
        "id": str(uuid.uuid4()),
        "patient_name": data.patient_name.strip(),
        "phone": data.phone.strip(),
        "status": AppointmentStatus.PENDING.value,
        "created_at": now_iso(),
        "updated_at": now_iso()
    })
    await db.appointments.insert_one(appointment)
    appointment.pop("_id", None)

    logger.info(f"[APPOINTMENT] New {appointment['booking_type']} booking {appointment['id']}")
    return {"success": True, "data": appointment}


@router.get("")
async def list_appointments(
    status: Optional[AppointmentStatus] = None,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    query = {}
    if status:
        query["status"] = status.value
    appointments = await db.appointments.find(query, {"_id": 0}).sort("created_at", -1).to_list(1000)
    return {"data": appointments}


@router.get("/{appointment_id}")
async def get_appointment(appointment_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    appointment = await db.appointments.find_one({"id": appointment_id}, {"_id": 0})
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return {"data": appointment}


@router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    admin: dict = Depends(get_current_admin),
    db=Depends(get_db),
):
    update = data.model_dump(mode="json", exclude_unset=True)
    update["updated_at"] = now_iso()

    result = await db.appointments.update_one({"id": appointment_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Appointment not found")

    appointment = await db.appointments.find_one({"id": appointment_id}, {"_id": 0})
    logger.info(f"[APPOINTMENT] {appointment_id} -> {appointment.get('status')} by {admin.get('email')}")
    return {"success": True, "data": appointment}


@router.delete("/{appointment_id}")
async def delete_appointment(appointment_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
    result = await db.appointments.delete_one({"id": appointment_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return {"success": True}
