"""
MedDent API - Consultation form (lead)

RULES:
1. A lead is created once, from the public form, without authentication
2. source is a snapshot taken at submission time and never changes
3. Only lead_status and notes are edited afterwards (CRM staff)
4. Leads are never deleted
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class LeadStatus(str, Enum):
    """CRM workflow statuses"""
    NEW = "Yangi"
    CALLED = "Qo'ng'iroq qilindi"
    AGREED = "Kelishildi"
    REJECTED = "Rad etildi"
    WAITING = "Kutmoqda"


VALID_LEAD_STATUSES = [s.value for s in LeadStatus]


class ConsultationFormCreate(BaseModel):
    """Public submission from the consultation modal"""
    full_name: str
    phone: str
    lives_in_tashkent: Optional[str] = None
    last_dentist_visit: Optional[str] = None
    current_problems: Optional[str] = None
    previous_clinic_experience: Optional[str] = None
    missing_teeth: Optional[str] = None
    preferred_call_time: Optional[str] = None
    source: Optional[str] = None
    time_spent_seconds: Optional[int] = None

    @field_validator("full_name", "phone")
    @classmethod
    def required_text(cls, v):
        if v is None or not v.strip():
            raise ValueError("field is required")
        return v.strip()

    @field_validator("time_spent_seconds")
    @classmethod
    def non_negative(cls, v):
        if v is not None and v < 0:
            return 0
        return v


class ConsultationFormUpdate(BaseModel):
    """CRM edit: status and notes only"""
    lead_status: Optional[LeadStatus] = None
    notes: Optional[str] = None
