"""
MedDent API - Campaign links

A campaign link is the tagged URL (?source=<unique_code>) handed out to a
marketing channel. click_count is owned by the server and only moves
through the increment endpoint.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from config import parse_iso

CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def normalize_code(value: str) -> str:
    value = (value or "").strip()
    if not CODE_PATTERN.match(value):
        raise ValueError("unique_code must be 1-64 characters of letters, digits, '-' or '_'")
    return value


def normalize_expiry(value) -> Optional[str]:
    """Expiry dates are stored as UTC ISO strings so they compare with now_iso()"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime) or isinstance(value, str):
        return parse_iso(value).isoformat()
    raise ValueError("expiry_date must be an ISO date")


class CampaignCreate(BaseModel):
    campaign_name: str
    unique_code: str
    is_active: bool = True
    expiry_date: Optional[str] = None

    @field_validator("campaign_name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("campaign_name is required")
        return v.strip()

    @field_validator("unique_code")
    @classmethod
    def validate_code(cls, v):
        return normalize_code(v)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def validate_expiry(cls, v):
        return normalize_expiry(v)


class CampaignUpdate(BaseModel):
    campaign_name: Optional[str] = None
    unique_code: Optional[str] = None
    is_active: Optional[bool] = None
    expiry_date: Optional[str] = None

    @field_validator("unique_code")
    @classmethod
    def validate_code(cls, v):
        return normalize_code(v) if v is not None else v

    @field_validator("expiry_date", mode="before")
    @classmethod
    def validate_expiry(cls, v):
        return normalize_expiry(v)


class ClickIncrement(BaseModel):
    code: str
