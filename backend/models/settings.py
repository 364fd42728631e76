"""
MedDent API - Site settings and configuration presets
Storage stays schemaless: one document per key, any JSON value.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class SettingUpsert(BaseModel):
    value: Any = None


class SettingsBulkUpdate(BaseModel):
    settings: Dict[str, Any]

    @field_validator("settings")
    @classmethod
    def non_empty_keys(cls, v):
        for key in v:
            if not key or not key.strip():
                raise ValueError("setting keys cannot be blank")
        return v


class PresetCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class PresetUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
