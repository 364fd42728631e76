"""
MedDent API - Auth models
Two independent schemes: admin (email + password, JWT) and CRM
(username + password, opaque session token).
"""

from typing import Optional

from pydantic import BaseModel, field_validator


class AdminLogin(BaseModel):
    email: str
    password: str


class CRMLogin(BaseModel):
    username: str
    password: str


class CRMUserCreate(BaseModel):
    username: str
    password: str
    is_active: bool = True

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v or not v.strip():
            raise ValueError("username is required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v or len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v


class CRMUserUpdate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if v is not None and not v.strip():
            raise ValueError("username cannot be blank")
        return v.strip() if v is not None else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is not None and len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v
