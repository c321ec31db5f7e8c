"""Supervisor schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from ojt_tracker.utils.constants import CertificationLevel


class SupervisorCreate(BaseModel):
    """New supervisor for the caller's bank."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    certification_level: CertificationLevel
    company: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", "phone", "company")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v


class SupervisorResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    email: str
    phone: str
    certification_level: str
    company: str
    created_at: datetime

    class Config:
        from_attributes = True
