"""Verification request / redemption schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from ojt_tracker.schemas.entry import EntryResponse
from ojt_tracker.schemas.supervisor import SupervisorCreate, SupervisorResponse


class VerificationRequestCreate(BaseModel):
    """
    Ask a supervisor to verify one entry.

    Exactly one of `supervisor_id` (a saved supervisor) or `supervisor`
    (a new one, saved to the bank first) must be given.
    """

    supervisor_id: Optional[UUID] = None
    supervisor: Optional[SupervisorCreate] = None

    @model_validator(mode="after")
    def one_supervisor_source(self):
        if (self.supervisor_id is None) == (self.supervisor is None):
            raise ValueError("Provide either supervisor_id or supervisor, not both")
        return self


class VerificationRequestResponse(BaseModel):
    message: str
    supervisor: SupervisorResponse
    entry: EntryResponse
    verification_url: str
    email_sent: bool


class EntrySnapshot(BaseModel):
    """What the supervisor reviews before verifying."""

    date: date
    location: str
    method: str
    method_display: str
    hours: float


class TechnicianInfo(BaseModel):
    name: Optional[str] = None
    employee_number: Optional[str] = None


class VerificationDetails(BaseModel):
    entry: EntrySnapshot
    technician: TechnicianInfo


class RedeemRequest(BaseModel):
    verifier_name: str = Field(..., min_length=1, max_length=255, description="Name of the verifying supervisor")

    @field_validator("verifier_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Verifier name is required")
        return v


class RedeemResponse(BaseModel):
    message: str
    entry: EntryResponse
