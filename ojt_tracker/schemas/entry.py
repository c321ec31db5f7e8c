"""
Pydantic schemas for entry APIs
Request/response models, totals and export report
"""

from datetime import date, datetime
from typing import Annotated, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ojt_tracker.utils.constants import Method


class EntryCreate(BaseModel):
    """One logged unit of OJT time."""

    date: date
    location: str = Field(..., min_length=1, max_length=255, description="Job location")
    method: Method = Field(..., description="Inspection method code, e.g. ET or UT_THK")
    hours: float = Field(..., gt=0, allow_inf_nan=False, description="Hours worked, a finite number greater than 0")

    @field_validator("location")
    @classmethod
    def location_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Location is required")
        return v


EntryBatch = Annotated[List[EntryCreate], Field(min_length=1)]

# Entry creation accepts either one object or a non-empty array of them
EntryCreatePayload = Union[EntryCreate, EntryBatch]


class EntryResponse(BaseModel):
    """Entry as returned to its owner and to admins."""

    id: UUID
    user_id: UUID
    date: date
    location: str
    method: str
    hours: float
    verified: bool
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TotalsResponse(BaseModel):
    """Hours per method over the selected entries."""

    status: str
    totals: Dict[str, float]
    total_hours: float
    entry_count: int


class ExportEntry(BaseModel):
    date: date
    location: str
    method: str
    method_display: str
    hours: float
    hours_display: str
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None


class ExportReport(BaseModel):
    """Verified entries and totals, ready for a printable log."""

    title: str = "Experience Hours (OJT)"
    employee_name: Optional[str] = None
    employee_number: Optional[str] = None
    generated_at: datetime
    methods: List[str]
    method_labels: Dict[str, str]
    entries: List[ExportEntry]
    totals: Dict[str, float]
    totals_display: Dict[str, str]
    total_hours: float
