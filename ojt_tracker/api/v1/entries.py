"""Entry endpoints: create, list, totals, export."""

from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.security import get_current_user
from ojt_tracker.db.session import get_db
from ojt_tracker.models.user import User
from ojt_tracker.schemas.entry import (
    EntryCreatePayload,
    EntryResponse,
    ExportReport,
    TotalsResponse,
)
from ojt_tracker.services import entry_service
from ojt_tracker.services.totals import ENTRY_STATUSES, compute_method_totals, filter_by_status

router = APIRouter()

STATUS_PATTERN = "^(" + "|".join(ENTRY_STATUSES) + ")$"


@router.post(
    "",
    response_model=Union[EntryResponse, List[EntryResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def create_entries(
    payload: EntryCreatePayload,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Log one entry or a batch.

    A single object in the body returns a single object; an array returns
    an array in the same order.
    """
    items = payload if isinstance(payload, list) else [payload]
    entries = await entry_service.create_entries(db, current_user.id, items)
    if isinstance(payload, list):
        return entries
    return entries[0]


@router.get("", response_model=List[EntryResponse])
async def list_entries(
    verified: Optional[bool] = Query(None, description="Filter by verification state"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Caller's entries, newest date first."""
    return await entry_service.list_entries(db, current_user.id, verified=verified)


@router.get("/totals", response_model=TotalsResponse)
async def get_totals(
    status_filter: str = Query("all", alias="status", pattern=STATUS_PATTERN),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Hours per method over all, verified or unverified entries."""
    entries = filter_by_status(await entry_service.list_entries(db, current_user.id), status_filter)
    totals = compute_method_totals(entries)
    return TotalsResponse(
        status=status_filter,
        totals=totals,
        total_hours=sum(totals.values()),
        entry_count=len(entries),
    )


@router.get("/export", response_model=ExportReport)
async def export_entries(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Verified entries and totals for the printable hours log."""
    return await entry_service.build_export_report(db, current_user)


@router.get("/{entry_id}", response_model=EntryResponse)
async def get_entry(
    entry_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await entry_service.get_owned_entry(db, current_user.id, entry_id)
