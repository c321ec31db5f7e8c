"""Entry creation, owner-scoped reads and the export report."""

import uuid
from datetime import datetime
from typing import List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.exceptions import ForbiddenError, NotFoundError
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.user import User
from ojt_tracker.schemas.entry import EntryCreate, ExportEntry, ExportReport
from ojt_tracker.services.totals import compute_method_totals, format_hours
from ojt_tracker.utils.constants import METHOD_DISPLAY_NAMES, METHODS, method_display_name

logger = structlog.get_logger(__name__)


async def create_entries(db: AsyncSession, owner_id: uuid.UUID, items: List[EntryCreate]) -> List[Entry]:
    """
    Create one or more entries for the owner.

    New entries start unverified with no verification token. The whole
    batch is validated before this is called, so either every item is
    written or none is.
    """
    entries = [
        Entry(
            user_id=owner_id,
            date=item.date,
            location=item.location,
            method=item.method.value,
            hours=item.hours,
            verified=False,
        )
        for item in items
    ]
    db.add_all(entries)
    await db.commit()
    for entry in entries:
        await db.refresh(entry)

    logger.info("entries_created", user_id=str(owner_id), count=len(entries))
    return entries


async def list_entries(
    db: AsyncSession,
    owner_id: uuid.UUID,
    verified: Optional[bool] = None,
) -> List[Entry]:
    """Owner's entries, newest work date first."""
    query = select(Entry).where(Entry.user_id == owner_id)
    if verified is not None:
        query = query.where(Entry.verified.is_(verified))
    query = query.order_by(Entry.date.desc(), Entry.created_at.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_owned_entry(db: AsyncSession, owner_id: uuid.UUID, entry_id: uuid.UUID) -> Entry:
    """Fetch an entry, refusing entries owned by someone else."""
    result = await db.execute(select(Entry).where(Entry.id == entry_id))
    entry = result.scalar_one_or_none()

    if entry is None:
        raise NotFoundError("Entry not found")
    if entry.user_id != owner_id:
        raise ForbiddenError("Entry does not belong to you")

    return entry


async def build_export_report(db: AsyncSession, user: User) -> ExportReport:
    """Verified entries (oldest first) and their per-method totals."""
    entries = await list_entries(db, user.id, verified=True)
    entries.sort(key=lambda e: (e.date, e.created_at))

    totals = compute_method_totals(entries)

    return ExportReport(
        employee_name=user.name,
        employee_number=user.employee_number,
        generated_at=datetime.utcnow(),
        methods=METHODS,
        method_labels=METHOD_DISPLAY_NAMES,
        entries=[
            ExportEntry(
                date=entry.date,
                location=entry.location,
                method=entry.method,
                method_display=method_display_name(entry.method),
                hours=entry.hours,
                hours_display=format_hours(entry.hours),
                verified_by=entry.verified_by,
                verified_at=entry.verified_at,
            )
            for entry in entries
        ],
        totals=totals,
        totals_display={method: format_hours(hours) for method, hours in totals.items()},
        total_hours=sum(totals.values()),
    )
