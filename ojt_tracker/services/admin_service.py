"""Admin-only listing and deletion."""

import uuid
from typing import List

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.exceptions import BadRequestError, NotFoundError
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.supervisor import Supervisor
from ojt_tracker.models.user import User

logger = structlog.get_logger(__name__)


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def list_all_entries(db: AsyncSession) -> List[Entry]:
    result = await db.execute(select(Entry).order_by(Entry.date.desc(), Entry.created_at.desc()))
    return list(result.scalars().all())


async def delete_user(db: AsyncSession, admin: User, user_id: uuid.UUID) -> None:
    """
    Delete a user with their entries and supervisors.

    Children are deleted explicitly so the cascade does not depend on the
    database enforcing foreign keys (SQLite does not by default).
    """
    if user_id == admin.id:
        raise BadRequestError("Cannot delete your own account", code="SELF_DELETE")

    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    entries = await db.execute(delete(Entry).where(Entry.user_id == user_id))
    supervisors = await db.execute(delete(Supervisor).where(Supervisor.user_id == user_id))
    await db.delete(user)
    await db.commit()

    logger.info(
        "user_deleted",
        user_id=str(user_id),
        admin_id=str(admin.id),
        entries_deleted=entries.rowcount,
        supervisors_deleted=supervisors.rowcount,
    )


async def delete_entry(db: AsyncSession, admin: User, entry_id: uuid.UUID) -> None:
    entry = await db.get(Entry, entry_id)
    if entry is None:
        raise NotFoundError("Entry not found")

    await db.delete(entry)
    await db.commit()
    logger.info("entry_deleted", entry_id=str(entry_id), admin_id=str(admin.id))
