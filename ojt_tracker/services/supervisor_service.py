"""Supervisor bank operations, always scoped to the owning user."""

import uuid
from typing import List

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.exceptions import ForbiddenError, NotFoundError
from ojt_tracker.models.supervisor import Supervisor
from ojt_tracker.schemas.supervisor import SupervisorCreate

logger = structlog.get_logger(__name__)


async def create_supervisor(db: AsyncSession, owner_id: uuid.UUID, data: SupervisorCreate) -> Supervisor:
    """Save a supervisor to the owner's bank (flushed, not committed)."""
    supervisor = Supervisor(
        user_id=owner_id,
        name=data.name,
        email=str(data.email),
        phone=data.phone,
        certification_level=data.certification_level.value,
        company=data.company,
    )
    db.add(supervisor)
    await db.flush()
    await db.refresh(supervisor)
    logger.info("supervisor_created", supervisor_id=str(supervisor.id), user_id=str(owner_id))
    return supervisor


async def list_supervisors(db: AsyncSession, owner_id: uuid.UUID) -> List[Supervisor]:
    result = await db.execute(
        select(Supervisor)
        .where(Supervisor.user_id == owner_id)
        .order_by(Supervisor.name, Supervisor.created_at)
    )
    return list(result.scalars().all())


async def get_owned_supervisor(db: AsyncSession, owner_id: uuid.UUID, supervisor_id: uuid.UUID) -> Supervisor:
    """Fetch a supervisor from the owner's bank."""
    result = await db.execute(select(Supervisor).where(Supervisor.id == supervisor_id))
    supervisor = result.scalar_one_or_none()

    if supervisor is None:
        raise NotFoundError("Supervisor not found")
    if supervisor.user_id != owner_id:
        raise ForbiddenError("Supervisor does not belong to you")

    return supervisor
