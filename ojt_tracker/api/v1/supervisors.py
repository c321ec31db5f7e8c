"""Supervisor bank endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.security import get_current_user
from ojt_tracker.db.session import get_db
from ojt_tracker.models.user import User
from ojt_tracker.schemas.supervisor import SupervisorCreate, SupervisorResponse
from ojt_tracker.services import supervisor_service

router = APIRouter()


@router.post("", response_model=SupervisorResponse, status_code=status.HTTP_201_CREATED)
async def create_supervisor(
    request: SupervisorCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Save a supervisor to the caller's bank."""
    supervisor = await supervisor_service.create_supervisor(db, current_user.id, request)
    await db.commit()
    return supervisor


@router.get("", response_model=List[SupervisorResponse])
async def list_supervisors(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await supervisor_service.list_supervisors(db, current_user.id)
