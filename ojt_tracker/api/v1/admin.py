"""Admin API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.security import get_current_admin_user
from ojt_tracker.db.session import get_db
from ojt_tracker.models.user import User
from ojt_tracker.schemas.auth import UserResponse
from ojt_tracker.schemas.entry import EntryResponse
from ojt_tracker.services import admin_service

router = APIRouter()


# ==================== Users ====================

@router.get("/users", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """All users, newest first."""
    return await admin_service.list_users(db)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Delete a user together with their entries and supervisors."""
    await admin_service.delete_user(db, current_user, user_id)


# ==================== Entries ====================

@router.get("/entries", response_model=List[EntryResponse])
async def list_entries(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return await admin_service.list_all_entries(db)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    await admin_service.delete_entry(db, current_user, entry_id)
