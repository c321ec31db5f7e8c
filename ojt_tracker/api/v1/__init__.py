"""API v1 routes."""

from fastapi import APIRouter

from ojt_tracker.api.v1 import admin, auth, entries, supervisors, verification

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(entries.router, prefix="/entries", tags=["Entries"])
api_router.include_router(supervisors.router, prefix="/supervisors", tags=["Supervisors"])
api_router.include_router(verification.router, tags=["Verification"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
