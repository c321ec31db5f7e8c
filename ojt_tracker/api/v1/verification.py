"""
Verification endpoints.

Issuing a request is an authenticated owner action. The /verify/{token}
pair is public: the token in the path is the only credential, and an
unknown token and an already verified entry get the same 404.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.exceptions import AlreadyVerifiedError, VerificationUnavailableError
from ojt_tracker.core.security import get_current_user
from ojt_tracker.db.session import get_db
from ojt_tracker.models.user import User
from ojt_tracker.schemas.verification import (
    EntrySnapshot,
    RedeemRequest,
    RedeemResponse,
    TechnicianInfo,
    VerificationDetails,
    VerificationRequestCreate,
    VerificationRequestResponse,
)
from ojt_tracker.services import verification_service
from ojt_tracker.services.notifications import Notifier, get_notifier
from ojt_tracker.utils.constants import method_display_name

router = APIRouter()


@router.post("/entries/{entry_id}/verification-request", response_model=VerificationRequestResponse)
async def request_verification(
    entry_id: UUID,
    request: VerificationRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Send a verification link for one of the caller's entries to a supervisor."""
    issued = await verification_service.issue_verification_request(
        db,
        notifier,
        owner_id=current_user.id,
        entry_id=entry_id,
        supervisor_id=request.supervisor_id,
        new_supervisor=request.supervisor,
    )

    if issued.email_sent:
        message = "Verification request sent"
    else:
        message = "Verification link created but the email could not be sent; share the link with your supervisor"

    return VerificationRequestResponse(
        message=message,
        supervisor=issued.supervisor,
        entry=issued.entry,
        verification_url=issued.verification_url,
        email_sent=issued.email_sent,
    )


@router.get("/verify/{token}", response_model=VerificationDetails)
async def get_verification(token: str, db: AsyncSession = Depends(get_db)):
    """Entry details for the supervisor's confirmation page."""
    try:
        view = await verification_service.get_verification_details(db, token)
    except AlreadyVerifiedError:
        raise VerificationUnavailableError()

    entry = view.entry
    technician = view.technician
    return VerificationDetails(
        entry=EntrySnapshot(
            date=entry.date,
            location=entry.location,
            method=entry.method,
            method_display=method_display_name(entry.method),
            hours=entry.hours,
        ),
        technician=TechnicianInfo(
            name=technician.name if technician else None,
            employee_number=technician.employee_number if technician else None,
        ),
    )


@router.post("/verify/{token}", response_model=RedeemResponse)
async def redeem_verification(
    token: str,
    request: RedeemRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Confirm the hours. Works once per entry."""
    try:
        entry = await verification_service.redeem_verification(db, notifier, token, request.verifier_name)
    except AlreadyVerifiedError:
        raise VerificationUnavailableError()

    return RedeemResponse(message="Hours verified successfully", entry=entry)
