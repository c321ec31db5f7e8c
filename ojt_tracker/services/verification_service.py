"""
Entry verification workflow.

An entry owner asks a supervisor to verify an entry. That stores a fresh
random token on the entry and emails the supervisor a link carrying it.
The supervisor (never logged in) opens the link and confirms, which flips
the entry to verified.

Verification state of one entry:

    UNVERIFIED --issue--> UNVERIFIED (token T1)
    UNVERIFIED (T1) --issue--> UNVERIFIED (T2); T1 is dead
    UNVERIFIED (Tn) --redeem Tn--> VERIFIED
    VERIFIED --redeem anything--> rejected

VERIFIED is terminal. Both writes are conditional updates whose affected
row count decides the outcome, so concurrent requests served by different
processes cannot verify an entry twice. Email is sent after the commit and
its failure is only logged.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.config import settings
from ojt_tracker.core.exceptions import AlreadyVerifiedError, BadRequestError, VerificationUnavailableError
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.supervisor import Supervisor
from ojt_tracker.models.user import User
from ojt_tracker.schemas.supervisor import SupervisorCreate
from ojt_tracker.services import email_templates
from ojt_tracker.services.entry_service import get_owned_entry
from ojt_tracker.services.notifications import Notifier, dispatch
from ojt_tracker.services.supervisor_service import create_supervisor, get_owned_supervisor

logger = structlog.get_logger(__name__)


@dataclass
class IssuedVerification:
    entry: Entry
    supervisor: Supervisor
    token: str
    verification_url: str
    email_sent: bool


@dataclass
class VerificationView:
    entry: Entry
    technician: Optional[User]


def new_verification_token() -> str:
    """Random UUIDv4 string (122 bits of entropy)."""
    return str(uuid.uuid4())


def build_verification_url(token: str) -> str:
    return f"{settings.base_url}/verify/{token}"


async def issue_verification_request(
    db: AsyncSession,
    notifier: Notifier,
    owner_id: uuid.UUID,
    entry_id: uuid.UUID,
    supervisor_id: Optional[uuid.UUID] = None,
    new_supervisor: Optional[SupervisorCreate] = None,
) -> IssuedVerification:
    """
    Mint a verification token for an entry and email the supervisor.

    Any token issued earlier for the same entry stops working.

    Raises:
        NotFoundError: unknown entry or supervisor
        ForbiddenError: entry or supervisor owned by another user
        AlreadyVerifiedError: entry is already verified
    """
    entry = await get_owned_entry(db, owner_id, entry_id)
    if entry.verified:
        raise AlreadyVerifiedError()

    if supervisor_id is not None:
        supervisor = await get_owned_supervisor(db, owner_id, supervisor_id)
    elif new_supervisor is not None:
        supervisor = await create_supervisor(db, owner_id, new_supervisor)
    else:
        raise BadRequestError("supervisor_id or supervisor is required", code="SUPERVISOR_REQUIRED")

    token = new_verification_token()
    result = await db.execute(
        update(Entry)
        .where(Entry.id == entry.id, Entry.verified.is_(False))
        .values(verification_token=token)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        # Verified between our read and this write
        await db.rollback()
        raise AlreadyVerifiedError()

    await db.commit()
    await db.refresh(entry)

    verification_url = build_verification_url(token)
    logger.info(
        "verification_requested",
        entry_id=str(entry.id),
        user_id=str(owner_id),
        supervisor_id=str(supervisor.id),
        verification_url=verification_url,
    )

    owner = await db.get(User, owner_id)
    subject, body = email_templates.verification_request_email(
        owner.name if owner else None,
        owner.employee_number if owner else None,
        entry,
        verification_url,
    )
    email_sent = await dispatch(notifier, supervisor.email, subject, body)
    if not email_sent:
        logger.warning(
            "verification_email_failed",
            entry_id=str(entry.id),
            supervisor_email=supervisor.email,
            verification_url=verification_url,
        )

    return IssuedVerification(
        entry=entry,
        supervisor=supervisor,
        token=token,
        verification_url=verification_url,
        email_sent=email_sent,
    )


async def _entry_for_token(db: AsyncSession, token: str) -> Entry:
    result = await db.execute(select(Entry).where(Entry.verification_token == token))
    entry = result.scalar_one_or_none()
    if entry is None:
        raise VerificationUnavailableError()
    if entry.verified:
        raise AlreadyVerifiedError()
    return entry


async def get_verification_details(db: AsyncSession, token: str) -> VerificationView:
    """
    Entry and technician shown to the supervisor before confirming.

    Raises:
        VerificationUnavailableError: token unknown or superseded
        AlreadyVerifiedError: entry already verified
    """
    entry = await _entry_for_token(db, token)
    technician = await db.get(User, entry.user_id)
    return VerificationView(entry=entry, technician=technician)


async def redeem_verification(
    db: AsyncSession,
    notifier: Notifier,
    token: str,
    verifier_name: str,
) -> Entry:
    """
    Mark the entry behind `token` as verified by `verifier_name`.

    Succeeds at most once per entry. A losing concurrent attempt sees zero
    affected rows and gets AlreadyVerifiedError; the winner's
    verified_by / verified_at are left untouched.

    Raises:
        VerificationUnavailableError: token unknown or superseded
        AlreadyVerifiedError: entry already verified
    """
    verifier_name = verifier_name.strip()
    if not verifier_name:
        raise BadRequestError("Verifier name is required", code="VERIFIER_NAME_REQUIRED")

    entry = await _entry_for_token(db, token)
    # Rollback expires the instance; keep the key for logging
    entry_id = entry.id

    result = await db.execute(
        update(Entry)
        .where(
            Entry.id == entry_id,
            Entry.verification_token == token,
            Entry.verified.is_(False),
        )
        .values(verified=True, verified_by=verifier_name, verified_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.warning("verification_redeem_rejected", entry_id=str(entry_id))
        raise AlreadyVerifiedError()

    await db.commit()
    await db.refresh(entry)
    logger.info("entry_verified", entry_id=str(entry.id), verified_by=verifier_name)

    owner = await db.get(User, entry.user_id)
    if owner is not None:
        subject, body = email_templates.verification_confirmation_email(entry, verifier_name)
        if not await dispatch(notifier, owner.email, subject, body):
            logger.warning("verification_confirmation_email_failed", entry_id=str(entry.id), user_id=str(owner.id))

    return entry
