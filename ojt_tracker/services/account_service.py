"""
Account operations: registration, login, profile, password reset,
magic-link login and the startup admin bootstrap.

Reset and login tokens are random UUIDv4 strings stored on the user row
with an expiry. Both are single use: a successful consume clears them.
"""

import uuid
from datetime import datetime, timedelta
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.config import settings
from ojt_tracker.core.exceptions import AuthenticationError, ConflictError, InvalidTokenError
from ojt_tracker.core.security import get_password_hash, verify_password
from ojt_tracker.models.user import User
from ojt_tracker.schemas.auth import RegisterRequest, UserUpdate
from ojt_tracker.services import email_templates
from ojt_tracker.services.notifications import Notifier, dispatch

logger = structlog.get_logger(__name__)

PASSWORD_RESET_MESSAGE = "If an account exists with that email, a password reset link has been sent"
MAGIC_LINK_MESSAGE = "If the address is valid, a login link has been sent"


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, data: RegisterRequest) -> User:
    """Create a password account. Emails are compared lower-cased."""
    if await get_user_by_email(db, data.email):
        raise ConflictError("User with this email already exists", code="EMAIL_TAKEN")

    user = User(
        email=data.email.lower(),
        password_hash=get_password_hash(data.password),
        name=data.name,
        employee_number=data.employee_number,
        is_admin=False,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("user_registered", user_id=str(user.id))
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Same error for unknown email and wrong password."""
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", email=email.lower())
        raise AuthenticationError("Incorrect email or password")
    return user


async def update_profile(db: AsyncSession, user: User, data: UserUpdate) -> User:
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(user, field, value)
    await db.commit()
    await db.refresh(user)
    logger.info("profile_updated", user_id=str(user.id), fields=sorted(changes))
    return user


def _expiry(minutes: int) -> datetime:
    return datetime.utcnow() + timedelta(minutes=minutes)


async def request_password_reset(db: AsyncSession, notifier: Notifier, email: str) -> str:
    """
    Email a reset link when the address belongs to an account.

    The returned message is the same either way, so the endpoint does not
    reveal which addresses are registered.
    """
    user = await get_user_by_email(db, email)
    if user is None:
        logger.info("password_reset_unknown_email")
        return PASSWORD_RESET_MESSAGE

    token = str(uuid.uuid4())
    user.reset_token = token
    user.reset_token_expires_at = _expiry(settings.PASSWORD_RESET_EXPIRE_MINUTES)
    await db.commit()

    reset_url = f"{settings.base_url}/reset-password/{token}"
    subject, body = email_templates.password_reset_email(reset_url, settings.PASSWORD_RESET_EXPIRE_MINUTES)
    if not await dispatch(notifier, user.email, subject, body):
        logger.warning("password_reset_email_failed", user_id=str(user.id), reset_url=reset_url)

    return PASSWORD_RESET_MESSAGE


async def reset_password(db: AsyncSession, token: str, new_password: str) -> User:
    result = await db.execute(select(User).where(User.reset_token == token))
    user = result.scalar_one_or_none()

    if user is None or user.reset_token_expires_at is None or user.reset_token_expires_at < datetime.utcnow():
        raise InvalidTokenError()

    user.password_hash = get_password_hash(new_password)
    user.reset_token = None
    user.reset_token_expires_at = None
    await db.commit()
    await db.refresh(user)

    logger.info("password_reset", user_id=str(user.id))
    return user


async def request_magic_link(db: AsyncSession, notifier: Notifier, email: str) -> str:
    """Email a one-time login link, creating the account on first use."""
    user = await get_user_by_email(db, email)
    if user is None:
        user = User(email=email.lower(), is_admin=False)
        db.add(user)
        await db.flush()
        logger.info("user_created_from_magic_link", user_id=str(user.id))

    token = str(uuid.uuid4())
    user.login_token = token
    user.login_token_expires_at = _expiry(settings.MAGIC_LINK_EXPIRE_MINUTES)
    await db.commit()

    login_url = f"{settings.base_url}/login?token={token}"
    subject, body = email_templates.magic_link_email(login_url, settings.MAGIC_LINK_EXPIRE_MINUTES)
    if not await dispatch(notifier, user.email, subject, body):
        logger.warning("magic_link_email_failed", user_id=str(user.id), login_url=login_url)

    return MAGIC_LINK_MESSAGE


async def consume_magic_link(db: AsyncSession, token: str) -> User:
    result = await db.execute(select(User).where(User.login_token == token))
    user = result.scalar_one_or_none()

    if user is None or user.login_token_expires_at is None or user.login_token_expires_at < datetime.utcnow():
        raise InvalidTokenError()

    user.login_token = None
    user.login_token_expires_at = None
    await db.commit()
    await db.refresh(user)

    logger.info("magic_link_login", user_id=str(user.id))
    return user


async def bootstrap_admin(db: AsyncSession) -> Optional[User]:
    """
    Create the configured admin account if no admin exists yet.

    Skipped while ADMIN_PASSWORD is empty. An existing non-admin account
    with ADMIN_EMAIL is promoted instead of duplicated.
    """
    if not settings.ADMIN_PASSWORD:
        return None

    result = await db.execute(select(User).where(User.is_admin.is_(True)).limit(1))
    if result.scalar_one_or_none() is not None:
        return None

    user = await get_user_by_email(db, settings.ADMIN_EMAIL)
    if user is None:
        user = User(
            email=settings.ADMIN_EMAIL.lower(),
            password_hash=get_password_hash(settings.ADMIN_PASSWORD),
            name=settings.ADMIN_NAME,
        )
        db.add(user)
    user.is_admin = True
    await db.commit()
    await db.refresh(user)

    logger.info("admin_bootstrapped", user_id=str(user.id), email=user.email)
    return user
