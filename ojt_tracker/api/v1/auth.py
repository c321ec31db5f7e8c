"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ojt_tracker.core.security import create_access_token, get_current_user
from ojt_tracker.db.session import get_db
from ojt_tracker.models.user import User
from ojt_tracker.schemas.auth import (
    EmailRequest,
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdate,
)
from ojt_tracker.services import account_service
from ojt_tracker.services.notifications import Notifier, get_notifier

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token({"sub": str(user.id)}),
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user."""
    user = await account_service.register_user(db, request)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    user = await account_service.authenticate(db, request.email, request.password)
    return _token_response(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    request: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update name and employee number."""
    return await account_service.update_profile(db, current_user, request)


@router.post("/password-reset", response_model=MessageResponse)
async def request_password_reset(
    request: EmailRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    message = await account_service.request_password_reset(db, notifier, request.email)
    return MessageResponse(message=message)


@router.post("/password-reset/{token}", response_model=MessageResponse)
async def confirm_password_reset(
    token: str,
    request: PasswordResetConfirm,
    db: AsyncSession = Depends(get_db),
):
    await account_service.reset_password(db, token, request.password)
    return MessageResponse(message="Password has been reset successfully")


@router.post("/magic-link", response_model=MessageResponse)
async def request_magic_link(
    request: EmailRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Email a one-time login link (creates the account on first use)."""
    message = await account_service.request_magic_link(db, notifier, request.email)
    return MessageResponse(message=message)


@router.post("/magic-link/{token}", response_model=TokenResponse)
async def consume_magic_link(token: str, db: AsyncSession = Depends(get_db)):
    user = await account_service.consume_magic_link(db, token)
    return _token_response(user)
