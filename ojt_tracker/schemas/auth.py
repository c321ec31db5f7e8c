"""Authentication schemas."""

from __future__ import annotations  # Enable forward references

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Register request schema."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")
    name: Optional[str] = Field(None, max_length=255)
    employee_number: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModel):
    """User response schema (never carries secrets)."""

    id: UUID
    email: str
    name: Optional[str] = None
    employee_number: Optional[str] = None
    is_admin: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Issued access token plus the user it belongs to."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserUpdate(BaseModel):
    """Profile fields a user may change."""

    name: Optional[str] = Field(None, max_length=255)
    employee_number: Optional[str] = Field(None, max_length=100)


class EmailRequest(BaseModel):
    """Body for password-reset and magic-link requests."""

    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class PasswordResetConfirm(BaseModel):
    password: str = Field(..., min_length=8)


class MessageResponse(BaseModel):
    message: str


TokenResponse.model_rebuild()
