"""User model."""

from sqlalchemy import Boolean, Column, DateTime, String

from ojt_tracker.db.base import Base


class User(Base):
    """Technician (or admin) owning an OJT log."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)  # null for magic-link only accounts
    name = Column(String(255), nullable=True)
    employee_number = Column(String(100), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Password reset
    reset_token = Column(String(36), unique=True, nullable=True)
    reset_token_expires_at = Column(DateTime, nullable=True)

    # Magic-link login
    login_token = Column(String(36), unique=True, nullable=True)
    login_token_expires_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<User {self.email}{' (admin)' if self.is_admin else ''}>"
