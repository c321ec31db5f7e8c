"""Supervisor model."""

from sqlalchemy import Column, ForeignKey, String, Uuid

from ojt_tracker.db.base import Base


class Supervisor(Base):
    """Verifier contact saved to a user's supervisor bank."""

    __tablename__ = "supervisors"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    certification_level = Column(String(20), nullable=False)  # Level I, Level II, Level III
    company = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Supervisor {self.name} ({self.certification_level})>"
