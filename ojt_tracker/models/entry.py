"""
OJT log entry model.

One row is one unit of logged training time. Rows are written once by
their owner and afterwards only change through supervisor verification
(see ojt_tracker.services.verification_service) or admin deletion.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, Float, ForeignKey, Index, String, Uuid

from ojt_tracker.db.base import Base


class Entry(Base):
    """Logged OJT hours for one method, date and location."""

    __tablename__ = "entries"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    location = Column(String(255), nullable=False)
    method = Column(String(20), nullable=False)  # see utils.constants.Method
    hours = Column(Float, nullable=False)

    # Verification
    verified = Column(Boolean, default=False, nullable=False)
    verified_by = Column(String(255), nullable=True)
    verification_token = Column(String(36), unique=True, nullable=True)
    verified_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint("hours > 0", name="ck_entries_hours_positive"),
        Index("idx_entries_user_date", "user_id", "date"),
    )

    def __repr__(self):
        return f"<Entry(user_id={self.user_id}, method={self.method}, hours={self.hours}, verified={self.verified})>"
