"""Database models."""

# Base models (no foreign keys)
from ojt_tracker.models.user import User

# Models with foreign keys to users
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.supervisor import Supervisor

# Export all models
__all__ = [
    "User",
    "Entry",
    "Supervisor",
]
