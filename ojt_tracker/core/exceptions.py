"""
Domain exceptions for the OJT Hours Tracker.

Services raise these instead of HTTPException so they stay usable outside
a request. The API layer renders them with the status code each class
carries (see ojt_tracker.main).

Usage:
    from ojt_tracker.core.exceptions import NotFoundError

    if entry is None:
        raise NotFoundError("Entry not found")
"""

from typing import Any, Dict, Optional


class OJTTrackerError(Exception):
    """Base exception for all OJT Hours Tracker errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {"detail": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(OJTTrackerError):
    """Credentials missing or wrong"""

    status_code = 401

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, code="AUTH_FAILED")


class ForbiddenError(OJTTrackerError):
    """Resource belongs to someone else, or caller lacks the admin flag"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Resource Errors
# ============================================

class NotFoundError(OJTTrackerError):
    """Requested resource does not exist"""

    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class ConflictError(OJTTrackerError):
    """Request clashes with current state"""

    status_code = 409

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


class BadRequestError(OJTTrackerError):
    """Request is well-formed but cannot be applied"""

    status_code = 400

    def __init__(self, message: str, code: str = "BAD_REQUEST"):
        super().__init__(message, code=code)


class InvalidTokenError(BadRequestError):
    """Password-reset or login token unknown or expired"""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


# ============================================
# Verification Errors
# ============================================

class AlreadyVerifiedError(ConflictError):
    """Entry is already verified"""

    def __init__(self, message: str = "Entry already verified"):
        super().__init__(message, code="ALREADY_VERIFIED")


class VerificationUnavailableError(NotFoundError):
    """
    Public verification link cannot be used.

    Raised for unknown tokens, superseded tokens and already verified
    entries alike, so callers cannot tell which tokens ever existed.
    """

    def __init__(self):
        super().__init__("Invalid or already verified verification link")
        self.code = "VERIFICATION_UNAVAILABLE"
