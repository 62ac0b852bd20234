"""
Domain errors for the research portal.

Services raise these; the handler registered in app.main turns them into
JSON responses of the form {"detail": message, "code": code} with the
status code carried by the exception class.

Usage:
    from app.core.exceptions import NotFoundError

    if not project:
        raise NotFoundError("Project not found")
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base class for every error the API reports to the caller."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(PortalError):
    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(PortalError):
    status_code = 403
    code = "FORBIDDEN"


class ValidationError(PortalError):
    status_code = 400
    code = "VALIDATION_ERROR"


class DuplicateApplicationError(PortalError):
    status_code = 400
    code = "DUPLICATE_APPLICATION"

    def __init__(self, message: str = "You have already applied to this project"):
        super().__init__(message)


class InvalidStateError(PortalError):
    status_code = 400
    code = "INVALID_STATE"


class ConflictError(PortalError):
    """The row changed since the caller read it (stale version)."""

    status_code = 409
    code = "CONFLICT"
