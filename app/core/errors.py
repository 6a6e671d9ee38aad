# /app/core/errors.py

"""
Error taxonomy shared by the services and routers.

Every error carries a client-safe `message`, optional `details`, and the HTTP
status the API maps it to. Services raise these; the exception handlers
registered in `app.main` turn them into `{"message": ..., "details": ...}`
JSON bodies.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """A required field is missing or out of range."""
    status_code = 400


class NotFoundError(AppError):
    """The requested group or artwork does not exist."""
    status_code = 404


class ForbiddenError(AppError):
    """Editing is disabled for this deployment."""
    status_code = 403


class RateLimitError(AppError):
    status_code = 429


class GenerationError(AppError):
    """The chat-completion call failed or returned something unusable."""
    status_code = 500


class InternalError(AppError):
    """Storage or encoding failure not attributable to the caller."""
    status_code = 500
