"""
Error taxonomy shared by the lifecycle manager, the access gate and the routes.

Each error carries the HTTP status it maps to; main.py turns any of them
into a `{"ok": false, "error": ...}` envelope.
"""

from typing import Any, Optional


class StoreError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_envelope(self) -> dict:
        body = {"ok": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(StoreError):
    """Malformed or inconsistent input."""

    status_code = 400
    default_message = "Invalid request data"


class Unauthorized(StoreError):
    """No bearer credential was presented."""

    status_code = 401
    default_message = "Access token required"


class InvalidCredential(StoreError):
    """The credential is malformed, tampered with, or expired."""

    status_code = 403
    default_message = "Invalid or expired token"


class NotFoundError(StoreError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StoreError):
    """A unique key (username, product slug) is already taken."""

    status_code = 409
    default_message = "Already exists"


class InternalError(StoreError):
    status_code = 500
