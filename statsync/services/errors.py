from __future__ import annotations

from typing import Any, Dict, Optional

INVALID_FORMAT_MESSAGE = "Invalid data format. Expected { players: [...] }"


class SyncError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MethodError(SyncError):
    status_code = 405
    message = "Method not allowed"


class AuthorizationError(SyncError):
    status_code = 401
    message = "Unauthorized"


class ValidationError(SyncError):
    status_code = 400
    message = INVALID_FORMAT_MESSAGE


class TransactionError(SyncError):
    """The batch was rolled back; ``details`` holds the driver message."""

    status_code = 500
    message = "Database operation failed"
