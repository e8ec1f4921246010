"""
Exception hierarchy for the mission picker.

Every error carries a machine-readable `code` so the UI can branch on it
without parsing English messages.
"""
from __future__ import annotations

from typing import Any


class MissionPickerError(Exception):
    """Base class for all application-level errors."""
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class EmptyInput(MissionPickerError):
    code = "EMPTY_INPUT"

    def __init__(self, field: str = "owner_id"):
        super().__init__(
            message="Please enter your name.",
            details={"field": field},
        )


class InvalidArgument(MissionPickerError, ValueError):
    code = "INVALID_ARGUMENT"


class StoreUnavailable(MissionPickerError):
    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(
            message=f"Storage is unavailable ({operation}). Changes will not be saved.",
            details={"operation": operation, "reason": reason},
        )


class MalformedRecord(MissionPickerError):
    code = "MALFORMED_RECORD"

    def __init__(self, key: str, reason: str):
        super().__init__(
            message=f"Stored key {key!r} could not be decoded: {reason}",
            details={"key": key, "reason": reason},
        )
