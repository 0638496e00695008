from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    IO_ERROR = "IO_ERROR"
    DATA_NOT_FOUND = "DATA_NOT_FOUND"
    INTERNAL = "INTERNAL"


class AppError(Exception):
    def __init__(self: AppError, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self: AppError) -> dict[str, str]:
        return {"error": self.code.value, "message": self.message}


class SampleCountWarning(UserWarning):
    """Raised through ``warnings`` when a caller asks for zero lines."""
