"""Typed failures of the photo upload pipeline."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine readable error kinds callers can branch on."""

    INVALID_FILE_TYPE = "invalid_file_type"
    FILE_TOO_LARGE = "file_too_large"
    DECODE_ERROR = "decode_error"
    SLOT_ORDER_VIOLATION = "slot_order_violation"


class PhotoUploadError(Exception):
    """Base class for every error surfaced by the photo pipeline."""

    kind: ErrorKind
    default_message = "Failed to process image."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidFileType(PhotoUploadError):
    """Raised when the declared MIME type is not an image."""

    kind = ErrorKind.INVALID_FILE_TYPE
    default_message = "Please upload an image file (JPEG, PNG, etc.)"


class FileTooLarge(PhotoUploadError):
    """Raised when the selected file exceeds the upload limit."""

    kind = ErrorKind.FILE_TOO_LARGE
    default_message = "Maximum file size is 5MB"


class DecodeError(PhotoUploadError):
    """Raised when the bytes cannot be decoded into an image."""

    kind = ErrorKind.DECODE_ERROR
    default_message = "Failed to load image"


class SlotOrderViolation(PhotoUploadError):
    """Raised when a slot is filled before the slot preceding it."""

    kind = ErrorKind.SLOT_ORDER_VIOLATION
    default_message = "Please add the previous photo first."
