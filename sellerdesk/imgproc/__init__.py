"""Product photo normalisation."""

from .codec import ImageCodec, PillowCodec
from .errors import (
    DecodeError,
    ErrorKind,
    FileTooLarge,
    InvalidFileType,
    PhotoUploadError,
    SlotOrderViolation,
)
from .models import NormalizedImage, RawSelection
from .normalize import ImageNormalizer, NormalizationLimits

__all__ = [
    "DecodeError",
    "ErrorKind",
    "FileTooLarge",
    "ImageCodec",
    "ImageNormalizer",
    "InvalidFileType",
    "NormalizationLimits",
    "NormalizedImage",
    "PhotoUploadError",
    "PillowCodec",
    "RawSelection",
    "SlotOrderViolation",
]
