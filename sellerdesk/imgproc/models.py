"""Data models for selected and normalised images.

Both models are plain dataclasses without processing logic.
"""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

JPEG_MIME_TYPE = "image/jpeg"


def to_data_uri(data: bytes, mime_type: str = JPEG_MIME_TYPE) -> str:
    """Return ``data`` as a base64 data URI."""

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


@dataclass(frozen=True, slots=True)
class RawSelection:
    """A file as handed over by the file picker.

    Fields:
        data: Raw file content.
        mime_type: Declared MIME type, e.g. "image/png".
        size_bytes: Declared file size.
    """

    data: bytes
    mime_type: str
    size_bytes: int

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> RawSelection:
        return cls(data=data, mime_type=mime_type, size_bytes=len(data))

    @classmethod
    def from_path(cls, path: str | Path) -> RawSelection:
        """Read a file from disk, guessing its MIME type from the name."""

        file_path = Path(path)
        mime_type, _ = mimetypes.guess_type(file_path.name)
        data = file_path.read_bytes()
        return cls(
            data=data,
            mime_type=mime_type or "application/octet-stream",
            size_bytes=len(data),
        )


@dataclass(frozen=True, slots=True)
class NormalizedImage:
    """Immutable JPEG produced by :class:`ImageNormalizer`.

    Fields:
        encoded_bytes: JPEG file content.
        width: Width, px.
        height: Height, px.
        approx_size_bytes: Size estimate used by the quality search.
        quality_used: JPEG quality in [0.5, 0.9].
    """

    encoded_bytes: bytes
    width: int
    height: int
    approx_size_bytes: int
    quality_used: float
    mime_type: str = JPEG_MIME_TYPE

    def to_data_uri(self) -> str:
        return to_data_uri(self.encoded_bytes, self.mime_type)
