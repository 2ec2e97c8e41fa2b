"""Pixel-level decode/composite/encode capability and its Pillow backend."""

from __future__ import annotations

from io import BytesIO
from typing import Protocol

from PIL import Image, ImageOps, UnidentifiedImageError

from sellerdesk.imgproc.errors import DecodeError

WHITE = (255, 255, 255)


class PixelBuffer(Protocol):
    """Decoded image with known dimensions."""

    @property
    def size(self) -> tuple[int, int]: ...

    def close(self) -> None: ...


class ImageCodec(Protocol):
    """Backend used by the normaliser for all pixel work."""

    def decode_image(self, data: bytes) -> PixelBuffer:
        """Decode raw file bytes, raising :class:`DecodeError` on failure."""

    def composite_over_white(self, buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
        """Draw ``buffer`` scaled to ``width`` x ``height`` over an opaque white canvas."""

    def encode_jpeg(self, buffer: PixelBuffer, quality: float) -> bytes:
        """Encode an opaque buffer as JPEG with quality in (0, 1]."""

    def release(self, buffer: PixelBuffer) -> None:
        """Free resources held by ``buffer``."""


class PillowCodec:
    """:class:`ImageCodec` implemented with Pillow."""

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self._resample = resample

    def decode_image(self, data: bytes) -> Image.Image:
        """Decode ``data`` into an upright RGBA image."""

        try:
            with Image.open(BytesIO(data)) as source:
                source.load()
                upright = ImageOps.exif_transpose(source)
                try:
                    return upright.convert("RGBA")
                finally:
                    if upright is not source:
                        upright.close()
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError() from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Failed to load image: {exc}") from exc

    def composite_over_white(self, buffer: Image.Image, width: int, height: int) -> Image.Image:
        resized = buffer
        if buffer.size != (width, height):
            resized = buffer.resize((width, height), self._resample)
        try:
            canvas = Image.new("RGB", (width, height), WHITE)
            if resized.mode == "RGBA":
                canvas.paste(resized, (0, 0), resized)
            else:
                canvas.paste(resized, (0, 0))
            return canvas
        finally:
            if resized is not buffer:
                resized.close()

    def encode_jpeg(self, buffer: Image.Image, quality: float) -> bytes:
        out = BytesIO()
        buffer.save(out, format="JPEG", quality=round(quality * 100), optimize=True)
        return out.getvalue()

    def release(self, buffer: Image.Image) -> None:
        buffer.close()
