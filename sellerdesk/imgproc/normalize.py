"""Image normalisation helpers.

Every accepted product photo goes through the same steps: validate the
selection, decode it, shrink it to fit ``max_width`` x ``max_height``, flatten
transparency onto white and re-encode as JPEG, lowering the quality in fixed
steps until the estimated size fits ``max_size_kb`` or the floor is reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sellerdesk.imgproc.codec import ImageCodec, PillowCodec, PixelBuffer
from sellerdesk.imgproc.errors import FileTooLarge, InvalidFileType, PhotoUploadError
from sellerdesk.imgproc.models import NormalizedImage, RawSelection, to_data_uri
from sellerdesk.metrics.prometheus_exporter import (
    image_normalization_total,
    jpeg_encode_passes_total,
)

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 5 * 1024 * 1024
MAX_WIDTH = 1200
MAX_HEIGHT = 1200
MAX_SIZE_KB = 500
QUALITY_START = 0.9
QUALITY_STEP = 0.1
QUALITY_FLOOR = 0.5

# base64 expands by 4/3; the data URI length times this factor approximates bytes.
DATA_URI_SIZE_FACTOR = 0.75


@dataclass(frozen=True, slots=True)
class NormalizationLimits:
    """Bounds applied by :class:`ImageNormalizer`."""

    max_file_bytes: int = MAX_FILE_BYTES
    max_width: int = MAX_WIDTH
    max_height: int = MAX_HEIGHT
    max_size_kb: int = MAX_SIZE_KB
    quality_start: float = QUALITY_START
    quality_step: float = QUALITY_STEP
    quality_floor: float = QUALITY_FLOOR

    def __post_init__(self) -> None:
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError("max_width and max_height must be positive")
        if self.max_size_kb <= 0:
            raise ValueError("max_size_kb must be positive")
        if _percent(self.quality_step) <= 0:
            raise ValueError("quality_step must be at least 0.01")
        if _percent(self.quality_floor) <= 0:
            raise ValueError("quality_floor must be positive")
        if self.quality_floor > self.quality_start or self.quality_start > 1:
            raise ValueError("quality must satisfy 0 < quality_floor <= quality_start <= 1")

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_kb * 1024


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def target_dimensions(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Return the size that fits the bounds without upscaling or distorting."""

    if width <= max_width and height <= max_height:
        return width, height

    # The side with the tighter ratio hits its bound exactly.
    if max_width * height <= max_height * width:
        return max_width, max(1, _round_half_up(height * max_width, width))
    return max(1, _round_half_up(width * max_height, height)), max_height


def estimate_encoded_size(encoded: bytes) -> int:
    """Approximate transfer size of ``encoded`` once wrapped in a data URI."""

    return int(len(to_data_uri(encoded)) * DATA_URI_SIZE_FACTOR)


def _percent(value: float) -> int:
    return round(value * 100)


class ImageNormalizer:
    """Turns an arbitrary image selection into a bounded JPEG."""

    def __init__(
        self,
        codec: ImageCodec | None = None,
        limits: NormalizationLimits | None = None,
    ) -> None:
        self._codec = codec or PillowCodec()
        self._limits = limits or NormalizationLimits()

    @property
    def limits(self) -> NormalizationLimits:
        return self._limits

    def validate(self, selection: RawSelection) -> None:
        """Check declared type and size without touching the bytes."""

        if not selection.mime_type.lower().startswith("image/"):
            raise InvalidFileType()
        if selection.size_bytes > self._limits.max_file_bytes:
            raise FileTooLarge()

    def normalize(self, selection: RawSelection) -> NormalizedImage:
        """Return a resized, white-flattened JPEG within the size budget.

        Raises:
            InvalidFileType: if the MIME type is not ``image/*``.
            FileTooLarge: if the file exceeds ``max_file_bytes``.
            DecodeError: if the bytes are not a decodable image.
        """

        try:
            self.validate(selection)
            result = self._process(selection)
        except PhotoUploadError as exc:
            image_normalization_total.labels(outcome=exc.kind.value).inc()
            logger.info("Rejected %s selection: %s", selection.mime_type, exc.kind.value)
            raise

        image_normalization_total.labels(outcome="ok").inc()
        return result

    def _process(self, selection: RawSelection) -> NormalizedImage:
        decoded: PixelBuffer | None = None
        canvas: PixelBuffer | None = None
        try:
            decoded = self._codec.decode_image(selection.data)
            source_width, source_height = decoded.size
            width, height = target_dimensions(
                source_width,
                source_height,
                self._limits.max_width,
                self._limits.max_height,
            )
            canvas = self._codec.composite_over_white(decoded, width, height)
            self._codec.release(decoded)
            decoded = None

            encoded, estimate, quality = self._encode_within_budget(canvas)
        finally:
            if decoded is not None:
                self._codec.release(decoded)
            if canvas is not None:
                self._codec.release(canvas)

        logger.debug(
            "Normalised %sx%s -> %sx%s at quality %.1f (~%d bytes)",
            source_width,
            source_height,
            width,
            height,
            quality,
            estimate,
        )
        return NormalizedImage(
            encoded_bytes=encoded,
            width=width,
            height=height,
            approx_size_bytes=estimate,
            quality_used=quality,
        )

    def _encode_within_budget(self, canvas: PixelBuffer) -> tuple[bytes, int, float]:
        # Quality is stepped in whole percents so repeated subtraction cannot drift.
        percent = _percent(self._limits.quality_start)
        step = _percent(self._limits.quality_step)
        floor = _percent(self._limits.quality_floor)

        while True:
            quality = percent / 100
            encoded = self._codec.encode_jpeg(canvas, quality)
            jpeg_encode_passes_total.inc()
            estimate = estimate_encoded_size(encoded)
            if estimate <= self._limits.max_size_bytes or percent <= floor:
                if estimate > self._limits.max_size_bytes:
                    logger.warning(
                        "Size budget of %d KB not met at quality floor (~%d bytes)",
                        self._limits.max_size_kb,
                        estimate,
                    )
                return encoded, estimate, quality
            percent = max(percent - step, floor)
