"""Ordered, bounded set of product photos.

Slot 0 holds the primary photo. Slots are filled left to right: a slot can
only be assigned when the slot before it is occupied.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from sellerdesk.imgproc.errors import SlotOrderViolation
from sellerdesk.imgproc.models import NormalizedImage, RawSelection
from sellerdesk.imgproc.normalize import ImageNormalizer

logger = logging.getLogger(__name__)

MAX_SLOTS = 3


@dataclass(slots=True)
class PhotoPayload:
    """Encoded photos ready for the product submission."""

    primary: bytes | None
    extras: list[bytes] = field(default_factory=list)


class PhotoSlotManager:
    """Mediates every change to the photo slots through the normaliser.

    Calls must not be interleaved: await one ``assign`` before starting the next.
    """

    def __init__(self, normalizer: ImageNormalizer | None = None, capacity: int = MAX_SLOTS) -> None:
        self._normalizer = normalizer or ImageNormalizer()
        self._slots: list[NormalizedImage | None] = [None] * capacity

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def _check_index(self, slot: int) -> None:
        if not 0 <= slot < len(self._slots):
            raise IndexError(f"Slot {slot} is out of range 0..{len(self._slots) - 1}")

    def slot(self, index: int) -> NormalizedImage | None:
        """Return the image stored at ``index`` or ``None`` if empty."""

        self._check_index(index)
        return self._slots[index]

    async def assign(self, slot: int, selection: RawSelection) -> NormalizedImage:
        """Normalise ``selection`` and store it at ``slot``, replacing any image there.

        Raises:
            SlotOrderViolation: if the previous slot is empty.
            PhotoUploadError: any normaliser failure, with slots left unchanged.
        """

        self._check_index(slot)
        if slot > 0 and self._slots[slot - 1] is None:
            raise SlotOrderViolation()

        image = await asyncio.to_thread(self._normalizer.normalize, selection)

        replaced = self._slots[slot] is not None
        self._slots[slot] = image
        logger.info(
            "%s slot %d with %dx%d photo",
            "Replaced" if replaced else "Filled",
            slot,
            image.width,
            image.height,
        )
        return image

    def remove(self, slot: int) -> None:
        """Empty ``slot``. Later slots are not shifted down."""

        self._check_index(slot)
        self._slots[slot] = None

    def reset(self) -> None:
        """Empty every slot."""

        self._slots = [None] * len(self._slots)

    def count(self) -> int:
        return sum(1 for image in self._slots if image is not None)

    def is_full(self) -> bool:
        return self.count() == len(self._slots)

    def to_payload(self) -> PhotoPayload:
        """Return slot 0 as primary and the filled slots that follow it without a gap."""

        primary = self._slots[0]
        if primary is None:
            return PhotoPayload(primary=None)

        extras: list[bytes] = []
        for image in self._slots[1:]:
            # TODO: decide whether remove() should compact; photos after a gap are dropped.
            if image is None:
                break
            extras.append(image.encoded_bytes)
        return PhotoPayload(primary=primary.encoded_bytes, extras=extras)
