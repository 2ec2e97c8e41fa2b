"""Shared fixtures producing in-memory test images."""

from __future__ import annotations

from io import BytesIO
from typing import Callable

import pytest
from PIL import Image

from sellerdesk.imgproc.models import RawSelection

ImageFactory = Callable[..., bytes]


def encode_image(image: Image.Image, fmt: str = "PNG", **params: object) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=fmt, **params)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> ImageFactory:
    """Return a factory for solid-colour images of the given size."""

    def _make(
        width: int,
        height: int,
        *,
        mode: str = "RGB",
        color: object = (200, 40, 40),
        fmt: str = "PNG",
    ) -> bytes:
        with Image.new(mode, (width, height), color) as image:
            return encode_image(image, fmt)

    return _make


@pytest.fixture
def make_selection(make_image: ImageFactory) -> Callable[..., RawSelection]:
    def _make(width: int = 64, height: int = 48, **kwargs: object) -> RawSelection:
        return RawSelection.from_bytes(make_image(width, height, **kwargs), "image/png")

    return _make
