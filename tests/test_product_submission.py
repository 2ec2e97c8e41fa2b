"""Tests for product submission with photos."""

from __future__ import annotations

import base64
import json

import httpx
import pytest

from sellerdesk.api import SellerApiClient, SellerApiError
from sellerdesk.catalog import PhotoSlotManager, ProductDraft, ProductValidationError
from sellerdesk.config.settings import Settings
from sellerdesk.services.product_submission import ProductSubmissionService

SETTINGS = Settings(seller_api_base_url="http://seller.test/api")
DRAFT = ProductDraft(name="Shirt", price=1500, description="Soft linen", aesthetic="vintage")


def _service(handler) -> tuple[ProductSubmissionService, SellerApiClient]:
    client = SellerApiClient(SETTINGS, transport=httpx.MockTransport(handler))
    return ProductSubmissionService(client), client


@pytest.mark.asyncio
async def test_submit_sends_photos_as_data_uris_and_resets_slots(make_selection) -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "p1", "name": "Shirt", "price": 1500})

    slots = PhotoSlotManager()
    primary = await slots.assign(0, make_selection(80, 60))
    extra = await slots.assign(1, make_selection(60, 80))
    service, client = _service(handler)
    try:
        product = await service.submit(DRAFT, slots, auth_token="secret")
    finally:
        await client.close()

    body = bodies[0]
    assert body["name"] == "Shirt"
    assert body["aesthetic"] == "vintage"
    assert body["image_url"] == primary.to_data_uri()
    assert len(body["images"]) == 1
    prefix, encoded = body["images"][0].split(",", 1)
    assert prefix == "data:image/jpeg;base64"
    assert base64.b64decode(encoded) == extra.encoded_bytes
    assert product.id == "p1"
    assert slots.count() == 0


@pytest.mark.asyncio
async def test_submit_requires_primary_photo() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not be called
        raise AssertionError("request should not be sent")

    service, client = _service(handler)
    try:
        with pytest.raises(ProductValidationError):
            await service.submit(DRAFT, PhotoSlotManager(), auth_token="secret")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_failed_submission_keeps_photos(make_selection) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Database unavailable"})

    slots = PhotoSlotManager()
    await slots.assign(0, make_selection())
    service, client = _service(handler)
    try:
        with pytest.raises(SellerApiError, match="Database unavailable"):
            await service.submit(DRAFT, slots, auth_token="secret")
    finally:
        await client.close()

    assert slots.count() == 1
