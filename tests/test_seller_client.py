"""Tests for the seller API client."""

from __future__ import annotations

import json

import httpx
import pytest

from sellerdesk.api import SellerApiClient, SellerApiError
from sellerdesk.config.settings import Settings

SETTINGS = Settings(seller_api_base_url="http://seller.test/api/", seller_api_timeout=5.0)


@pytest.mark.asyncio
async def test_create_product_posts_with_explicit_token() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"data": {"product": {"id": 9, "name": "Shirt", "price": "100"}}})

    client = SellerApiClient(SETTINGS, transport=httpx.MockTransport(handler))
    try:
        product = await client.create_product({"name": "Shirt", "price": 100.0}, auth_token="token-1")
    finally:
        await client.close()

    request = captured[0]
    assert request.method == "POST"
    assert request.url.path == "/api/sellers/products"
    assert request.headers["Authorization"] == "Bearer token-1"
    assert json.loads(request.content) == {"name": "Shirt", "price": 100.0}
    assert product.id == "9"
    assert product.price == 100.0


@pytest.mark.asyncio
async def test_server_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Price must be positive"})

    client = SellerApiClient(SETTINGS, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(SellerApiError) as exc_info:
            await client.create_product({}, auth_token="t")
    finally:
        await client.close()

    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "Price must be positive"


@pytest.mark.asyncio
async def test_missing_product_in_response_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {}})

    client = SellerApiClient(SETTINGS, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(SellerApiError, match="missing product"):
            await client.create_product({}, auth_token="t")
    finally:
        await client.close()
