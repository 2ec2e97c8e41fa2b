"""Async client for the seller REST API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from sellerdesk.catalog.product import Product
from sellerdesk.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class SellerApiError(RuntimeError):
    """Raised when the seller API responds with an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return f"Seller API returned {response.status_code}: {response.text}"


def _unwrap_product(payload: Any) -> Any:
    """Accept ``{product}``, ``{data: {product}}`` or ``{data: product}`` envelopes."""

    if not isinstance(payload, Mapping):
        return payload
    data = payload.get("data", payload)
    if isinstance(data, Mapping) and isinstance(data.get("product"), Mapping):
        return data["product"]
    if isinstance(payload.get("product"), Mapping):
        return payload["product"]
    return data


class SellerApiClient:
    """Thin wrapper around the seller endpoints.

    The auth token is passed per call; the client keeps no session state.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=settings.seller_api_base_url.rstrip("/"),
            timeout=settings.seller_api_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        auth_token: str,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                endpoint,
                json=json_body,
                headers={"Authorization": f"Bearer {auth_token}"},
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:  # pragma: no cover - network safeguard
            raise SellerApiError("Seller API timed out.") from exc
        except httpx.HTTPStatusError as exc:
            raise SellerApiError(
                _error_message(exc.response),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise SellerApiError(f"Seller API request failed: {exc}") from exc

        if not response.content:
            return {}
        return response.json()

    async def create_product(self, payload: Mapping[str, Any], *, auth_token: str) -> Product:
        """Create a product and return the stored record."""

        body = await self._request_json(
            "POST",
            "/sellers/products",
            auth_token=auth_token,
            json_body=payload,
        )
        try:
            product = Product.model_validate(_unwrap_product(body))
        except ValidationError as exc:
            logger.error("Unexpected create_product response: %s", body)
            raise SellerApiError("Invalid response from server - missing product") from exc
        logger.info("Created product %s", product.id)
        return product
