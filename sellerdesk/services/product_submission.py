"""Assembles a product draft and its photos into a seller API request."""

from __future__ import annotations

import logging
from typing import Any

from sellerdesk.api.seller_client import SellerApiClient, SellerApiError
from sellerdesk.catalog.photo_slots import PhotoPayload, PhotoSlotManager
from sellerdesk.catalog.product import Product, ProductDraft, ProductValidationError
from sellerdesk.imgproc.models import to_data_uri
from sellerdesk.metrics.prometheus_exporter import product_submission_total

logger = logging.getLogger(__name__)


def build_product_payload(draft: ProductDraft, photos: PhotoPayload) -> dict[str, Any]:
    """Return the JSON body for ``POST /sellers/products``."""

    if photos.primary is None:
        raise ProductValidationError("Please upload an image for your product")

    payload: dict[str, Any] = {
        "name": draft.name,
        "price": draft.price,
        "description": draft.description,
        "aesthetic": draft.aesthetic,
        "image_url": to_data_uri(photos.primary),
        "images": [to_data_uri(extra) for extra in photos.extras],
    }
    if draft.product_type:
        payload["product_type"] = draft.product_type
    return payload


class ProductSubmissionService:
    """Facade over the photo slots and the seller API client."""

    def __init__(self, client: SellerApiClient) -> None:
        self._client = client

    async def submit(
        self,
        draft: ProductDraft,
        slots: PhotoSlotManager,
        *,
        auth_token: str,
    ) -> Product:
        """Send the product and clear the slots once the server accepted it.

        The slots are left untouched when validation or the request fails so the
        seller can retry without re-selecting photos.
        """

        payload = build_product_payload(draft, slots.to_payload())
        try:
            product = await self._client.create_product(payload, auth_token=auth_token)
        except SellerApiError as exc:
            product_submission_total.labels(outcome="error").inc()
            logger.warning("Product submission failed (%s): %s", exc.status_code, exc)
            raise

        product_submission_total.labels(outcome="ok").inc()
        slots.reset()
        return product
