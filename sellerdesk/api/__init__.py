"""HTTP surface and seller API client."""

from .seller_client import SellerApiClient, SellerApiError

__all__ = ["SellerApiClient", "SellerApiError"]
