"""Product catalog models and photo slots."""

from .photo_slots import MAX_SLOTS, PhotoPayload, PhotoSlotManager
from .product import Product, ProductDraft, ProductValidationError

__all__ = [
    "MAX_SLOTS",
    "PhotoPayload",
    "PhotoSlotManager",
    "Product",
    "ProductDraft",
    "ProductValidationError",
]
