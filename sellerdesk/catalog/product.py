"""Product models exchanged with the seller API."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_AESTHETIC = "noir"


class ProductValidationError(ValueError):
    """Raised when a product cannot be submitted as entered."""


class ProductDraft(BaseModel):
    """Seller-entered product fields, excluding photos."""

    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    description: str = Field(min_length=1)
    aesthetic: str = DEFAULT_AESTHETIC
    product_type: str | None = None

    @field_validator("name", "description", "aesthetic", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


def _coerce_price(value: Any) -> float:
    """Accept numbers, numeric strings and ``{"value"|"amount"|"price": n}`` objects."""

    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    if isinstance(value, dict):
        for key in ("value", "amount", "price"):
            candidate = value.get(key)
            if isinstance(candidate, (int, float)) and not isinstance(candidate, bool):
                return float(candidate)
    return 0.0


class Product(BaseModel):
    """Product as returned by the server, tolerant of camelCase and snake_case keys."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str = ""
    price: float = 0.0
    description: str = ""
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))
    images: list[str] = Field(default_factory=list)
    aesthetic: str = DEFAULT_AESTHETIC
    seller_id: str | None = Field(default=None, validation_alias=AliasChoices("seller_id", "sellerId"))
    created_at: str | None = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: str | None = Field(default=None, validation_alias=AliasChoices("updated_at", "updatedAt"))
    is_sold: bool = Field(default=False, validation_alias=AliasChoices("is_sold", "isSold"))
    status: str = "available"

    @field_validator("id", "seller_id", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value: Any) -> float:
        return _coerce_price(value)

    @model_validator(mode="after")
    def _sold_state(self) -> Product:
        if self.status == "sold":
            self.is_sold = True
        elif self.is_sold:
            self.status = "sold"
        return self
