"""Catalog, cart and order schemas shared by the storefront and tools."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SortKey = Literal["price_asc", "price_desc", "rating", "popularity"]
OrderStatus = Literal["pending", "confirmed", "shipped", "delivered"]


class ShopModel(BaseModel):
    """Base model serialising to the camelCase shape the planner sees."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProductSummary(ShopModel):
    id: str
    title: str
    price: float
    rating: float
    num_ratings: int
    delivery_date: str
    in_cart: bool = False
    in_wishlist: bool = False


class ProductDetails(ProductSummary):
    description: str
    images: list[str] = Field(default_factory=list)


class ProductReview(ShopModel):
    rating: int
    comment: str
    date: str


class SearchFilters(ShopModel):
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    sort_by: SortKey | None = None


class CartItem(ShopModel):
    product_id: str
    title: str
    price: float
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Cart(ShopModel):
    items: list[CartItem] = Field(default_factory=list)
    total: float = 0.0


class Order(ShopModel):
    order_id: str
    items: list[CartItem]
    total: float
    status: OrderStatus = "confirmed"
    order_date: str
    estimated_delivery: str | None = None


class CartUpdate(ShopModel):
    """Result of a cart mutation."""

    success: bool = True
    message: str
    cart: Cart


class WishlistUpdate(ShopModel):
    """Result of a wishlist mutation."""

    success: bool = True
    message: str
    wishlist: list[str] = Field(default_factory=list)


class ActionResult(ShopModel):
    success: bool = True
    message: str
