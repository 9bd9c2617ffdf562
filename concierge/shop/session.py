"""Mutable shopping state for one conversation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from concierge.shop.models import Cart, CartItem, Order


@dataclass(slots=True)
class ShoppingSession:
    """Cart, wishlist and order history owned by a single shopper.

    The session is passed by handle to every storefront operation; nothing in
    the package keeps a process-wide cart.
    """

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    cart_items: list[CartItem] = field(default_factory=list)
    wishlist: list[str] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)

    @property
    def cart_total(self) -> float:
        return round(sum(item.subtotal for item in self.cart_items), 2)

    def find_cart_item(self, product_id: str) -> CartItem | None:
        for item in self.cart_items:
            if item.product_id == product_id:
                return item
        return None

    def in_cart(self, product_id: str) -> bool:
        return self.find_cart_item(product_id) is not None

    def in_wishlist(self, product_id: str) -> bool:
        return product_id in self.wishlist

    def cart_snapshot(self) -> Cart:
        """Return a detached copy of the cart."""

        return Cart(
            items=[item.model_copy() for item in self.cart_items],
            total=self.cart_total,
        )
