"""Backend operations over the catalog and a shopper's session."""

from __future__ import annotations

import logging
import secrets
import string
import time
from datetime import date
from typing import Any, Callable

from concierge.core.errors import OperationFailure
from concierge.shop.catalog import Catalog
from concierge.shop.models import (
    ActionResult,
    Cart,
    CartItem,
    CartUpdate,
    Order,
    ProductDetails,
    ProductReview,
    ProductSummary,
    SearchFilters,
    WishlistUpdate,
)
from concierge.shop.session import ShoppingSession

_BASE36 = string.digits + string.ascii_uppercase

logger = logging.getLogger("concierge.shop")


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_order_id() -> str:
    """Return an id shaped like ``ORD-<base36 millis>-<4 random chars>``."""

    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"ORD-{timestamp}-{suffix}"


class Storefront:
    """Catalog lookups and session mutations exposed as named operations.

    Every mutating call takes the :class:`ShoppingSession` it acts on. Failures
    raise :class:`OperationFailure` with a message fit to show the shopper.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        *,
        order_id_factory: Callable[[], str] = generate_order_id,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.catalog = catalog or Catalog()
        self._order_id_factory = order_id_factory
        self._today = today

    # -- catalog -----------------------------------------------------------

    def search_products(
        self,
        session: ShoppingSession,
        search_term: str,
        filters: SearchFilters | None = None,
    ) -> list[ProductSummary]:
        raw_term = search_term.lower()
        title_terms = self.catalog.expand_terms(search_term)

        matches = []
        for product in self.catalog.products():
            title = product["title"].lower()
            if any(term in title for term in title_terms):
                matches.append(product)
            # Aliases only widen title matching; descriptions use the raw term.
            elif raw_term in product.get("description", "").lower():
                matches.append(product)

        if filters is not None:
            if filters.min_price is not None:
                matches = [p for p in matches if p["price"] >= filters.min_price]
            if filters.max_price is not None:
                matches = [p for p in matches if p["price"] <= filters.max_price]
            if filters.min_rating is not None:
                matches = [p for p in matches if p["rating"] >= filters.min_rating]
            if filters.sort_by == "price_asc":
                matches.sort(key=lambda p: p["price"])
            elif filters.sort_by == "price_desc":
                matches.sort(key=lambda p: p["price"], reverse=True)
            elif filters.sort_by == "rating":
                matches.sort(key=lambda p: p["rating"], reverse=True)
            elif filters.sort_by == "popularity":
                matches.sort(key=lambda p: p["num_ratings"], reverse=True)

        logger.debug("Search %r matched %d products", search_term, len(matches))
        return [self._summary(session, product) for product in matches]

    def get_product_details(self, session: ShoppingSession, product_id: str) -> ProductDetails:
        return self._details(session, self._require_product(product_id))

    def get_product_reviews(self, product_id: str) -> list[ProductReview]:
        reviews = self.catalog.reviews(product_id)
        if not reviews:
            raise OperationFailure(f'No reviews found for product ID "{product_id}"')
        return [ProductReview(**review) for review in reviews]

    def compare_products(self, session: ShoppingSession, product_ids: list[str]) -> list[ProductDetails]:
        products = [
            self._details(session, product)
            for product in (self.catalog.get(product_id) for product_id in product_ids)
            if product is not None
        ]
        if not products:
            raise OperationFailure("No valid products found to compare")
        return products

    def get_recommendations(
        self,
        session: ShoppingSession,
        product_id: str,
        limit: int = 3,
    ) -> list[ProductSummary]:
        product = self.catalog.get(product_id)
        if product is None:
            raise OperationFailure(f'Product "{product_id}" not found')

        price_range = product["price"] * 0.5
        candidates = [
            candidate
            for candidate in self.catalog.products()
            if candidate["id"] != product_id and abs(candidate["price"] - product["price"]) <= price_range
        ]
        candidates.sort(key=lambda candidate: candidate["rating"], reverse=True)
        return [self._summary(session, candidate) for candidate in candidates[:limit]]

    # -- cart --------------------------------------------------------------

    def add_to_cart(self, session: ShoppingSession, product_id: str, quantity: int = 1) -> CartUpdate:
        product = self._require_product(product_id)

        item = session.find_cart_item(product_id)
        if item is not None:
            item.quantity += quantity
        else:
            session.cart_items.append(
                CartItem(
                    product_id=product_id,
                    title=product["title"],
                    price=product["price"],
                    quantity=quantity,
                )
            )

        return CartUpdate(
            message=f'Added {quantity}x "{product["title"]}" to cart',
            cart=session.cart_snapshot(),
        )

    def remove_from_cart(self, session: ShoppingSession, product_id: str) -> CartUpdate:
        item = session.find_cart_item(product_id)
        if item is None:
            raise OperationFailure(f'Product "{product_id}" is not in your cart')

        session.cart_items.remove(item)
        return CartUpdate(message=f'Removed "{item.title}" from cart', cart=session.cart_snapshot())

    def update_cart_quantity(self, session: ShoppingSession, product_id: str, quantity: int) -> CartUpdate:
        item = session.find_cart_item(product_id)
        if item is None:
            raise OperationFailure(f'Product "{product_id}" is not in your cart')
        if quantity <= 0:
            return self.remove_from_cart(session, product_id)

        item.quantity = quantity
        return CartUpdate(message=f"Updated quantity to {quantity}", cart=session.cart_snapshot())

    def view_cart(self, session: ShoppingSession) -> Cart:
        return session.cart_snapshot()

    def clear_cart(self, session: ShoppingSession) -> ActionResult:
        session.cart_items.clear()
        return ActionResult(message="Cart has been cleared")

    # -- wishlist ----------------------------------------------------------

    def add_to_wishlist(self, session: ShoppingSession, product_id: str) -> WishlistUpdate:
        product = self._require_product(product_id)

        if session.in_wishlist(product_id):
            return WishlistUpdate(
                message=f'"{product["title"]}" is already in your wishlist',
                wishlist=list(session.wishlist),
            )

        session.wishlist.append(product_id)
        return WishlistUpdate(
            message=f'Added "{product["title"]}" to wishlist',
            wishlist=list(session.wishlist),
        )

    def remove_from_wishlist(self, session: ShoppingSession, product_id: str) -> WishlistUpdate:
        if not session.in_wishlist(product_id):
            raise OperationFailure(f'Product "{product_id}" is not in your wishlist')

        session.wishlist.remove(product_id)
        product = self.catalog.get(product_id)
        title = product["title"] if product else product_id
        return WishlistUpdate(message=f'Removed "{title}" from wishlist', wishlist=list(session.wishlist))

    def view_wishlist(self, session: ShoppingSession) -> list[ProductDetails]:
        products = []
        for product_id in session.wishlist:
            product = self.catalog.get(product_id)
            if product is not None:
                products.append(self._details(session, product))
        return products

    def move_wishlist_to_cart(self, session: ShoppingSession, product_id: str) -> ActionResult:
        if not session.in_wishlist(product_id):
            raise OperationFailure(f'Product "{product_id}" is not in your wishlist')

        self.remove_from_wishlist(session, product_id)
        self.add_to_cart(session, product_id, 1)
        product = self.catalog.get(product_id)
        title = product["title"] if product else product_id
        return ActionResult(message=f'Moved "{title}" from wishlist to cart')

    # -- orders ------------------------------------------------------------

    def purchase_product(self, session: ShoppingSession, product_id: str, quantity: int = 1) -> Order:
        product = self._require_product(product_id)

        order = Order(
            order_id=self._order_id_factory(),
            items=[
                CartItem(
                    product_id=product_id,
                    title=product["title"],
                    price=product["price"],
                    quantity=quantity,
                )
            ],
            total=round(product["price"] * quantity, 2),
            order_date=self._today().isoformat(),
            estimated_delivery=product["delivery_date"],
        )
        session.orders.append(order)
        logger.info("Order %s placed for %sx %s", order.order_id, quantity, product_id)
        return order

    def checkout(self, session: ShoppingSession) -> Order:
        if not session.cart_items:
            raise OperationFailure("Your cart is empty. Add items before checkout.")

        latest_delivery = ""
        for item in session.cart_items:
            product = self.catalog.get(item.product_id)
            if product and product["delivery_date"] > latest_delivery:
                latest_delivery = product["delivery_date"]

        order = Order(
            order_id=self._order_id_factory(),
            items=[item.model_copy() for item in session.cart_items],
            total=session.cart_total,
            order_date=self._today().isoformat(),
            estimated_delivery=latest_delivery or None,
        )
        session.orders.append(order)
        session.cart_items.clear()
        logger.info("Checkout produced order %s with %d lines", order.order_id, len(order.items))
        return order

    def view_orders(self, session: ShoppingSession) -> list[Order]:
        return list(session.orders)

    def get_order_details(self, session: ShoppingSession, order_id: str) -> Order:
        for order in session.orders:
            if order.order_id == order_id:
                return order
        raise OperationFailure(f'Order "{order_id}" not found')

    # -- helpers -----------------------------------------------------------

    def _require_product(self, product_id: str) -> dict[str, Any]:
        product = self.catalog.get(product_id)
        if product is None:
            raise OperationFailure(f'Product with ID "{product_id}" not found')
        return product

    @staticmethod
    def _summary(session: ShoppingSession, product: dict[str, Any]) -> ProductSummary:
        return ProductSummary(
            id=product["id"],
            title=product["title"],
            price=product["price"],
            rating=product["rating"],
            num_ratings=product["num_ratings"],
            delivery_date=product["delivery_date"],
            in_cart=session.in_cart(product["id"]),
            in_wishlist=session.in_wishlist(product["id"]),
        )

    @staticmethod
    def _details(session: ShoppingSession, product: dict[str, Any]) -> ProductDetails:
        return ProductDetails(
            **product,
            in_cart=session.in_cart(product["id"]),
            in_wishlist=session.in_wishlist(product["id"]),
        )
