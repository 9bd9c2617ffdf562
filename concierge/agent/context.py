"""Resolve references like "buy it now" against the last product shown."""

from __future__ import annotations

from concierge.memory.models import ProductReference

CONTEXTUAL_PHRASES: tuple[str, ...] = (
    "this",
    "it",
    "that",
    "the product",
    "this product",
    "this item",
    "buy now",
    "add to cart",
    "purchase",
)


def needs_product_context(request: str) -> bool:
    """Return True when the request contains a referential phrase.

    Matching is plain substring matching on the lowercased text, so words
    such as "item" or "with" also count as references.
    """

    lowered = request.lower()
    return any(phrase in lowered for phrase in CONTEXTUAL_PHRASES)


def enrich_request(request: str, reference: ProductReference | None) -> str:
    """Append the product annotation when the request refers back to it."""

    if reference is None or not needs_product_context(request):
        return request
    return f"{request} {reference.annotation()}"
