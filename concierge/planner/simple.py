"""Offline keyword planner used when no model backend is configured."""

from __future__ import annotations

import json
import re
from typing import Any

from concierge.planner.base import Planner
from concierge.planner.types import Operation, PlannerAction, PlannerDecision

PRODUCT_ID_RE = re.compile(r"\b(?:[A-Z]{2,3}\d{3}|B0[0-9A-Z]{8})\b", re.IGNORECASE)
ORDER_ID_RE = re.compile(r"\bORD-[0-9A-Z]+-[0-9A-Z]+\b", re.IGNORECASE)
CONTEXT_ID_RE = re.compile(r"\[Context: User is referring to .+? \(ID: ([^)]+)\)\]")
MAX_PRICE_RE = re.compile(r"\b(?:under|below|less than|cheaper than)\s*\$?\s*(\d+(?:\.\d+)?)")
MIN_PRICE_RE = re.compile(r"\b(?:over|above|more than)\s*\$?\s*(\d+(?:\.\d+)?)")
MIN_RATING_RE = re.compile(r"\b(\d(?:\.\d)?)\s*\+?\s*stars?\b")
QUANTITY_RE = re.compile(r"\b(\d{1,2})\s*(?:x\b|units?\b|pieces?\b|pcs\b|of\b)")

SEARCH_TRIGGERS = ("find", "search", "show me", "looking for", "look for", "need", "want", "browse")

FILLER_WORDS = {
    "a", "an", "and", "any", "are", "can", "find", "for", "get", "i", "im", "i'm", "in", "is",
    "look", "looking", "me", "need", "of", "please", "search", "show", "some", "the", "to",
    "want", "what", "with", "you", "browse", "rating", "rated",
}

FALLBACK_MESSAGE = (
    "I'm not sure how to help with that yet. Try something like "
    '"Find hiking boots under $200", "Add USB001 to my cart", or type "help".'
)


class RuleBasedPlanner(Planner):
    """Deterministic planner mapping recognisable requests to a single tool call.

    Every tool decision carries its closing message, so a turn needs at
    most one dispatch. Anything unrecognised yields a ``None`` decision
    asking the shopper to rephrase.
    """

    def describe(self) -> str:
        return "Rule-based keyword planner"

    async def decide(self, user_request: str, conversation_history: str) -> PlannerDecision:
        message = user_request.lower()
        product_ids = [match.upper() for match in PRODUCT_ID_RE.findall(user_request)]
        context_id = self._context_product(conversation_history)

        if "checkout" in message or "check out" in message:
            return self._call(Operation.CHECKOUT, {}, "Checking out the cart.", "Your order has been placed.")

        order_match = ORDER_ID_RE.search(user_request)
        if order_match:
            order_id = order_match.group(0).upper()
            return self._call(
                Operation.GET_ORDER_DETAILS,
                {"orderId": order_id},
                f"Looking up order {order_id}.",
                f"Here are the details for order {order_id}.",
            )

        if "compare" in message and len(product_ids) >= 2:
            return self._call(
                Operation.COMPARE_PRODUCTS,
                {"productIds": product_ids},
                "Comparing the requested products.",
                "Here is how they compare.",
            )

        target = product_ids[0] if product_ids else context_id
        if target:
            decision = self._product_action(message, target, explicit=bool(product_ids))
            if decision is not None:
                return decision

        if any(trigger in message for trigger in SEARCH_TRIGGERS) or MAX_PRICE_RE.search(message):
            decision = self._search(message)
            if decision is not None:
                return decision

        return PlannerDecision(
            thought="The request does not match anything I can act on.",
            action=PlannerAction(tool=Operation.NONE, reasoning="No matching rule", parameters="{}"),
            should_continue=False,
            final_response=FALLBACK_MESSAGE,
        )

    def _product_action(self, message: str, product_id: str, *, explicit: bool) -> PlannerDecision | None:
        if "review" in message:
            return self._call(
                Operation.GET_PRODUCT_REVIEWS,
                {"productId": product_id},
                f"Fetching reviews for {product_id}.",
                "Here is what other customers think.",
            )
        if "similar" in message or "recommend" in message or "alternative" in message:
            return self._call(
                Operation.GET_RECOMMENDATIONS,
                {"productId": product_id, "limit": 3},
                f"Finding products similar to {product_id}.",
                "You might also like these.",
            )
        if "wishlist" in message or "save" in message:
            if "move" in message and "cart" in message:
                return self._call(
                    Operation.MOVE_WISHLIST_TO_CART,
                    {"productId": product_id},
                    f"Moving {product_id} from the wishlist to the cart.",
                    "Done! It's in your cart now.",
                )
            if "remove" in message:
                return self._call(
                    Operation.REMOVE_FROM_WISHLIST,
                    {"productId": product_id},
                    f"Removing {product_id} from the wishlist.",
                    "Removed from your wishlist.",
                )
            return self._call(
                Operation.ADD_TO_WISHLIST,
                {"productId": product_id},
                f"Saving {product_id} to the wishlist.",
                "Saved for later!",
            )
        if "remove" in message and "cart" in message:
            return self._call(
                Operation.REMOVE_FROM_CART,
                {"productId": product_id},
                f"Removing {product_id} from the cart.",
                "Removed from your cart.",
            )
        quantity = self._quantity(message)
        if "buy" in message or "purchase" in message:
            return self._call(
                Operation.PURCHASE_PRODUCT,
                {"productId": product_id, "quantity": quantity},
                f"Purchasing {product_id}.",
                "Your purchase is complete.",
            )
        if "add" in message or "cart" in message:
            return self._call(
                Operation.ADD_TO_CART,
                {"productId": product_id, "quantity": quantity},
                f"Adding {product_id} to the cart.",
                "Added to your cart.",
            )
        if explicit or "detail" in message or "more about" in message or "tell me" in message:
            return self._call(
                Operation.GET_PRODUCT_DETAILS,
                {"productId": product_id},
                f"Looking up details for {product_id}.",
                "Here are the product details.",
            )
        return None

    def _search(self, message: str) -> PlannerDecision | None:
        filters: dict[str, Any] = {}
        remaining = message
        for pattern, key in ((MAX_PRICE_RE, "maxPrice"), (MIN_PRICE_RE, "minPrice"), (MIN_RATING_RE, "minRating")):
            match = pattern.search(remaining)
            if match:
                filters[key] = float(match.group(1))
                remaining = remaining[: match.start()] + " " + remaining[match.end() :]
        if "cheapest" in remaining:
            filters["sortBy"] = "price_asc"
            remaining = remaining.replace("cheapest", " ")
        elif "best" in remaining or "top rated" in remaining:
            filters["sortBy"] = "rating"

        words = [word.strip(" ,.!?;:\"'()$") for word in remaining.split()]
        term = " ".join(word for word in words if word and word not in FILLER_WORDS and word not in {"best", "top"})
        if not term:
            return None

        parameters: dict[str, Any] = {"searchTerm": term}
        if filters:
            parameters["filters"] = filters
        return self._call(
            Operation.SEARCH_PRODUCTS,
            parameters,
            f"Searching the catalog for '{term}'.",
            f"Here is what I found for '{term}'.",
        )

    @staticmethod
    def _context_product(conversation_history: str) -> str | None:
        # Only the latest user entry may carry a live reference.
        for entry in reversed(conversation_history.split("\n\n")):
            if entry.startswith("User: "):
                match = CONTEXT_ID_RE.search(entry)
                return match.group(1) if match else None
        return None

    @staticmethod
    def _quantity(message: str) -> int:
        match = QUANTITY_RE.search(message)
        return max(1, int(match.group(1))) if match else 1

    @staticmethod
    def _call(operation: Operation, parameters: dict[str, Any], thought: str, final_response: str) -> PlannerDecision:
        return PlannerDecision(
            thought=thought,
            action=PlannerAction(
                tool=operation,
                reasoning=f"Matched {operation.value} rule",
                parameters=json.dumps(parameters),
            ),
            should_continue=True,
            final_response=final_response,
        )
