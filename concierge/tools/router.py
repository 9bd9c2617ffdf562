"""Tool router mapping planner operations to tool implementations."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from pydantic import ValidationError

from concierge.core.errors import MalformedParameters, UnknownOperation
from concierge.planner.types import Operation
from concierge.shop.session import ShoppingSession
from concierge.shop.storefront import Storefront
from concierge.tools.base import Tool, ToolContext, ToolParams, ToolResponse
from concierge.tools.cart import (
    AddToCartTool,
    ClearCartTool,
    RemoveFromCartTool,
    UpdateCartQuantityTool,
    ViewCartTool,
)
from concierge.tools.catalog import (
    CompareProductsTool,
    GetProductDetailsTool,
    GetProductReviewsTool,
    GetRecommendationsTool,
    SearchProductsTool,
)
from concierge.tools.orders import CheckoutTool, GetOrderDetailsTool, PurchaseProductTool, ViewOrdersTool
from concierge.tools.wishlist import (
    AddToWishlistTool,
    MoveWishlistToCartTool,
    RemoveFromWishlistTool,
    ViewWishlistTool,
)

logger = logging.getLogger("concierge.tools")

DEFAULT_TOOLS: tuple[type[Tool], ...] = (
    SearchProductsTool,
    GetProductDetailsTool,
    GetProductReviewsTool,
    CompareProductsTool,
    GetRecommendationsTool,
    AddToCartTool,
    RemoveFromCartTool,
    UpdateCartQuantityTool,
    ViewCartTool,
    ClearCartTool,
    AddToWishlistTool,
    RemoveFromWishlistTool,
    ViewWishlistTool,
    MoveWishlistToCartTool,
    PurchaseProductTool,
    CheckoutTool,
    ViewOrdersTool,
    GetOrderDetailsTool,
)


@dataclass(slots=True, frozen=True)
class ToolCall:
    """A decoded operation request: the operation and its typed parameters."""

    operation: Operation
    params: ToolParams
    raw_parameters: str = "{}"


class ToolRouter:
    """Decode planner actions and dispatch them to concrete tools."""

    def __init__(self, tools: Mapping[Operation, Tool]) -> None:
        self._tools = dict(tools)

    @property
    def operations(self) -> list[Operation]:
        return list(self._tools)

    def get(self, operation: Operation) -> Tool | None:
        return self._tools.get(operation)

    def tools(self) -> Iterable[Tool]:
        return self._tools.values()

    def decode(self, operation: Operation | str, raw_parameters: str | None) -> ToolCall:
        """Turn a wire-level ``(name, JSON text)`` pair into a typed :class:`ToolCall`."""

        raw = raw_parameters if raw_parameters is not None else ""
        try:
            payload = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise MalformedParameters(raw) from exc
        if not isinstance(payload, dict):
            raise MalformedParameters(raw, "expected a JSON object")

        try:
            resolved = Operation(operation)
        except ValueError as exc:
            raise UnknownOperation(str(getattr(operation, "value", operation))) from exc
        tool = self._tools.get(resolved)
        if tool is None:
            raise UnknownOperation(resolved.value)

        try:
            params = tool.params_model.model_validate(payload)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
            raise MalformedParameters(raw, f"invalid fields: {fields}") from exc

        return ToolCall(operation=resolved, params=params, raw_parameters=raw or "{}")

    async def dispatch(self, call: ToolCall, session: ShoppingSession) -> ToolResponse:
        tool = self._tools.get(call.operation)
        if not tool:
            raise UnknownOperation(call.operation.value)

        context = ToolContext(session=session)
        logger.debug("Dispatching %s with %s", call.operation.value, call.raw_parameters)
        return await tool.run(context, call.params)


def build_tool_router(storefront: Storefront, tool_types: Iterable[type[Tool]] = DEFAULT_TOOLS) -> ToolRouter:
    """Register every shop operation against one storefront."""

    return ToolRouter({tool_type.name: tool_type(storefront) for tool_type in tool_types})
