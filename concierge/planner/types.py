"""Planner-related enums and data structures."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operation(str, Enum):
    """Operations the planner may choose; values are the wire names."""

    SEARCH_PRODUCTS = "SearchProducts"
    GET_PRODUCT_DETAILS = "GetProductDetails"
    GET_PRODUCT_REVIEWS = "GetProductReviews"
    COMPARE_PRODUCTS = "CompareProducts"
    GET_RECOMMENDATIONS = "GetRecommendations"
    ADD_TO_CART = "AddToCart"
    REMOVE_FROM_CART = "RemoveFromCart"
    UPDATE_CART_QUANTITY = "UpdateCartQuantity"
    VIEW_CART = "ViewCart"
    CLEAR_CART = "ClearCart"
    ADD_TO_WISHLIST = "AddToWishlist"
    REMOVE_FROM_WISHLIST = "RemoveFromWishlist"
    VIEW_WISHLIST = "ViewWishlist"
    MOVE_WISHLIST_TO_CART = "MoveWishlistToCart"
    PURCHASE_PRODUCT = "PurchaseProduct"
    CHECKOUT = "Checkout"
    VIEW_ORDERS = "ViewOrders"
    GET_ORDER_DETAILS = "GetOrderDetails"
    NONE = "None"


class PlannerAction(BaseModel):
    """The tool a decision asks for, with its still-serialized parameters."""

    model_config = ConfigDict(extra="ignore")

    tool: Operation
    reasoning: str
    parameters: str

    @field_validator("parameters", mode="before")
    @classmethod
    def _serialize_object_parameters(cls, value: Any) -> Any:
        # Models occasionally emit the payload as an object instead of JSON text.
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return value


class PlannerDecision(BaseModel):
    """One reasoning/action record returned per loop iteration."""

    model_config = ConfigDict(extra="ignore")

    thought: str
    action: PlannerAction
    should_continue: bool
    final_response: str | None = Field(default=None)

    @property
    def is_terminal(self) -> bool:
        return not self.should_continue or self.action.tool is Operation.NONE

    def summary(self) -> str:
        return f"{self.action.tool.value} (continue={self.should_continue})"
