"""Literal shortcuts served without consulting the planner."""

from __future__ import annotations

from enum import Enum

from concierge.planner.types import Operation


class QuickCommand(str, Enum):
    HELP = "help"
    VIEW_CART = "view_cart"
    VIEW_WISHLIST = "view_wishlist"
    VIEW_ORDERS = "view_orders"
    CLEAR_CART = "clear_cart"
    RESET = "reset"


QUICK_COMMANDS: dict[str, QuickCommand] = {
    "help": QuickCommand.HELP,
    "?": QuickCommand.HELP,
    "cart": QuickCommand.VIEW_CART,
    "view cart": QuickCommand.VIEW_CART,
    "show cart": QuickCommand.VIEW_CART,
    "wishlist": QuickCommand.VIEW_WISHLIST,
    "show wishlist": QuickCommand.VIEW_WISHLIST,
    "view wishlist": QuickCommand.VIEW_WISHLIST,
    "orders": QuickCommand.VIEW_ORDERS,
    "my orders": QuickCommand.VIEW_ORDERS,
    "order history": QuickCommand.VIEW_ORDERS,
    "clear cart": QuickCommand.CLEAR_CART,
    "empty cart": QuickCommand.CLEAR_CART,
    "clear history": QuickCommand.RESET,
    "reset": QuickCommand.RESET,
}

# Commands answered by running a tool directly.
COMMAND_OPERATIONS: dict[QuickCommand, Operation] = {
    QuickCommand.VIEW_CART: Operation.VIEW_CART,
    QuickCommand.VIEW_WISHLIST: Operation.VIEW_WISHLIST,
    QuickCommand.VIEW_ORDERS: Operation.VIEW_ORDERS,
    QuickCommand.CLEAR_CART: Operation.CLEAR_CART,
}


def match_quick_command(request: str) -> QuickCommand | None:
    return QUICK_COMMANDS.get(request.strip().lower())
