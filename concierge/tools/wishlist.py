"""Wishlist tools."""

from __future__ import annotations

from concierge import ui
from concierge.planner.types import Operation
from concierge.tools.base import NoParams, ProductIdParams, Tool, ToolContext, ToolResponse


class AddToWishlistTool(Tool[ProductIdParams]):
    """Save a product to the wishlist."""

    name = Operation.ADD_TO_WISHLIST
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        update = self.storefront.add_to_wishlist(context.session, params.product_id)
        return ToolResponse(
            content=ui.message_box(f"{ui.ICONS['heart']} {update.message}", "success"),
            data=update.to_payload(),
        )


class RemoveFromWishlistTool(Tool[ProductIdParams]):
    """Remove a product from the wishlist."""

    name = Operation.REMOVE_FROM_WISHLIST
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        update = self.storefront.remove_from_wishlist(context.session, params.product_id)
        return ToolResponse(
            content=ui.message_box(f"{ui.ICONS['heart']} {update.message}", "success"),
            data=update.to_payload(),
        )


class ViewWishlistTool(Tool[NoParams]):
    """Show saved products."""

    name = Operation.VIEW_WISHLIST

    async def execute(self, context: ToolContext, params: NoParams) -> ToolResponse:
        products = self.storefront.view_wishlist(context.session)
        return ToolResponse(
            content=ui.wishlist_summary(products),
            data=[product.to_payload() for product in products],
        )


class MoveWishlistToCartTool(Tool[ProductIdParams]):
    """Move a saved product into the cart."""

    name = Operation.MOVE_WISHLIST_TO_CART
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        result = self.storefront.move_wishlist_to_cart(context.session, params.product_id)
        return ToolResponse(
            content=ui.message_box(f"{ui.ICONS['cart']} {result.message}", "success"),
            data=result.to_payload(),
        )
