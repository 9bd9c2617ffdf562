"""Shopping cart tools."""

from __future__ import annotations

from concierge import ui
from concierge.planner.types import Operation
from concierge.tools.base import (
    NoParams,
    ProductIdParams,
    ProductQuantityParams,
    Tool,
    ToolContext,
    ToolResponse,
)


class UpdateQuantityParams(ProductIdParams):
    # Zero or negative quantities remove the line.
    quantity: int


class AddToCartTool(Tool[ProductQuantityParams]):
    """Add a product to the cart (quantity defaults to 1)."""

    name = Operation.ADD_TO_CART
    params_model = ProductQuantityParams

    async def execute(self, context: ToolContext, params: ProductQuantityParams) -> ToolResponse:
        update = self.storefront.add_to_cart(context.session, params.product_id, params.quantity)
        return ToolResponse(
            content=ui.message_box(f"{ui.ICONS['cart']} {update.message}", "success"),
            data=update.to_payload(),
        )


class RemoveFromCartTool(Tool[ProductIdParams]):
    """Remove a product line from the cart."""

    name = Operation.REMOVE_FROM_CART
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        update = self.storefront.remove_from_cart(context.session, params.product_id)
        return ToolResponse(content=ui.message_box(update.message, "success"), data=update.to_payload())


class UpdateCartQuantityTool(Tool[UpdateQuantityParams]):
    """Set the quantity of a product already in the cart."""

    name = Operation.UPDATE_CART_QUANTITY
    params_model = UpdateQuantityParams

    async def execute(self, context: ToolContext, params: UpdateQuantityParams) -> ToolResponse:
        update = self.storefront.update_cart_quantity(context.session, params.product_id, params.quantity)
        return ToolResponse(content=ui.message_box(update.message, "success"), data=update.to_payload())


class ViewCartTool(Tool[NoParams]):
    """Show the cart contents and total."""

    name = Operation.VIEW_CART

    async def execute(self, context: ToolContext, params: NoParams) -> ToolResponse:
        cart = self.storefront.view_cart(context.session)
        return ToolResponse(content=ui.cart_summary(cart.items, cart.total), data=cart.to_payload())


class ClearCartTool(Tool[NoParams]):
    """Empty the cart."""

    name = Operation.CLEAR_CART

    async def execute(self, context: ToolContext, params: NoParams) -> ToolResponse:
        result = self.storefront.clear_cart(context.session)
        return ToolResponse(content=ui.message_box(result.message, "success"), data=result.to_payload())
