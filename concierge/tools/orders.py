"""Purchase and order history tools."""

from __future__ import annotations

from pydantic import Field

from concierge import ui
from concierge.planner.types import Operation
from concierge.tools.base import NoParams, ProductQuantityParams, Tool, ToolContext, ToolParams, ToolResponse


class OrderIdParams(ToolParams):
    order_id: str = Field(min_length=1)


class PurchaseProductTool(Tool[ProductQuantityParams]):
    """Buy a single product immediately (quantity defaults to 1)."""

    name = Operation.PURCHASE_PRODUCT
    params_model = ProductQuantityParams

    async def execute(self, context: ToolContext, params: ProductQuantityParams) -> ToolResponse:
        order = self.storefront.purchase_product(context.session, params.product_id, params.quantity)
        return ToolResponse(content=ui.order_confirmation(order), data=order.to_payload())


class CheckoutTool(Tool[NoParams]):
    """Place an order for everything in the cart and empty it."""

    name = Operation.CHECKOUT

    async def execute(self, context: ToolContext, params: NoParams) -> ToolResponse:
        order = self.storefront.checkout(context.session)
        return ToolResponse(content=ui.order_confirmation(order), data=order.to_payload())


class ViewOrdersTool(Tool[NoParams]):
    """List past orders."""

    name = Operation.VIEW_ORDERS

    async def execute(self, context: ToolContext, params: NoParams) -> ToolResponse:
        orders = self.storefront.view_orders(context.session)
        return ToolResponse(
            content=ui.orders_summary(orders),
            data=[order.to_payload() for order in orders],
        )


class GetOrderDetailsTool(Tool[OrderIdParams]):
    """Show one past order by id."""

    name = Operation.GET_ORDER_DETAILS
    params_model = OrderIdParams

    async def execute(self, context: ToolContext, params: OrderIdParams) -> ToolResponse:
        order = self.storefront.get_order_details(context.session, params.order_id)
        return ToolResponse(content=ui.orders_summary([order]), data=order.to_payload())
