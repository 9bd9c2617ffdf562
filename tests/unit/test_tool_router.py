import json

import pytest

from concierge.core.errors import MalformedParameters, UnknownOperation
from concierge.planner.types import Operation
from concierge.shop.session import ShoppingSession
from concierge.shop.storefront import Storefront
from concierge.tools.router import DEFAULT_TOOLS, build_tool_router


def test_every_operation_except_none_is_registered(router):
    registered = set(router.operations)

    assert registered == set(Operation) - {Operation.NONE}
    assert len(DEFAULT_TOOLS) == len(registered)


def test_decode_blank_parameters_as_empty_object(router):
    call = router.decode("ViewCart", "   ")

    assert call.operation is Operation.VIEW_CART
    assert call.raw_parameters == "{}"


def test_decode_rejects_invalid_json(router):
    with pytest.raises(MalformedParameters, match=r"Invalid parameters format: \{not json"):
        router.decode("AddToCart", "{not json")


def test_decode_rejects_non_object_payload(router):
    with pytest.raises(MalformedParameters):
        router.decode("AddToCart", '["USB001"]')


def test_decode_rejects_missing_required_field(router):
    with pytest.raises(MalformedParameters, match="productId"):
        router.decode("GetProductDetails", "{}")


@pytest.mark.parametrize("name", ["TeleportProduct", "None", Operation.NONE])
def test_decode_unknown_operation(router, name):
    with pytest.raises(UnknownOperation, match="Unknown tool"):
        router.decode(name, "{}")


def test_decode_applies_defaults(router):
    add = router.decode("AddToCart", '{"productId": "USB001"}')
    recommend = router.decode("GetRecommendations", '{"productId": "HB002"}')
    search = router.decode("SearchProducts", '{"searchTerm": "boots"}')

    assert add.params.quantity == 1
    assert recommend.params.limit == 3
    assert search.params.filters is None


def test_decode_treats_zero_quantity_as_default(router):
    call = router.decode("PurchaseProduct", '{"productId": "USB001", "quantity": 0}')

    assert call.params.quantity == 1


@pytest.mark.asyncio
async def test_dispatch_add_to_cart_mutates_session(router, session):
    call = router.decode("AddToCart", json.dumps({"productId": "USB001", "quantity": 2}))

    response = await router.dispatch(call, session)

    assert response.success
    assert "Added 2x" in response.content
    assert response.data["cart"]["items"][0]["productId"] == "USB001"
    assert session.find_cart_item("USB001").quantity == 2


@pytest.mark.asyncio
async def test_dispatch_search_returns_payload_list(router, session):
    call = router.decode("SearchProducts", '{"searchTerm": "USB cables", "filters": {"maxPrice": 15}}')

    response = await router.dispatch(call, session)

    assert [item["id"] for item in response.data] == ["USB001", "USB003", "USB004"]
    assert "Found 3 products" in response.content


@pytest.mark.asyncio
async def test_dispatch_empty_search_is_still_success(router, session):
    response = await router.dispatch(router.decode("SearchProducts", '{"searchTerm": "zzz"}'), session)

    assert response.success
    assert response.data == []
    assert "No products found" in response.content


@pytest.mark.asyncio
async def test_dispatch_operation_failure_becomes_unsuccessful_response(router, session):
    response = await router.dispatch(router.decode("GetProductDetails", '{"productId": "NOPE"}'), session)

    assert response.success is False
    assert response.content == 'Product with ID "NOPE" not found'


class RecordingStorefront(Storefront):
    """Storefront that records each top-level operation call, minus the session."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.calls: list[tuple[str, tuple]] = []
        self._depth = 0


def _recorded(name):
    delegate = getattr(Storefront, name)

    def method(self, *args):
        if self._depth == 0:
            self.calls.append((name, tuple(arg for arg in args if not isinstance(arg, ShoppingSession))))
        self._depth += 1
        try:
            return delegate(self, *args)
        finally:
            self._depth -= 1

    return method


# operation -> (wire parameters, session setup, storefront method, expected arguments)
DISPATCH_CASES = {
    Operation.SEARCH_PRODUCTS: ({"searchTerm": "usb"}, None, "search_products", ("usb", None)),
    Operation.GET_PRODUCT_DETAILS: ({"productId": "HB001"}, None, "get_product_details", ("HB001",)),
    Operation.GET_PRODUCT_REVIEWS: ({"productId": "HB001"}, None, "get_product_reviews", ("HB001",)),
    Operation.COMPARE_PRODUCTS: (
        {"productIds": ["HB001", "HB002"]},
        None,
        "compare_products",
        (["HB001", "HB002"],),
    ),
    Operation.GET_RECOMMENDATIONS: ({"productId": "HB002"}, None, "get_recommendations", ("HB002", 3)),
    Operation.ADD_TO_CART: ({"productId": "USB001"}, None, "add_to_cart", ("USB001", 1)),
    Operation.REMOVE_FROM_CART: ({"productId": "USB001"}, "cart", "remove_from_cart", ("USB001",)),
    Operation.UPDATE_CART_QUANTITY: (
        {"productId": "USB001", "quantity": 3},
        "cart",
        "update_cart_quantity",
        ("USB001", 3),
    ),
    Operation.VIEW_CART: ({}, None, "view_cart", ()),
    Operation.CLEAR_CART: ({}, "cart", "clear_cart", ()),
    Operation.ADD_TO_WISHLIST: ({"productId": "HP002"}, None, "add_to_wishlist", ("HP002",)),
    Operation.REMOVE_FROM_WISHLIST: ({"productId": "HP002"}, "wishlist", "remove_from_wishlist", ("HP002",)),
    Operation.VIEW_WISHLIST: ({}, "wishlist", "view_wishlist", ()),
    Operation.MOVE_WISHLIST_TO_CART: ({"productId": "HP002"}, "wishlist", "move_wishlist_to_cart", ("HP002",)),
    Operation.PURCHASE_PRODUCT: ({"productId": "USB003"}, None, "purchase_product", ("USB003", 1)),
    Operation.CHECKOUT: ({}, "cart", "checkout", ()),
    Operation.VIEW_ORDERS: ({}, "order", "view_orders", ()),
    Operation.GET_ORDER_DETAILS: ({"orderId": "ORD-TEST-0001"}, "order", "get_order_details", ("ORD-TEST-0001",)),
}

for _name in {method for _, _, method, _ in DISPATCH_CASES.values()}:
    setattr(RecordingStorefront, _name, _recorded(_name))


def prepare(storefront, session, setup):
    if setup == "cart":
        storefront.add_to_cart(session, "USB001")
    elif setup == "wishlist":
        session.wishlist.append("HP002")
    elif setup == "order":
        storefront.purchase_product(session, "USB003")


@pytest.fixture
def recording_storefront():
    return RecordingStorefront(order_id_factory=lambda: "ORD-REC-0001")


def test_dispatch_cases_cover_every_operation():
    assert set(DISPATCH_CASES) == set(Operation) - {Operation.NONE}


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", list(DISPATCH_CASES), ids=lambda operation: operation.value)
async def test_dispatch_calls_storefront_once_with_decoded_arguments(
    storefront, recording_storefront, session, operation
):
    parameters, setup, method, arguments = DISPATCH_CASES[operation]
    prepare(storefront, session, setup)
    router = build_tool_router(recording_storefront)

    response = await router.dispatch(router.decode(operation.value, json.dumps(parameters)), session)

    assert response.success, response.content
    assert response.content
    assert recording_storefront.calls == [(method, arguments)]


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -2])
async def test_dispatch_update_quantity_non_positive_removes_line(
    storefront, recording_storefront, session, quantity
):
    prepare(storefront, session, "cart")
    router = build_tool_router(recording_storefront)
    call = router.decode("UpdateCartQuantity", json.dumps({"productId": "USB001", "quantity": quantity}))

    response = await router.dispatch(call, session)

    assert response.success
    assert session.cart_items == []
    assert recording_storefront.calls == [("update_cart_quantity", ("USB001", quantity))]


@pytest.mark.asyncio
async def test_dispatch_checkout_flow(router, session):
    await router.dispatch(router.decode("AddToCart", '{"productId": "USB001"}'), session)

    response = await router.dispatch(router.decode("Checkout", "{}"), session)

    assert response.success
    assert "ORDER CONFIRMED" in response.content
    assert session.cart_items == []
    assert response.data["orderId"] == "ORD-TEST-0001"


def test_parameter_hint_lists_camel_case_fields(router):
    hint = router.get(Operation.ADD_TO_CART).parameter_hint()

    assert hint == "{productId: string, quantity?: integer}"
