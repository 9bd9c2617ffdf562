import json

import pytest

from concierge.planner.simple import RuleBasedPlanner
from concierge.planner.types import Operation

CONTEXT_HISTORY = (
    "User: Tell me about HB002\n\nAgent Thought: Looking up details\n\n"
    "User: buy it now [Context: User is referring to Merrell Moab 3 (ID: HB002)]"
)


async def decide(text, history=""):
    return await RuleBasedPlanner().decide(text, history or f"User: {text}")


@pytest.mark.asyncio
async def test_search_extracts_price_ceiling():
    decision = await decide("Find USB cables under $15")

    assert decision.action.tool is Operation.SEARCH_PRODUCTS
    assert json.loads(decision.action.parameters) == {"searchTerm": "usb cables", "filters": {"maxPrice": 15.0}}
    assert decision.final_response


@pytest.mark.asyncio
async def test_search_extracts_rating_and_sort():
    decision = await decide("Show me the best hiking boots with 4.5+ stars")
    parameters = json.loads(decision.action.parameters)

    assert parameters["searchTerm"] == "hiking boots"
    assert parameters["filters"] == {"minRating": 4.5, "sortBy": "rating"}


@pytest.mark.asyncio
async def test_explicit_id_defaults_to_details():
    decision = await decide("Tell me more about product HB001")

    assert decision.action.tool is Operation.GET_PRODUCT_DETAILS
    assert json.loads(decision.action.parameters) == {"productId": "HB001"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("text", "operation"),
    [
        ("Show reviews for HB001", Operation.GET_PRODUCT_REVIEWS),
        ("Add USB001 to my cart", Operation.ADD_TO_CART),
        ("Save HP002 for later", Operation.ADD_TO_WISHLIST),
        ("Move HP002 from wishlist to cart", Operation.MOVE_WISHLIST_TO_CART),
        ("Remove HP002 from my wishlist", Operation.REMOVE_FROM_WISHLIST),
        ("Remove USB001 from cart", Operation.REMOVE_FROM_CART),
        ("Buy product USB001", Operation.PURCHASE_PRODUCT),
        ("Anything similar to HB002?", Operation.GET_RECOMMENDATIONS),
        ("Compare HB001 and HB002", Operation.COMPARE_PRODUCTS),
        ("Checkout please", Operation.CHECKOUT),
        ("Where is order ORD-TEST-0001?", Operation.GET_ORDER_DETAILS),
    ],
)
async def test_keyword_routing(text, operation):
    decision = await decide(text)

    assert decision.action.tool is operation
    assert decision.should_continue is True


@pytest.mark.asyncio
async def test_context_annotation_resolves_pronoun():
    decision = await RuleBasedPlanner().decide("buy it now", CONTEXT_HISTORY)

    assert decision.action.tool is Operation.PURCHASE_PRODUCT
    assert json.loads(decision.action.parameters) == {"productId": "HB002", "quantity": 1}


@pytest.mark.asyncio
async def test_stale_context_is_ignored():
    history = CONTEXT_HISTORY + "\n\nUser: buy it"

    decision = await RuleBasedPlanner().decide("buy it", history)

    assert decision.action.tool is Operation.NONE


@pytest.mark.asyncio
async def test_unrecognised_request_returns_none_decision():
    decision = await decide("What's the weather like?")

    assert decision.action.tool is Operation.NONE
    assert decision.is_terminal
    assert "help" in decision.final_response
