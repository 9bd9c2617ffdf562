import pytest

from concierge.agent.commands import COMMAND_OPERATIONS, QuickCommand, match_quick_command
from concierge.agent.context import enrich_request, needs_product_context
from concierge.memory.models import ProductReference
from concierge.planner.types import Operation

REFERENCE = ProductReference("HB002", "Merrell Moab 3")


@pytest.mark.parametrize(
    "request_text",
    ["Buy it now", "add this to my cart", "What about that one?", "purchase", "Tell me about the product"],
)
def test_referential_requests_need_context(request_text):
    assert needs_product_context(request_text)


def test_plain_request_does_not_need_context():
    assert not needs_product_context("Find hiking boots")


def test_enrich_appends_annotation_when_reference_set():
    enriched = enrich_request("Buy it now", REFERENCE)

    assert enriched == "Buy it now [Context: User is referring to Merrell Moab 3 (ID: HB002)]"


def test_enrich_without_reference_returns_request_unchanged():
    assert enrich_request("Buy it now", None) == "Buy it now"


def test_enrich_ignores_non_referential_request():
    assert enrich_request("Find boots", REFERENCE) == "Find boots"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("help", QuickCommand.HELP),
        ("  ?  ", QuickCommand.HELP),
        ("CART", QuickCommand.VIEW_CART),
        ("show wishlist", QuickCommand.VIEW_WISHLIST),
        ("order history", QuickCommand.VIEW_ORDERS),
        ("Empty Cart", QuickCommand.CLEAR_CART),
        ("clear history", QuickCommand.RESET),
        ("reset", QuickCommand.RESET),
    ],
)
def test_quick_commands_match_exact_tokens(text, expected):
    assert match_quick_command(text) is expected


def test_quick_commands_do_not_match_sentences():
    assert match_quick_command("show me my cart please") is None


def test_tool_backed_commands_map_to_operations():
    assert COMMAND_OPERATIONS[QuickCommand.CLEAR_CART] is Operation.CLEAR_CART
    assert QuickCommand.HELP not in COMMAND_OPERATIONS
    assert QuickCommand.RESET not in COMMAND_OPERATIONS
