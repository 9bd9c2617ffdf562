import pytest

from concierge import main as concierge_main


@pytest.fixture(autouse=True)
def fresh_shop_state():
    """Start every HTTP test with an empty transcript, cart, wishlist and order list."""

    session = concierge_main.agent.session
    concierge_main.agent.reset()
    session.cart_items.clear()
    session.wishlist.clear()
    session.orders.clear()
    yield
    concierge_main.agent.reset()


@pytest.fixture
def use_planner(monkeypatch):
    def install(planner):
        monkeypatch.setattr(concierge_main.agent, "planner", planner)
        return planner

    return install
