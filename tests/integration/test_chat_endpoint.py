from fastapi.testclient import TestClient

from concierge.main import app
from concierge.planner.simple import RuleBasedPlanner

client = TestClient(app)


def test_chat_runs_usb_scenario(use_planner, scripted_planner, usb_scenario):
    use_planner(scripted_planner(usb_scenario["decisions"]))

    response = client.post("/chat", json={"content": usb_scenario["request"]})

    assert response.status_code == 200
    payload = response.json()
    assert "Found 3 cables" in payload["message"]
    for product_id in usb_scenario["expected_ids"]:
        assert product_id in payload["message"]

    metrics_payload = client.get("/metrics").json()
    assert metrics_payload["total_requests"] >= 1
    assert metrics_payload["tool_calls"]["SearchProducts"] >= 1


def test_chat_missing_content_returns_400():
    response = client.post("/chat", json={"conversation_id": "conv-err"})

    assert response.status_code == 400


def test_chat_blank_content_returns_400():
    response = client.post("/chat", json={"content": "   "})

    assert response.status_code == 400


def test_chat_rule_planner_keeps_product_context(use_planner):
    use_planner(RuleBasedPlanner())

    details = client.post("/chat", json={"content": "Tell me more about product HB002"}).json()
    assert details["product_context"]["product_id"] == "HB002"

    purchase = client.post("/chat", json={"content": "buy it now"}).json()

    assert "ORDER CONFIRMED" in purchase["message"]
    assert "HB002" not in client.post("/chat", json={"content": "cart"}).json()["message"]
    orders = client.post("/tools/ViewOrders", json={}).json()
    assert orders["data"][0]["items"][0]["productId"] == "HB002"


def test_chat_planner_failure_returns_error_message(use_planner, scripted_planner):
    use_planner(scripted_planner([RuntimeError("planner offline")]))

    response = client.post("/chat", json={"content": "find boots"})

    assert response.status_code == 200
    assert "Failed to process request: planner offline" in response.json()["message"]


def test_chat_quick_command_and_reset(use_planner, scripted_planner):
    use_planner(scripted_planner([]))

    help_reply = client.post("/chat", json={"content": "help"}).json()
    reset_reply = client.post("/reset").json()

    assert "Help & Commands" in help_reply["message"]
    assert reset_reply["message"] == "Conversation history cleared. Starting fresh!"


def test_chat_returns_409_while_busy(monkeypatch):
    from concierge import main as concierge_main

    monkeypatch.setattr(concierge_main.runner, "_busy", True)

    response = client.post("/chat", json={"content": "cart"})

    assert response.status_code == 409
