from fastapi.testclient import TestClient

from concierge.main import app

client = TestClient(app, raise_server_exceptions=False)


def test_search_tool_route():
    response = client.post(
        "/tools/SearchProducts",
        json={"searchTerm": "USB cables", "filters": {"maxPrice": 15}},
    )

    assert response.status_code == 200
    payload = response.json()
    assert [item["id"] for item in payload["data"]] == ["USB001", "USB003", "USB004"]
    assert "Found 3 products" in payload["message"]


def test_tool_route_without_body_uses_defaults():
    response = client.post("/tools/ViewCart")

    assert response.status_code == 200
    assert response.json()["data"] == {"items": [], "total": 0.0}


def test_cart_round_trip_through_tool_routes():
    added = client.post("/tools/AddToCart", json={"productId": "USB004"})
    assert added.status_code == 200
    assert added.json()["data"]["cart"]["items"][0]["quantity"] == 1

    checkout = client.post("/tools/Checkout", json={})
    assert checkout.status_code == 200
    assert client.post("/tools/ViewCart").json()["data"]["items"] == []


def test_unknown_operation_returns_404():
    response = client.post("/tools/TeleportProduct", json={})

    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown tool: TeleportProduct"


def test_none_sentinel_is_not_dispatchable():
    assert client.post("/tools/None", json={}).status_code == 404


def test_malformed_parameters_return_400():
    response = client.post("/tools/GetProductDetails", json={"wrong": "field"})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid parameters format")


def test_operation_failure_returns_422():
    response = client.post("/tools/Checkout", json={})

    assert response.status_code == 422
    assert response.json()["detail"] == "Your cart is empty. Add items before checkout."


def test_tool_listing_describes_parameters():
    response = client.get("/tools")

    assert response.status_code == 200
    tools = {tool["name"]: tool for tool in response.json()}
    assert tools["AddToCart"]["parameters"] == "{productId: string, quantity?: integer}"
    assert "None" not in tools
