"""Integration tests for the Ordering API via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.routes import order_router
from ordering.order.order import Order
from protean.utils.globals import current_domain
from shared.api import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(order_router)
    return TestClient(app)


def _with_payment(client, items=None, payment_method=1, **overrides):
    body = {
        "customer_email": "ana@example.com",
        "customer_name": "Ana Souza",
        "items": items if items is not None else [{"product_id": "prod-x", "quantity": 2, "price": 100.0}],
        "payment_method": payment_method,
    }
    body.update(overrides)
    return client.post("/orders/with-payment", json=body)


def _stored_orders():
    return current_domain.repository_for(Order).list_recent()


class TestCreateWithPaymentEndpoint:
    def test_paid(self, client, remote_gateway, widget):
        response = _with_payment(client, payment_method=3)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "paid"
        assert body["total"] == 200.0
        assert body["payment_id"]
        assert remote_gateway.calls[0]["payment_method"] == "pix"

    def test_declined(self, client, remote_gateway, widget):
        remote_gateway.configure(verdict="declined")
        response = _with_payment(client)
        assert response.status_code == 201
        assert response.json()["status"] == "canceled"

    @pytest.mark.parametrize("payment_method", [0, 6])
    def test_unknown_payment_method_returns_400(self, client, remote_gateway, payment_method):
        response = _with_payment(client, payment_method=payment_method)
        assert response.status_code == 400
        assert "payment_method" in response.json()["error"]
        assert remote_gateway.calls == []

    @pytest.mark.parametrize("field", ["customer_email", "customer_name"])
    def test_blank_customer_returns_400(self, client, remote_gateway, widget, field):
        response = _with_payment(client, **{field: ""})

        assert response.status_code == 400
        assert field in response.json()["error"]
        assert _stored_orders() == []
        assert remote_gateway.calls == []

    def test_empty_items_returns_400(self, client, remote_gateway):
        response = _with_payment(client, items=[])
        assert response.status_code == 400
        assert remote_gateway.calls == []

    def test_zero_quantity_returns_400(self, client, widget):
        response = _with_payment(client, items=[{"product_id": "prod-x", "quantity": 0, "price": 100.0}])
        assert response.status_code == 400

    def test_unreachable_payments_service_returns_502(self, client, remote_gateway, widget):
        remote_gateway.configure(fail_process=True)

        response = _with_payment(client)

        assert response.status_code == 502
        assert "payment" in response.json()["error"].lower()
        [order] = _stored_orders()
        assert order.status == "payment_failed"
        assert order.total == 200.0


class TestCancelEndpoint:
    def test_cancel_with_payment(self, client, widget):
        created = _with_payment(client).json()

        response = client.post(f"/orders/{created['order_id']}/cancel", json={"payment_id": created["payment_id"]})

        assert response.status_code == 200
        assert response.json() == {
            "order_id": created["order_id"],
            "status": "canceled",
            "payment_canceled": True,
            "payment_cancel_pending": False,
        }

    def test_cancel_without_body(self, client, remote_gateway, widget):
        created = _with_payment(client).json()

        response = client.post(f"/orders/{created['order_id']}/cancel")

        assert response.status_code == 200
        assert response.json()["payment_canceled"] is None
        assert [c["method"] for c in remote_gateway.calls] == ["process_payment"]

    def test_unreachable_payments_service_still_cancels(self, client, remote_gateway, widget):
        created = _with_payment(client).json()
        remote_gateway.configure(fail_cancel=True)

        response = client.post(f"/orders/{created['order_id']}/cancel", json={"payment_id": created["payment_id"]})

        assert response.status_code == 200
        assert response.json()["status"] == "canceled"
        assert response.json()["payment_cancel_pending"] is True
        assert client.get(f"/orders/{created['order_id']}").json()["payment_cancel_pending"] is True

    def test_unknown_order_returns_404(self, client, remote_gateway):
        response = client.post("/orders/ord-404/cancel", json={"payment_id": "pay-1"})
        assert response.status_code == 404
        assert remote_gateway.calls == []


class TestOrderEndpoints:
    def test_build_an_order(self, client, widget, gadget):
        order_id = client.post("/orders").json()["order_id"]

        response = client.post(f"/orders/{order_id}/items", json={"product_id": "prod-x", "quantity": 1})
        assert response.status_code == 201
        client.post(f"/orders/{order_id}/items", json={"product_id": "prod-y", "quantity": 2})

        order = client.get(f"/orders/{order_id}").json()
        assert order["status"] == "pending"
        assert order["total"] == 200.0
        assert {i["product_id"]: i["quantity"] for i in order["items"]} == {"prod-x": 1, "prod-y": 2}

    def test_update_and_remove_item(self, client, widget):
        order_id = client.post("/orders").json()["order_id"]
        item_id = client.post(f"/orders/{order_id}/items", json={"product_id": "prod-x", "quantity": 1}).json()[
            "items"
        ][0]["item_id"]

        response = client.put(f"/orders/{order_id}/items/{item_id}", json={"quantity": 3})
        assert response.json()["total"] == 300.0

        response = client.delete(f"/orders/{order_id}/items/{item_id}")
        assert response.json()["items"] == []
        assert response.json()["total"] == 0.0

    def test_add_unknown_product_returns_400(self, client):
        order_id = client.post("/orders").json()["order_id"]

        response = client.post(f"/orders/{order_id}/items", json={"product_id": "prod-404", "quantity": 1})

        assert response.status_code == 400
        assert response.json()["error"] == {"product_id": ["Product prod-404 is not available"]}

    def test_get_unknown_order_returns_404(self, client):
        response = client.get("/orders/ord-404")
        assert response.status_code == 404


class TestListOrders:
    def test_newest_first(self, client):
        first = client.post("/orders").json()["order_id"]
        second = client.post("/orders").json()["order_id"]

        response = client.get("/orders")

        assert response.status_code == 200
        assert [order["order_id"] for order in response.json()] == [second, first]

    def test_limit(self, client):
        for _ in range(3):
            client.post("/orders")
        assert len(client.get("/orders", params={"limit": 2}).json()) == 2

    def test_limit_out_of_range_returns_400(self, client):
        assert client.get("/orders", params={"limit": 0}).status_code == 400

    def test_empty(self, client):
        assert client.get("/orders").json() == []


class TestDeleteOrder:
    def test_order_and_items_are_gone(self, client, widget):
        order_id = client.post("/orders").json()["order_id"]
        client.post(f"/orders/{order_id}/items", json={"product_id": "prod-x", "quantity": 1})

        response = client.delete(f"/orders/{order_id}")

        assert response.status_code == 204
        assert client.get(f"/orders/{order_id}").status_code == 404
        assert client.get("/orders").json() == []

    def test_unknown_order_returns_404(self, client):
        assert client.delete("/orders/ord-404").status_code == 404


class TestCalculateOrder:
    def test_total_of_items(self, client, widget, gadget):
        order_id = client.post("/orders").json()["order_id"]
        client.post(f"/orders/{order_id}/items", json={"product_id": "prod-x", "quantity": 2})
        client.post(f"/orders/{order_id}/items", json={"product_id": "prod-y", "quantity": 1})

        response = client.get(f"/orders/{order_id}/calculate")

        assert response.status_code == 200
        assert response.json() == {"order_id": order_id, "total": 250.0, "item_count": 2}

    def test_empty_order_returns_400(self, client):
        order_id = client.post("/orders").json()["order_id"]

        response = client.get(f"/orders/{order_id}/calculate")

        assert response.status_code == 400
        assert response.json()["error"] == {"items": ["Order has no items"]}

    def test_unknown_order_returns_404(self, client):
        assert client.get("/orders/ord-404/calculate").status_code == 404


class TestChangeStatus:
    def test_complete_a_paid_order(self, client, widget):
        created = _with_payment(client).json()

        response = client.put(f"/orders/{created['order_id']}/status", json={"status": "completed"})

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert client.get(f"/orders/{created['order_id']}").json()["status"] == "completed"

    def test_invalid_status_returns_400(self, client):
        order_id = client.post("/orders").json()["order_id"]

        response = client.put(f"/orders/{order_id}/status", json={"status": "shipped"})

        assert response.status_code == 400
        assert response.json()["error"] == {"status": ["Invalid order status: shipped"]}
        assert client.get(f"/orders/{order_id}").json()["status"] == "pending"

    def test_unknown_order_returns_404(self, client):
        response = client.put("/orders/ord-404/status", json={"status": "completed"})
        assert response.status_code == 404
