import pytest
from fastapi.testclient import TestClient

from chakravya.main import create_app
from chakravya.orders.models import Order
from conftest import ADDRESS, make_settings


@pytest.fixture
def order(client, user, products):
    r = client.post("/api/orders", json={"productId": products[1]["id"], "shippingAddress": ADDRESS})
    assert r.status_code == 200
    return r.json()  # Premium Blessings, 2499.00


def _status(db, order_id):
    return db.get(Order, order_id, populate_existing=True).status


def _confirm(client, order_id, intent_id):
    return client.post(f"/api/orders/{order_id}/payment", json={"paymentIntentId": intent_id})


def test_create_payment_intent(client, user, order, gateway):
    r = client.post("/api/create-payment-intent", json={"orderId": order["id"]})
    assert r.status_code == 200, r.text
    assert r.json() == {"clientSecret": "pi_test_1_secret_x"}

    pi = gateway.created[0]
    assert pi.amount == 249900
    assert pi.currency == "inr"
    assert pi.metadata == {"orderId": order["id"], "userId": user.id}


def test_payment_intent_for_someone_elses_order(other_client, order, gateway):
    r = other_client.post("/api/create-payment-intent", json={"orderId": order["id"]})
    assert r.status_code == 404
    assert gateway.created == []


def test_full_checkout(client, user, order, gateway, db):
    client.post("/api/create-payment-intent", json={"orderId": order["id"]})
    intent = gateway.created[0]
    gateway.succeed(intent.id)

    r = _confirm(client, order["id"], intent.id)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["order"]["status"] == "paid"
    assert body["order"]["paymentId"] == intent.id
    assert _status(db, order["id"]) == "paid"


def _intent_for(gateway, order, user_id, **overrides):
    kw = dict(status="succeeded", amount=249900, metadata={"orderId": order["id"], "userId": user_id})
    kw.update(overrides)
    return gateway.add(**kw)


@pytest.mark.parametrize("overrides", [
    {"status": "requires_payment_method"},
    {"status": "processing"},
    {"amount": 249800},
    {"amount": 2499},
    {"metadata": {"orderId": "some-other-order", "userId": "__user__"}},
    {"metadata": {"orderId": "__order__", "userId": "someone-else"}},
    {"metadata": {}},
])
def test_any_mismatch_leaves_order_pending(client, user, order, gateway, db, overrides):
    overrides = dict(overrides)
    if "metadata" in overrides:
        real = {"__user__": user.id, "__order__": order["id"]}
        overrides["metadata"] = {k: real.get(v, v) for k, v in overrides["metadata"].items()}
    intent = _intent_for(gateway, order, user.id, **overrides)

    r = _confirm(client, order["id"], intent.id)
    assert r.status_code == 400
    assert r.json()["code"] == "payment_verification_failed"
    assert _status(db, order["id"]) == "pending"


def test_unknown_intent_fails_verification(client, order, db):
    r = _confirm(client, order["id"], "pi_does_not_exist")
    assert r.status_code == 400
    assert _status(db, order["id"]) == "pending"


def test_paid_order_cannot_be_confirmed_again(client, user, order, gateway):
    intent = _intent_for(gateway, order, user.id)
    assert _confirm(client, order["id"], intent.id).status_code == 200
    calls = len(gateway.retrieved)

    again = _confirm(client, order["id"], intent.id)
    assert again.status_code == 400
    assert again.json()["code"] == "invalid_state"
    assert len(gateway.retrieved) == calls

    r = client.post("/api/create-payment-intent", json={"orderId": order["id"]})
    assert r.status_code == 400


def test_other_users_order_is_not_found(other_client, user, order, gateway, db):
    # even a perfectly matching intent cannot be used by another account
    intent = _intent_for(gateway, order, user.id)
    r = _confirm(other_client, order["id"], intent.id)
    assert r.status_code == 404
    assert "shippingAddress" not in r.json()
    assert gateway.retrieved == []
    assert _status(db, order["id"]) == "pending"


def test_intent_belonging_to_another_order_is_rejected(client, user, products, gateway, db):
    a = client.post("/api/orders", json={"productId": products[0]["id"], "shippingAddress": ADDRESS}).json()
    b = client.post("/api/orders", json={"productId": products[0]["id"], "shippingAddress": ADDRESS}).json()
    intent = gateway.add(status="succeeded", amount=129900, metadata={"orderId": a["id"], "userId": user.id})

    assert _confirm(client, b["id"], intent.id).status_code == 400
    assert _status(db, b["id"]) == "pending"
    assert _confirm(client, a["id"], intent.id).status_code == 200


def test_confirm_requires_body(client, order):
    r = client.post(f"/api/orders/{order['id']}/payment", json={})
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_data"


def test_payments_config_reports_enabled(client):
    assert client.get("/api/config/payments").json() == {"enabled": True, "currency": "inr"}


@pytest.mark.parametrize("overrides, hint", [
    ({"PAYMENTS_ENABLED": False}, "PAYMENTS_ENABLED=false"),
    ({"STRIPE_SECRET_KEY": None}, "STRIPE_SECRET_KEY is not set"),
])
def test_disabled_payments_return_503(overrides, hint):
    app = create_app(make_settings(**overrides))
    with TestClient(app) as c:
        c.post("/api/auth/register", json={"email": "x@example.com", "password": "longenough"})
        pid = c.get("/api/products").json()[0]["id"]

        order = c.post("/api/orders", json={"productId": pid, "shippingAddress": ADDRESS})
        assert order.status_code == 200  # ordering itself still works

        r = c.post("/api/create-payment-intent", json={"orderId": order.json()["id"]})
        assert r.status_code == 503
        assert r.json()["code"] == "service_unavailable"
        assert hint in r.json()["message"]

        r = c.post(f"/api/orders/{order.json()['id']}/payment", json={"paymentIntentId": "pi_x"})
        assert r.status_code == 503

        assert c.get("/api/config/payments").json() == {"enabled": False, "currency": None}
