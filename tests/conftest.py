import pytest
from fastapi.testclient import TestClient

from chakravya.main import create_app
from chakravya.shared.config import Settings
from chakravya.auth.service import create_user
from chakravya.orders.payments import PaymentGatewayError, PaymentIntent

PASSWORD = "s3cret-pw"

ADDRESS = {
    "name": "Radha Devi",
    "address": "12 Temple Road",
    "city": "Vrindavan",
    "state": "Uttar Pradesh",
    "pincode": "281121",
    "phone": "9876543210",
}


class FakeGateway:
    """In-process stand-in for the payment processor."""
    enabled = True
    reason = None

    def __init__(self):
        self.intents: dict[str, PaymentIntent] = {}
        self.created: list[PaymentIntent] = []
        self.retrieved: list[str] = []

    def add(self, status="succeeded", amount=0, currency="inr", metadata=None) -> PaymentIntent:
        n = len(self.intents) + 1
        pi = PaymentIntent(
            id=f"pi_test_{n}", status=status, amount=amount, currency=currency,
            metadata=dict(metadata or {}), client_secret=f"pi_test_{n}_secret_x",
        )
        self.intents[pi.id] = pi
        return pi

    def create_intent(self, amount, currency, metadata):
        pi = self.add(status="requires_payment_method", amount=amount, currency=currency, metadata=metadata)
        self.created.append(pi)
        return pi

    def retrieve_intent(self, intent_id):
        self.retrieved.append(intent_id)
        if intent_id not in self.intents:
            raise PaymentGatewayError(f"No such payment_intent: '{intent_id}'")
        return self.intents[intent_id]

    def succeed(self, intent_id):
        self.intents[intent_id].status = "succeeded"


def make_settings(**overrides) -> Settings:
    base = dict(
        DATABASE_URL="sqlite://",
        SESSION_SECRET="test-secret",
        PAYMENTS_ENABLED=True,
        STRIPE_SECRET_KEY="sk_test_dummy",
        PAYMENT_CURRENCY="inr",
        SEED_ON_STARTUP=True,
    )
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(gateway):
    return create_app(make_settings(), gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    with app.state.session_factory() as s:
        yield s


def login(c: TestClient, email: str, password: str = PASSWORD):
    r = c.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def user(db, client):
    u = create_user(db, "devotee@example.com", PASSWORD, first_name="Arjun")
    login(client, "devotee@example.com")
    return u


@pytest.fixture
def other_client(app, client, db):
    # shares the running app (and its database) with `client`
    c = TestClient(app)
    create_user(db, "someone@example.com", PASSWORD)
    login(c, "someone@example.com")
    return c


@pytest.fixture
def products(client):
    return client.get("/api/products").json()
