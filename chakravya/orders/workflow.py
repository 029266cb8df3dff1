"""
Order lifecycle: creation, payment-intent issuance and payment confirmation.

An order is created `pending` with its amount copied from the product's
current price. It becomes `paid` only after the processor reports a
succeeded intent whose metadata (orderId, userId) and amount match the
stored order exactly. Every check runs before the single conditional update,
so a rejected confirmation leaves the order untouched.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from chakravya.catalog.service import get_product
from chakravya.orders.models import Order
from chakravya.orders.payments import PaymentGateway, PaymentGatewayError
from chakravya.orders.service import create_order, get_user_order, mark_order_paid
from chakravya.shared.errors import (
    InternalError,
    InvalidState,
    NotFound,
    PaymentVerificationFailed,
    ServiceUnavailable,
)

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class OrderWorkflow:
    def __init__(self, db: Session, gateway: PaymentGateway, currency: str):
        self.db = db
        self.gateway = gateway
        self.currency = currency

    def _require_gateway(self):
        if not self.gateway.enabled:
            raise ServiceUnavailable(
                f"Payment processing is not configured: {self.gateway.reason}",
                details={"reason": self.gateway.reason},
            )

    def _pending_order(self, user_id: str, order_id: str) -> Order:
        order = get_user_order(self.db, user_id, order_id)
        if not order:
            raise NotFound("Order not found")
        if order.status != "pending":
            raise InvalidState("Order is not pending")
        return order

    def create_order(self, user_id: str, product_id: str, shipping_address: dict) -> Order:
        product = get_product(self.db, product_id)
        if not product or not product.active:
            raise NotFound("Product not found")
        # price comes from the catalog, never from the request
        order = create_order(self.db, user_id, product.id, product.price, shipping_address)
        logger.info("order %s created for user %s (%s %s)", order.id, user_id, order.amount, self.currency)
        return order

    def create_payment_intent(self, user_id: str, order_id: str) -> str:
        self._require_gateway()
        order = self._pending_order(user_id, order_id)
        try:
            intent = self.gateway.create_intent(
                amount=to_minor_units(order.amount),
                currency=self.currency,
                metadata={"orderId": order.id, "userId": user_id},
            )
        except PaymentGatewayError as e:
            logger.error("payment intent creation failed for order %s: %s", order.id, e)
            raise InternalError("Error creating payment intent") from e
        if not intent.client_secret:
            raise InternalError("Error creating payment intent")
        logger.info("payment intent %s issued for order %s", intent.id, order.id)
        return intent.client_secret

    def confirm_payment(self, user_id: str, order_id: str, payment_intent_id: str) -> Order:
        self._require_gateway()
        order = self._pending_order(user_id, order_id)

        try:
            intent = self.gateway.retrieve_intent(payment_intent_id)
        except PaymentGatewayError as e:
            logger.warning("could not retrieve intent %s for order %s: %s", payment_intent_id, order.id, e)
            raise PaymentVerificationFailed() from e

        mismatch = self._mismatch(order, user_id, intent)
        if mismatch:
            logger.warning("payment %s rejected for order %s: %s", intent.id, order.id, mismatch)
            raise PaymentVerificationFailed()

        if not mark_order_paid(self.db, order.id, intent.id):
            # another confirmation got there first
            raise InvalidState("Order is not pending")
        self.db.refresh(order)
        logger.info("order %s paid (intent %s)", order.id, intent.id)
        return order

    @staticmethod
    def _mismatch(order: Order, user_id: str, intent) -> str | None:
        if intent.status != "succeeded":
            return f"status={intent.status}"
        if intent.metadata.get("orderId") != order.id:
            return "metadata.orderId"
        if intent.metadata.get("userId") != user_id:
            return "metadata.userId"
        if intent.amount != to_minor_units(order.amount):
            return f"amount {intent.amount} != {to_minor_units(order.amount)}"
        return None
