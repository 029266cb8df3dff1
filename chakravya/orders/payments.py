"""
Payment processor adapters.

The workflow talks to a `PaymentGateway`; which one it gets is decided once at
startup from `Settings.payments()`:

* `StripeGateway` when payments are enabled and a secret key is configured
* `DisabledGateway` otherwise; every call raises ServiceUnavailable
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import stripe

from chakravya.shared.config import PaymentsDisabled, PaymentsEnabled
from chakravya.shared.errors import ServiceUnavailable

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """The processor rejected a call or could not be reached."""


@dataclass
class PaymentIntent:
    id: str
    status: str
    amount: int                      # minor units
    currency: str
    metadata: Dict[str, str] = field(default_factory=dict)
    client_secret: Optional[str] = None


class PaymentGateway(Protocol):
    enabled: bool
    reason: Optional[str]

    def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> PaymentIntent: ...

    def retrieve_intent(self, intent_id: str) -> PaymentIntent: ...


class DisabledGateway:
    enabled = False

    def __init__(self, reason: str = "payments are not configured"):
        self.reason = reason

    def _refuse(self):
        raise ServiceUnavailable("Payment processing is not configured", details={"reason": self.reason})

    def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> PaymentIntent:
        self._refuse()

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        self._refuse()


class StripeGateway:
    enabled = True
    reason = None

    def __init__(self, secret_key: str):
        self._api_key = secret_key

    @staticmethod
    def _to_intent(pi) -> PaymentIntent:
        # StripeObject stopped being a dict subclass; convert before reading
        md = pi.metadata.to_dict() if pi.metadata is not None else {}
        return PaymentIntent(
            id=pi.id,
            status=pi.status,
            amount=int(pi.amount),
            currency=pi.currency,
            metadata={k: md.get(k) for k in ("orderId", "userId") if md.get(k) is not None},
            client_secret=pi.client_secret,
        )

    def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> PaymentIntent:
        try:
            pi = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata=metadata,
                api_key=self._api_key,
            )
        except stripe.StripeError as e:
            raise PaymentGatewayError(getattr(e, "user_message", None) or str(e)) from e
        return self._to_intent(pi)

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        try:
            pi = stripe.PaymentIntent.retrieve(intent_id, api_key=self._api_key)
        except stripe.StripeError as e:
            raise PaymentGatewayError(getattr(e, "user_message", None) or str(e)) from e
        return self._to_intent(pi)


def build_gateway(config: PaymentsEnabled | PaymentsDisabled) -> PaymentGateway:
    if isinstance(config, PaymentsEnabled):
        logger.info("payments enabled (stripe, currency=%s)", config.currency)
        return StripeGateway(config.secret_key)
    logger.warning("payments disabled: %s", config.reason)
    return DisabledGateway(config.reason)
