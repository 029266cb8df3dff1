from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from chakravya.shared.db import get_db
from chakravya.shared.auth import current_user, get_settings
from chakravya.shared.config import Settings
from chakravya.shared.errors import NotFound
from chakravya.auth.models import User
from chakravya.orders.payments import PaymentGateway
from chakravya.orders.schemas import (
    OrderCreate,
    OrderOut,
    OrderWithProductOut,
    PaymentConfirmIn,
    PaymentConfirmOut,
    PaymentIntentIn,
    PaymentIntentOut,
    PaymentsConfigOut,
)
from chakravya.orders.service import get_user_order, list_user_orders
from chakravya.orders.workflow import OrderWorkflow

router = APIRouter(prefix="/api", tags=["Orders"])


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def get_workflow(
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> OrderWorkflow:
    return OrderWorkflow(db, gateway, settings.PAYMENT_CURRENCY.lower())


@router.get("/orders", response_model=List[OrderWithProductOut])
def api_orders(user: User = Depends(current_user), db: Session = Depends(get_db)):
    return list_user_orders(db, user.id)


@router.post("/orders", response_model=OrderOut)
def api_create_order(inb: OrderCreate, user: User = Depends(current_user), wf: OrderWorkflow = Depends(get_workflow)):
    return wf.create_order(user.id, inb.product_id, inb.shipping_address.model_dump())


@router.get("/orders/{order_id}", response_model=OrderWithProductOut)
def api_order(order_id: str, user: User = Depends(current_user), db: Session = Depends(get_db)):
    o = get_user_order(db, user.id, order_id)
    if not o:
        raise NotFound("Order not found")
    return o


@router.post("/create-payment-intent", response_model=PaymentIntentOut)
def api_create_payment_intent(
    inb: PaymentIntentIn, user: User = Depends(current_user), wf: OrderWorkflow = Depends(get_workflow)
):
    return PaymentIntentOut(client_secret=wf.create_payment_intent(user.id, inb.order_id))


@router.post("/orders/{order_id}/payment", response_model=PaymentConfirmOut)
def api_confirm_payment(
    order_id: str,
    inb: PaymentConfirmIn,
    user: User = Depends(current_user),
    wf: OrderWorkflow = Depends(get_workflow),
):
    order = wf.confirm_payment(user.id, order_id, inb.payment_intent_id)
    return PaymentConfirmOut(order=OrderOut.model_validate(order))


@router.get("/config/payments", response_model=PaymentsConfigOut)
def api_payments_config(gateway: PaymentGateway = Depends(get_gateway), settings: Settings = Depends(get_settings)):
    if not gateway.enabled:
        return PaymentsConfigOut(enabled=False)
    return PaymentsConfigOut(enabled=True, currency=settings.PAYMENT_CURRENCY.lower())
