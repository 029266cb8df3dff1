from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import select, desc, update
from sqlalchemy.orm import Session
from chakravya.orders.models import Order


def create_order(db: Session, user_id: str, product_id: str, amount: Decimal, shipping_address: dict) -> Order:
    o = Order(user_id=user_id, product_id=product_id, amount=amount, status="pending")
    o.shipping_address = shipping_address
    db.add(o)
    db.commit()
    db.refresh(o)
    return o


def list_user_orders(db: Session, user_id: str) -> list[Order]:
    stmt = select(Order).where(Order.user_id == user_id).order_by(desc(Order.created_at))
    return list(db.scalars(stmt).unique().all())


def get_user_order(db: Session, user_id: str, order_id: str) -> Order | None:
    o = db.get(Order, order_id, populate_existing=True)
    if not o or o.user_id != user_id:
        return None
    return o


def mark_order_paid(db: Session, order_id: str, payment_id: str) -> bool:
    """Flip pending -> paid in one conditional statement. False if the order was no longer pending."""
    res = db.execute(
        update(Order)
        .where(Order.id == order_id, Order.status == "pending")
        .values(status="paid", payment_id=payment_id, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return res.rowcount == 1
