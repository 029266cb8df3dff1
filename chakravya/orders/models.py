from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from chakravya.shared.db import Base
from chakravya.catalog.models import Product
from typing import Literal
import uuid, json

OrderStatus = Literal["pending", "paid", "shipped", "delivered"]


def _id32() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    user_id: Mapped[str | None] = mapped_column(String(32), ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    product_id: Mapped[str] = mapped_column(String(32), ForeignKey("products.id"))
    status: Mapped[str] = mapped_column(String(16), default="pending")  # pending|paid|shipped|delivered
    # snapshot of the product price when the order was placed; never rewritten
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2, asdecimal=True))
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    shipping_address_json: Mapped[str] = mapped_column("shipping_address", Text, default="{}")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)

    product: Mapped[Product] = relationship(lazy="joined")

    @property
    def shipping_address(self) -> dict:
        try:
            return json.loads(self.shipping_address_json or "{}")
        except ValueError:
            return {}

    @shipping_address.setter
    def shipping_address(self, val: dict):
        self.shipping_address_json = json.dumps(val or {})
