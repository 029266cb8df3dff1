from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, Boolean, DateTime, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from chakravya.shared.db import Base
import uuid, json


def _id32() -> str:
    return uuid.uuid4().hex


class Product(Base):
    __tablename__ = "products"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    tier: Mapped[str] = mapped_column(String(16))  # tier1|tier2|tier3
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2, asdecimal=True))
    original_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2, asdecimal=True), nullable=True)
    # ordered list of {"name": str, "included": bool}
    features_json: Mapped[str] = mapped_column("features", Text, default="[]")
    popular: Mapped[bool] = mapped_column(Boolean, default=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @property
    def features(self) -> list[dict]:
        try:
            return json.loads(self.features_json or "[]")
        except ValueError:
            return []

    @features.setter
    def features(self, val: list[dict]):
        self.features_json = json.dumps(val or [])
