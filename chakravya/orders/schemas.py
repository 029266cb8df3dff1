from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chakravya.catalog.schemas import ProductOut
from chakravya.orders.models import OrderStatus


class _Camel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ShippingAddress(BaseModel):
    name: str = Field(min_length=1, description="Name is required")
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    pincode: str = Field(pattern=r"^\d{6}$", description="PIN code must be 6 digits")
    phone: str = Field(pattern=r"^\d{10}$", description="Phone number must be 10 digits")


class OrderCreate(_Camel):
    # unknown fields such as a client-supplied amount are dropped
    product_id: str = Field(min_length=1)
    shipping_address: ShippingAddress


class PaymentIntentIn(_Camel):
    order_id: str = Field(min_length=1)


class PaymentIntentOut(_Camel):
    client_secret: str


class PaymentConfirmIn(_Camel):
    payment_intent_id: str = Field(min_length=1)


class OrderOut(_Camel):
    id: str
    user_id: str | None = None
    product_id: str
    status: OrderStatus
    amount: Decimal
    payment_id: str | None = None
    shipping_address: ShippingAddress | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderWithProductOut(OrderOut):
    product: ProductOut


class PaymentConfirmOut(_Camel):
    success: bool = True
    message: str = "Payment confirmed"
    order: OrderOut


class PaymentsConfigOut(_Camel):
    enabled: bool
    currency: str | None = None
