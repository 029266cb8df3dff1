from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProductFeature(BaseModel):
    name: str
    included: bool


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
    id: str
    tier: str
    title: str
    description: str | None = None
    price: Decimal
    original_price: Decimal | None = None
    features: List[ProductFeature] = []
    popular: bool
    image_url: str | None = None
    active: bool
    created_at: datetime | None = None
