from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chakravya.shared.db import get_db
from chakravya.shared.errors import NotFound
from chakravya.catalog.schemas import ProductOut
from chakravya.catalog.service import get_product, list_products

router = APIRouter(prefix="/api/products", tags=["Catalog"])


@router.get("", response_model=List[ProductOut])
def api_products(db: Session = Depends(get_db)):
    return list_products(db)


@router.get("/{product_id}", response_model=ProductOut)
def api_product(product_id: str, db: Session = Depends(get_db)):
    p = get_product(db, product_id)
    if not p:
        raise NotFound("Product not found")
    return p
