from sqlalchemy import select
from sqlalchemy.orm import Session
from chakravya.catalog.models import Product


def list_products(db: Session) -> list[Product]:
    stmt = select(Product).where(Product.active == True).order_by(Product.tier)  # noqa: E712
    return list(db.scalars(stmt).all())


def get_product(db: Session, product_id: str) -> Product | None:
    return db.get(Product, product_id)


def create_product(db: Session, features: list[dict] | None = None, **fields) -> Product:
    p = Product(**fields)
    p.features = features or []
    db.add(p); db.commit(); db.refresh(p)
    return p
