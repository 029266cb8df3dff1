"""
Reference data and the demo account.

    python -m chakravya.seed
"""
import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from chakravya.auth.service import create_user, get_user_by_email
from chakravya.catalog.models import Product
from chakravya.catalog.service import create_product
from chakravya.practice.models import SpiritualTask
from chakravya.practice.service import create_task

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@chakravya.com"
DEMO_PASSWORD = "demo123"

SPIRITUAL_TASKS = [
    {"title": "Chant Hare Krishna Maha-mantra", "description": "Chant the holy names of the Lord for spiritual purification",
     "category": "chanting", "default_target": 16, "unit": "rounds"},
    {"title": "Read Bhagavad Gita", "description": "Study Krishna's teachings in the Bhagavad Gita",
     "category": "reading", "default_target": 1, "unit": "chapters"},
    {"title": "Morning Meditation", "description": "Start your day with peaceful meditation and prayer",
     "category": "meditation", "default_target": 20, "unit": "minutes"},
    {"title": "Visit Temple", "description": "Participate in temple darshan and community worship",
     "category": "service", "default_target": 1, "unit": "times"},
    {"title": "Offer Food to Krishna", "description": "Prepare and offer meals to the Supreme Lord",
     "category": "service", "default_target": 3, "unit": "times"},
    {"title": "Evening Prayers", "description": "End your day with gratitude and spiritual reflection",
     "category": "meditation", "default_target": 15, "unit": "minutes"},
]


def _features(included: list[str], excluded: list[str] = ()) -> list[dict]:
    return [{"name": n, "included": True} for n in included] + [{"name": n, "included": False} for n in excluded]


PRODUCTS = [
    {
        "tier": "tier1", "title": "Divine Essentials",
        "description": "Perfect for beginners starting their spiritual journey",
        "price": Decimal("1299.00"), "original_price": Decimal("1699.00"), "popular": False,
        "features": _features(
            ["Sacred Brass Diya", "Tulsi Mala (108 beads)", "Pocket Bhagavad Gita",
             "Sandalwood Incense (10 sticks)", "Kumkum & Chandan"],
            ["Temple Prasadam", "Course Access"],
        ),
    },
    {
        "tier": "tier2", "title": "Premium Blessings",
        "description": "Enhanced collection for deeper devotional practice",
        "price": Decimal("2499.00"), "original_price": Decimal("3299.00"), "popular": True,
        "features": _features(
            ["Sacred Brass Diya", "Tulsi Mala (108 beads)", "Complete Bhagavad Gita",
             "Sandalwood Incense (25 sticks)", "Kumkum & Chandan", "Rudraksha Beads", "Temple Prasadam"],
            ["Basic Course Access"],
        ),
    },
    {
        "tier": "tier3", "title": "Exclusive Grace",
        "description": "Complete devotional package for serious practitioners",
        "price": Decimal("4999.00"), "original_price": Decimal("6999.00"), "popular": False,
        "features": _features(
            ["Sacred Brass Diya Set", "Premium Tulsi Mala", "Illustrated Bhagavad Gita",
             "Sandalwood Incense (50 sticks)", "Premium Kumkum & Chandan", "Rudraksha Mala",
             "Temple Prasadam", "Full Course Access", "Monthly Spiritual Guidance"],
        ),
    },
]


def _count(db: Session, model) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0


def seed_reference_data(db: Session) -> dict:
    """Insert tasks and products only into empty tables, so reruns are harmless."""
    out = {"tasks": 0, "products": 0}
    if _count(db, SpiritualTask) == 0:
        for t in SPIRITUAL_TASKS:
            create_task(db, **t)
        out["tasks"] = len(SPIRITUAL_TASKS)
        logger.info("seeded %d spiritual tasks", out["tasks"])
    if _count(db, Product) == 0:
        for p in PRODUCTS:
            create_product(db, active=True, **p)
        out["products"] = len(PRODUCTS)
        logger.info("seeded %d products", out["products"])
    return out


def seed_demo_user(db: Session) -> bool:
    if get_user_by_email(db, DEMO_EMAIL):
        logger.info("demo user already exists")
        return False
    create_user(db, DEMO_EMAIL, DEMO_PASSWORD, first_name="Demo", last_name="User")
    logger.info("demo user created (%s)", DEMO_EMAIL)
    return True


def main() -> None:
    from chakravya.shared.config import settings
    from chakravya.shared.db import init_database, make_engine, make_session_factory
    from chakravya.shared.log import setup_logging

    setup_logging(settings.LOG_LEVEL)
    engine = make_engine(settings.DATABASE_URL)
    try:
        init_database(engine)
        with make_session_factory(engine)() as db:
            seed_reference_data(db)
            seed_demo_user(db)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
