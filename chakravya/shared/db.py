import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        # in-memory sqlite lives and dies with its single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Check connectivity, then create any missing tables."""
    # import models so they register with Base.metadata
    from chakravya.auth import models as auth_models  # noqa: F401
    from chakravya.practice import models as practice_models  # noqa: F401
    from chakravya.catalog import models as catalog_models  # noqa: F401
    from chakravya.orders import models as orders_models  # noqa: F401
    from chakravya.contact import models as contact_models  # noqa: F401

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("database connection ok (%s)", engine.url.get_backend_name())
    Base.metadata.create_all(bind=engine)


# FastAPI dep
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
