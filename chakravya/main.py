import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from chakravya.shared.config import Settings, settings as default_settings
from chakravya.shared.db import init_database, make_engine, make_session_factory
from chakravya.shared.http import install_error_handlers
from chakravya.shared.log import setup_logging
from chakravya.shared.auth import purge_expired_sessions
from chakravya.orders.payments import PaymentGateway, build_gateway
from chakravya.seed import seed_reference_data

# Routers Import
from chakravya.auth.api import router as auth_router
from chakravya.practice.api import router as practice_router
from chakravya.catalog.api import router as catalog_router
from chakravya.orders.api import router as orders_router
from chakravya.contact.api import router as contact_router

logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Auth", "description": "Session login/logout and the current user"},
    {"name": "Practice", "description": "Spiritual tasks and personal progress"},
    {"name": "Catalog", "description": "Gift box tiers"},
    {"name": "Orders", "description": "Orders, payment intents and payment confirmation"},
    {"name": "Contact", "description": "Public contact form and its admin inbox"},
    {"name": "Health", "description": "Service health"},
]


def create_app(settings: Optional[Settings] = None, gateway: Optional[PaymentGateway] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.DATABASE_URL)
        init_database(engine)
        app.state.engine = engine
        app.state.session_factory = make_session_factory(engine)
        app.state.gateway = gateway or build_gateway(settings.payments())

        with app.state.session_factory() as db:
            purged = purge_expired_sessions(db)
            if purged:
                logger.info("purged %d expired sessions", purged)
            if settings.SEED_ON_STARTUP:
                seed_reference_data(db)
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(
        title="Chakravya",
        version="1.0.0",
        description="Devotional gift boxes, membership and practice tracking API.",
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )
    app.state.settings = settings
    install_error_handlers(app)

    @app.get("/healthz", tags=["Health"])
    def healthz():
        return {"ok": True}

    # Routers
    app.include_router(auth_router)
    app.include_router(practice_router)
    app.include_router(catalog_router)
    app.include_router(orders_router)
    app.include_router(contact_router)
    return app


app = create_app()
