"""Product Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and registry initialized on startup via lifespan; the registry
      is restored from the latest snapshot before the first request

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_registry.api.error_handlers import register_error_handlers
from product_registry.api.routes import admin, creators, health, ledger, products
from product_registry.config import get_settings
from product_registry.infrastructure.database import init_db
from product_registry.infrastructure.observability import setup_logging
from product_registry.services.registry_runtime import init_runtime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    runtime = init_runtime(settings)
    async with manager.session() as db:
        await runtime.restore(db)
    logger.info(
        "Product Registry API started",
        extra={"ledger_height": runtime.clock.current_height()},
    )
    yield
    await manager.dispose()
    logger.info("Product Registry API shutting down")


app = FastAPI(
    title="Product Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(products.router)
app.include_router(creators.router)
app.include_router(admin.router)
app.include_router(ledger.router)

register_error_handlers(app)
