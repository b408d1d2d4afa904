"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from pricecompare.cache import RedisClient
from pricecompare.config import (
    get_api_settings,
    get_cache_settings,
    get_database_settings,
    get_exchange_rate_settings,
    get_logging_settings,
    get_realtime_settings,
)
from pricecompare.db import DatabaseSessionManager
from pricecompare.logging import configure_logging
from pricecompare.rates import load_exchange_rates
from pricecompare.store import InsertSubscription, PriceStore

from .handlers import register_exception_handlers
from .middleware import LoggingMiddleware, RequestIDMiddleware
from .routers import (
    currencies_router,
    health_router,
    prices_router,
    websocket_router,
)
from .websocket import PriceFeedManager

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the long-lived handles, keeps them on ``app.state`` and
    releases them on shutdown, or when startup fails part way.

    Args:
        app: FastAPI application

    Yields:
        None
    """
    # Startup
    logger.info("starting_application")
    cache_settings = get_cache_settings()

    db = DatabaseSessionManager.from_settings(get_database_settings())
    redis_client = RedisClient.from_settings(cache_settings)
    subscription: InsertSubscription | None = None

    try:
        await redis_client.connect()

        store = PriceStore(
            db=db,
            redis_client=redis_client,
            channel=cache_settings.price_channel,
            realtime_settings=get_realtime_settings(),
        )
        feed = PriceFeedManager()

        app.state.exchange_rates = await load_exchange_rates(get_exchange_rate_settings())
        subscription = await store.subscribe_to_inserts(feed.on_insert)
        app.state.price_subscription = subscription
        app.state.price_store = store
        app.state.price_feed = feed

        yield
    finally:
        # Shutdown
        logger.info("shutting_down_application")
        try:
            if subscription is not None:
                await subscription.unsubscribe()
        finally:
            try:
                await redis_client.close()
            finally:
                await db.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    log_settings = get_logging_settings()
    configure_logging(log_settings.level, log_settings.format)

    settings = get_api_settings()

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "prices", "description": "Model prices and cost comparison"},
            {"name": "currencies", "description": "Currencies and exchange rates"},
            {"name": "websocket", "description": "Real-time price notifications"},
        ],
    )

    # Register middleware (order matters - first added = last executed)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # CORS
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Health checks (no prefix)
    app.include_router(health_router)

    app.include_router(prices_router, prefix=settings.api_prefix)
    app.include_router(currencies_router, prefix=settings.api_prefix)
    app.include_router(websocket_router, prefix=settings.api_prefix)

    logger.info(
        "application_configured",
        title=settings.title,
        version=settings.version,
        debug=settings.debug,
    )

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pricecompare.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_api_settings().debug,
    )
