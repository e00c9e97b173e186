"""FastAPI application entry point for the catalog API."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error_handlers import register_error_handlers
from src.api.middleware.request_logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from src.api.routes import health, products
from src.config import settings
from src.infrastructure.database.connection import Database
from src.infrastructure.observability.logging_config import setup_logging

logger = structlog.get_logger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.log_level, json_output=settings.is_production)
        db = database or Database()
        db.connect()
        app.state.database = db
        logger.info("catalog_api_starting", environment=settings.environment, port=settings.port)
        yield
        logger.info("catalog_api_stopping")
        await db.dispose()

    app = FastAPI(
        title="Catalog Scroll API",
        description="Paginated product listings for infinitely scrolling storefronts.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(products.router)

    register_error_handlers(app)

    return app


app = create_app()
