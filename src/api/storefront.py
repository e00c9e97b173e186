"""FastAPI application entry point for the storefront proxy."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error_handlers import register_error_handlers
from src.api.middleware.request_logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from src.api.routes import storefront
from src.config import settings
from src.infrastructure.observability.logging_config import setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(settings.log_level, json_output=settings.is_production)
    logger.info("storefront_proxy_starting", backend_api_url=settings.backend_api_url)
    yield
    logger.info("storefront_proxy_stopping")


def create_storefront_app() -> FastAPI:
    app = FastAPI(
        title="Catalog Scroll Storefront",
        description="Same-origin proxy in front of the catalog API.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(storefront.router)

    register_error_handlers(app)

    return app


app = create_storefront_app()
