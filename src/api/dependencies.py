"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected, keeping the route handlers thin.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.product_repository import ProductRepository
from src.application.use_cases.list_products_page import ListProductsPage
from src.config import settings
from src.infrastructure.database.connection import Database
from src.infrastructure.database.repositories.product_repository import (
    SqlAlchemyProductRepository,
)
from src.infrastructure.external_services.product_api_client import ProductApiClient


# ---- Low-level dependencies ------------------------------------------------

def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


def get_product_repo(session: AsyncSession = Depends(get_session)) -> ProductRepository:
    return SqlAlchemyProductRepository(session)


# ---- Use-case dependencies -------------------------------------------------

def get_list_products_page_use_case(
    product_repo: ProductRepository = Depends(get_product_repo),
) -> ListProductsPage:
    return ListProductsPage(product_repo, max_limit=settings.max_page_size)


# ---- External services -----------------------------------------------------

def get_product_api_client() -> ProductApiClient:
    return ProductApiClient()
