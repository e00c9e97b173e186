from decimal import Decimal

import structlog
from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.product_repository import (
    ProductRepository,
    StorageUnavailableError,
)
from src.domain.entities.page_request import SortSpec
from src.domain.entities.product import Product
from src.domain.enums.sort_field import SortField
from src.infrastructure.database.models import ProductModel

logger = structlog.get_logger(__name__)

_SORT_COLUMNS = {
    SortField.NAME: ProductModel.name,
    SortField.PRICE: ProductModel.price,
}


def _to_domain(model: ProductModel) -> Product:
    return Product(
        id=model.id,
        name=model.name,
        description=model.description,
        price=Decimal(str(model.price)),
        image_url=model.image_url,
        category=model.category,
        stock_quantity=model.stock_quantity,
    )


class SqlAlchemyProductRepository(ProductRepository):
    """SQLAlchemy implementation for read-only product queries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count_products(self) -> int:
        try:
            result = await self._session.execute(select(func.count()).select_from(ProductModel))
            return int(result.scalar_one())
        except SQLAlchemyError as exc:
            logger.error("product_count_failed", error=str(exc))
            raise StorageUnavailableError("Product store is unavailable.") from exc

    async def list_products(self, *, offset: int, limit: int, sort: SortSpec) -> list[Product]:
        column = _SORT_COLUMNS[sort.field]
        direction = desc if sort.order.is_descending else asc

        # Primary key as secondary key keeps page boundaries stable across equal values
        query = (
            select(ProductModel)
            .order_by(direction(column), ProductModel.id.asc())
            .limit(limit)
            .offset(offset)
        )

        try:
            result = await self._session.execute(query)
            models = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error(
                "product_page_query_failed",
                offset=offset,
                limit=limit,
                sort=str(sort),
                error=str(exc),
            )
            raise StorageUnavailableError("Product store is unavailable.") from exc

        return [_to_domain(m) for m in models]
