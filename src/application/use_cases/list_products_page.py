from dataclasses import dataclass

import structlog

from src.application.interfaces.product_repository import ProductRepository
from src.domain.entities.page_request import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    PageRequest,
)
from src.domain.entities.product import Product
from src.domain.entities.product_page import ProductPage
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder

logger = structlog.get_logger(__name__)


@dataclass
class ListProductsPageInput:
    page: int | str = DEFAULT_PAGE
    limit: int | str = DEFAULT_LIMIT
    sort_by: SortField | str = SortField.NAME
    sort_order: SortOrder | str = SortOrder.ASC


class ListProductsPage:
    """
    Use case: Return one page of the product catalog with its totals.

    Input is validated before the repository is touched. The count and the
    row window are two independent reads; the repository owns the ordering
    and the translation of storage failures.
    """

    def __init__(self, product_repo: ProductRepository, max_limit: int = MAX_LIMIT) -> None:
        self._product_repo = product_repo
        self._max_limit = max_limit

    async def execute(self, input_data: ListProductsPageInput) -> ProductPage:
        # May raise InvalidPageRequestError; let it propagate to the caller
        request = PageRequest.create(
            page=input_data.page,
            limit=input_data.limit,
            sort_by=input_data.sort_by,
            sort_order=input_data.sort_order,
            max_limit=self._max_limit,
        )

        total = await self._product_repo.count_products()
        if request.offset >= total:
            # Past the end: nothing to fetch, and huge offsets never reach the driver
            items: list[Product] = []
        else:
            items = await self._product_repo.list_products(
                offset=request.offset,
                limit=request.limit,
                sort=request.sort,
            )

        result = ProductPage.build(request, items, total)

        logger.info(
            "products_page_listed",
            page=result.page,
            page_size=result.page_size,
            sort=str(request.sort),
            returned=len(result.items),
            total=result.total,
            has_next_page=result.has_next_page,
        )

        return result
