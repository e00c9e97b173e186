"""Unit tests for application use cases. All dependencies are mocked."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.interfaces.product_repository import StorageUnavailableError
from src.application.use_cases.list_products_page import (
    ListProductsPage,
    ListProductsPageInput,
)
from src.domain.entities.page_request import InvalidPageRequestError, SortSpec
from src.domain.entities.product import Product
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder

CATALOG = [
    Product(id=f"id-{name}", name=name, price=Decimal(price))
    for name, price in [("A", "5"), ("B", "4"), ("C", "3"), ("D", "2"), ("E", "1")]
]


def _make_repo(rows: list[Product] | None = None) -> MagicMock:
    """Repository mock that serves windows of ``rows`` (already ordered)."""
    rows = CATALOG if rows is None else rows
    repo = MagicMock()
    repo.count_products = AsyncMock(return_value=len(rows))

    async def _list(*, offset: int, limit: int, sort: SortSpec) -> list[Product]:
        return rows[offset : offset + limit]

    repo.list_products = AsyncMock(side_effect=_list)
    return repo


class TestListProductsPage:
    @pytest.mark.asyncio
    async def test_walks_catalog_in_pages(self) -> None:
        use_case = ListProductsPage(_make_repo())

        first = await use_case.execute(ListProductsPageInput(page=1, limit=2))
        second = await use_case.execute(ListProductsPageInput(page=2, limit=2))
        third = await use_case.execute(ListProductsPageInput(page=3, limit=2))

        assert [p.name for p in first.items] == ["A", "B"]
        assert (first.has_next_page, first.next_page) == (True, 2)
        assert [p.name for p in second.items] == ["C", "D"]
        assert (second.has_next_page, second.next_page) == (True, 3)
        assert [p.name for p in third.items] == ["E"]
        assert (third.has_next_page, third.next_page) == (False, None)
        assert third.total == 5

    @pytest.mark.asyncio
    async def test_passes_offset_limit_and_sort_to_repository(self) -> None:
        repo = _make_repo()
        use_case = ListProductsPage(repo)

        await use_case.execute(
            ListProductsPageInput(page=3, limit=20, sort_by="price", sort_order="desc")
        )

        repo.list_products.assert_awaited_once_with(
            offset=40,
            limit=20,
            sort=SortSpec(SortField.PRICE, SortOrder.DESC),
        )
        repo.count_products.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejects_invalid_input_before_touching_storage(self) -> None:
        repo = _make_repo()
        use_case = ListProductsPage(repo)

        with pytest.raises(InvalidPageRequestError):
            await use_case.execute(ListProductsPageInput(limit=-1))

        repo.count_products.assert_not_awaited()
        repo.list_products.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_honours_configured_max_limit(self) -> None:
        use_case = ListProductsPage(_make_repo(), max_limit=10)
        with pytest.raises(InvalidPageRequestError):
            await use_case.execute(ListProductsPageInput(limit=11))

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self) -> None:
        use_case = ListProductsPage(_make_repo())
        result = await use_case.execute(ListProductsPageInput(page=10, limit=2))
        assert result.items == []
        assert result.has_next_page is False
        assert result.next_page is None

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self) -> None:
        repo = _make_repo()
        repo.count_products = AsyncMock(side_effect=StorageUnavailableError("down"))
        use_case = ListProductsPage(repo)

        with pytest.raises(StorageUnavailableError):
            await use_case.execute(ListProductsPageInput())

        # No retry
        repo.count_products.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_page_past_the_end_skips_the_row_query(self) -> None:
        repo = _make_repo()
        use_case = ListProductsPage(repo)

        result = await use_case.execute(ListProductsPageInput(page=10**20, limit=50))

        assert result.items == []
        assert result.total == 5
        assert result.has_next_page is False
        assert result.next_page is None
        repo.list_products.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_catalog_skips_the_row_query(self) -> None:
        repo = _make_repo([])
        result = await ListProductsPage(repo).execute(ListProductsPageInput())
        assert result.items == []
        assert result.total == 0
        assert result.has_next_page is False
        repo.list_products.assert_not_awaited()
