"""
Integration tests for the SQLAlchemy product repository.

Runs against a throwaway SQLite file through aiosqlite, so ordering and
paging go through real SQL.
"""
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import insert

from src.application.interfaces.product_repository import StorageUnavailableError
from src.application.use_cases.list_products_page import (
    ListProductsPage,
    ListProductsPageInput,
)
from src.domain.entities.page_request import SortSpec
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder
from src.infrastructure.database.connection import Base, Database
from src.infrastructure.database.models import ProductModel
from src.infrastructure.database.repositories.product_repository import (
    SqlAlchemyProductRepository,
)
from src.infrastructure.database.seed import seed_products

ROWS = [
    {"id": "id-01", "name": "Mug", "price": Decimal("9.99")},
    {"id": "id-02", "name": "Kettle", "price": Decimal("19.90")},
    {"id": "id-03", "name": "Lamp", "price": Decimal("9.99")},
    {"id": "id-04", "name": "Backpack", "price": Decimal("49.00")},
    {"id": "id-05", "name": "Notebook", "price": Decimal("9.99")},
    {"id": "id-06", "name": "Keyboard", "price": Decimal("35.50")},
    {"id": "id-07", "name": "Speaker", "price": Decimal("9.99")},
]


@pytest_asyncio.fixture()
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    db.connect()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


@pytest_asyncio.fixture()
async def populated(database: Database) -> Database:
    async with database.session() as session:
        await session.execute(insert(ProductModel), ROWS)
    return database


@pytest_asyncio.fixture()
async def missing_table(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    db.connect()
    yield db
    await db.dispose()


async def _walk(database: Database, sort: SortSpec, limit: int) -> list[str]:
    ids: list[str] = []
    offset = 0
    while True:
        async with database.session() as session:
            batch = await SqlAlchemyProductRepository(session).list_products(
                offset=offset, limit=limit, sort=sort
            )
        if not batch:
            return ids
        ids.extend(p.id for p in batch)
        offset += limit


class TestSqlAlchemyProductRepository:
    @pytest.mark.asyncio
    async def test_count(self, populated: Database) -> None:
        async with populated.session() as session:
            assert await SqlAlchemyProductRepository(session).count_products() == len(ROWS)

    @pytest.mark.asyncio
    async def test_orders_by_name(self, populated: Database) -> None:
        async with populated.session() as session:
            products = await SqlAlchemyProductRepository(session).list_products(
                offset=0, limit=3, sort=SortSpec(SortField.NAME, SortOrder.ASC)
            )
        assert [p.name for p in products] == ["Backpack", "Kettle", "Keyboard"]

    @pytest.mark.asyncio
    async def test_equal_prices_break_ties_on_id(self, populated: Database) -> None:
        async with populated.session() as session:
            products = await SqlAlchemyProductRepository(session).list_products(
                offset=0, limit=4, sort=SortSpec(SortField.PRICE, SortOrder.ASC)
            )
        assert [p.id for p in products] == ["id-01", "id-03", "id-05", "id-07"]
        assert all(p.price == Decimal("9.99") for p in products)

    @pytest.mark.asyncio
    async def test_descending_price(self, populated: Database) -> None:
        async with populated.session() as session:
            products = await SqlAlchemyProductRepository(session).list_products(
                offset=0, limit=2, sort=SortSpec(SortField.PRICE, SortOrder.DESC)
            )
        assert [p.name for p in products] == ["Backpack", "Keyboard"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
    @pytest.mark.parametrize("field", [SortField.NAME, SortField.PRICE])
    async def test_pages_neither_repeat_nor_skip(
        self, populated: Database, field: SortField, order: SortOrder
    ) -> None:
        ids = await _walk(populated, SortSpec(field, order), limit=2)
        assert len(ids) == len(ROWS)
        assert sorted(ids) == sorted(r["id"] for r in ROWS)

    @pytest.mark.asyncio
    async def test_offset_past_end_is_empty(self, populated: Database) -> None:
        async with populated.session() as session:
            products = await SqlAlchemyProductRepository(session).list_products(
                offset=100, limit=10, sort=SortSpec()
            )
        assert products == []


class TestSeedProducts:
    @pytest.mark.asyncio
    async def test_seeds_once(self, database: Database) -> None:
        assert await seed_products(database, count=250) == 250
        assert await seed_products(database, count=250) == 0

        async with database.session() as session:
            assert await SqlAlchemyProductRepository(session).count_products() == 250


class TestListProductsPageOnSqlite:
    @pytest.mark.asyncio
    async def test_huge_page_number_returns_empty_page(self, populated: Database) -> None:
        async with populated.session() as session:
            result = await ListProductsPage(SqlAlchemyProductRepository(session)).execute(
                ListProductsPageInput(page=10**20, limit=50)
            )
        assert result.items == []
        assert result.total == len(ROWS)
        assert result.has_next_page is False


class TestStorageFailures:
    @pytest.mark.asyncio
    async def test_count_without_table_is_storage_unavailable(self, missing_table: Database) -> None:
        with pytest.raises(StorageUnavailableError):
            async with missing_table.session() as session:
                await SqlAlchemyProductRepository(session).count_products()

    @pytest.mark.asyncio
    async def test_list_without_table_is_storage_unavailable(self, missing_table: Database) -> None:
        with pytest.raises(StorageUnavailableError):
            async with missing_table.session() as session:
                await SqlAlchemyProductRepository(session).list_products(
                    offset=0, limit=10, sort=SortSpec()
                )
