"""Unit tests for page request validation and page arithmetic."""
from decimal import Decimal

import pytest

from src.domain.entities.page_request import InvalidPageRequestError, PageRequest, SortSpec
from src.domain.entities.product import Product
from src.domain.entities.product_page import ProductPage
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder


class TestPageRequestCreate:
    def test_defaults(self) -> None:
        request = PageRequest.create()
        assert request.page == 1
        assert request.limit == 50
        assert request.sort == SortSpec(SortField.NAME, SortOrder.ASC)

    def test_accepts_string_values(self) -> None:
        request = PageRequest.create(page="3", limit="20", sort_by="price", sort_order="desc")
        assert request.page == 3
        assert request.limit == 20
        assert request.sort == SortSpec(SortField.PRICE, SortOrder.DESC)

    def test_offset(self) -> None:
        assert PageRequest.create(page=1, limit=50).offset == 0
        assert PageRequest.create(page=4, limit=25).offset == 75

    @pytest.mark.parametrize("limit", [0, -1, 201])
    def test_rejects_out_of_range_limit(self, limit: int) -> None:
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.create(limit=limit)
        assert [e.field for e in exc_info.value.errors] == ["limit"]

    def test_limit_bounds_are_inclusive(self) -> None:
        assert PageRequest.create(limit=1).limit == 1
        assert PageRequest.create(limit=200).limit == 200

    def test_rejects_page_below_one(self) -> None:
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.create(page=0)
        assert exc_info.value.errors[0].field == "page"

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.create(page="two", limit=True)
        assert {e.field for e in exc_info.value.errors} == {"page", "limit"}

    def test_rejects_unknown_sort(self) -> None:
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.create(sort_by="rating", sort_order="sideways")
        assert {e.field for e in exc_info.value.errors} == {"sortBy", "sortOrder"}

    def test_custom_max_limit(self) -> None:
        with pytest.raises(InvalidPageRequestError):
            PageRequest.create(limit=60, max_limit=50)


class TestProductPageBuild:
    def _items(self, count: int) -> list[Product]:
        return [Product(id=str(i), name=f"P{i}", price=Decimal("1")) for i in range(count)]

    @pytest.mark.parametrize(
        ("page", "limit", "total", "expected"),
        [
            (1, 2, 5, True),
            (2, 2, 5, True),
            (3, 2, 5, False),
            (2, 2, 4, False),
            (1, 50, 0, False),
            (7, 10, 5, False),
        ],
    )
    def test_has_next_page_iff_more_rows_remain(
        self, page: int, limit: int, total: int, expected: bool
    ) -> None:
        request = PageRequest.create(page=page, limit=limit)
        result = ProductPage.build(request, self._items(0), total)
        assert result.has_next_page is expected
        assert result.has_next_page is (request.offset + request.limit < total)
        assert result.next_page == (page + 1 if expected else None)

    def test_echoes_request(self) -> None:
        request = PageRequest.create(page=2, limit=3)
        result = ProductPage.build(request, self._items(3), 10)
        assert result.page == 2
        assert result.page_size == 3
        assert result.total == 10
        assert len(result.items) == 3


class TestProduct:
    def test_price_is_fixed_two_digit_scale(self) -> None:
        product = Product(id="a", name="A", price=Decimal("9.5"))
        assert str(product.price) == "9.50"

    def test_unknown_stock(self) -> None:
        assert Product(id="a", name="A", price=Decimal("1")).in_stock is None
        assert Product(id="a", name="A", price=Decimal("1"), stock_quantity=0).in_stock is False
