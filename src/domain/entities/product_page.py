from dataclasses import dataclass, field

from src.domain.entities.page_request import PageRequest
from src.domain.entities.product import Product


@dataclass(frozen=True)
class ProductPage:
    """One page of the product listing plus the totals needed to keep scrolling."""

    items: list[Product] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    has_next_page: bool = False
    next_page: int | None = None

    @classmethod
    def build(cls, request: PageRequest, items: list[Product], total: int) -> "ProductPage":
        has_next_page = request.offset + request.limit < total
        return cls(
            items=list(items),
            total=total,
            page=request.page,
            page_size=request.limit,
            has_next_page=has_next_page,
            next_page=request.page + 1 if has_next_page else None,
        )
