from abc import ABC, abstractmethod

from src.domain.entities.page_request import SortSpec
from src.domain.entities.product import Product


class StorageUnavailableError(Exception):
    """Raised when the product store cannot be reached or queried."""


class ProductRepository(ABC):
    """Port for read-only access to the product catalog."""

    @abstractmethod
    async def count_products(self) -> int:
        ...

    @abstractmethod
    async def list_products(self, *, offset: int, limit: int, sort: SortSpec) -> list[Product]:
        """
        Return the row window [offset, offset + limit) ordered by ``sort``,
        tie-broken by primary key so that pages never overlap or skip.
        """
        ...
