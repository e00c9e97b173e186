from abc import ABC, abstractmethod

from src.domain.entities.page_request import SortSpec
from src.domain.entities.product_page import ProductPage


class PageSourceError(Exception):
    """Base class for failures while fetching a page from a remote source."""


class NetworkFailureError(PageSourceError):
    """Transport failure or non-success status from the listing endpoint."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UnexpectedResponseShapeError(PageSourceError):
    """The listing endpoint answered, but not with a page of products."""


class PageSource(ABC):
    """Port used by the incremental fetch controller to obtain pages."""

    @abstractmethod
    async def fetch_page(self, *, page: int, page_size: int, sort: SortSpec) -> ProductPage:
        ...
