"""HTTP client for the catalog listing API."""
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from src.api.schemas.product_responses import ProductPageResponse
from src.application.interfaces.page_source import (
    NetworkFailureError,
    PageSource,
    UnexpectedResponseShapeError,
)
from src.config import settings
from src.domain.entities.page_request import SortSpec
from src.domain.entities.product import Product
from src.domain.entities.product_page import ProductPage

logger = structlog.get_logger(__name__)

PAGED_PATH = "/api/v1/products/paged"
STOREFRONT_PATH = "/api/products"


def _to_domain(body: ProductPageResponse) -> ProductPage:
    return ProductPage(
        items=[
            Product(
                id=item.id,
                name=item.name,
                description=item.description,
                price=item.price,
                image_url=item.image_url,
                category=item.category,
                stock_quantity=item.stock_quantity,
            )
            for item in body.items
        ],
        total=body.total,
        page=body.page,
        page_size=body.page_size,
        has_next_page=body.has_next_page,
        next_page=body.next_page,
    )


class ProductApiClient(PageSource):
    """
    Thin HTTP wrapper around the paged product listing.

    With ``via_proxy`` the storefront route is used instead of the catalog
    API directly; the only difference on the wire is ``pageSize`` vs ``limit``.
    """

    def __init__(
        self,
        base_url: str = settings.backend_api_url,
        timeout: float = settings.http_timeout_seconds,
        *,
        via_proxy: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._via_proxy = via_proxy
        self._transport = transport
        self._headers = {"Accept": "application/json"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def fetch_page(self, *, page: int, page_size: int, sort: SortSpec) -> ProductPage:
        """
        GET /api/v1/products/paged → {"items": [...], "hasNextPage": ..., "nextPage": ..., ...}
        """
        if self._via_proxy:
            path = STOREFRONT_PATH
            params = {"page": page, "pageSize": page_size}
        else:
            path = PAGED_PATH
            params = {"page": page, "limit": page_size}
        params.update(sortBy=sort.field.value, sortOrder=sort.order.value)  # type: ignore[arg-type]

        async with self._client() as client:
            try:
                response = await client.get(
                    f"{self._base_url}{path}", params=params, headers=self._headers
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "product_page_request_failed",
                    page=page,
                    status_code=exc.response.status_code,
                )
                raise NetworkFailureError(
                    f"Product listing returned {exc.response.status_code}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.RequestError as exc:
                logger.error("product_api_connection_failed", page=page, error=str(exc))
                raise NetworkFailureError(f"Failed to reach product listing: {exc}") from exc

        try:
            body = ProductPageResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("product_page_malformed", page=page, error=str(exc))
            raise UnexpectedResponseShapeError(
                f"Product listing returned an unexpected body for page {page}"
            ) from exc

        logger.info(
            "product_page_fetched",
            page=body.page,
            items=len(body.items),
            has_next_page=body.has_next_page,
        )
        return _to_domain(body)

    async def forward_paged(self, params: dict[str, str]) -> tuple[int, Any]:
        """
        Pass a listing query straight through to the catalog API.

        Parameters are not validated here; the catalog API is the only place
        that bounds them. Returns the upstream status code and JSON body.
        """
        async with self._client() as client:
            try:
                response = await client.get(
                    f"{self._base_url}{PAGED_PATH}", params=params, headers=self._headers
                )
            except httpx.RequestError as exc:
                logger.error("product_api_connection_failed", error=str(exc))
                raise NetworkFailureError(f"Failed to reach product listing: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise UnexpectedResponseShapeError(
                f"Product listing returned a non-JSON body ({response.status_code})"
            ) from exc

        logger.debug("product_page_forwarded", status_code=response.status_code)
        return response.status_code, body
