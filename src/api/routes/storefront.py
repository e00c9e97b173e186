import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_product_api_client
from src.application.interfaces.page_source import PageSourceError
from src.config import settings
from src.infrastructure.external_services.product_api_client import ProductApiClient

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api", tags=["storefront"])


@router.get("/products")
async def proxy_products(
    page: str = Query(default="1"),
    page_size: str = Query(default=str(settings.default_page_size), alias="pageSize"),
    sort_by: str = Query(default="name", alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    client: ProductApiClient = Depends(get_product_api_client),
) -> JSONResponse:
    """Forward a listing query to the catalog API, renaming ``pageSize`` to ``limit``.

    Values are passed through untouched; the catalog API validates them.
    """
    try:
        status_code, body = await client.forward_paged(
            {"page": page, "limit": page_size, "sortBy": sort_by, "sortOrder": sort_order}
        )
    except PageSourceError as exc:
        logger.error("storefront_proxy_failed", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "Failed to fetch products from backend"},
        )
    return JSONResponse(status_code=status_code, content=body)
