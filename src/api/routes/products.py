from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_list_products_page_use_case
from src.api.schemas.product_responses import (
    ErrorResponse,
    ProductPageResponse,
    ProductResponse,
)
from src.application.use_cases.list_products_page import (
    ListProductsPage,
    ListProductsPageInput,
)
from src.domain.entities.page_request import DEFAULT_LIMIT, DEFAULT_PAGE
from src.domain.entities.product import Product
from src.domain.entities.product_page import ProductPage
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder

router = APIRouter(prefix="/api/v1", tags=["products"])


def _product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
        category=product.category,
        stock_quantity=product.stock_quantity,
    )


def _page_to_response(result: ProductPage) -> ProductPageResponse:
    return ProductPageResponse(
        items=[_product_to_response(p) for p in result.items],
        has_next_page=result.has_next_page,
        next_page=result.next_page,
        page=result.page,
        page_size=result.page_size,
        total=result.total,
    )


@router.get(
    "/products/paged",
    response_model=ProductPageResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_products_paged(
    page: int = Query(default=DEFAULT_PAGE, description="Page number (1-indexed)"),
    limit: int = Query(default=DEFAULT_LIMIT, description="Items per page (1-200)"),
    sort_by: SortField = Query(default=SortField.NAME, alias="sortBy"),
    sort_order: SortOrder = Query(default=SortOrder.ASC, alias="sortOrder"),
    use_case: ListProductsPage = Depends(get_list_products_page_use_case),
) -> ProductPageResponse:
    """
    Page-based listing for infinite scroll, e.g.
    ``/api/v1/products/paged?page=2&limit=50&sortBy=price&sortOrder=desc``.
    """
    result = await use_case.execute(
        ListProductsPageInput(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
    )
    return _page_to_response(result)
