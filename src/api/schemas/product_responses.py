from decimal import Decimal

from pydantic import BaseModel, field_serializer
from pydantic.alias_generators import to_camel


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    category: str | None = None
    stock_quantity: int | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_serializer("price")
    def serialize_price(self, value: Decimal) -> str:
        return f"{value:.2f}"


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    has_next_page: bool
    next_page: int | None
    page: int
    page_size: int
    total: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: list[FieldErrorResponse] | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: str
