"""
SQLAlchemy ORM models.

These are purely infrastructure concerns: domain entities are mapped to/from
these models inside the repository implementations.
"""
import uuid
from decimal import Decimal

from sqlalchemy import Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.connection import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class ProductModel(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stock_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)

    __table_args__ = (
        Index("ix_products_name", "name", "id"),
        Index("ix_products_price", "price", "id"),
    )
