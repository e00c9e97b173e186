from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def to_price(value: Decimal | float | int | str) -> Decimal:
    """Normalise a price to the fixed two-digit scale used by the catalog."""
    return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Product:
    """
    Read-only catalog entry served by the paged listing.

    ``stock_quantity`` of ``None`` means the stock level is unknown, which is
    different from an explicit zero.
    """

    id: str
    name: str
    price: Decimal
    description: str | None = None
    image_url: str | None = None
    category: str | None = None
    stock_quantity: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_price(self.price))

    @property
    def in_stock(self) -> bool | None:
        if self.stock_quantity is None:
            return None
        return self.stock_quantity > 0
