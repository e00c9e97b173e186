from enum import Enum


class SortField(str, Enum):
    """Columns a product listing can be ordered by."""

    NAME = "name"
    PRICE = "price"
