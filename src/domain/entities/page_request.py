from dataclasses import dataclass, field
from typing import Any

from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 200


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class InvalidPageRequestError(Exception):
    """Raised when pagination or sort parameters are out of range."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__(
            "Invalid page request: " + "; ".join(f"{e.field}: {e.message}" for e in errors)
        )


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.NAME
    order: SortOrder = SortOrder.ASC

    def __str__(self) -> str:
        return f"{self.field.value} {self.order.value}"


@dataclass(frozen=True)
class PageRequest:
    """
    A validated request for one page of the product listing.

    Build instances through ``PageRequest.create`` so that bad input is
    rejected before anything reaches storage. Limits outside the bound are
    rejected, never clamped.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: SortSpec = field(default_factory=SortSpec)

    @classmethod
    def create(
        cls,
        *,
        page: Any = DEFAULT_PAGE,
        limit: Any = DEFAULT_LIMIT,
        sort_by: Any = SortField.NAME,
        sort_order: Any = SortOrder.ASC,
        max_limit: int = MAX_LIMIT,
    ) -> "PageRequest":
        errors: list[FieldError] = []

        page_value = _as_int(page)
        if page_value is None:
            errors.append(FieldError("page", "must be an integer"))
        elif page_value < 1:
            errors.append(FieldError("page", "must be greater than or equal to 1"))

        limit_value = _as_int(limit)
        if limit_value is None:
            errors.append(FieldError("limit", "must be an integer"))
        elif not 1 <= limit_value <= max_limit:
            errors.append(FieldError("limit", f"must be between 1 and {max_limit}"))

        sort_field = _as_enum(SortField, sort_by)
        if sort_field is None:
            errors.append(
                FieldError("sortBy", f"must be one of: {', '.join(f.value for f in SortField)}")
            )

        order = _as_enum(SortOrder, sort_order)
        if order is None:
            errors.append(
                FieldError("sortOrder", f"must be one of: {', '.join(o.value for o in SortOrder)}")
            )

        if errors:
            raise InvalidPageRequestError(errors)

        return cls(
            page=page_value,  # type: ignore[arg-type]
            limit=limit_value,  # type: ignore[arg-type]
            sort=SortSpec(field=sort_field, order=order),  # type: ignore[arg-type]
        )

    @property
    def offset(self) -> int:
        """Zero-based row offset of the first item on this page."""
        return (self.page - 1) * self.limit


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_enum(enum_cls: type, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None
