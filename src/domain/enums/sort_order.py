from enum import Enum


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def is_descending(self) -> bool:
        return self is SortOrder.DESC
