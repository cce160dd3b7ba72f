"""Page/limit/sort handling for list endpoints."""
import math
from dataclasses import dataclass
from typing import Any, Optional

from tenant_admin.core.enums import SortOrder


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_SORT_FIELD = "created_at"
SORT_FIELDS = ("name", "created_at", "updated_at", "industry", "status")


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> "PageRequest":
        """Clamp raw query values into range; unusable values fall back to defaults."""
        page_number = max(1, _to_int(page, 0) or DEFAULT_PAGE)
        page_size = min(MAX_LIMIT, max(1, _to_int(limit, 0) or DEFAULT_LIMIT))

        sort_field = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT_FIELD
        sort_order = SortOrder.ASC if (order or "").lower() == SortOrder.ASC.value else SortOrder.DESC
        return cls(page=page_number, limit=page_size, sort_field=sort_field, sort_order=sort_order)


def build_pagination(page_request: PageRequest, total: int) -> dict:
    return {
        "currentPage": page_request.page,
        "totalPages": math.ceil(total / page_request.limit),
        "totalItems": total,
        "limit": page_request.limit,
        "hasNext": page_request.page * page_request.limit < total,
        "hasPrev": page_request.page > 1,
    }
