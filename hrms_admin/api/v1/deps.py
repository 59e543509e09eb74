"""Shared query-parameter handling for list and delete endpoints."""
from typing import Any, Literal, Optional

from fastapi import Query

from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.list_query import ListQuery, ListQueryConfig


class ListParams:
    """Search, sort and page parameters accepted by every list endpoint."""

    def __init__(
        self,
        search: Optional[str] = Query(None, max_length=200),
        sort_by: Optional[str] = Query(None, max_length=50),
        sort_order: Optional[Literal["asc", "desc"]] = Query(None),
        page: int = Query(1, ge=1),
        page_size: Optional[int] = Query(None, ge=1, le=500),
    ):
        self.search = search
        self.sort_by = sort_by
        self.sort_order = sort_order
        self.page = page
        self.page_size = page_size

    def to_query(self, config: ListQueryConfig, search_term: Optional[str] = None, **filters: Any) -> ListQuery:
        """Build the ListQuery, falling back to the screen's defaults for unset values."""
        term = search_term if search_term is not None else (self.search or "")
        return ListQuery(
            search_term=term,
            filters={k: v for k, v in filters.items() if v is not None},
            sort_by=self.sort_by or config.default_sort_by,
            sort_order=self.sort_order or config.default_sort_order,
            page=self.page,
            page_size=self.page_size or config.default_page_size,
        )


def require_confirmation(confirm: bool = Query(False, description="Must be true to delete")) -> None:
    """Destructive actions need an explicit confirm step."""
    if not confirm:
        raise ValidationError(
            "Deletion must be confirmed with confirm=true",
            error_code="CONFIRMATION_REQUIRED"
        )
