"""
Client-side list processing: search, filter, sort and paginate a record collection.

The stages always run in that order so that ``total_count`` and ``total_pages``
describe the filtered result before it is sliced into a page.
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from hrms_admin.core.pagination import PageToken, clamp_page, page_window, total_pages

WILDCARD_FILTER_VALUES = {"", "all", "any"}

Record = Mapping[str, Any]


class ListQuery(BaseModel):
    """Search term, field filters, sort and page position for one list view."""
    search_term: str = ""
    filters: Dict[str, Any] = Field(default_factory=dict)
    sort_by: Optional[str] = None
    sort_order: Literal["asc", "desc"] = "asc"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=500)


class ListQueryConfig(BaseModel):
    """Which fields a screen searches, filters and sorts on."""
    model_config = ConfigDict(frozen=True)

    search_fields: Tuple[str, ...] = ()
    filter_fields: Tuple[str, ...] = ()
    sort_fields: Tuple[str, ...] = ()
    # Computed fields usable by filters and sorts, e.g. stock status or priority
    derived: Dict[str, Callable[[Record], Any]] = Field(default_factory=dict)
    default_sort_by: Optional[str] = None
    default_sort_order: Literal["asc", "desc"] = "asc"
    default_page_size: int = Field(default=10, ge=1)

    def default_query(self, **overrides: Any) -> ListQuery:
        values = {
            "sort_by": self.default_sort_by,
            "sort_order": self.default_sort_order,
            "page_size": self.default_page_size,
        }
        values.update(overrides)
        return ListQuery(**values)


class ListPage(BaseModel):
    items: List[Dict[str, Any]]
    total_count: int
    total_pages: int
    current_page: int
    page_size: int
    page_window: List[PageToken]


def resolve_field(record: Any, field: str, config: Optional[ListQueryConfig] = None) -> Any:
    """Read a field from a record; dotted paths walk nested mappings."""
    if config is not None and field in config.derived:
        return config.derived[field](record)

    value = record
    for part in field.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
        if value is None:
            return None
    return value


def as_text(value: Any) -> str:
    """String form used for search matching; None is empty, never a wildcard."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _matches_search(record: Record, term: str, config: ListQueryConfig) -> bool:
    fields = config.search_fields or tuple(record.keys())
    return any(term in as_text(resolve_field(record, f, config)).lower() for f in fields)


def _is_wildcard(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip().lower() in WILDCARD_FILTER_VALUES


def _matches_filter(record: Record, field: str, expected: Any, config: ListQueryConfig) -> bool:
    actual = resolve_field(record, field, config)
    if isinstance(actual, Enum):
        actual = actual.value
    if actual == expected:
        return True
    # Query strings carry every filter as text; compare against the value's text form
    if isinstance(expected, str) and actual is not None and not isinstance(actual, str):
        return as_text(actual) == expected
    return False


def _numeric_text(value: str) -> Optional[Decimal]:
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _sort_key(value: Any) -> Tuple[int, Any]:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (bool, int, float, Decimal)):
        return (0, value)
    if isinstance(value, datetime):
        return (1, value.isoformat())
    if isinstance(value, date):
        return (1, value.isoformat())
    # Prices and quantities often arrive as strings such as "2.50"
    if isinstance(value, str):
        number = _numeric_text(value)
        if number is not None:
            return (0, number)
    return (2, as_text(value).lower())


def _is_sortable(sort_by: Optional[str], config: ListQueryConfig) -> bool:
    if not sort_by:
        return False
    if config.sort_fields:
        return sort_by in config.sort_fields or sort_by in config.derived
    return True


def apply(
    records: Sequence[Record],
    query: ListQuery,
    config: Optional[ListQueryConfig] = None,
) -> ListPage:
    """
    Run the search/filter/sort/paginate pipeline over ``records``.

    The input sequence and its records are never modified. Unknown filter or
    sort fields are ignored rather than raising.

    Args:
        records: Records as returned by the HRMS backend
        query: The view's current query
        config: Screen configuration; defaults to searching every top-level field

    Returns:
        ListPage with the page slice and pagination metadata. The page number is
        clamped into the valid range, so callers should store ``current_page``.
    """
    config = config or ListQueryConfig()
    result: List[Record] = list(records)

    term = (query.search_term or "").strip().lower()
    if term:
        result = [r for r in result if _matches_search(r, term, config)]

    for field, expected in (query.filters or {}).items():
        if _is_wildcard(expected):
            continue
        if config.filter_fields and field not in config.filter_fields:
            continue
        result = [r for r in result if _matches_filter(r, field, expected, config)]

    if _is_sortable(query.sort_by, config):
        present: List[Tuple[Tuple[int, Any], Record]] = []
        missing: List[Record] = []
        for record in result:
            value = resolve_field(record, query.sort_by, config)
            if value is None:
                missing.append(record)
            else:
                present.append((_sort_key(value), record))
        # sorted() is stable in both directions, so equal keys keep their order
        present = sorted(present, key=lambda pair: pair[0], reverse=query.sort_order == "desc")
        result = [record for _, record in present] + missing

    total_count = len(result)
    pages = total_pages(total_count, query.page_size)
    current = clamp_page(query.page, pages)
    start = (current - 1) * query.page_size

    return ListPage(
        items=[dict(r) for r in result[start:start + query.page_size]],
        total_count=total_count,
        total_pages=pages,
        current_page=current,
        page_size=query.page_size,
        page_window=page_window(current, pages),
    )


def count_by(records: Sequence[Record], field: str, config: Optional[ListQueryConfig] = None) -> Dict[str, int]:
    """Tally records by the text form of a (possibly derived) field."""
    counts: Dict[str, int] = {}
    for record in records:
        key = as_text(resolve_field(record, field, config))
        counts[key] = counts.get(key, 0) + 1
    return counts
