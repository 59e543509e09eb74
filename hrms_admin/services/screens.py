"""
List screens: records fetched from the HRMS backend plus the query applied to them.

A screen never patches its records locally. Every mutating action is followed
by a fresh fetch so the backend stays the single source of truth.
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from hrms_admin.core.classifiers import priority_for, stock_status_for, to_number, total_points, appraisal_grade
from hrms_admin.core.exceptions import ActionError, BackendError, HRMSAdminException
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage, ListQuery, ListQueryConfig, apply
from hrms_admin.core.logging_config import get_logger
from hrms_admin.services import resources
from hrms_admin.services.appraisals import decorate_appraisal
from hrms_admin.services.holidays import parse_date
from hrms_admin.services.stationery import decorate_item, decorate_transaction, decorate_usage

logger = get_logger(__name__)

Loader = Callable[[], Awaitable[List[Dict[str, Any]]]]
Decorator = Callable[[Mapping[str, Any]], Dict[str, Any]]


def _stock_status_label(record: Mapping[str, Any]) -> str:
    return stock_status_for(record).label.value


def _priority_rank(record: Mapping[str, Any]) -> int:
    return priority_for(record).rank


def _grade(record: Mapping[str, Any]) -> str:
    return appraisal_grade(total_points(record)).grade.value


def _holiday_month(record: Mapping[str, Any]) -> Optional[int]:
    day = parse_date(record.get("date"))
    return day.month if day is not None else None


APPRAISAL_LIST = ListQueryConfig(
    search_fields=("name", "employee_id", "designation", "department", "department_name"),
    filter_fields=("department", "department_name", "grade"),
    sort_fields=("name", "employee_id", "designation", "department_name", "total_points"),
    derived={"total_points": total_points, "grade": _grade},
    default_page_size=10,
)

STATIONERY_ITEMS = ListQueryConfig(
    search_fields=("name", "description"),
    filter_fields=("stock_status", "unit", "category"),
    sort_fields=("name", "stock", "current_stock", "reorder_level", "unit_price"),
    derived={
        "stock_status": _stock_status_label,
        "stock": lambda r: to_number(r.get("current_stock")),
    },
    default_sort_by="name",
    default_sort_order="asc",
    default_page_size=12,
)

STOCK_REPORT = ListQueryConfig(
    search_fields=("name", "description", "category"),
    filter_fields=("stock_status", "category"),
    sort_fields=("priority", "stock", "name", "current_stock", "reorder_level"),
    derived={
        "stock_status": _stock_status_label,
        "priority": _priority_rank,
        "stock": lambda r: to_number(r.get("current_stock")),
    },
    default_sort_by="priority",
    default_sort_order="desc",
    default_page_size=12,
)

STATIONERY_USAGE = ListQueryConfig(
    search_fields=("employee.name", "employee_name", "stationery_item.name", "item_name", "purpose"),
    filter_fields=("status", "employee"),
    sort_fields=("created_at", "request_date", "quantity", "status"),
    default_page_size=10,
)

STATIONERY_TRANSACTIONS = ListQueryConfig(
    search_fields=("stationery_item.name", "item_name", "remarks", "transaction_type"),
    filter_fields=("transaction_type",),
    sort_fields=("created_at", "date", "quantity"),
    default_sort_by="created_at",
    default_sort_order="desc",
)

EMPLOYEES = ListQueryConfig(
    search_fields=("name", "employee_id", "designation", "department_name", "email"),
    filter_fields=("department_name", "designation", "company_name"),
    sort_fields=("name", "employee_id", "designation", "joining_date"),
    default_sort_by="name",
)

LEAVE_REQUESTS = ListQueryConfig(
    search_fields=("employee_name", "employee_code", "leave_type", "status"),
    filter_fields=("status", "leave_type"),
    sort_fields=("start_date", "end_date", "employee_name", "status"),
    default_sort_by="start_date",
    default_sort_order="desc",
)

LETTERS = ListQueryConfig(
    search_fields=("name", "email", "letter_type"),
    filter_fields=("letter_type",),
    sort_fields=("name", "created_at"),
)

HOLIDAYS = ListQueryConfig(
    search_fields=("name", "description", "type"),
    filter_fields=("month", "type"),
    sort_fields=("date", "name"),
    derived={"month": _holiday_month},
    default_sort_by="date",
    default_page_size=20,
)

ADMIN_PROVISIONS = ListQueryConfig(
    search_fields=("employee_name", "employee_id", "employee"),
    sort_fields=("employee_name",),
)


class ListScreen:
    """
    Records and query for one list view.

    ``refresh()`` cancels a previous refresh that is still waiting on the
    backend, so an older response can never overwrite a newer one.
    """

    def __init__(
        self,
        name: str,
        loader: Loader,
        config: ListQueryConfig,
        query: Optional[ListQuery] = None,
        decorate: Optional[Decorator] = None,
    ):
        self.name = name
        self.loader = loader
        self.config = config
        self.query = query or config.default_query()
        self.decorate = decorate
        self.records: List[Dict[str, Any]] = []
        self.error: Optional[HRMSAdminException] = None
        self.loading = False
        self._fetch_task: Optional[asyncio.Task] = None

    async def refresh(self) -> bool:
        """
        Re-fetch the records.

        Returns:
            True when the fetched records were applied, False when this refresh
            was superseded by a newer one or failed (see ``error``).
        """
        if self._fetch_task is not None and not self._fetch_task.done():
            logger.debug(f"Cancelling superseded fetch for {self.name}")
            self._fetch_task.cancel()

        task = asyncio.ensure_future(self.loader())
        self._fetch_task = task
        self.loading = True
        try:
            records = await task
        except asyncio.CancelledError:
            if self._fetch_task is not task:
                return False
            self.loading = False
            raise
        except HRMSAdminException as e:
            if self._fetch_task is task:
                logger.error(f"Failed to load {self.name}: {e.message}")
                self.error = e
                self.loading = False
            return False

        if self._fetch_task is not task:
            return False
        self.records = list(records)
        self.error = None
        self.loading = False
        return True

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def set_query(self, **changes: Any) -> ListQuery:
        self.query = self.query.model_copy(update=changes)
        return self.query

    def view(self) -> ListPage:
        """Apply the query to the current records and decorate the visible page."""
        page = apply(self.records, self.query, self.config)
        if page.current_page != self.query.page:
            # keep the stored page in range after the result set shrank
            self.query = self.query.model_copy(update={"page": page.current_page})
        if self.decorate is not None:
            page.items = [self.decorate(item) for item in page.items]
        return page

    async def perform(self, description: str, action: Callable[[], Awaitable[Any]]) -> Any:
        """Run a mutating action, then re-fetch the records."""
        result = await run_action(description, action)
        await self.refresh()
        return result


async def run_action(description: str, action: Callable[[], Awaitable[Any]]) -> Any:
    """
    Run an approve/reject/issue/create/delete call against the backend.

    Backend failures become ActionError; nothing is changed locally.
    """
    try:
        return await action()
    except BackendError as e:
        logger.error(f"Failed to {description}: {e.message}")
        raise ActionError(
            f"Failed to {description}. Please try again.",
            error_code="ACTION_FAILED",
            details={"backend_status": e.status_code}
        ) from e


def _loader(client: HRMSClient, path: str, params: Optional[Dict[str, Any]] = None) -> Loader:
    async def load() -> List[Dict[str, Any]]:
        return await client.fetch_all(path, params)
    return load


def appraisal_screen(client: HRMSClient, query: Optional[ListQuery] = None) -> ListScreen:
    return ListScreen("appraisals", _loader(client, resources.APPRAISALS), APPRAISAL_LIST, query, decorate_appraisal)


def stationery_items_screen(client: HRMSClient, query: Optional[ListQuery] = None) -> ListScreen:
    return ListScreen("stationery items", _loader(client, resources.STATIONERY_ITEMS), STATIONERY_ITEMS, query, decorate_item)


def stock_report_screen(client: HRMSClient, query: Optional[ListQuery] = None) -> ListScreen:
    return ListScreen("stock report", _loader(client, resources.STATIONERY_ITEMS), STOCK_REPORT, query, decorate_item)


def stationery_usage_screen(
    client: HRMSClient,
    query: Optional[ListQuery] = None,
    employee_id: Optional[str] = None,
) -> ListScreen:
    params = {"employee": employee_id} if employee_id else None
    return ListScreen(
        "stationery usage",
        _loader(client, resources.STATIONERY_USAGE, params),
        STATIONERY_USAGE,
        query,
        decorate_usage,
    )


def stationery_transactions_screen(client: HRMSClient, query: Optional[ListQuery] = None) -> ListScreen:
    return ListScreen(
        "stationery transactions",
        _loader(client, resources.STATIONERY_TRANSACTIONS),
        STATIONERY_TRANSACTIONS,
        query,
        decorate_transaction,
    )


def resource_screen(
    name: str,
    client: HRMSClient,
    path: str,
    config: ListQueryConfig,
    query: Optional[ListQuery] = None,
) -> ListScreen:
    return ListScreen(name, _loader(client, path), config, query)
