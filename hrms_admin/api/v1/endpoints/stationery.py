"""
Stationery API Endpoints
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.core.transitions import ACTION_ENDPOINTS, UsageAction, allowed_actions, is_allowed
from hrms_admin.models.stationery import (
    StationeryItemCreate, StationeryItemUpdate, StationeryItemResponse,
    UsageRequestCreate, UsageRequestResponse, StationeryTransactionCreate,
    StationeryItemStats, StockReportStats, UsageStats
)
from hrms_admin.services import resources
from hrms_admin.services.screens import (
    STATIONERY_ITEMS, STOCK_REPORT, STATIONERY_USAGE, STATIONERY_TRANSACTIONS,
    stationery_items_screen, stock_report_screen, stationery_usage_screen,
    stationery_transactions_screen, run_action
)
from hrms_admin.services.stationery import (
    decorate_item, decorate_transaction, decorate_usage, item_stats, stock_report_stats, usage_stats
)

logger = get_logger(__name__)
router = APIRouter()


# Stationery Items endpoints
@router.get("/items", response_model=ListPage)
async def list_stationery_items(
    stock_status: Optional[str] = Query(None, description="In Stock, Low Stock, Out of Stock or all"),
    category: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List stationery items with search, stock status filter, sorting and pagination"""
    screen = stationery_items_screen(client, params.to_query(STATIONERY_ITEMS, stock_status=stock_status, category=category))
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.get("/items/stats", response_model=StationeryItemStats)
async def get_stationery_item_stats(client: HRMSClient = Depends(get_hrms_client)):
    """Counts per stock status and total units on hand"""
    items = await client.fetch_all(resources.STATIONERY_ITEMS)
    return item_stats(items)


@router.post("/items", response_model=StationeryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_stationery_item(
    item_data: StationeryItemCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Create a new stationery item"""
    item = await run_action(
        "add stationery item",
        lambda: client.create(resources.STATIONERY_ITEMS, item_data.model_dump(mode="json", exclude_none=True))
    )
    logger.info(f"Created stationery item {item.get('id')}: {item_data.name}")
    return decorate_item(item)


@router.get("/items/{item_id}", response_model=StationeryItemResponse)
async def get_stationery_item(
    item_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Get a specific stationery item with its stock status"""
    item = await client.retrieve(resources.STATIONERY_ITEMS, item_id)
    return decorate_item(item)


@router.put("/items/{item_id}", response_model=StationeryItemResponse)
async def update_stationery_item(
    item_id: str,
    item_data: StationeryItemUpdate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Update a stationery item"""
    update_data = item_data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided", error_code="EMPTY_UPDATE")

    # The backend expects a full record on PUT
    current = await client.retrieve(resources.STATIONERY_ITEMS, item_id)
    payload = {**current, **update_data}
    await run_action("update stationery item", lambda: client.update(resources.STATIONERY_ITEMS, item_id, payload))
    return decorate_item(await client.retrieve(resources.STATIONERY_ITEMS, item_id))


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_stationery_item(
    item_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Delete a stationery item"""
    await run_action("delete stationery item", lambda: client.delete(resources.STATIONERY_ITEMS, item_id))
    logger.info(f"Deleted stationery item {item_id}")


# Stock report endpoints
@router.get("/stock-report", response_model=ListPage)
async def get_stock_report(
    stock_status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """Stock report ordered by replenishment priority by default"""
    screen = stock_report_screen(client, params.to_query(STOCK_REPORT, stock_status=stock_status, category=category))
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.get("/stock-report/stats", response_model=StockReportStats)
async def get_stock_report_stats(client: HRMSClient = Depends(get_hrms_client)):
    """Inventory health figures for the stock report header"""
    items = await client.fetch_all(resources.STATIONERY_ITEMS)
    return stock_report_stats(items)


# Stationery Usage endpoints
@router.get("/usage", response_model=ListPage)
async def list_stationery_usage(
    usage_status: Optional[str] = Query(None, alias="status"),
    employee: Optional[str] = Query(None, description="Only requests by this employee"),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List usage requests; each row carries the actions valid for its status"""
    screen = stationery_usage_screen(client, params.to_query(STATIONERY_USAGE, status=usage_status), employee_id=employee)
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.get("/usage/stats", response_model=UsageStats)
async def get_usage_stats(client: HRMSClient = Depends(get_hrms_client)):
    """Usage request counts per status"""
    records = await client.fetch_all(resources.STATIONERY_USAGE)
    return usage_stats(records)


@router.post("/usage", response_model=UsageRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_usage_request(
    usage_data: UsageRequestCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Submit a new stationery usage request"""
    record = await run_action(
        "add usage request",
        lambda: client.create(resources.STATIONERY_USAGE, usage_data.model_dump(mode="json", exclude_none=True))
    )
    return decorate_usage(record)


@router.post("/usage/{usage_id}/{action}", response_model=UsageRequestResponse)
async def transition_usage_request(
    usage_id: str,
    action: UsageAction,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Approve, reject or issue a usage request"""
    record = await client.retrieve(resources.STATIONERY_USAGE, usage_id)
    current_status = record.get("status")
    if not is_allowed(current_status, action.value):
        raise ValidationError(
            f"Cannot {action.value} a request that is {current_status}",
            error_code="INVALID_TRANSITION",
            details={"status": current_status, "allowed_actions": allowed_actions(current_status)}
        )

    await run_action(
        f"{action.value} usage request",
        lambda: client.action(resources.STATIONERY_USAGE, usage_id, ACTION_ENDPOINTS[action])
    )
    logger.info(f"Usage request {usage_id}: {action.value} (was {current_status})")
    return decorate_usage(await client.retrieve(resources.STATIONERY_USAGE, usage_id))


# Stationery Transactions endpoints
@router.get("/transactions", response_model=ListPage)
async def list_stationery_transactions(
    transaction_type: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List stock transactions with their display labels"""
    screen = stationery_transactions_screen(client, params.to_query(STATIONERY_TRANSACTIONS, transaction_type=transaction_type))
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
async def create_stationery_transaction(
    transaction_data: StationeryTransactionCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Record a stock transaction (order, issue, return, adjustment or damage)"""
    record = await run_action(
        "add transaction",
        lambda: client.create(resources.STATIONERY_TRANSACTIONS, transaction_data.model_dump(mode="json", exclude_none=True))
    )
    return decorate_transaction(record)
