"""
Holiday Calendar API Endpoints
"""

from datetime import date
from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.models.holiday import HolidayCreate
from hrms_admin.services import resources
from hrms_admin.services.holidays import month_options, total_holiday_days, upcoming_holidays
from hrms_admin.services.screens import HOLIDAYS, resource_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_holidays(
    month: Optional[int] = Query(None, ge=1, le=12),
    holiday_type: Optional[str] = Query(None, alias="type"),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List holidays, optionally for a single month"""
    query = params.to_query(HOLIDAYS, month=month, type=holiday_type)
    screen = resource_screen("holidays", client, resources.HOLIDAYS, HOLIDAYS, query)
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.get("/summary")
async def get_holiday_summary(
    limit: int = Query(3, ge=1, le=20),
    client: HRMSClient = Depends(get_hrms_client)
):
    """Upcoming holidays, months that have holidays and the total number of holiday days"""
    holidays = await client.fetch_all(resources.HOLIDAYS)
    return {
        "upcoming": upcoming_holidays(holidays, date.today(), limit=limit),
        "months": month_options(holidays),
        "total_holidays": len(holidays),
        "total_days": total_holiday_days(holidays),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_holiday(
    holiday_data: HolidayCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Add a holiday to the calendar"""
    record = await run_action(
        "add holiday",
        lambda: client.create(resources.HOLIDAYS, holiday_data.model_dump(mode="json", exclude_none=True))
    )
    logger.info(f"Added holiday {holiday_data.name} on {holiday_data.date}")
    return record


@router.get("/{holiday_id}")
async def get_holiday(
    holiday_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    return await client.retrieve(resources.HOLIDAYS, holiday_id)


@router.put("/{holiday_id}")
async def update_holiday(
    holiday_id: str,
    holiday_data: HolidayCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Replace a holiday"""
    await run_action(
        "update holiday",
        lambda: client.update(resources.HOLIDAYS, holiday_id, holiday_data.model_dump(mode="json", exclude_none=True))
    )
    return await client.retrieve(resources.HOLIDAYS, holiday_id)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_holiday(
    holiday_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    await run_action("delete holiday", lambda: client.delete(resources.HOLIDAYS, holiday_id))
    logger.info(f"Deleted holiday {holiday_id}")
