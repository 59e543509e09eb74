"""
Leave Request API Endpoints
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.models.leave import LeaveRequestCreate, LeaveRequestUpdate
from hrms_admin.services import resources
from hrms_admin.services.screens import LEAVE_REQUESTS, resource_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_leave_requests(
    leave_status: Optional[str] = Query(None, alias="status"),
    leave_type: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List leave requests"""
    query = params.to_query(LEAVE_REQUESTS, status=leave_status, leave_type=leave_type)
    screen = resource_screen("leave requests", client, resources.LEAVE_REQUESTS, LEAVE_REQUESTS, query)
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    leave_data: LeaveRequestCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Submit a leave request on behalf of an employee"""
    payload = leave_data.model_dump(mode="json", exclude_none=True)
    payload["leave_days"] = leave_data.leave_days
    record = await run_action("add leave request", lambda: client.create(resources.LEAVE_REQUESTS, payload))
    logger.info(f"Leave request for employee {leave_data.employee}: {leave_data.leave_days} day(s)")
    return record


@router.get("/{leave_id}")
async def get_leave_request(
    leave_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    return await client.retrieve(resources.LEAVE_REQUESTS, leave_id)


@router.put("/{leave_id}")
async def update_leave_request(
    leave_id: str,
    leave_data: LeaveRequestUpdate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Update a leave request, including approving or rejecting it"""
    update_data = leave_data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided", error_code="EMPTY_UPDATE")

    current = await client.retrieve(resources.LEAVE_REQUESTS, leave_id)
    await run_action(
        "update leave request",
        lambda: client.update(resources.LEAVE_REQUESTS, leave_id, {**current, **update_data})
    )
    return await client.retrieve(resources.LEAVE_REQUESTS, leave_id)


@router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_leave_request(
    leave_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    await run_action("delete leave request", lambda: client.delete(resources.LEAVE_REQUESTS, leave_id))
    logger.info(f"Deleted leave request {leave_id}")
