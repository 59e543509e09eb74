"""
Performance Appraisal API Endpoints
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.preferences import Preferences
from hrms_admin.core.security import get_hrms_client, get_preferences
from hrms_admin.models.appraisal import AppraisalCreate, AppraisalUpdate, AppraisalResponse
from hrms_admin.services import resources
from hrms_admin.services.appraisals import (
    decorate_appraisal, can_approve_increment, can_approve_designation, remembered_search_term
)
from hrms_admin.services.screens import APPRAISAL_LIST, appraisal_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_appraisals(
    department: Optional[str] = Query(None),
    grade: Optional[str] = Query(None, description="A+, A, B, C or D"),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client),
    preferences: Preferences = Depends(get_preferences)
):
    """
    List appraisals with total points and grade.

    The search term is remembered: a request without ``search`` reuses the
    last term, and ``search=`` (empty) clears it.
    """
    term = remembered_search_term(params.search, preferences.appraisal_search_term)
    if params.search is not None:
        preferences.appraisal_search_term = params.search

    screen = appraisal_screen(
        client,
        params.to_query(APPRAISAL_LIST, search_term=term, department_name=department, grade=grade)
    )
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("", response_model=AppraisalResponse, status_code=status.HTTP_201_CREATED)
async def create_appraisal(
    appraisal_data: AppraisalCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Create a new performance appraisal"""
    record = await run_action(
        "add appraisal",
        lambda: client.create(resources.APPRAISALS, appraisal_data.model_dump(mode="json", exclude_none=True))
    )
    logger.info(f"Created appraisal for employee {appraisal_data.employee_id}")
    return decorate_appraisal(record)


@router.get("/{appraisal_id}", response_model=AppraisalResponse)
async def get_appraisal(
    appraisal_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Get an appraisal with its computed grade"""
    record = await client.retrieve(resources.APPRAISALS, appraisal_id)
    return decorate_appraisal(record)


@router.put("/{appraisal_id}", response_model=AppraisalResponse)
async def update_appraisal(
    appraisal_id: str,
    appraisal_data: AppraisalUpdate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Update an appraisal; total points and grade are recomputed from the stored record"""
    update_data = appraisal_data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided", error_code="EMPTY_UPDATE")

    current = await client.retrieve(resources.APPRAISALS, appraisal_id)
    payload = {**current, **update_data}
    await run_action("update appraisal", lambda: client.update(resources.APPRAISALS, appraisal_id, payload))
    return decorate_appraisal(await client.retrieve(resources.APPRAISALS, appraisal_id))


@router.delete("/{appraisal_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_appraisal(
    appraisal_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Delete an appraisal"""
    await run_action("delete appraisal", lambda: client.delete(resources.APPRAISALS, appraisal_id))
    logger.info(f"Deleted appraisal {appraisal_id}")


@router.post("/{appraisal_id}/approve-increment", response_model=AppraisalResponse)
async def approve_increment(
    appraisal_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Approve the salary increment proposed in an appraisal"""
    record = await client.retrieve(resources.APPRAISALS, appraisal_id)
    if not can_approve_increment(record):
        raise ValidationError(
            "This appraisal has no pending increment to approve",
            error_code="INVALID_TRANSITION"
        )

    await run_action(
        "approve increment",
        lambda: client.action(resources.APPRAISALS, appraisal_id, resources.APPROVE_INCREMENT)
    )
    logger.info(f"Increment approved for appraisal {appraisal_id}")
    return decorate_appraisal(await client.retrieve(resources.APPRAISALS, appraisal_id))


@router.post("/{appraisal_id}/approve-designation", response_model=AppraisalResponse)
async def approve_designation(
    appraisal_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Approve the designation change proposed in an appraisal"""
    record = await client.retrieve(resources.APPRAISALS, appraisal_id)
    if not can_approve_designation(record):
        raise ValidationError(
            "This appraisal has no pending designation change to approve",
            error_code="INVALID_TRANSITION"
        )

    await run_action(
        "approve designation",
        lambda: client.action(resources.APPRAISALS, appraisal_id, resources.APPROVE_DESIGNATION)
    )
    logger.info(f"Designation change approved for appraisal {appraisal_id}")
    return decorate_appraisal(await client.retrieve(resources.APPRAISALS, appraisal_id))
