"""
Employee API Endpoints
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.models.employee import EmployeeCreate, EmployeeUpdate
from hrms_admin.services import resources
from hrms_admin.services.screens import EMPLOYEES, resource_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_employees(
    department: Optional[str] = Query(None),
    designation: Optional[str] = Query(None),
    company: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List employees with search, filters, sorting and pagination"""
    query = params.to_query(EMPLOYEES, department_name=department, designation=designation, company_name=company)
    screen = resource_screen("employees", client, resources.EMPLOYEES, EMPLOYEES, query)
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_data: EmployeeCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Create a new employee"""
    record = await run_action(
        "add employee",
        lambda: client.create(resources.EMPLOYEES, employee_data.model_dump(mode="json", exclude_none=True))
    )
    logger.info(f"Created employee {employee_data.employee_id}")
    return record


@router.get("/{employee_id}")
async def get_employee(
    employee_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Get a specific employee"""
    return await client.retrieve(resources.EMPLOYEES, employee_id)


@router.put("/{employee_id}")
async def update_employee(
    employee_id: str,
    employee_data: EmployeeUpdate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Update an employee"""
    update_data = employee_data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided", error_code="EMPTY_UPDATE")

    current = await client.retrieve(resources.EMPLOYEES, employee_id)
    await run_action(
        "update employee",
        lambda: client.update(resources.EMPLOYEES, employee_id, {**current, **update_data})
    )
    return await client.retrieve(resources.EMPLOYEES, employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_employee(
    employee_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Delete an employee"""
    await run_action("delete employee", lambda: client.delete(resources.EMPLOYEES, employee_id))
    logger.info(f"Deleted employee {employee_id}")
