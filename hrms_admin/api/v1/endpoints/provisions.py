"""
Admin Provision API Endpoints

Tracks the onboarding items handed to an employee (bank account paper,
SIM card, visiting card, placement).
"""

from fastapi import APIRouter, Depends, status

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.models.provision import AdminProvisionCreate, AdminProvisionUpdate
from hrms_admin.services import resources
from hrms_admin.services.screens import ADMIN_PROVISIONS, resource_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_admin_provisions(
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    screen = resource_screen(
        "admin provisions", client, resources.ADMIN_PROVISIONS, ADMIN_PROVISIONS, params.to_query(ADMIN_PROVISIONS)
    )
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_admin_provision(
    provision_data: AdminProvisionCreate,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Record the provisions handed to an employee"""
    return await run_action(
        "add admin provision",
        lambda: client.create(resources.ADMIN_PROVISIONS, provision_data.model_dump(mode="json"))
    )


@router.get("/{provision_id}")
async def get_admin_provision(
    provision_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    return await client.retrieve(resources.ADMIN_PROVISIONS, provision_id)


@router.put("/{provision_id}")
async def update_admin_provision(
    provision_id: str,
    provision_data: AdminProvisionUpdate,
    client: HRMSClient = Depends(get_hrms_client)
):
    update_data = provision_data.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided", error_code="EMPTY_UPDATE")

    current = await client.retrieve(resources.ADMIN_PROVISIONS, provision_id)
    await run_action(
        "update admin provision",
        lambda: client.update(resources.ADMIN_PROVISIONS, provision_id, {**current, **update_data})
    )
    return await client.retrieve(resources.ADMIN_PROVISIONS, provision_id)


@router.delete("/{provision_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_admin_provision(
    provision_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    await run_action("delete admin provision", lambda: client.delete(resources.ADMIN_PROVISIONS, provision_id))
    logger.info(f"Deleted admin provision {provision_id}")
