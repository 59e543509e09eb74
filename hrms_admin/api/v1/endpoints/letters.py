"""
Candidate Letter API Endpoints
"""

from fastapi import APIRouter, Depends, status, Query, UploadFile, File, Form
from pydantic import ValidationError as PydanticValidationError
from typing import Optional

from hrms_admin.api.v1.deps import ListParams, require_confirmation
from hrms_admin.core.config import get_settings
from hrms_admin.core.exceptions import ValidationError
from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.list_query import ListPage
from hrms_admin.core.logging_config import get_logger
from hrms_admin.core.security import get_hrms_client
from hrms_admin.models.letter import LetterSendCreate, validate_letter_file
from hrms_admin.services import resources
from hrms_admin.services.screens import LETTERS, resource_screen, run_action

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=ListPage)
async def list_letters(
    letter_type: Optional[str] = Query(None),
    params: ListParams = Depends(),
    client: HRMSClient = Depends(get_hrms_client)
):
    """List letters sent to candidates"""
    query = params.to_query(LETTERS, letter_type=letter_type)
    screen = resource_screen("letters", client, resources.LETTERS, LETTERS, query)
    await screen.refresh()
    screen.raise_for_error()
    return screen.view()


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_letter(
    name: str = Form(...),
    email: str = Form(...),
    letter_type: str = Form(...),
    letter_file: Optional[UploadFile] = File(None),
    client: HRMSClient = Depends(get_hrms_client)
):
    """Send an offer letter, appointment letter or joining report to a candidate"""
    try:
        letter = LetterSendCreate(name=name, email=email, letter_type=letter_type)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid letter details",
            error_code="INVALID_LETTER",
            details={"errors": e.errors(include_url=False, include_context=False)}
        )

    content = await letter_file.read() if letter_file is not None else b""
    validate_letter_file(
        letter_file.filename if letter_file is not None else None,
        letter_file.content_type if letter_file is not None else None,
        len(content),
        get_settings().max_upload_bytes
    )

    record = await run_action(
        "send letter",
        lambda: client.upload(
            resources.LETTERS,
            data=letter.model_dump(mode="json"),
            files={"letter_file": (letter_file.filename, content, letter_file.content_type)}
        )
    )
    logger.info(f"Sent {letter.letter_type} to {letter.email}")
    return record


@router.get("/{letter_id}")
async def get_letter(
    letter_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    return await client.retrieve(resources.LETTERS, letter_id)


@router.delete("/{letter_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_confirmation)])
async def delete_letter(
    letter_id: str,
    client: HRMSClient = Depends(get_hrms_client)
):
    """Delete a sent letter record"""
    await run_action("delete letter", lambda: client.delete(resources.LETTERS, letter_id))
    logger.info(f"Deleted letter {letter_id}")
