"""
Candidate Letter Models for the HRMS Admin Console
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from pathlib import PurePath

from hrms_admin.core.exceptions import ValidationError

LetterType = Literal["offer_letter", "appointment_letter", "joining_report"]

ALLOWED_LETTER_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_LETTER_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/octet-stream",
}


class LetterSendCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    letter_type: LetterType


def validate_letter_file(
    filename: Optional[str],
    content_type: Optional[str],
    size: int,
    max_bytes: int
) -> None:
    """
    Validate an uploaded letter file before it is forwarded.

    Args:
        filename: Client-supplied file name
        content_type: Client-supplied MIME type
        size: File size in bytes
        max_bytes: Upload size limit

    Raises:
        ValidationError if the file is missing, empty, too large or of the wrong type
    """
    if not filename:
        raise ValidationError("Please select a letter file", error_code="FILE_REQUIRED")

    extension = PurePath(filename).suffix.lower()
    if extension not in ALLOWED_LETTER_EXTENSIONS:
        raise ValidationError(
            f"Unsupported file type '{extension or filename}'. Allowed: .pdf, .doc, .docx",
            error_code="INVALID_FILE_TYPE",
            details={"field": "letter_file"}
        )
    if content_type and content_type not in ALLOWED_LETTER_CONTENT_TYPES:
        raise ValidationError(
            f"Unsupported content type '{content_type}'",
            error_code="INVALID_FILE_TYPE",
            details={"field": "letter_file"}
        )
    if size <= 0:
        raise ValidationError("The letter file is empty", error_code="EMPTY_FILE", details={"field": "letter_file"})
    if size > max_bytes:
        raise ValidationError(
            f"The letter file exceeds the {max_bytes // (1024 * 1024)} MB limit",
            error_code="FILE_TOO_LARGE",
            details={"field": "letter_file", "size": size, "max_bytes": max_bytes}
        )
