"""
Leave Request Models for the HRMS Admin Console
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Union
from datetime import date
from enum import Enum


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveRequestCreate(BaseModel):
    employee: Union[int, str]
    leave_type: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date
    whereabouts: Optional[str] = Field(None, max_length=255)
    sub_person: Optional[str] = Field(None, max_length=150)
    reason: Optional[str] = None

    @model_validator(mode='after')
    def validate_date_range(self):
        """End date cannot precede the start date."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self

    @property
    def leave_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class LeaveRequestUpdate(BaseModel):
    leave_type: Optional[str] = Field(None, min_length=1, max_length=50)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    whereabouts: Optional[str] = Field(None, max_length=255)
    reason: Optional[str] = None
    status: Optional[LeaveStatus] = None

    @model_validator(mode='after')
    def validate_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self
