"""
Holiday Calendar Models for the HRMS Admin Console
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date

HolidayType = Literal["national", "religious", "cultural", "international", "company"]


class HolidayCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    date: date
    total_days: int = Field(default=1, ge=1, le=60)
    type: HolidayType = "national"
    description: Optional[str] = None
