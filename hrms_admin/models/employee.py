"""
Employee Models for the HRMS Admin Console
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Union
from datetime import date
from decimal import Decimal


class EmployeeCreate(BaseModel):
    employee_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    designation: str = Field(..., min_length=1, max_length=100)
    department: Optional[Union[int, str]] = None
    company: Optional[Union[int, str]] = None
    joining_date: Optional[date] = None
    date_of_birth: Optional[date] = None
    personal_phone: Optional[str] = Field(None, max_length=30)
    salary: Optional[Decimal] = Field(None, ge=0)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    designation: Optional[str] = Field(None, min_length=1, max_length=100)
    department: Optional[Union[int, str]] = None
    company: Optional[Union[int, str]] = None
    personal_phone: Optional[str] = Field(None, max_length=30)
    salary: Optional[Decimal] = Field(None, ge=0)
