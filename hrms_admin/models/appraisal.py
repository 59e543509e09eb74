from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union, Dict
from datetime import date
from decimal import Decimal

from hrms_admin.core.classifiers import APPRAISAL_CRITERIA

Score = Optional[int]


def _blank_to_none(v):
    """Form posts send unscored criteria and empty dates as empty strings."""
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


class AppraisalBase(BaseModel):
    employee_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=150)
    designation: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    last_increment_date: Optional[date] = None
    last_promotion_date: Optional[date] = None
    last_education: Optional[str] = None

    job_knowledge: Score = Field(None, ge=1, le=5)
    job_description: Optional[str] = None
    performance_in_meetings: Score = Field(None, ge=1, le=5)
    performance_description: Optional[str] = None
    communication_skills: Score = Field(None, ge=1, le=5)
    communication_description: Optional[str] = None
    reliability: Score = Field(None, ge=1, le=5)
    reliability_description: Optional[str] = None
    initiative: Score = Field(None, ge=1, le=5)
    initiative_description: Optional[str] = None
    stress_management: Score = Field(None, ge=1, le=5)
    stress_management_description: Optional[str] = None
    co_operation: Score = Field(None, ge=1, le=5)
    co_operation_description: Optional[str] = None
    leadership: Score = Field(None, ge=1, le=5)
    leadership_description: Optional[str] = None
    discipline: Score = Field(None, ge=1, le=5)
    discipline_description: Optional[str] = None
    ethical_considerations: Score = Field(None, ge=1, le=5)
    ethical_considerations_description: Optional[str] = None

    promotion: bool = False
    increment: bool = False
    performance_reward: bool = False
    performance: Optional[str] = None
    expected_performance: Optional[str] = None
    present_salary: Optional[Decimal] = Field(None, ge=0)
    proposed_salary: Optional[Decimal] = Field(None, ge=0)
    present_designation: Optional[str] = None
    proposed_designation: Optional[str] = None

    @field_validator(
        *APPRAISAL_CRITERIA,
        "joining_date",
        "last_increment_date",
        "last_promotion_date",
        "present_salary",
        "proposed_salary",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, v):
        return _blank_to_none(v)


class AppraisalCreate(AppraisalBase):
    pass


class AppraisalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    designation: Optional[str] = None
    department: Optional[str] = None
    last_increment_date: Optional[date] = None
    last_promotion_date: Optional[date] = None
    last_education: Optional[str] = None

    job_knowledge: Score = Field(None, ge=1, le=5)
    performance_in_meetings: Score = Field(None, ge=1, le=5)
    communication_skills: Score = Field(None, ge=1, le=5)
    reliability: Score = Field(None, ge=1, le=5)
    initiative: Score = Field(None, ge=1, le=5)
    stress_management: Score = Field(None, ge=1, le=5)
    co_operation: Score = Field(None, ge=1, le=5)
    leadership: Score = Field(None, ge=1, le=5)
    discipline: Score = Field(None, ge=1, le=5)
    ethical_considerations: Score = Field(None, ge=1, le=5)

    promotion: Optional[bool] = None
    increment: Optional[bool] = None
    performance_reward: Optional[bool] = None
    proposed_salary: Optional[Decimal] = Field(None, ge=0)
    proposed_designation: Optional[str] = None

    @field_validator(*APPRAISAL_CRITERIA, "last_increment_date", "last_promotion_date", "proposed_salary", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        return _blank_to_none(v)


class AppraisalResponse(BaseModel):
    """Appraisal record with its computed total and grade."""
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    employee_id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    total_points: int
    grade: str
    grade_tier: int
    grade_style: Dict[str, str]
    can_approve_increment: bool = False
    can_approve_designation: bool = False
