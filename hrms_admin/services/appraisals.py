"""Appraisal grading and approval eligibility."""
from typing import Any, Dict, Mapping, Optional

from hrms_admin.core.classifiers import appraisal_grade, total_points
from hrms_admin.core.presentation import grade_style


def decorate_appraisal(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Attach total points, grade and approval flags to an appraisal record."""
    points = total_points(record)
    result = appraisal_grade(points)
    return {
        **record,
        "total_points": points,
        "grade": result.grade.value,
        "grade_tier": result.tier,
        "grade_style": grade_style(result.grade),
        "can_approve_increment": can_approve_increment(record),
        "can_approve_designation": can_approve_designation(record),
    }


def can_approve_increment(record: Mapping[str, Any]) -> bool:
    return bool(record.get("increment")) and not record.get("increment_approved")


def can_approve_designation(record: Mapping[str, Any]) -> bool:
    return (
        bool(record.get("promotion"))
        and not record.get("designation_approved")
        and bool(record.get("proposed_designation"))
    )


def remembered_search_term(requested: Optional[str], stored: str) -> str:
    """Use the requested term when given, otherwise the last remembered one."""
    return stored if requested is None else requested
