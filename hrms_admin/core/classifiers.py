"""Derived status classification for stationery stock and performance appraisals.

Every function here is pure and never raises: values that cannot be read as
numbers count as 0 so a malformed record still renders.
"""
import math
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional


APPRAISAL_CRITERIA = (
    "job_knowledge",
    "performance_in_meetings",
    "communication_skills",
    "reliability",
    "initiative",
    "stress_management",
    "co_operation",
    "leadership",
    "discipline",
    "ethical_considerations",
)

# (lower bound inclusive, grade); checked top down
GRADE_BOUNDARIES = (
    (47, "A+"),
    (42, "A"),
    (37, "B"),
    (32, "C"),
)

DEFAULT_UNIT_PRICE = 10
REORDER_TARGET_MULTIPLE = 3


class StockStatus(str, Enum):
    OUT_OF_STOCK = "Out of Stock"
    LOW_STOCK = "Low Stock"
    IN_STOCK = "In Stock"
    UNKNOWN = "Unknown"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}

_SEVERITY_RANK = {
    StockStatus.OUT_OF_STOCK: 3,
    StockStatus.LOW_STOCK: 2,
    StockStatus.IN_STOCK: 1,
    StockStatus.UNKNOWN: 0,
}

_GRADE_TIER = {Grade.A_PLUS: 5, Grade.A: 4, Grade.B: 3, Grade.C: 2, Grade.D: 1}


class StockStatusResult(NamedTuple):
    label: StockStatus
    severity_rank: int


class GradeResult(NamedTuple):
    grade: Grade
    tier: int


def to_number(value: Any) -> float:
    """Read a value as a finite number, falling back to 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def stock_status(current_stock: Any, reorder_level: Any) -> StockStatusResult:
    """
    Classify an item's stock level.

    Precedence: anything at or below zero is out of stock, anything at or below
    the reorder level is low, everything else is in stock.

    Args:
        current_stock: Units on hand (negative values count as out of stock)
        reorder_level: Replenishment threshold

    Returns:
        StockStatusResult with the label and its severity rank (3 = most urgent)
    """
    current = to_number(current_stock)
    reorder = to_number(reorder_level)

    if current <= 0:
        status = StockStatus.OUT_OF_STOCK
    elif current <= reorder:
        status = StockStatus.LOW_STOCK
    else:
        status = StockStatus.IN_STOCK
    return StockStatusResult(status, _SEVERITY_RANK[status])


def stock_status_for(item: Optional[Mapping[str, Any]]) -> StockStatusResult:
    """Classify a stationery item record; a missing item is Unknown."""
    if not item:
        return StockStatusResult(StockStatus.UNKNOWN, _SEVERITY_RANK[StockStatus.UNKNOWN])
    return stock_status(item.get("current_stock"), item.get("reorder_level"))


def priority_level(current_stock: Any, reorder_level: Any) -> Priority:
    """
    Replenishment priority used by the stock report.

    Args:
        current_stock: Units on hand
        reorder_level: Replenishment threshold

    Returns:
        HIGH at or below the reorder level, MEDIUM up to twice the reorder level, LOW otherwise
    """
    current = to_number(current_stock)
    reorder = to_number(reorder_level)

    if current <= reorder:
        return Priority.HIGH
    if current <= reorder * 2:
        return Priority.MEDIUM
    return Priority.LOW


def priority_for(item: Mapping[str, Any]) -> Priority:
    return priority_level(item.get("current_stock"), item.get("reorder_level"))


def is_critical(current_stock: Any, reorder_level: Any) -> bool:
    """True when stock has fallen to half the reorder level or below."""
    return to_number(current_stock) <= to_number(reorder_level) * 0.5


def stock_percentage(current_stock: Any, reorder_level: Any) -> float:
    """
    Stock as a percentage of the reorder level, capped at 100.

    A non-positive reorder level has no meaningful ratio: such items read as
    100 when they hold stock and 0 when they do not.
    """
    current = to_number(current_stock)
    reorder = to_number(reorder_level)
    if reorder <= 0:
        return 100.0 if current > 0 else 0.0
    return round(max(0.0, min(current / reorder * 100, 100.0)), 1)


def total_points(appraisal: Mapping[str, Any]) -> int:
    """Sum the ten appraisal criteria; unscored criteria count as 0."""
    total = 0
    for field in APPRAISAL_CRITERIA:
        value = appraisal.get(field)
        if value is None or value == "":
            continue
        total += int(to_number(value))
    return total


def appraisal_grade(points: Any) -> GradeResult:
    """
    Map total appraisal points (0-50) to a letter grade.

    Grading scale: 47-50 = A+ | 42-46 = A | 37-41 = B | 32-36 = C | below 32 = D

    Args:
        points: Sum of the criteria scores

    Returns:
        GradeResult with the grade and its tier (5 = A+, 1 = D)
    """
    value = to_number(points)
    for lower_bound, grade_name in GRADE_BOUNDARIES:
        if value >= lower_bound:
            grade = Grade(grade_name)
            return GradeResult(grade, _GRADE_TIER[grade])
    return GradeResult(Grade.D, _GRADE_TIER[Grade.D])


def stock_value(current_stock: Any, unit_price: Any) -> float:
    """Inventory value of an item; items without a price are valued at DEFAULT_UNIT_PRICE."""
    price = to_number(unit_price) or DEFAULT_UNIT_PRICE
    return to_number(current_stock) * price


def suggested_order_quantity(current_stock: Any, reorder_level: Any) -> int:
    """Units needed to bring stock up to REORDER_TARGET_MULTIPLE times the reorder level."""
    target = to_number(reorder_level) * REORDER_TARGET_MULTIPLE
    return max(0, int(round(target - to_number(current_stock))))
