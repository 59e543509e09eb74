"""Holiday calendar helpers."""
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from hrms_admin.core.classifiers import to_number


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def upcoming_holidays(holidays: Sequence[Mapping[str, Any]], today: date, limit: int = 3) -> List[Dict[str, Any]]:
    """The next ``limit`` holidays on or after ``today``, soonest first."""
    dated = []
    for holiday in holidays:
        day = parse_date(holiday.get("date"))
        if day is not None and day >= today:
            dated.append((day, holiday))
    dated.sort(key=lambda pair: pair[0])
    return [dict(h) for _, h in dated[:limit]]


def month_options(holidays: Sequence[Mapping[str, Any]]) -> List[int]:
    """Months (1-12) that contain at least one holiday."""
    days = [parse_date(h.get("date")) for h in holidays]
    return sorted({d.month for d in days if d is not None})


def total_holiday_days(holidays: Sequence[Mapping[str, Any]]) -> int:
    return int(sum(to_number(h.get("total_days", 1)) for h in holidays))
