"""Allowed actions for stationery usage requests.

The HRMS backend enforces the transitions; this table only decides which
action buttons a view offers for a request in a given status.
"""
from enum import Enum
from typing import Dict, List, Optional, Tuple


class UsageStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ISSUED = "issued"


class UsageAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    ISSUE = "issue"


USAGE_TRANSITIONS: Dict[UsageStatus, Tuple[UsageAction, ...]] = {
    UsageStatus.PENDING: (UsageAction.APPROVE, UsageAction.REJECT),
    UsageStatus.APPROVED: (UsageAction.ISSUE,),
    UsageStatus.ISSUED: (),
    UsageStatus.REJECTED: (),
}

# Backend action endpoint for each action, relative to stationery_usage/{id}/
ACTION_ENDPOINTS: Dict[UsageAction, str] = {
    UsageAction.APPROVE: "approve_request",
    UsageAction.REJECT: "reject_request",
    UsageAction.ISSUE: "issue_item",
}


def _as_status(status: Optional[str]) -> Optional[UsageStatus]:
    try:
        return UsageStatus(status)
    except ValueError:
        return None


def allowed_actions(status: Optional[str]) -> List[str]:
    """Actions offered for a request; unknown statuses offer none."""
    usage_status = _as_status(status)
    if usage_status is None:
        return []
    return [action.value for action in USAGE_TRANSITIONS[usage_status]]


def is_allowed(status: Optional[str], action: str) -> bool:
    return action in allowed_actions(status)
