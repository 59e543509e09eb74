"""Display metadata (colors, icons, labels) keyed by classifier and status values."""
from typing import Dict

from hrms_admin.core.classifiers import Grade, Priority, StockStatus

STOCK_STATUS_STYLES: Dict[StockStatus, Dict[str, str]] = {
    StockStatus.OUT_OF_STOCK: {"color": "#ef4444", "bg": "#fef2f2", "icon": "x-circle"},
    StockStatus.LOW_STOCK: {"color": "#f97316", "bg": "#fff7ed", "icon": "alert-triangle"},
    StockStatus.IN_STOCK: {"color": "#10b981", "bg": "#f0fdf4", "icon": "check-circle"},
    StockStatus.UNKNOWN: {"color": "#9ca3af", "bg": "#f3f4f6", "icon": "help-circle"},
}

PRIORITY_STYLES: Dict[Priority, Dict[str, str]] = {
    Priority.HIGH: {"text": "High Priority", "color": "#dc2626", "bg": "#fee2e2"},
    Priority.MEDIUM: {"text": "Medium Priority", "color": "#d97706", "bg": "#fef3c7"},
    Priority.LOW: {"text": "Low Priority", "color": "#059669", "bg": "#d1fae5"},
}

GRADE_STYLES: Dict[Grade, Dict[str, str]] = {
    Grade.A_PLUS: {"color": "#047857", "bg": "#d1fae5"},
    Grade.A: {"color": "#059669", "bg": "#ecfdf5"},
    Grade.B: {"color": "#2563eb", "bg": "#dbeafe"},
    Grade.C: {"color": "#d97706", "bg": "#fef3c7"},
    Grade.D: {"color": "#dc2626", "bg": "#fee2e2"},
}

USAGE_STATUS_STYLES: Dict[str, Dict[str, str]] = {
    "approved": {"bg": "#10B981", "text": "#047857", "light": "#D1FAE5", "icon": "check-circle"},
    "pending": {"bg": "#F59E0B", "text": "#B45309", "light": "#FEF3C7", "icon": "clock"},
    "rejected": {"bg": "#EF4444", "text": "#B91C1C", "light": "#FEE2E2", "icon": "x-circle"},
    "issued": {"bg": "#3B82F6", "text": "#1D4ED8", "light": "#DBEAFE", "icon": "check"},
}
DEFAULT_USAGE_STATUS_STYLE = {"bg": "#6B7280", "text": "#374151", "light": "#F3F4F6", "icon": "alert-circle"}

TRANSACTION_TYPES: Dict[str, Dict[str, str]] = {
    "issue": {"label": "Issue", "color": "#3b82f6"},
    "order": {"label": "Order", "color": "#10b981"},
    "return": {"label": "Return", "color": "#8b5cf6"},
    "adjust": {"label": "Adjust", "color": "#f59e0b"},
    "damage": {"label": "Damage", "color": "#ef4444"},
}
DEFAULT_TRANSACTION_COLOR = "#6b7280"


def stock_status_style(status: StockStatus) -> Dict[str, str]:
    return {"label": status.value, **STOCK_STATUS_STYLES[status]}


def priority_style(priority: Priority) -> Dict[str, str]:
    return {"label": priority.value, **PRIORITY_STYLES[priority]}


def grade_style(grade: Grade) -> Dict[str, str]:
    return {"label": grade.value, **GRADE_STYLES[grade]}


def usage_status_style(status: str) -> Dict[str, str]:
    return dict(USAGE_STATUS_STYLES.get(status, DEFAULT_USAGE_STATUS_STYLE))


def transaction_label(transaction_type: str) -> str:
    """Human label for a transaction type; unknown types are shown as-is."""
    entry = TRANSACTION_TYPES.get(transaction_type)
    return entry["label"] if entry else transaction_type


def transaction_color(transaction_type: str) -> str:
    entry = TRANSACTION_TYPES.get(transaction_type)
    return entry["color"] if entry else DEFAULT_TRANSACTION_COLOR
