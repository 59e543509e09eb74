"""Display shaping and dashboard statistics for the stationery module."""
from typing import Any, Dict, Mapping, Sequence

from hrms_admin.core.classifiers import (
    StockStatus,
    is_critical,
    priority_for,
    stock_percentage,
    stock_status_for,
    stock_value,
    suggested_order_quantity,
    to_number,
)
from hrms_admin.core.list_query import count_by
from hrms_admin.core.presentation import (
    priority_style,
    stock_status_style,
    transaction_color,
    transaction_label,
    usage_status_style,
)
from hrms_admin.core.transitions import UsageStatus, allowed_actions
from hrms_admin.models.stationery import StationeryItemStats, StockReportStats, UsageStats


def decorate_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    """Attach stock status, priority and their display styles to an item."""
    status = stock_status_for(item)
    priority = priority_for(item)
    current = item.get("current_stock")
    reorder = item.get("reorder_level")
    return {
        **item,
        "stock_status": status.label.value,
        "severity_rank": status.severity_rank,
        "priority": priority.value,
        "priority_rank": priority.rank,
        "stock_percentage": stock_percentage(current, reorder),
        "is_critical": is_critical(current, reorder),
        "suggested_order_quantity": suggested_order_quantity(current, reorder),
        "status_style": stock_status_style(status.label),
        "priority_style": priority_style(priority),
    }


def decorate_usage(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Attach the action buttons valid for the request's current status."""
    status = record.get("status") or UsageStatus.PENDING.value
    return {
        **record,
        "status": status,
        "allowed_actions": allowed_actions(status),
        "status_style": usage_status_style(status),
    }


def decorate_transaction(record: Mapping[str, Any]) -> Dict[str, Any]:
    transaction_type = record.get("transaction_type") or ""
    return {
        **record,
        "transaction_label": transaction_label(transaction_type),
        "transaction_color": transaction_color(transaction_type),
    }


def _count_statuses(items: Sequence[Mapping[str, Any]]) -> Dict[StockStatus, int]:
    counts = {status: 0 for status in StockStatus}
    for item in items:
        counts[stock_status_for(item).label] += 1
    return counts


def item_stats(items: Sequence[Mapping[str, Any]]) -> StationeryItemStats:
    counts = _count_statuses(items)
    return StationeryItemStats(
        total_items=len(items),
        in_stock=counts[StockStatus.IN_STOCK],
        low_stock=counts[StockStatus.LOW_STOCK],
        out_of_stock=counts[StockStatus.OUT_OF_STOCK],
        total_stock_units=sum(to_number(i.get("current_stock")) for i in items),
    )


def stock_report_stats(items: Sequence[Mapping[str, Any]]) -> StockReportStats:
    """
    Headline numbers for the stock report.

    Out-of-stock items count as critical, and so does any item at or below half
    its reorder level, so an empty item counts twice toward ``critical_items``.
    """
    counts = _count_statuses(items)
    critical = 0
    total_value = 0.0

    for item in items:
        current = item.get("current_stock")
        if stock_status_for(item).label is StockStatus.OUT_OF_STOCK:
            critical += 1
        if is_critical(current, item.get("reorder_level")):
            critical += 1
        total_value += stock_value(current, item.get("unit_price"))

    in_stock = counts[StockStatus.IN_STOCK]
    if items:
        health_score = round((in_stock - critical * 0.5) / len(items) * 100)
    else:
        health_score = 100

    return StockReportStats(
        total_items=len(items),
        in_stock=in_stock,
        low_stock=counts[StockStatus.LOW_STOCK],
        out_of_stock=counts[StockStatus.OUT_OF_STOCK],
        critical_items=critical,
        total_value=round(total_value, 2),
        health_score=health_score,
    )


def usage_stats(records: Sequence[Mapping[str, Any]]) -> UsageStats:
    counts = count_by(records, "status")
    return UsageStats(
        **{status.value: counts.get(status.value, 0) for status in UsageStatus},
        total=len(records),
    )
