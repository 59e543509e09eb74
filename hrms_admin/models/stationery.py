"""
Stationery Models for the HRMS Admin Console
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, Union, List, Dict
from decimal import Decimal

from hrms_admin.core.transitions import UsageStatus

RecordId = Union[int, str]

TransactionType = Literal["issue", "order", "return", "adjust", "damage"]


class StationeryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    unit: str = Field(default="pcs", min_length=1, max_length=20)
    current_stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=10, gt=0)
    unit_price: Optional[Decimal] = Field(None, ge=0)


class StationeryItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    current_stock: Optional[int] = Field(None, ge=0)
    reorder_level: Optional[int] = Field(None, gt=0)
    unit_price: Optional[Decimal] = Field(None, ge=0)


class StationeryItemResponse(BaseModel):
    """An item as returned by the backend plus its derived display fields."""
    model_config = ConfigDict(extra="allow")

    id: RecordId
    name: str
    description: Optional[str] = None
    unit: Optional[str] = None
    current_stock: Union[int, float] = 0
    reorder_level: Union[int, float] = 0
    unit_price: Optional[Decimal] = None
    stock_status: str
    severity_rank: int
    priority: str
    stock_percentage: float
    suggested_order_quantity: int = 0
    status_style: Dict[str, str]


class UsageRequestCreate(BaseModel):
    employee: RecordId
    stationery_item: RecordId
    quantity: int = Field(default=1, gt=0)
    purpose: Optional[str] = Field(None, max_length=500)
    remarks: Optional[str] = Field(None, max_length=500)


class UsageRequestResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId
    quantity: Optional[int] = None
    status: str = UsageStatus.PENDING.value
    allowed_actions: List[str]
    status_style: Dict[str, str]


class StationeryTransactionCreate(BaseModel):
    stationery_item: RecordId
    transaction_type: TransactionType
    quantity: int = Field(..., gt=0)
    remarks: Optional[str] = Field(None, max_length=500)


class StationeryItemStats(BaseModel):
    total_items: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    total_stock_units: float


class StockReportStats(BaseModel):
    total_items: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    critical_items: int
    total_value: float
    health_score: int


class UsageStats(BaseModel):
    pending: int
    approved: int
    issued: int
    rejected: int
    total: int
