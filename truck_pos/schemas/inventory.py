"""
Inventory Schemas for Truck POS
===============================

Pydantic models for inventory items, stock purchases (FIFO lots) and the
FIFO deduction command result.

Stock Status:
-------------
Computed per item from total_quantity and reorder_threshold:
- out_of_stock: quantity is zero
- low_stock: quantity at or below LOW_STOCK_PERCENTAGE of the threshold
- in_stock: everything else
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StockStatus(str, Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


InventoryCategoryLiteral = Literal["proteins", "sauces", "produce", "sides", "bread", "packaging"]
UnitLiteral = Literal["kg", "g", "L", "ml", "pc", "box", "bottle", "pack", "cup"]


class InventoryItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    unit_of_measurement: str
    total_quantity: float
    total_value: float
    weighted_avg_cost: float
    reorder_threshold: Optional[float] = None
    is_expirable: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InventoryItemWithStatus(InventoryItemOut):
    stock_status: StockStatus
    days_until_expiry: Optional[int] = None
    oldest_purchase_date: Optional[date] = None


class StockPurchaseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    inventory_item_id: str
    quantity_purchased: float
    quantity_remaining: float
    cost_per_unit: float
    total_cost: float
    supplier: Optional[str] = None
    purchase_date: date
    expiry_date: Optional[date] = None


class InventoryItemDetails(InventoryItemWithStatus):
    purchases: List[StockPurchaseOut] = []
    total_purchases: int = 0


class InventoryItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: InventoryCategoryLiteral
    unit_of_measurement: UnitLiteral
    reorder_threshold: Optional[float] = None
    is_expirable: bool = False


class InventoryItemUpdate(BaseModel):
    """Partial update; only provided fields are written."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category: Optional[InventoryCategoryLiteral] = None
    unit_of_measurement: Optional[UnitLiteral] = None
    reorder_threshold: Optional[float] = None
    is_expirable: Optional[bool] = None


class AddStockRequest(BaseModel):
    quantity_purchased: float = Field(ge=0.001, le=999999)
    total_cost: float = Field(ge=0.01, le=999999)
    supplier: Optional[str] = Field(default=None, max_length=100)
    purchase_date: date
    expiry_date: Optional[date] = None


class InventoryFilters(BaseModel):
    category: Optional[str] = None
    status: Optional[StockStatus] = None
    search: Optional[str] = None
    expirable_only: bool = False


class InventorySort(BaseModel):
    field: Literal["name", "category", "total_quantity", "updated_at"] = "name"
    direction: Literal["asc", "desc"] = "asc"


class FIFODeduction(BaseModel):
    purchase_id: str
    quantity_deducted: float
    cost_per_unit: float
    cost: float
    purchase_date: Optional[date] = None
    expiry_date: Optional[date] = None


class FIFOResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    total_cost: float = 0.0
    deductions: List[FIFODeduction] = []
    error: Optional[str] = None


class DeductStockRequest(BaseModel):
    quantity: float = Field(gt=0)
