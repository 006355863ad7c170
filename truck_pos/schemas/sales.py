"""
Sales Schemas for Truck POS
===========================

Read models for sales recorded by the backend, and the aggregated sales
statistics shown on the dashboard.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class SaleMenuItemRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float


class SaleIngredientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    inventory_item_id: str
    quantity: float
    cost: float


class SaleSelectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    option_group_id: Optional[str] = None
    option_id: str


class SaleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    menu_item_id: str
    quantity: int
    revenue: float
    cogs: float
    profit: float
    channel: str
    payment_method: str
    discount_percent: Optional[float] = None
    discount_amount: Optional[float] = None
    original_revenue: Optional[float] = None
    created_at: Optional[datetime] = None


class SaleWithDetails(SaleOut):
    menu_item: Optional[SaleMenuItemRef] = None
    ingredients: List[SaleIngredientOut] = []
    selections: List[SaleSelectionOut] = []


class SalesFilters(BaseModel):
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    payment_method: Optional[str] = None
    menu_item_id: Optional[str] = None


class SalesStats(BaseModel):
    total_sales: int = 0
    total_revenue: float = 0.0
    total_cogs: float = 0.0
    total_profit: float = 0.0
    profit_margin: float = 0.0
    by_payment_method: Dict[str, float] = {}
