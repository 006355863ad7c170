"""
Owner Balance Schemas for Truck POS
===================================

The owner's cash balance is initial balance + manual adjustments + sales.
The backend computes it; these models carry its answer and the inputs the
dashboard writes.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class BalanceBreakdown(BaseModel):
    initial: float = 0.0
    adjustments: float = 0.0
    sales: float = 0.0


class CurrentBalanceResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = True
    has_initial_balance: bool = False
    balance: float = 0.0
    breakdown: Optional[BalanceBreakdown] = None


class InitialBalanceCreate(BaseModel):
    amount: float


class AdjustmentCreate(BaseModel):
    """Signed amount: positive adds money, negative removes it."""
    amount: float
    description: str = Field(min_length=1)


class AdjustmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: float
    reason: str
    adjustment_type: Literal["add", "subtract"]
    created_at: Optional[datetime] = None
