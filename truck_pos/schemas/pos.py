"""
POS Schemas for Truck POS
=========================

Models for the terminal cart and for the sale-completion command.

Cart Lines:
-----------
A CartLine is created on every "add to cart" tap and carries the price that
was resolved at that moment. Two taps on the same item give two lines.

Sale Commands:
--------------
At checkout the cart is folded into one SaleRequest per distinct menu item
and each request is sent to the backend's sale-completion procedure, whose
answer is a SaleResult. The backend result is authoritative for revenue,
cost and profit.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartLine(BaseModel):
    """
    One entry in the terminal cart.

    Attributes:
        menu_item_id: Menu item this line sells one unit of
        name: Display name
        price: Unit price including option surcharges at add time
        selected_option_ids: Option ids chosen for this unit (variable recipes)
        selected_options_display: Comma-joined option names for the receipt
    """
    menu_item_id: str
    name: str
    price: float
    selected_option_ids: Optional[List[str]] = None
    selected_options_display: Optional[str] = None


class AddToCartRequest(BaseModel):
    menu_item_id: str
    selected_option_ids: List[str] = []


class DiscountRequest(BaseModel):
    discount_percent: Optional[float] = Field(default=None, ge=0, le=100)


class CartOut(BaseModel):
    terminal_id: str
    lines: List[CartLine]
    total: float
    discount_percent: Optional[float] = None
    discounted_total: float


class OrderAggregate(BaseModel):
    """All cart lines of one menu item folded together."""
    menu_item_id: str
    quantity: int
    option_ids: List[str] = []


class SaleRequest(BaseModel):
    menu_item_id: str
    quantity: int = Field(gt=0)
    selected_option_ids: Optional[List[str]] = None
    payment_method: str
    discount_percent: Optional[float] = None


class SaleResult(BaseModel):
    """Answer of the sale-completion procedure."""
    model_config = ConfigDict(extra="ignore")

    success: bool
    sale_id: Optional[str] = None
    menu_item_name: Optional[str] = None
    quantity: Optional[int] = None
    original_revenue: Optional[float] = None
    discount_percent: Optional[float] = None
    discount_amount: Optional[float] = None
    revenue: float = 0.0
    cogs: float = 0.0
    profit: float = 0.0
    payment_method: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


class CheckoutRequest(BaseModel):
    payment_method: str = "cash"
    discount_percent: Optional[float] = Field(default=None, ge=0, le=100)


class CheckoutResult(BaseModel):
    checkout_key: str
    revenue: float
    cogs: float
    profit: float
    sale_ids: List[str] = []
    sales_count: int
