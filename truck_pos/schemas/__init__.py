"""
Schemas Package for Truck POS
=============================

Pydantic models used for API request validation, response serialization and
as the typed input of the pricing and costing functions.

Schema Organization:
--------------------
- **menu.py**: Menu graph, COGS and price breakdowns, price quotes
- **pos.py**: Cart lines, sale commands and checkout results
- **inventory.py**: Inventory items, stock purchases, FIFO results
- **sales.py**: Recorded sales and sales statistics
- **balance.py**: Owner balance and adjustments

Naming Conventions:
-------------------
- *Out: Response models built from ORM rows (`from_attributes=True`)
- *Create / *Update: Request bodies for POST / PATCH
- *Request / *Result: Command inputs and outputs
"""

from .menu import (
    RecipeType,
    InventoryCostView,
    MenuIngredientOut,
    MenuPackagingOut,
    MenuOptionOut,
    MenuOptionGroupOut,
    MenuItemWithDetails,
    MenuItemSummary,
    MenuFilters,
    COGSBreakdown,
    PriceBreakdown,
    QuoteRequest,
    QuoteResponse,
)
from .pos import (
    CartLine,
    AddToCartRequest,
    DiscountRequest,
    CartOut,
    OrderAggregate,
    SaleRequest,
    SaleResult,
    CheckoutRequest,
    CheckoutResult,
)
from .inventory import (
    StockStatus,
    InventoryItemOut,
    InventoryItemWithStatus,
    InventoryItemDetails,
    InventoryItemCreate,
    InventoryItemUpdate,
    StockPurchaseOut,
    AddStockRequest,
    DeductStockRequest,
    InventoryFilters,
    InventorySort,
    FIFODeduction,
    FIFOResult,
)
from .sales import (
    SaleOut,
    SaleWithDetails,
    SalesFilters,
    SalesStats,
)
from .balance import (
    BalanceBreakdown,
    CurrentBalanceResponse,
    InitialBalanceCreate,
    AdjustmentCreate,
    AdjustmentOut,
)

__all__ = [
    # Menu
    "RecipeType",
    "InventoryCostView",
    "MenuIngredientOut",
    "MenuPackagingOut",
    "MenuOptionOut",
    "MenuOptionGroupOut",
    "MenuItemWithDetails",
    "MenuItemSummary",
    "MenuFilters",
    "COGSBreakdown",
    "PriceBreakdown",
    "QuoteRequest",
    "QuoteResponse",
    # POS
    "CartLine",
    "AddToCartRequest",
    "DiscountRequest",
    "CartOut",
    "OrderAggregate",
    "SaleRequest",
    "SaleResult",
    "CheckoutRequest",
    "CheckoutResult",
    # Inventory
    "StockStatus",
    "InventoryItemOut",
    "InventoryItemWithStatus",
    "InventoryItemDetails",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "StockPurchaseOut",
    "AddStockRequest",
    "DeductStockRequest",
    "InventoryFilters",
    "InventorySort",
    "FIFODeduction",
    "FIFOResult",
    # Sales
    "SaleOut",
    "SaleWithDetails",
    "SalesFilters",
    "SalesStats",
    # Balance
    "BalanceBreakdown",
    "CurrentBalanceResponse",
    "InitialBalanceCreate",
    "AdjustmentCreate",
    "AdjustmentOut",
]
