"""
Routes Package for Truck POS
============================

API route definitions organized by area. Each module defines a FastAPI
APIRouter with a prefix and tags for the OpenAPI docs.

**Terminal Routes:**
- pos.py: Menu, quotes, per-terminal cart and checkout

**Admin Routes:**
- admin_menu.py: Menu items with COGS estimates
- admin_inventory.py: Inventory items and stock lots
- admin_sales.py: Sales history and statistics
- admin_balance.py: Owner balance and adjustments

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 400: Bad request (empty cart, unknown option, bad payment method)
- 404: Not found (invalid ID)
- 409: Conflict (backend refused a sale, duplicate or in-use item)
- 429: Too many requests (checkout rate limit)
- 502: Backend failure that left sales needing manual reconciliation
"""

from .pos import pos_router
from .admin_menu import admin_menu_router
from .admin_inventory import admin_inventory_router
from .admin_sales import admin_sales_router
from .admin_balance import admin_balance_router

__all__ = [
    "pos_router",
    "admin_menu_router",
    "admin_inventory_router",
    "admin_sales_router",
    "admin_balance_router",
]
