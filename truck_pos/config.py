"""
Configuration Module for Truck POS
==================================

This module centralizes configuration settings, environment variables, and
constants used throughout the Truck POS application. Values are read once at
import time; tests override them by patching the module attributes.

Configuration Categories:
-------------------------
- **Payments**: Accepted payment methods at the terminal.

- **Rate Limiting**: Per-terminal cap on checkout requests. Overlapping
  checkouts of one cart are refused by the terminal's checkout lock
  (services/terminals.py), not by this limit.

- **Terminal Carts**: TTL and size limits for the in-memory cart registry.

- **Inventory Thresholds**: Low-stock ratio and expiry warning windows.

- **Backend Commands**: Names of the stored procedures this app invokes.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  terminal and dashboard frontends.

Environment Variables:
----------------------
- RATE_LIMIT_CHECKOUT: Checkout endpoint rate limit (default: "20 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CART_TTL_SECONDS: Idle cart TTL (default: 28800)
- CART_MAX_TERMINALS: Max carts held in memory (default: 64)
- LOW_STOCK_PERCENTAGE: Fraction of reorder threshold that counts as low (default: 0.2)
- CURRENCY_SYMBOL: Symbol used by format_currency (default: "$")
- PROC_COMPLETE_SALE: Sale procedure (default: "complete_pos_sale_simple")
- PROC_VOID_SALE: Void procedure (default: "void_pos_sale")
- PROC_DEDUCT_FIFO: FIFO stock deduction procedure (default: "deduct_inventory_fifo")
- PROC_CURRENT_BALANCE: Owner balance procedure (default: "get_current_owner_balance")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from truck_pos.config import PAYMENT_METHODS, LOW_STOCK_PERCENTAGE
"""

import os
from typing import List


# =============================================================================
# Payment Configuration
# =============================================================================

PAYMENT_METHODS: List[str] = ["cash", "omt", "whish"]
DEFAULT_PAYMENT_METHOD: str = "cash"


# =============================================================================
# Rate Limiting Configuration
# =============================================================================

RATE_LIMIT_CHECKOUT: str = os.getenv("RATE_LIMIT_CHECKOUT", "20 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_checkout() -> str:
    """Return the current checkout rate limit (patchable in tests)."""
    return RATE_LIMIT_CHECKOUT


# =============================================================================
# Terminal Cart Configuration
# =============================================================================
# Carts live only in memory. An idle cart is dropped after CART_TTL_SECONDS.

CART_TTL_SECONDS: int = int(os.getenv("CART_TTL_SECONDS", str(8 * 60 * 60)))
CART_MAX_TERMINALS: int = int(os.getenv("CART_MAX_TERMINALS", "64"))


# =============================================================================
# Inventory Thresholds
# =============================================================================

# quantity <= reorder_threshold * LOW_STOCK_PERCENTAGE -> low stock
LOW_STOCK_PERCENTAGE: float = float(os.getenv("LOW_STOCK_PERCENTAGE", "0.2"))

# Days until expiry at which an item is flagged
EXPIRY_CRITICAL_DAYS: int = 3
EXPIRY_WARNING_DAYS: int = 7
EXPIRY_INFO_DAYS: int = 14

# Window used by the dashboard "expiring soon" counter
EXPIRING_SOON_DAYS: int = 7

CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")


# =============================================================================
# Backend Commands
# =============================================================================
# Stored procedures owned by the backend database. This app only calls them.

PROC_COMPLETE_SALE: str = os.getenv("PROC_COMPLETE_SALE", "complete_pos_sale_simple")
PROC_VOID_SALE: str = os.getenv("PROC_VOID_SALE", "void_pos_sale")
PROC_DEDUCT_FIFO: str = os.getenv("PROC_DEDUCT_FIFO", "deduct_inventory_fifo")
PROC_CURRENT_BALANCE: str = os.getenv("PROC_CURRENT_BALANCE", "get_current_owner_balance")


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
