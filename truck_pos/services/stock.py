"""
Stock status and expiry calculations for inventory items.
"""

from datetime import date
from typing import Optional

from .. import config
from ..schemas.inventory import StockStatus


def calculate_stock_status(quantity: float, threshold: Optional[float]) -> StockStatus:
    """
    Classify an item's stock level.

    Zero quantity is out of stock. With a reorder threshold, a quantity at or
    below LOW_STOCK_PERCENTAGE of it is low stock. Everything else is in stock.
    """
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if threshold is not None and quantity <= threshold * config.LOW_STOCK_PERCENTAGE:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def calculate_days_until_expiry(expiry_date: date, today: Optional[date] = None) -> int:
    """Whole days from today to expiry_date; negative once expired."""
    today = today or date.today()
    return (expiry_date - today).days


def get_expiry_status(days_until_expiry: Optional[int]) -> Optional[str]:
    """Map days until expiry to 'critical', 'warning', 'info' or 'normal' (None if not expirable)."""
    if days_until_expiry is None:
        return None
    if days_until_expiry <= config.EXPIRY_CRITICAL_DAYS:
        return "critical"
    if days_until_expiry <= config.EXPIRY_WARNING_DAYS:
        return "warning"
    if days_until_expiry <= config.EXPIRY_INFO_DAYS:
        return "info"
    return "normal"


def calculate_stock_percentage(quantity: float, threshold: Optional[float]) -> Optional[float]:
    """Quantity as a percentage of the reorder threshold, None without a threshold."""
    if not threshold:
        return None
    return quantity / threshold * 100


def needs_reorder(quantity: float, threshold: Optional[float]) -> bool:
    if threshold is None:
        return False
    return quantity <= threshold
