"""
Display formatting helpers shared by the terminal and the dashboard.

Currency convention: the minus sign goes before the symbol ("-$10.00"),
amounts are rounded half-up to the requested number of decimals and
thousands are comma-separated.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .. import config
from ..schemas.inventory import StockStatus

CATEGORY_LABELS = {
    "proteins": "Proteins",
    "sauces": "Sauces & Condiments",
    "produce": "Produce & Veggies",
    "sides": "Sides",
    "bread": "Bread",
    "packaging": "Packaging & Supplies",
}

STOCK_STATUS_LABELS = {
    StockStatus.IN_STOCK: "In Stock",
    StockStatus.LOW_STOCK: "Low Stock",
    StockStatus.OUT_OF_STOCK: "Out of Stock",
}


def _quantize(value: float, decimals: int) -> Decimal:
    # str() first so 10.125 rounds as written, not as its binary approximation
    exponent = Decimal(1).scaleb(-decimals)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount: float, decimals: int = 2) -> str:
    """
    Format an amount as currency.

    Examples:
        10.999 -> "$11.00"
        1234.5 -> "$1,234.50"
        -10    -> "-$10.00"
    """
    value = _quantize(amount, decimals)
    sign = "-" if value < 0 else ""
    return f"{sign}{config.CURRENCY_SYMBOL}{abs(value):,.{decimals}f}"


def format_number(value: float, decimals: int = 2) -> str:
    """Integers print bare, everything else with a fixed number of decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{_quantize(value, decimals):.{decimals}f}"


def format_quantity(quantity: float, unit: str) -> str:
    return f"{format_number(quantity)} {unit}"


def format_days_until_expiry(days: int) -> str:
    if days < 0:
        return "Expired"
    if days == 0:
        return "Expires today"
    if days == 1:
        return "Expires tomorrow"
    if days < 7:
        return f"Expires in {days} days"
    if days < 30:
        return f"Expires in {days // 7} weeks"
    return f"Expires in {days // 30} months"


def format_relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """Coarse "n days ago" style label."""
    now = now or datetime.now(moment.tzinfo)
    days = (now - moment).days

    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


def format_date(value: date, include_time: bool = False) -> str:
    if include_time and isinstance(value, datetime):
        return value.strftime("%b %d, %Y %I:%M %p").replace(" 0", " ")
    return value.strftime("%b %d, %Y").replace(" 0", " ")


def format_category(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def format_stock_status(status: StockStatus) -> str:
    return STOCK_STATUS_LABELS.get(status, getattr(status, "value", status))


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
