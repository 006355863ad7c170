"""
Tests for stock status and expiry rules.
"""
from datetime import date

import pytest

from truck_pos.schemas.inventory import StockStatus
from truck_pos.services.stock import (
    calculate_days_until_expiry,
    calculate_stock_percentage,
    calculate_stock_status,
    get_expiry_status,
    needs_reorder,
)


@pytest.mark.parametrize("quantity,threshold,expected", [
    (0, 10, StockStatus.OUT_OF_STOCK),
    (0, None, StockStatus.OUT_OF_STOCK),
    (2, 10, StockStatus.LOW_STOCK),
    (1.5, 10, StockStatus.LOW_STOCK),
    (2.5, 10, StockStatus.IN_STOCK),
    (5, None, StockStatus.IN_STOCK),
])
def test_stock_status(quantity, threshold, expected):
    assert calculate_stock_status(quantity, threshold) == expected


def test_low_stock_ratio_is_configurable(monkeypatch):
    monkeypatch.setattr("truck_pos.config.LOW_STOCK_PERCENTAGE", 0.5)
    assert calculate_stock_status(5, 10) == StockStatus.LOW_STOCK


def test_days_until_expiry():
    today = date(2026, 10, 19)
    assert calculate_days_until_expiry(date(2026, 10, 25), today) == 6
    assert calculate_days_until_expiry(date(2026, 10, 19), today) == 0
    assert calculate_days_until_expiry(date(2026, 10, 17), today) == -2


@pytest.mark.parametrize("days,expected", [
    (None, None),
    (-4, "critical"),
    (0, "critical"),
    (3, "critical"),
    (4, "warning"),
    (7, "warning"),
    (8, "info"),
    (14, "info"),
    (15, "normal"),
])
def test_expiry_status(days, expected):
    assert get_expiry_status(days) == expected


def test_stock_percentage():
    assert calculate_stock_percentage(5, 20) == pytest.approx(25.0)
    assert calculate_stock_percentage(5, None) is None
    assert calculate_stock_percentage(5, 0) is None


def test_needs_reorder():
    assert needs_reorder(10, 10)
    assert not needs_reorder(11, 10)
    assert not needs_reorder(0, None)
