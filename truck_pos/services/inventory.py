"""
Inventory Service for Truck POS
===============================

Reads and writes the inventory tables used by the admin inventory page.

Stock received is recorded as a StockPurchase lot; the backend's triggers
roll lots up into the item's total_quantity, total_value and
weighted_avg_cost. Stock consumption goes through the backend's FIFO
deduction command, never through direct updates here.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import config
from ..backend import BackendGateway
from ..models import InventoryItem, MenuIngredient, MenuOption, MenuPackaging, StockPurchase
from ..schemas.inventory import (
    AddStockRequest,
    FIFOResult,
    InventoryFilters,
    InventoryItemCreate,
    InventoryItemDetails,
    InventoryItemOut,
    InventoryItemUpdate,
    InventoryItemWithStatus,
    InventorySort,
    StockPurchaseOut,
    StockStatus,
)
from .stock import calculate_days_until_expiry, calculate_stock_status

logger = logging.getLogger(__name__)

# Inventory item columns that may be cleared with an explicit null
NULLABLE_ITEM_FIELDS = {"reorder_threshold"}


class DuplicateItemNameError(Exception):
    """Raised when an inventory item name is already taken (case-insensitive)."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"An inventory item named '{name}' already exists")


class InventoryItemInUseError(Exception):
    """Raised when deleting an item that still has stock or is used by the menu."""


def _oldest_open_purchase(db: Session, item_id: str) -> Optional[StockPurchase]:
    return (
        db.query(StockPurchase)
        .filter(StockPurchase.inventory_item_id == item_id, StockPurchase.quantity_remaining > 0)
        .order_by(StockPurchase.purchase_date.asc())
        .first()
    )


def _with_status(item: InventoryItem, oldest: Optional[StockPurchase]) -> InventoryItemWithStatus:
    days_until_expiry = None
    if oldest is not None and oldest.expiry_date:
        days_until_expiry = calculate_days_until_expiry(oldest.expiry_date)
    return InventoryItemWithStatus(
        **InventoryItemOut.model_validate(item).model_dump(),
        stock_status=calculate_stock_status(item.total_quantity, item.reorder_threshold),
        days_until_expiry=days_until_expiry,
        oldest_purchase_date=oldest.purchase_date if oldest is not None else None,
    )


# =============================================================================
# Read Operations
# =============================================================================

def get_inventory_items(
    db: Session,
    filters: Optional[InventoryFilters] = None,
    sort: Optional[InventorySort] = None,
) -> List[InventoryItemWithStatus]:
    """
    List inventory items with stock status and nearest expiry.

    The status filter is applied after the status is computed, the other
    filters in SQL.
    """
    query = db.query(InventoryItem)
    filters = filters or InventoryFilters()

    if filters.category:
        query = query.filter(InventoryItem.category == filters.category)
    if filters.expirable_only:
        query = query.filter(InventoryItem.is_expirable.is_(True))
    if filters.search:
        query = query.filter(InventoryItem.name.ilike(f"%{filters.search}%"))

    sort = sort or InventorySort()
    column = getattr(InventoryItem, sort.field)
    query = query.order_by(column.asc() if sort.direction == "asc" else column.desc())

    items = [
        _with_status(item, _oldest_open_purchase(db, item.id))
        for item in query.all()
    ]

    if filters.status:
        items = [item for item in items if item.stock_status == filters.status]
    return items


def get_inventory_item_by_id(db: Session, item_id: str) -> Optional[InventoryItemDetails]:
    """One inventory item with its purchase history (newest first)."""
    item = db.get(InventoryItem, item_id)
    if item is None:
        return None

    purchases = (
        db.query(StockPurchase)
        .filter(StockPurchase.inventory_item_id == item_id)
        .order_by(StockPurchase.purchase_date.desc())
        .all()
    )
    return InventoryItemDetails(
        **_with_status(item, _oldest_open_purchase(db, item_id)).model_dump(),
        purchases=[StockPurchaseOut.model_validate(p) for p in purchases],
        total_purchases=len(purchases),
    )


def get_stock_purchases(db: Session, item_id: str) -> List[StockPurchaseOut]:
    purchases = (
        db.query(StockPurchase)
        .filter(StockPurchase.inventory_item_id == item_id)
        .order_by(StockPurchase.purchase_date.desc())
        .all()
    )
    return [StockPurchaseOut.model_validate(p) for p in purchases]


def check_item_name_exists(db: Session, name: str, exclude_id: Optional[str] = None) -> bool:
    """Case-insensitive name check, optionally ignoring one item (for renames)."""
    query = db.query(InventoryItem.id).filter(func.lower(InventoryItem.name) == name.strip().lower())
    if exclude_id:
        query = query.filter(InventoryItem.id != exclude_id)
    return query.first() is not None


def get_low_stock_count(db: Session) -> int:
    """Number of items that are low or out of stock."""
    count = 0
    for quantity, threshold in db.query(InventoryItem.total_quantity, InventoryItem.reorder_threshold):
        if calculate_stock_status(quantity, threshold) != StockStatus.IN_STOCK:
            count += 1
    return count


def get_expiring_soon_count(db: Session, days: int = config.EXPIRING_SOON_DAYS, today: Optional[date] = None) -> int:
    """Number of open stock lots expiring within the next `days` days."""
    cutoff = (today or date.today()) + timedelta(days=days)
    return (
        db.query(StockPurchase)
        .filter(
            StockPurchase.quantity_remaining > 0,
            StockPurchase.expiry_date.isnot(None),
            StockPurchase.expiry_date <= cutoff,
        )
        .count()
    )


# =============================================================================
# Write Operations
# =============================================================================

def create_inventory_item(db: Session, payload: InventoryItemCreate) -> InventoryItem:
    """Create an empty inventory item. Stock arrives through add_stock."""
    name = payload.name.strip()
    if check_item_name_exists(db, name):
        raise DuplicateItemNameError(name)

    item = InventoryItem(
        name=name,
        category=payload.category,
        unit_of_measurement=payload.unit_of_measurement,
        reorder_threshold=payload.reorder_threshold or None,
        is_expirable=payload.is_expirable,
        total_quantity=0.0,
        total_value=0.0,
        weighted_avg_cost=0.0,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created inventory item: %s (id=%s)", item.name, item.id)
    return item


def add_stock(db: Session, item_id: str, payload: AddStockRequest) -> StockPurchase:
    """
    Record a purchase lot for an item.

    cost_per_unit is derived from the total paid and the quantity bought.

    Raises:
        LookupError: The inventory item does not exist
    """
    if db.get(InventoryItem, item_id) is None:
        raise LookupError(f"Inventory item {item_id} not found")

    purchase = StockPurchase(
        inventory_item_id=item_id,
        quantity_purchased=payload.quantity_purchased,
        quantity_remaining=payload.quantity_purchased,
        cost_per_unit=payload.total_cost / payload.quantity_purchased,
        total_cost=payload.total_cost,
        supplier=payload.supplier or None,
        purchase_date=payload.purchase_date,
        expiry_date=payload.expiry_date,
    )
    db.add(purchase)
    db.commit()
    db.refresh(purchase)
    logger.info("Added stock lot %s to inventory item %s", purchase.id, item_id)
    return purchase


def update_inventory_item(db: Session, item_id: str, payload: InventoryItemUpdate) -> Optional[InventoryItem]:
    """
    Apply a partial update. Returns None if the item does not exist.

    An explicit null only clears reorder_threshold; nulls sent for the
    other fields are ignored.
    """
    item = db.get(InventoryItem, item_id)
    if item is None:
        return None

    updates = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_ITEM_FIELDS
    }
    if "name" in updates:
        updates["name"] = updates["name"].strip()
        if check_item_name_exists(db, updates["name"], exclude_id=item_id):
            raise DuplicateItemNameError(updates["name"])

    for field, value in updates.items():
        setattr(item, field, value)
    item.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(item)
    return item


def delete_inventory_item(db: Session, item_id: str) -> bool:
    """
    Delete an inventory item that has no stock history and no menu usage.

    Returns:
        False if the item does not exist, True once deleted

    Raises:
        InventoryItemInUseError: The item has purchases or is used by a recipe
    """
    item = db.get(InventoryItem, item_id)
    if item is None:
        return False

    if db.query(StockPurchase.id).filter(StockPurchase.inventory_item_id == item_id).first():
        raise InventoryItemInUseError(
            "Cannot delete item with existing stock purchases. Remove all stock first."
        )

    for model in (MenuIngredient, MenuOption, MenuPackaging):
        if db.query(model.id).filter(model.inventory_item_id == item_id).first():
            raise InventoryItemInUseError(
                "Cannot delete item that is used in menu recipes. Remove from menu first."
            )

    db.delete(item)
    db.commit()
    logger.info("Deleted inventory item %s", item_id)
    return True


def deduct_inventory_fifo(gateway: BackendGateway, item_id: str, quantity: float) -> FIFOResult:
    """Consume stock oldest-lot-first through the backend command."""
    result = gateway.deduct_inventory_fifo(item_id, quantity)
    if not result.success:
        logger.warning("FIFO deduction of %s from %s refused: %s", quantity, item_id, result.error)
    return result
