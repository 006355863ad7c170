"""
Admin Inventory Routes for Truck POS
====================================

Endpoints for the dashboard's inventory page: the raw ingredients and
packaging the truck buys, and the stock lots they arrive in.

Endpoints:
----------
- GET /admin/inventory: List items with stock status (filter + sort)
- GET /admin/inventory/alerts: Low-stock and expiring-soon counters
- POST /admin/inventory: Create an item
- GET /admin/inventory/{id}: Item with purchase history
- PATCH /admin/inventory/{id}: Update an item
- DELETE /admin/inventory/{id}: Delete an unused item
- GET /admin/inventory/{id}/purchases: Stock lots, newest first
- POST /admin/inventory/{id}/stock: Record a purchase lot
- POST /admin/inventory/{id}/deduct: Consume stock oldest lot first

Stock Status:
-------------
- out_of_stock: quantity is zero
- low_stock: quantity at or below LOW_STOCK_PERCENTAGE of the reorder threshold
- in_stock: anything else, or no threshold configured

Error Responses:
----------------
- 404: Unknown inventory item
- 409: Duplicate name, or the item still has stock / menu usage on delete
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ..backend import BackendError, BackendGateway
from ..db import get_db
from ..dependencies import get_backend_gateway
from ..schemas.inventory import (
    AddStockRequest,
    DeductStockRequest,
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
from ..services import inventory as inventory_service
from ..services.inventory import DuplicateItemNameError, InventoryItemInUseError


logger = logging.getLogger(__name__)

# Router definition
admin_inventory_router = APIRouter(prefix="/admin/inventory", tags=["Admin - Inventory"])


@admin_inventory_router.get("", response_model=List[InventoryItemWithStatus])
def list_inventory(
    category: Optional[str] = Query(None),
    status: Optional[StockStatus] = Query(None),
    search: Optional[str] = Query(None),
    expirable_only: bool = Query(False),
    sort_by: str = Query("name", pattern="^(name|category|total_quantity|updated_at)$"),
    direction: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
) -> List[InventoryItemWithStatus]:
    filters = InventoryFilters(category=category, status=status, search=search, expirable_only=expirable_only)
    return inventory_service.get_inventory_items(db, filters, InventorySort(field=sort_by, direction=direction))


@admin_inventory_router.get("/alerts", response_model=Dict[str, int])
def inventory_alerts(
    days: int = Query(7, ge=1, le=90),
    db: Session = Depends(get_db),
) -> Dict[str, int]:
    """Counters for the dashboard badges."""
    return {
        "low_stock": inventory_service.get_low_stock_count(db),
        "expiring_soon": inventory_service.get_expiring_soon_count(db, days=days, today=date.today()),
    }


@admin_inventory_router.post("", response_model=InventoryItemOut, status_code=201)
def create_inventory_item(
    payload: InventoryItemCreate,
    db: Session = Depends(get_db),
) -> InventoryItemOut:
    try:
        item = inventory_service.create_inventory_item(db, payload)
    except DuplicateItemNameError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return InventoryItemOut.model_validate(item)


@admin_inventory_router.get("/{item_id}", response_model=InventoryItemDetails)
def get_inventory_item(item_id: str, db: Session = Depends(get_db)) -> InventoryItemDetails:
    item = inventory_service.get_inventory_item_by_id(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item


@admin_inventory_router.patch("/{item_id}", response_model=InventoryItemOut)
def update_inventory_item(
    item_id: str,
    payload: InventoryItemUpdate,
    db: Session = Depends(get_db),
) -> InventoryItemOut:
    try:
        item = inventory_service.update_inventory_item(db, item_id, payload)
    except DuplicateItemNameError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    logger.info("Updated inventory item %s", item_id)
    return InventoryItemOut.model_validate(item)


@admin_inventory_router.delete("/{item_id}", status_code=204)
def delete_inventory_item(item_id: str, db: Session = Depends(get_db)) -> Response:
    try:
        deleted = inventory_service.delete_inventory_item(db, item_id)
    except InventoryItemInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return Response(status_code=204)


@admin_inventory_router.get("/{item_id}/purchases", response_model=List[StockPurchaseOut])
def list_stock_purchases(item_id: str, db: Session = Depends(get_db)) -> List[StockPurchaseOut]:
    return inventory_service.get_stock_purchases(db, item_id)


@admin_inventory_router.post("/{item_id}/stock", response_model=StockPurchaseOut, status_code=201)
def add_stock(
    item_id: str,
    payload: AddStockRequest,
    db: Session = Depends(get_db),
) -> StockPurchaseOut:
    """Record a purchase lot. The backend rolls it into the item totals."""
    try:
        purchase = inventory_service.add_stock(db, item_id, payload)
    except LookupError:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return StockPurchaseOut.model_validate(purchase)


@admin_inventory_router.post("/{item_id}/deduct", response_model=FIFOResult)
def deduct_stock(
    item_id: str,
    payload: DeductStockRequest,
    gateway: BackendGateway = Depends(get_backend_gateway),
) -> FIFOResult:
    """Manual stock write-off (spoilage, staff meals), oldest lots first."""
    try:
        result = inventory_service.deduct_inventory_fifo(gateway, item_id, payload.quantity)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.detail)
    if not result.success:
        raise HTTPException(status_code=409, detail=result.error or "Stock deduction failed")
    return result
