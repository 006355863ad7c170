"""
Admin Menu Routes for Truck POS
===============================

Read-only menu endpoints for the owner's dashboard. Menu editing happens
in the backend's own console; this app shows what each item costs to make.

Endpoints:
----------
- GET /admin/menu: Menu items with estimated COGS and profit margin
- GET /admin/menu/{id}: One menu item with its recipe graph
- GET /admin/menu/{id}/cogs: Estimated COGS breakdown for one item

COGS Estimates:
---------------
The estimate is worst-case: every multiple-selection group counts all of
its options, every single-selection group counts its most expensive one.
Costs use each inventory item's current weighted average cost.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.menu import COGSBreakdown, MenuFilters, MenuItemSummary, MenuItemWithDetails, RecipeType
from ..services.costing import calculate_estimated_cogs
from ..services.menu import get_menu_item_by_id, get_menu_items, summarize_menu_item


logger = logging.getLogger(__name__)

# Router definition
admin_menu_router = APIRouter(prefix="/admin/menu", tags=["Admin - Menu"])


@admin_menu_router.get("", response_model=List[MenuItemSummary])
def admin_menu(
    category: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    recipe_type: Optional[RecipeType] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive name search"),
    db: Session = Depends(get_db),
) -> List[MenuItemSummary]:
    """List menu items with their COGS estimate and margin."""
    filters = MenuFilters(category=category, is_active=is_active, recipe_type=recipe_type, search=search)
    return [summarize_menu_item(item) for item in get_menu_items(db, filters)]


@admin_menu_router.get("/{item_id}", response_model=MenuItemWithDetails)
def get_menu_item(item_id: str, db: Session = Depends(get_db)) -> MenuItemWithDetails:
    item = get_menu_item_by_id(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@admin_menu_router.get("/{item_id}/cogs", response_model=COGSBreakdown)
def get_menu_item_cogs(item_id: str, db: Session = Depends(get_db)) -> COGSBreakdown:
    item = get_menu_item_by_id(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return calculate_estimated_cogs(item)
