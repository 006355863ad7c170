"""
Admin Sales Routes for Truck POS
================================

Sales history and statistics for the owner's dashboard. Sales are written
only by the terminal checkout; these endpoints are read-only.

Endpoints:
----------
- GET /admin/sales: Sales newest first (date range, payment, item filters)
- GET /admin/sales/stats: Totals for a date range (default: all time)
- GET /admin/sales/stats/today: Totals for the current UTC day
- GET /admin/sales/{id}: One sale with its ingredient and option rows
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.sales import SalesFilters, SalesStats, SaleWithDetails
from ..services.sales import get_sale_by_id, get_sales, get_sales_stats, get_today_sales_stats


logger = logging.getLogger(__name__)

# Router definition
admin_sales_router = APIRouter(prefix="/admin/sales", tags=["Admin - Sales"])


@admin_sales_router.get("", response_model=List[SaleWithDetails])
def list_sales(
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    payment_method: Optional[str] = Query(None),
    menu_item_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> List[SaleWithDetails]:
    filters = SalesFilters(
        date_from=date_from,
        date_to=date_to,
        payment_method=payment_method,
        menu_item_id=menu_item_id,
    )
    return get_sales(db, filters)


@admin_sales_router.get("/stats", response_model=SalesStats)
def sales_stats(
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
) -> SalesStats:
    return get_sales_stats(db, date_from, date_to)


@admin_sales_router.get("/stats/today", response_model=SalesStats)
def sales_stats_today(db: Session = Depends(get_db)) -> SalesStats:
    return get_today_sales_stats(db)


@admin_sales_router.get("/{sale_id}", response_model=SaleWithDetails)
def get_sale(sale_id: str, db: Session = Depends(get_db)) -> SaleWithDetails:
    sale = get_sale_by_id(db, sale_id)
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale
