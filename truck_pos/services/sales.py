"""
Sales Reporting Service for Truck POS
=====================================

Read side of the sales ledger. Sales rows are written only by the
backend's sale-completion procedure; this module lists them and rolls
them up into the dashboard statistics.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from .. import config
from ..models import Sale
from ..schemas.sales import SalesFilters, SalesStats, SaleWithDetails

logger = logging.getLogger(__name__)


def _details_query(db: Session):
    return db.query(Sale).options(
        selectinload(Sale.menu_item),
        selectinload(Sale.ingredients),
        selectinload(Sale.selections),
    )


def get_sales(db: Session, filters: Optional[SalesFilters] = None) -> List[SaleWithDetails]:
    """List sales newest first, optionally filtered by date range, payment method or menu item."""
    query = _details_query(db)

    if filters:
        if filters.date_from:
            query = query.filter(Sale.created_at >= filters.date_from)
        if filters.date_to:
            query = query.filter(Sale.created_at <= filters.date_to)
        if filters.payment_method:
            query = query.filter(Sale.payment_method == filters.payment_method)
        if filters.menu_item_id:
            query = query.filter(Sale.menu_item_id == filters.menu_item_id)

    sales = query.order_by(Sale.created_at.desc()).all()
    return [SaleWithDetails.model_validate(s) for s in sales]


def get_sale_by_id(db: Session, sale_id: str) -> Optional[SaleWithDetails]:
    sale = _details_query(db).filter(Sale.id == sale_id).first()
    if sale is None:
        return None
    return SaleWithDetails.model_validate(sale)


def summarize_sales(sales: Iterable[Sale]) -> SalesStats:
    """
    Roll a set of sales up into dashboard totals.

    Every configured payment method appears in by_payment_method, with 0
    when it has no sales. profit_margin is a percentage of revenue.
    """
    by_payment_method = {method: 0.0 for method in config.PAYMENT_METHODS}
    total_sales = 0
    total_revenue = 0.0
    total_cogs = 0.0
    total_profit = 0.0

    for sale in sales:
        total_sales += 1
        total_revenue += float(sale.revenue)
        total_cogs += float(sale.cogs)
        total_profit += float(sale.profit)
        by_payment_method[sale.payment_method] = (
            by_payment_method.get(sale.payment_method, 0.0) + float(sale.revenue)
        )

    return SalesStats(
        total_sales=total_sales,
        total_revenue=total_revenue,
        total_cogs=total_cogs,
        total_profit=total_profit,
        profit_margin=total_profit / total_revenue * 100 if total_revenue > 0 else 0.0,
        by_payment_method=by_payment_method,
    )


def get_sales_stats(
    db: Session,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> SalesStats:
    query = db.query(Sale)
    if date_from:
        query = query.filter(Sale.created_at >= date_from)
    if date_to:
        query = query.filter(Sale.created_at <= date_to)
    return summarize_sales(query.all())


def get_today_sales_stats(db: Session, today: Optional[date] = None) -> SalesStats:
    """Stats for the current UTC day."""
    today = today or datetime.now(timezone.utc).date()
    start = datetime.combine(today, time.min, tzinfo=timezone.utc)
    end = datetime.combine(today, time.max, tzinfo=timezone.utc)
    return get_sales_stats(db, start, end)
