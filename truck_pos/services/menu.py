"""
Menu queries for the terminal and the admin menu editor.

Menu items are loaded with their whole recipe graph (ingredients, option
groups with options, packaging, each joined to its inventory item) and
converted to MenuItemWithDetails. Option groups and the options inside
them are returned in display_order.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from ..models import MenuItem, MenuIngredient, MenuOption, MenuOptionGroup, MenuPackaging
from ..schemas.menu import MenuFilters, MenuItemSummary, MenuItemWithDetails
from .costing import calculate_estimated_cogs, calculate_profit_margin

logger = logging.getLogger(__name__)


def _details_query(db: Session):
    return db.query(MenuItem).options(
        selectinload(MenuItem.ingredients).selectinload(MenuIngredient.inventory_item),
        selectinload(MenuItem.option_groups)
        .selectinload(MenuOptionGroup.options)
        .selectinload(MenuOption.inventory_item),
        selectinload(MenuItem.packaging).selectinload(MenuPackaging.inventory_item),
    )


def _to_details(item: MenuItem) -> MenuItemWithDetails:
    detail = MenuItemWithDetails.model_validate(item)
    for group in detail.option_groups:
        group.options.sort(key=lambda opt: opt.display_order)
    detail.option_groups.sort(key=lambda group: group.display_order)
    return detail


def get_menu_items(db: Session, filters: Optional[MenuFilters] = None) -> List[MenuItemWithDetails]:
    """
    Fetch menu items with full details.

    Args:
        db: Database session
        filters: Optional category / active / recipe type / name search filters

    Returns:
        Items ordered by display_order, then name
    """
    query = _details_query(db)

    if filters:
        if filters.category:
            query = query.filter(MenuItem.category == filters.category)
        if filters.is_active is not None:
            query = query.filter(MenuItem.is_active == filters.is_active)
        if filters.recipe_type:
            query = query.filter(MenuItem.recipe_type == filters.recipe_type.value)
        if filters.search:
            query = query.filter(MenuItem.name.ilike(f"%{filters.search}%"))

    items = query.order_by(MenuItem.display_order.asc(), MenuItem.name.asc()).all()
    return [_to_details(item) for item in items]


def get_menu_item_by_id(db: Session, item_id: str) -> Optional[MenuItemWithDetails]:
    """Fetch one menu item with full details, or None if it does not exist."""
    item = _details_query(db).filter(MenuItem.id == item_id).first()
    if item is None:
        return None
    return _to_details(item)


def get_active_menu_items(db: Session) -> List[MenuItemWithDetails]:
    """Menu shown on the terminal."""
    return get_menu_items(db, MenuFilters(is_active=True))


def summarize_menu_item(item: MenuItemWithDetails) -> MenuItemSummary:
    """Attach the worst-case COGS estimate and resulting margin to a menu item."""
    cogs = calculate_estimated_cogs(item)
    return MenuItemSummary(
        **item.model_dump(),
        cogs=cogs,
        estimated_cogs=cogs.total_cogs,
        profit_margin=calculate_profit_margin(item.price, cogs.total_cogs),
    )
