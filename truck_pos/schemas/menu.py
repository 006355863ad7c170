"""
Menu Schemas for Truck POS
==========================

Pydantic models for the menu graph read from the backend and for the
pricing/costing values computed from it.

Menu Item Concepts:
-------------------
1. **Recipe Type**: `fixed_recipe` items always consume the same ingredients.
   `variable_recipe` items let the customer pick from option groups.

2. **Option Groups**: A group is either single selection (radio) or
   multiple selection (checkbox), and may be required.

3. **Inventory Cost View**: Each ingredient, option and packaging row carries
   the joined inventory item, whose weighted_avg_cost is the unit cost used by
   the COGS calculator. A missing join means a cost of zero.

Usage:
------
    item = db.query(MenuItem).first()
    detail = MenuItemWithDetails.model_validate(item)
    breakdown = calculate_estimated_cogs(detail)
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeType(str, Enum):
    FIXED = "fixed_recipe"
    VARIABLE = "variable_recipe"


class InventoryCostView(BaseModel):
    """Read-only slice of an inventory item used as a unit cost lookup."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    unit_of_measurement: str
    weighted_avg_cost: float = 0.0
    total_quantity: float = 0.0


class MenuIngredientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    menu_item_id: Optional[str] = None
    inventory_item_id: str
    quantity: float = Field(gt=0)
    inventory_item: Optional[InventoryCostView] = None


class MenuPackagingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    menu_item_id: Optional[str] = None
    inventory_item_id: str
    quantity: float
    inventory_item: Optional[InventoryCostView] = None


class MenuOptionOut(BaseModel):
    """
    One selectable option inside an option group.

    additional_price is a surcharge added to the item price when selected.
    Its sign is not validated; a negative value lowers the price.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    option_group_id: Optional[str] = None
    inventory_item_id: str
    name: str
    quantity: float
    additional_price: float = 0.0
    display_order: int = 0
    inventory_item: Optional[InventoryCostView] = None


class MenuOptionGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    menu_item_id: Optional[str] = None
    name: str
    is_required: bool = False
    multiple_selection: bool = False
    display_order: int = 0
    options: List[MenuOptionOut] = []


class MenuItemWithDetails(BaseModel):
    """
    Menu item with its full recipe graph.

    Attributes:
        id: Backend UUID
        name: Display name
        price: Base sale price before option surcharges
        recipe_type: fixed_recipe or variable_recipe
        ingredients: Fixed ingredients consumed per unit
        option_groups: Customer choices (variable recipes only)
        packaging: Packaging consumed per unit regardless of options
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float = Field(ge=0)
    recipe_type: RecipeType = RecipeType.FIXED
    is_active: bool = True
    category: Optional[str] = None
    display_order: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None
    ingredients: List[MenuIngredientOut] = []
    option_groups: List[MenuOptionGroupOut] = []
    packaging: List[MenuPackagingOut] = []


class MenuFilters(BaseModel):
    category: Optional[str] = None
    is_active: Optional[bool] = None
    recipe_type: Optional[RecipeType] = None
    search: Optional[str] = None


# =============================================================================
# Calculation Results
# =============================================================================

class COGSBreakdown(BaseModel):
    ingredients_cost: float = 0.0
    options_cost: float = 0.0
    packaging_cost: float = 0.0
    total_cogs: float = 0.0


class PriceBreakdown(BaseModel):
    base_price: float
    additional_options_cost: float = 0.0
    total_price: float


class MenuItemSummary(MenuItemWithDetails):
    """Menu item plus its worst-case cost estimate, for the admin menu editor."""
    cogs: COGSBreakdown
    estimated_cogs: float
    profit_margin: float


class QuoteRequest(BaseModel):
    """Option ids picked by the cashier for one unit of a menu item."""
    selected_option_ids: List[str] = []


class QuoteResponse(BaseModel):
    menu_item_id: str
    price: PriceBreakdown
    actual_cogs: float
    can_confirm: bool
    selected_options_display: Optional[str] = None
