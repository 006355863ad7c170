"""
Pricing and cost-of-goods calculations for menu items.

Every function here is pure: it reads a menu item graph (either ORM rows or
the pydantic models in schemas.menu, both expose the same attributes) and
returns numbers. Nothing here touches the database or raises on missing
cost data; an ingredient, option or packaging row without a joined
inventory item simply costs zero.

Two COGS modes exist:

- **Estimated** (calculate_estimated_cogs): a conservative upper bound used
  for margin planning. Multiple-selection groups count every option, single
  selection groups count their most expensive option.
- **Actual** (calculate_actual_cogs): the cost of one concrete unit given
  the options the customer really picked. Display only; the sale-completion
  procedure recomputes costs from its own FIFO lots for the ledger.
"""

from typing import Any, Iterable, Optional, Sequence

from ..schemas.menu import COGSBreakdown, PriceBreakdown


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency."""
    return round(amount, 2)


def unit_cost(component: Any) -> float:
    """Weighted average cost of the inventory item behind a recipe row, or 0."""
    inventory_item = getattr(component, "inventory_item", None)
    if inventory_item is None:
        return 0.0
    return getattr(inventory_item, "weighted_avg_cost", None) or 0.0


def component_cost(component: Any) -> float:
    """Unit cost times the quantity consumed by one sale."""
    return unit_cost(component) * (component.quantity or 0)


def _sum_costs(components: Optional[Iterable[Any]]) -> float:
    if not components:
        return 0.0
    return sum(component_cost(c) for c in components)


def estimate_group_cost(group: Any) -> float:
    """Worst-case cost of one option group.

    Multiple selection: the customer could pick everything, so sum all options.
    Single selection: the customer picks one, so take the priciest.
    """
    options = group.options or []
    if group.multiple_selection:
        return _sum_costs(options)
    costs = [component_cost(opt) for opt in options]
    if not costs:
        return 0.0
    return max(costs)


def calculate_estimated_cogs(item: Any) -> COGSBreakdown:
    """
    Calculate the worst-case COGS for a menu item.

    Args:
        item: Menu item with ingredients, option_groups and packaging loaded

    Returns:
        COGSBreakdown with ingredients, options, packaging and total cost
    """
    ingredients_cost = _sum_costs(item.ingredients)
    options_cost = sum(estimate_group_cost(g) for g in (item.option_groups or []))
    packaging_cost = _sum_costs(item.packaging)

    return COGSBreakdown(
        ingredients_cost=ingredients_cost,
        options_cost=options_cost,
        packaging_cost=packaging_cost,
        total_cogs=ingredients_cost + options_cost + packaging_cost,
    )


def calculate_actual_cogs(item: Any, selected_options: Sequence[Any]) -> float:
    """
    Calculate the COGS of one unit of a menu item for a concrete selection.

    Args:
        item: Menu item with ingredients and packaging loaded
        selected_options: The options the customer picked

    Returns:
        ingredients cost + packaging cost + cost of each selected option
    """
    return (
        _sum_costs(item.ingredients)
        + _sum_costs(selected_options)
        + _sum_costs(item.packaging)
    )


def calculate_dynamic_price(base_price: float, selected_options: Sequence[Any]) -> PriceBreakdown:
    """
    Calculate the sale price from a base price and selected option surcharges.

    Surcharges are not clamped: negative additional prices can bring the
    total below the base price.
    """
    additional_options_cost = sum(
        (opt.additional_price or 0) for opt in (selected_options or [])
    )
    return PriceBreakdown(
        base_price=base_price,
        additional_options_cost=additional_options_cost,
        total_price=base_price + additional_options_cost,
    )


def calculate_item_price(menu_item: Any, selected_options: Optional[Sequence[Any]] = None) -> float:
    """Unit price of a menu item with the given options (base price when none)."""
    if not selected_options:
        return menu_item.price
    return calculate_dynamic_price(menu_item.price, selected_options).total_price


def calculate_profit_margin(price: float, cogs: float) -> float:
    """Margin as a percentage of price. Zero-priced items have a 0 margin."""
    if not price:
        return 0.0
    return (price - cogs) / price * 100


def apply_discount(total: float, discount_percent: Optional[float]) -> float:
    """Display total after a percentage discount (None or 0 means no discount)."""
    if not discount_percent:
        return total
    return total * (1 - discount_percent / 100)
