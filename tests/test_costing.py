"""
Tests for COGS and price calculations.
"""
from types import SimpleNamespace

import pytest

from truck_pos.schemas.menu import MenuItemWithDetails
from truck_pos.services.costing import (
    apply_discount,
    calculate_actual_cogs,
    calculate_dynamic_price,
    calculate_estimated_cogs,
    calculate_item_price,
    calculate_profit_margin,
    estimate_group_cost,
    round_money,
)


def _inv(cost):
    return {"id": f"inv-{cost}", "name": "x", "unit_of_measurement": "pc", "weighted_avg_cost": cost}


def _option(option_id, cost, quantity=1, price=0.0, order=0):
    return {
        "id": option_id,
        "inventory_item_id": "inv",
        "name": option_id.title(),
        "quantity": quantity,
        "additional_price": price,
        "display_order": order,
        "inventory_item": _inv(cost),
    }


@pytest.fixture
def burger():
    return MenuItemWithDetails.model_validate({
        "id": "m1",
        "name": "Build Your Burger",
        "price": 6.0,
        "recipe_type": "variable_recipe",
        "ingredients": [
            {"id": "i1", "inventory_item_id": "bun", "quantity": 1, "inventory_item": _inv(0.5)},
        ],
        "packaging": [
            {"id": "p1", "inventory_item_id": "box", "quantity": 1, "inventory_item": _inv(0.2)},
        ],
        "option_groups": [
            {
                "id": "g1", "name": "Protein", "is_required": True, "multiple_selection": False,
                "options": [_option("single", 2.0), _option("double", 2.0, quantity=2, price=3.0)],
            },
            {
                "id": "g2", "name": "Extras", "multiple_selection": True,
                "options": [_option("cheese", 0.3, price=1.0), _option("bacon", 0.8, price=1.5)],
            },
        ],
    })


class TestEstimatedCogs:

    def test_breakdown_adds_up(self, burger):
        cogs = calculate_estimated_cogs(burger)
        assert cogs.ingredients_cost == pytest.approx(0.5)
        assert cogs.options_cost == pytest.approx(5.1)
        assert cogs.packaging_cost == pytest.approx(0.2)
        assert cogs.total_cogs == pytest.approx(
            cogs.ingredients_cost + cogs.options_cost + cogs.packaging_cost
        )

    def test_single_selection_group_counts_most_expensive_option(self, burger):
        assert estimate_group_cost(burger.option_groups[0]) == pytest.approx(4.0)

    def test_multiple_selection_group_counts_every_option(self, burger):
        assert estimate_group_cost(burger.option_groups[1]) == pytest.approx(1.1)

    def test_empty_group_costs_nothing(self):
        group = SimpleNamespace(options=[], multiple_selection=False)
        assert estimate_group_cost(group) == 0.0

    def test_item_without_recipe_costs_nothing(self):
        item = SimpleNamespace(ingredients=[], option_groups=[], packaging=[])
        assert calculate_estimated_cogs(item).total_cogs == 0.0

    def test_missing_inventory_item_costs_zero(self):
        item = SimpleNamespace(
            ingredients=[SimpleNamespace(quantity=3, inventory_item=None)],
            option_groups=None,
            packaging=[SimpleNamespace(quantity=1, inventory_item=SimpleNamespace(weighted_avg_cost=None))],
        )
        assert calculate_estimated_cogs(item).total_cogs == 0.0

    def test_estimate_never_below_actual(self, burger):
        options = [opt for group in burger.option_groups for opt in group.options]
        estimate = calculate_estimated_cogs(burger).total_cogs
        for chosen in ([], options[:1], options[1:2], options[2:], [options[1], options[3]]):
            assert calculate_actual_cogs(burger, chosen) <= estimate + 1e-9


class TestActualCogs:

    def test_no_options_is_ingredients_plus_packaging(self, burger):
        assert calculate_actual_cogs(burger, []) == pytest.approx(0.7)

    def test_selected_options_add_their_cost(self, burger):
        double = burger.option_groups[0].options[1]
        cheese = burger.option_groups[1].options[0]
        assert calculate_actual_cogs(burger, [double, cheese]) == pytest.approx(5.0)


class TestPricing:

    def test_dynamic_price_sums_surcharges(self, burger):
        double = burger.option_groups[0].options[1]
        bacon = burger.option_groups[1].options[1]
        price = calculate_dynamic_price(6.0, [double, bacon])
        assert price.base_price == 6.0
        assert price.additional_options_cost == pytest.approx(4.5)
        assert price.total_price == pytest.approx(10.5)

    def test_no_options_is_base_price(self):
        price = calculate_dynamic_price(6.0, [])
        assert price.additional_options_cost == 0
        assert price.total_price == 6.0

    def test_negative_surcharge_is_not_clamped(self):
        discount_option = SimpleNamespace(additional_price=-2.0)
        assert calculate_dynamic_price(6.0, [discount_option]).total_price == pytest.approx(4.0)

    def test_item_price_without_selection_is_menu_price(self, burger):
        assert calculate_item_price(burger) == 6.0
        assert calculate_item_price(burger, []) == 6.0

    def test_item_price_with_selection(self, burger):
        cheese = burger.option_groups[1].options[0]
        assert calculate_item_price(burger, [cheese]) == pytest.approx(7.0)


class TestMarginAndDiscount:

    def test_profit_margin_percentage(self):
        assert calculate_profit_margin(8.0, 2.7) == pytest.approx(66.25)

    def test_zero_price_has_zero_margin(self):
        assert calculate_profit_margin(0, 1.5) == 0.0

    def test_cost_above_price_gives_negative_margin(self):
        assert calculate_profit_margin(2.0, 3.0) == pytest.approx(-50.0)

    def test_apply_discount(self):
        assert apply_discount(20.0, 10) == pytest.approx(18.0)
        assert apply_discount(20.0, None) == 20.0
        assert apply_discount(20.0, 0) == 20.0
        assert apply_discount(20.0, 100) == 0.0

    def test_round_money(self):
        assert round_money(2.345678) == 2.35
        assert round_money(10) == 10


def test_single_selection_takes_maximum_of_option_costs():
    group = SimpleNamespace(
        multiple_selection=False,
        options=[
            SimpleNamespace(quantity=1, inventory_item=SimpleNamespace(weighted_avg_cost=cost))
            for cost in (2, 5, 1)
        ],
    )
    assert estimate_group_cost(group) == 5
