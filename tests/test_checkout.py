"""
Tests for the checkout service: per-item sale commands, totals, and
voiding already-recorded sales when a later command fails.
"""
import pytest

from truck_pos.schemas.pos import CartLine
from truck_pos.services.cart import Cart
from truck_pos.services.checkout import CheckoutError, CheckoutService, EmptyCartError
from tests.test_helpers import BUILD_BURGER, CLASSIC_BURGER, OPT_CHEESE, FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def cart():
    c = Cart()
    c.add_item(CartLine(menu_item_id=CLASSIC_BURGER, name="Classic Burger", price=8.0))
    c.add_item(CartLine(menu_item_id=BUILD_BURGER, name="Build Your Burger", price=7.0,
                        selected_option_ids=[OPT_CHEESE]))
    c.add_item(CartLine(menu_item_id=CLASSIC_BURGER, name="Classic Burger", price=8.0))
    return c


def test_one_command_per_menu_item(gateway, cart):
    CheckoutService(gateway).complete(cart, "cash")

    assert [(r.menu_item_id, r.quantity) for r in gateway.requests] == [
        (CLASSIC_BURGER, 2),
        (BUILD_BURGER, 1),
    ]
    assert gateway.requests[1].selected_option_ids == [OPT_CHEESE]


def test_totals_are_summed_from_backend_results(gateway, cart):
    result = CheckoutService(gateway).complete(cart, "whish")

    # FakeGateway: revenue = menu price x qty, cogs = 1.0 per unit
    assert result.revenue == pytest.approx(22.0)
    assert result.cogs == pytest.approx(3.0)
    assert result.profit == pytest.approx(19.0)
    assert result.sales_count == 2
    assert result.sale_ids == ["sale-1", "sale-2"]
    assert result.checkout_key


def test_discount_is_forwarded(gateway, cart):
    result = CheckoutService(gateway).complete(cart, "cash", discount_percent=50)
    assert all(r.discount_percent == 50 for r in gateway.requests)
    assert result.revenue == pytest.approx(11.0)


def test_success_clears_cart(gateway, cart):
    CheckoutService(gateway).complete(cart, "cash")
    assert cart.is_empty


def test_empty_cart_is_rejected(gateway):
    with pytest.raises(EmptyCartError):
        CheckoutService(gateway).complete(Cart(), "cash")
    assert gateway.requests == []


def test_unknown_payment_method_is_rejected(gateway, cart):
    with pytest.raises(ValueError):
        CheckoutService(gateway).complete(cart, "card")
    assert gateway.requests == []


@pytest.mark.parametrize("discount", [-1, 101])
def test_out_of_range_discount_is_rejected(gateway, cart, discount):
    with pytest.raises(ValueError):
        CheckoutService(gateway).complete(cart, "cash", discount)


def test_failed_command_voids_earlier_sales_and_keeps_cart(gateway, cart):
    gateway.fail_items[BUILD_BURGER] = "Insufficient stock for Cheddar Slice"

    with pytest.raises(CheckoutError) as exc_info:
        CheckoutService(gateway).complete(cart, "cash")

    err = exc_info.value
    assert err.message == "Insufficient stock for Cheddar Slice"
    assert err.menu_item_id == BUILD_BURGER
    assert err.unreversed_sale_ids == []
    assert gateway.voided == ["sale-1"]
    assert len(cart) == 3


def test_first_command_failure_voids_nothing(gateway, cart):
    gateway.fail_items[CLASSIC_BURGER] = "Menu item not found"

    with pytest.raises(CheckoutError):
        CheckoutService(gateway).complete(cart, "cash")

    assert gateway.voided == []
    assert len(gateway.requests) == 1


def test_backend_error_is_reported_as_checkout_error(gateway, cart):
    gateway.raise_items.add(BUILD_BURGER)

    with pytest.raises(CheckoutError) as exc_info:
        CheckoutService(gateway).complete(cart, "cash")

    assert exc_info.value.message == "connection reset"
    assert gateway.voided == ["sale-1"]


def test_sales_that_cannot_be_voided_are_reported(gateway, cart):
    gateway.fail_items[BUILD_BURGER] = "Insufficient stock"
    gateway.unvoidable.add("sale-1")

    with pytest.raises(CheckoutError) as exc_info:
        CheckoutService(gateway).complete(cart, "cash")

    assert exc_info.value.unreversed_sale_ids == ["sale-1"]


def test_recorded_sale_without_id_is_reported_unreversed(gateway, cart):
    gateway.no_id_items.add(CLASSIC_BURGER)
    gateway.fail_items[BUILD_BURGER] = "Insufficient stock"

    with pytest.raises(CheckoutError) as exc_info:
        CheckoutService(gateway).complete(cart, "cash")

    assert exc_info.value.unreversed_sale_ids == [f"menu_item:{CLASSIC_BURGER}"]
    assert gateway.voided == []
    assert len(cart) == 3


def test_voids_run_newest_first(gateway):
    cart = Cart()
    cart.add_item(CartLine(menu_item_id=CLASSIC_BURGER, name="Classic Burger", price=8.0))
    cart.add_item(CartLine(menu_item_id=BUILD_BURGER, name="Build Your Burger", price=6.0))
    cart.add_item(CartLine(menu_item_id="menu-missing", name="Gone", price=1.0))
    gateway.fail_items["menu-missing"] = "Menu item not found"

    with pytest.raises(CheckoutError):
        CheckoutService(gateway).complete(cart, "cash")

    assert gateway.voided == ["sale-2", "sale-1"]
