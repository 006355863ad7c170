"""
Tests for the per-terminal cart registry.
"""
from truck_pos.schemas.pos import CartLine
from truck_pos.services.terminals import CartRegistry


def test_get_creates_and_reuses_a_session():
    registry = CartRegistry()
    first = registry.get("front")
    first.cart.add_item(CartLine(menu_item_id="m1", name="Burger", price=8.0))

    again = registry.get("front")
    assert again is first
    assert len(again.cart) == 1
    assert len(registry) == 1


def test_terminals_have_separate_carts():
    registry = CartRegistry()
    registry.get("front").cart.add_item(CartLine(menu_item_id="m1", name="Burger", price=8.0))
    assert registry.get("window").cart.is_empty


def test_idle_sessions_expire(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr("truck_pos.services.terminals.time.time", lambda: clock[0])

    registry = CartRegistry(ttl_seconds=60)
    registry.get("front").discount_percent = 10

    clock[0] += 61
    registry.get("window")

    assert len(registry) == 1
    assert registry.get("front").discount_percent is None


def test_least_recently_used_terminal_is_evicted(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr("truck_pos.services.terminals.time.time", lambda: clock[0])

    registry = CartRegistry(ttl_seconds=3600, max_terminals=2)
    registry.get("a").discount_percent = 5
    clock[0] += 1
    registry.get("b")
    clock[0] += 1
    registry.get("a")
    clock[0] += 1
    registry.get("c")

    assert len(registry) == 2
    # "b" was the least recently used; "a" survives with its state
    assert registry.get("a").discount_percent == 5


def test_drop_and_clear():
    registry = CartRegistry()
    registry.get("a")
    registry.get("b")

    registry.drop("a")
    registry.drop("unknown")
    assert len(registry) == 1

    registry.clear()
    assert len(registry) == 0
