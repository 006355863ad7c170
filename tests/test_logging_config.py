"""
Tests for logging configuration.
"""
import logging

import pytest


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from truck_pos.logging_config import setup_logging
        setup_logging()

        assert logging.getLogger("truck_pos").level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from truck_pos.logging_config import setup_logging
        setup_logging()

        assert logging.getLogger("truck_pos").level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from truck_pos.logging_config import setup_logging
        setup_logging(level="ERROR")

        assert logging.getLogger("truck_pos").level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from truck_pos.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        assert logging.getLogger("truck_pos").level == logging.INFO

    def test_third_party_loggers_quieted_outside_debug(self):
        from truck_pos.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_debug_level_unmutes_library_loggers(self):
        from truck_pos.logging_config import QUIET_LOGGERS, setup_logging
        setup_logging(level="debug")

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG
        setup_logging(level="INFO")


class TestCheckoutLogging:
    """Checkout failures must leave a trace an admin can reconcile from."""

    def test_unreversed_sales_are_logged_as_errors(self, caplog):
        from truck_pos.schemas.pos import CartLine
        from truck_pos.services.cart import Cart
        from truck_pos.services.checkout import CheckoutError, CheckoutService
        from tests.test_helpers import BUILD_BURGER, CLASSIC_BURGER, FakeGateway

        gateway = FakeGateway()
        gateway.fail_items[BUILD_BURGER] = "Insufficient stock"
        gateway.unvoidable.add("sale-1")
        cart = Cart([
            CartLine(menu_item_id=CLASSIC_BURGER, name="Classic Burger", price=8.0),
            CartLine(menu_item_id=BUILD_BURGER, name="Build Your Burger", price=6.0),
        ])

        with caplog.at_level(logging.INFO, logger="truck_pos"):
            with pytest.raises(CheckoutError):
                CheckoutService(gateway).complete(cart, "cash")

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert any("sale-1" in r.getMessage() for r in errors)
