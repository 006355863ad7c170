"""
Tests for owner balance bookkeeping.
"""
import pytest

from truck_pos.models import OwnerInitialBalance
from truck_pos.schemas.balance import AdjustmentCreate
from truck_pos.services.balance import (
    create_adjustment,
    get_adjustments,
    get_current_balance,
    set_initial_balance,
)
from tests.test_helpers import FakeGateway


def test_current_balance_comes_from_backend():
    balance = get_current_balance(FakeGateway())
    assert balance.balance == 150.0
    assert balance.breakdown.sales == 30.0


def test_set_initial_balance(db_session):
    entry = set_initial_balance(db_session, 500.0)
    assert entry.id
    assert db_session.query(OwnerInitialBalance).count() == 1


def test_positive_adjustment_adds(db_session):
    adj = create_adjustment(db_session, AdjustmentCreate(amount=25.0, description="Cash float"))
    assert adj.adjustment_type == "add"
    assert adj.amount == 25.0
    assert adj.reason == "Cash float"


def test_negative_adjustment_subtracts_and_stores_positive_amount(db_session):
    adj = create_adjustment(db_session, AdjustmentCreate(amount=-40.0, description="Gas"))
    assert adj.adjustment_type == "subtract"
    assert adj.amount == 40.0


def test_adjustment_requires_description():
    with pytest.raises(ValueError):
        AdjustmentCreate(amount=5.0, description="")


def test_adjustment_history(db_session):
    create_adjustment(db_session, AdjustmentCreate(amount=10.0, description="a"))
    create_adjustment(db_session, AdjustmentCreate(amount=-5.0, description="b"))
    assert {a.reason for a in get_adjustments(db_session)} == {"a", "b"}
