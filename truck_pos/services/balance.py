"""
Owner balance bookkeeping.

The running balance is computed by the backend (initial balance plus
adjustments plus sales revenue). This module records the owner's inputs,
the initial amount and signed manual adjustments, and reads the history.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..backend import BackendGateway
from ..models import OwnerBalanceAdjustment, OwnerInitialBalance
from ..schemas.balance import AdjustmentCreate, CurrentBalanceResponse

logger = logging.getLogger(__name__)


def get_current_balance(gateway: BackendGateway) -> CurrentBalanceResponse:
    return gateway.get_current_balance()


def set_initial_balance(db: Session, amount: float) -> OwnerInitialBalance:
    """Record the owner's starting balance (first-time setup)."""
    entry = OwnerInitialBalance(amount=amount)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Initial owner balance recorded")
    return entry


def create_adjustment(db: Session, payload: AdjustmentCreate) -> OwnerBalanceAdjustment:
    """
    Record a manual balance adjustment.

    The sign of payload.amount picks the adjustment type ('add' for zero or
    more, 'subtract' below zero); the stored amount is always positive.
    """
    adjustment = OwnerBalanceAdjustment(
        amount=abs(payload.amount),
        reason=payload.description,
        adjustment_type="add" if payload.amount >= 0 else "subtract",
    )
    db.add(adjustment)
    db.commit()
    db.refresh(adjustment)
    logger.info("Balance adjustment recorded: %s %.2f", adjustment.adjustment_type, adjustment.amount)
    return adjustment


def get_adjustments(db: Session) -> List[OwnerBalanceAdjustment]:
    """Adjustment history, newest first."""
    return (
        db.query(OwnerBalanceAdjustment)
        .order_by(OwnerBalanceAdjustment.created_at.desc())
        .all()
    )
