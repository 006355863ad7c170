"""
Admin Balance Routes for Truck POS
==================================

The owner's cash position: initial balance, manual adjustments, and the
current balance computed by the backend.

Endpoints:
----------
- GET /admin/balance: Current balance with breakdown
- POST /admin/balance/initial: Record the starting balance
- GET /admin/balance/adjustments: Adjustment history, newest first
- POST /admin/balance/adjustments: Add (positive) or remove (negative) money
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..backend import BackendError, BackendGateway
from ..db import get_db
from ..dependencies import get_backend_gateway
from ..schemas.balance import AdjustmentCreate, AdjustmentOut, CurrentBalanceResponse, InitialBalanceCreate
from ..services import balance as balance_service


logger = logging.getLogger(__name__)

# Router definition
admin_balance_router = APIRouter(prefix="/admin/balance", tags=["Admin - Balance"])


@admin_balance_router.get("", response_model=CurrentBalanceResponse)
def current_balance(gateway: BackendGateway = Depends(get_backend_gateway)) -> CurrentBalanceResponse:
    try:
        return balance_service.get_current_balance(gateway)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.detail)


@admin_balance_router.post("/initial", status_code=201)
def set_initial_balance(payload: InitialBalanceCreate, db: Session = Depends(get_db)):
    entry = balance_service.set_initial_balance(db, payload.amount)
    return {"id": entry.id, "amount": entry.amount}


@admin_balance_router.get("/adjustments", response_model=List[AdjustmentOut])
def list_adjustments(db: Session = Depends(get_db)) -> List[AdjustmentOut]:
    return [AdjustmentOut.model_validate(a) for a in balance_service.get_adjustments(db)]


@admin_balance_router.post("/adjustments", response_model=AdjustmentOut, status_code=201)
def create_adjustment(payload: AdjustmentCreate, db: Session = Depends(get_db)) -> AdjustmentOut:
    return AdjustmentOut.model_validate(balance_service.create_adjustment(db, payload))
