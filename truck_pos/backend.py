"""
Backend command gateway.

The sale ledger, FIFO stock deduction and owner balance are computed by
stored procedures in the backend database. This module is the only place
that calls them. Services receive a BackendGateway so tests can hand in an
in-memory fake instead of a Postgres connection.

Procedure results are JSON objects. A procedure that runs but reports
`success: false` is a business failure and is returned as-is; a procedure
call that fails at the SQL/transport level raises BackendError.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import config
from .schemas.balance import CurrentBalanceResponse
from .schemas.inventory import FIFOResult
from .schemas.pos import SaleRequest, SaleResult

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised when a backend procedure cannot be executed."""

    def __init__(self, procedure: str, detail: str):
        self.procedure = procedure
        self.detail = detail
        super().__init__(f"{procedure} failed: {detail}")


class BackendGateway(ABC):
    """Commands exposed by the backend database."""

    @abstractmethod
    def complete_sale(self, request: SaleRequest) -> SaleResult:
        """Record one sale atomically (stock deduction, ledger, balance)."""

    @abstractmethod
    def void_sale(self, sale_id: str) -> bool:
        """Reverse a completed sale and restore its stock. True on success."""

    @abstractmethod
    def deduct_inventory_fifo(self, inventory_item_id: str, quantity: float) -> FIFOResult:
        """Consume stock of one inventory item, oldest lots first."""

    @abstractmethod
    def get_current_balance(self) -> CurrentBalanceResponse:
        """Owner balance = initial + adjustments + sales revenue."""


def _decode(payload: Any) -> Dict[str, Any]:
    # psycopg decodes json columns to dicts, other drivers hand back text
    if payload is None:
        return {}
    if isinstance(payload, (str, bytes)):
        return json.loads(payload)
    return dict(payload)


class SqlBackendGateway(BackendGateway):
    """Calls the backend procedures over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _call(self, procedure: str, sql: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = self.db.execute(text(sql), params).scalar()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Backend procedure %s failed: %s", procedure, e)
            raise BackendError(procedure, str(e)) from e
        return _decode(payload)

    def complete_sale(self, request: SaleRequest) -> SaleResult:
        selections = [{"option_id": option_id} for option_id in (request.selected_option_ids or [])]
        data = self._call(
            config.PROC_COMPLETE_SALE,
            f"SELECT {config.PROC_COMPLETE_SALE}("
            "p_menu_item_id => :p_menu_item_id, "
            "p_quantity => :p_quantity, "
            "p_selections => CAST(:p_selections AS jsonb), "
            "p_payment_method => :p_payment_method, "
            "p_discount_percent => :p_discount_percent)",
            {
                "p_menu_item_id": request.menu_item_id,
                "p_quantity": request.quantity,
                "p_selections": json.dumps(selections),
                "p_payment_method": request.payment_method,
                "p_discount_percent": request.discount_percent or 0,
            },
        )
        return SaleResult.model_validate(data)

    def void_sale(self, sale_id: str) -> bool:
        data = self._call(
            config.PROC_VOID_SALE,
            f"SELECT {config.PROC_VOID_SALE}(p_sale_id => :p_sale_id)",
            {"p_sale_id": sale_id},
        )
        return bool(data.get("success"))

    def deduct_inventory_fifo(self, inventory_item_id: str, quantity: float) -> FIFOResult:
        data = self._call(
            config.PROC_DEDUCT_FIFO,
            f"SELECT {config.PROC_DEDUCT_FIFO}(p_item_id => :p_item_id, p_quantity => :p_quantity)",
            {"p_item_id": inventory_item_id, "p_quantity": quantity},
        )
        return FIFOResult.model_validate(data)

    def get_current_balance(self) -> CurrentBalanceResponse:
        data = self._call(
            config.PROC_CURRENT_BALANCE,
            f"SELECT {config.PROC_CURRENT_BALANCE}()",
            {},
        )
        return CurrentBalanceResponse.model_validate(data)
