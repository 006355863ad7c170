"""
Tests for the SQL backend gateway: the parameters sent to each procedure,
decoding of procedure results, and failure handling.
"""
import json

import pytest
from sqlalchemy.exc import OperationalError

from truck_pos.backend import BackendError, SqlBackendGateway, _decode
from truck_pos.schemas.pos import SaleRequest


class _Result:
    def __init__(self, value):
        self.value = value

    def scalar(self):
        return self.value


class StubSession:
    """Records executed statements and answers with a canned payload."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.statements = []
        self.commits = 0
        self.rollbacks = 0

    def execute(self, clause, params):
        self.statements.append((str(clause), params))
        if self.error is not None:
            raise self.error
        return _Result(self.payload)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def _sale_request(**overrides):
    fields = {"menu_item_id": "menu-build", "quantity": 2, "payment_method": "cash"}
    fields.update(overrides)
    return SaleRequest(**fields)


class TestDecode:
    def test_none_is_empty(self):
        assert _decode(None) == {}

    def test_text_and_bytes_are_parsed(self):
        assert _decode('{"success": true}') == {"success": True}
        assert _decode(b'{"success": false}') == {"success": False}

    def test_mapping_is_copied(self):
        payload = {"success": True}
        decoded = _decode(payload)
        assert decoded == payload
        assert decoded is not payload


class TestCompleteSale:
    def test_selections_are_sent_as_json_objects(self):
        db = StubSession(payload={"success": True, "sale_id": "s-1", "revenue": 14.0})
        result = SqlBackendGateway(db).complete_sale(_sale_request(selected_option_ids=["opt-a", "opt-b"]))

        sql, params = db.statements[0]
        assert "complete_pos_sale_simple(" in sql
        assert json.loads(params["p_selections"]) == [{"option_id": "opt-a"}, {"option_id": "opt-b"}]
        assert params["p_quantity"] == 2
        assert result.sale_id == "s-1"
        assert db.commits == 1

    def test_missing_discount_and_options_are_sent_as_defaults(self):
        db = StubSession(payload={"success": True, "sale_id": "s-1"})
        SqlBackendGateway(db).complete_sale(_sale_request())

        _, params = db.statements[0]
        assert params["p_discount_percent"] == 0
        assert params["p_selections"] == "[]"

    def test_discount_is_forwarded(self):
        db = StubSession(payload={"success": True, "sale_id": "s-1"})
        SqlBackendGateway(db).complete_sale(_sale_request(discount_percent=15))
        assert db.statements[0][1]["p_discount_percent"] == 15

    def test_text_result_is_parsed(self):
        db = StubSession(payload='{"success": false, "error": "Insufficient stock"}')
        result = SqlBackendGateway(db).complete_sale(_sale_request())
        assert result.success is False
        assert result.error == "Insufficient stock"


class TestOtherProcedures:
    def test_void_sale_reads_bytes_result(self):
        db = StubSession(payload=b'{"success": true}')
        assert SqlBackendGateway(db).void_sale("s-9") is True
        assert db.statements[0][1] == {"p_sale_id": "s-9"}

    def test_void_sale_without_answer_is_not_voided(self):
        assert SqlBackendGateway(StubSession(payload=None)).void_sale("s-9") is False

    def test_procedure_names_come_from_config(self, monkeypatch):
        monkeypatch.setattr("truck_pos.config.PROC_VOID_SALE", "void_truck_sale")
        db = StubSession(payload={"success": True})
        SqlBackendGateway(db).void_sale("s-9")
        assert "void_truck_sale(p_sale_id => :p_sale_id)" in db.statements[0][0]

    def test_fifo_deduction_parameters(self):
        db = StubSession(payload={"success": True, "total_cost": 4.0, "deductions": []})
        result = SqlBackendGateway(db).deduct_inventory_fifo("inv-patty", 2.0)
        assert db.statements[0][1] == {"p_item_id": "inv-patty", "p_quantity": 2.0}
        assert result.total_cost == 4.0

    def test_current_balance_from_mapping(self):
        db = StubSession(payload={
            "success": True,
            "has_initial_balance": True,
            "balance": 150.0,
            "breakdown": {"initial": 100.0, "adjustments": 20.0, "sales": 30.0},
        })
        result = SqlBackendGateway(db).get_current_balance()
        assert result.balance == 150.0
        assert result.breakdown.sales == 30.0


class TestFailures:
    def test_sql_error_rolls_back_and_raises_backend_error(self):
        db = StubSession(error=OperationalError("SELECT void_pos_sale()", {}, Exception("server closed")))

        with pytest.raises(BackendError) as exc_info:
            SqlBackendGateway(db).void_sale("s-1")

        assert exc_info.value.procedure == "void_pos_sale"
        assert "server closed" in exc_info.value.detail
        assert db.rollbacks == 1
        assert db.commits == 0
