"""
CLI tests (flask <group> <command>).
"""

from agrostock.services import inventory_service
from agrostock.services.summary_service import OFFLINE_MESSAGE


class TestStockCommands:

    def test_oversized_quantity_fails_cleanly(self, runner, db_session):
        result = runner.invoke(args=[
            "stock", "intake", "--product", "p1", "--supplier", "s1", "--warehouse", "w1",
            "--quantity", str(10**20), "--batch", "BT-BIG", "--as", "u3",
        ])

        assert result.exit_code == 1
        assert "FAIL INVALID_INPUT" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_manager_approves(self, runner, db_session):
        result = runner.invoke(args=["stock", "approve", "st2", "--as", "u2"])

        assert result.exit_code == 0, result.output
        assert "PASS Approved st2" in result.output
        assert "95" in result.output
        assert inventory_service.get_product("p2").current_stock == 95

    def test_keeper_denied(self, runner, db_session):
        result = runner.invoke(args=["stock", "approve", "st2", "--as", "u3"])

        assert result.exit_code == 1
        assert "FAIL PERMISSION_DENIED" in result.output
        assert inventory_service.get_product("p2").current_stock == 45

    def test_list_pending(self, runner, db_session):
        result = runner.invoke(args=["stock", "list", "--status", "PENDING"])
        assert result.exit_code == 0
        assert "F-NPK-99" in result.output
        assert "BT-001" not in result.output

    def test_intake(self, runner, db_session):
        result = runner.invoke(args=[
            "stock", "intake", "--product", "p2", "--supplier", "s2", "--warehouse", "w2",
            "--quantity", "40", "--batch", "F-NPK-100", "--as", "u3",
        ])
        assert result.exit_code == 0, result.output
        assert "PENDING" in result.output


class TestSalesCommands:

    def test_record_sale(self, runner, db_session):
        result = runner.invoke(args=[
            "sales", "record", "--product", "p1", "--quantity", "50", "--price", "500",
            "--customer", "Abeokuta Farms Co.", "--as", "u3",
        ])

        assert result.exit_code == 0, result.output
        assert "₦25,000.00" in result.output
        assert inventory_service.get_product("p1").current_stock == 1200

    def test_oversell_fails(self, runner, db_session):
        result = runner.invoke(args=[
            "sales", "record", "--product", "p3", "--quantity", "13", "--price", "10",
            "--customer", "Walk-in",
        ])
        assert result.exit_code == 1
        assert "FAIL INSUFFICIENT_STOCK" in result.output

    def test_totals(self, runner, db_session):
        result = runner.invoke(args=["sales", "totals"])
        assert "Revenue: ₦25,000.00" in result.output


class TestViews:

    def test_audit_requires_view_audit(self, runner, db_session):
        assert runner.invoke(args=["audit", "list", "--as", "u4"]).exit_code == 0
        denied = runner.invoke(args=["audit", "list", "--as", "u2"])
        assert denied.exit_code == 1
        assert "FAIL PERMISSION_DENIED" in denied.output

    def test_unknown_actor(self, runner, db_session):
        result = runner.invoke(args=["catalog", "list", "--as", "u99"])
        assert result.exit_code == 1
        assert "FAIL NOT_FOUND" in result.output

    def test_low_stock(self, runner, db_session):
        result = runner.invoke(args=["catalog", "low-stock"])
        assert "NPK Fertilizer" in result.output
        assert "Maize Seeds" not in result.output

    def test_nav_for_auditor(self, runner, db_session):
        result = runner.invoke(args=["report", "nav", "--as", "u4"])
        assert "Auditing" in result.output
        assert "Suppliers" not in result.output

    def test_stats(self, runner, db_session):
        result = runner.invoke(args=["report", "stats"])
        assert "Pending approvals: 1" in result.output

    def test_summary_offline_without_key(self, runner, db_session):
        result = runner.invoke(args=["report", "summary"])
        assert result.exit_code == 0
        assert OFFLINE_MESSAGE in result.output


class TestAdminCommands:

    def test_create_supplier(self, runner, db_session):
        result = runner.invoke(args=["suppliers", "create", "--name", "Delta Seeds", "--as", "u2"])
        assert result.exit_code == 0, result.output
        assert "Delta Seeds" in runner.invoke(args=["suppliers", "list"]).output

    def test_keeper_cannot_create_user(self, runner, db_session):
        result = runner.invoke(args=[
            "users", "create", "--name", "New Hand", "--email", "hand@farm.ng",
            "--role", "STORE_KEEPER", "--as", "u3",
        ])
        assert result.exit_code == 1

    def test_seed_is_idempotent(self, runner, db_session):
        result = runner.invoke(args=["system", "seed"])
        assert "already present" in result.output
