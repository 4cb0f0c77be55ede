"""
Stock intake approval tests.

Verifies:
- Approval credits stock exactly once and appends one audit entry
- Rejection leaves stock untouched
- Terminal entries never transition again
- Denied or invalid attempts change nothing (no stock, no status, no audit)
- The approval is all-or-nothing
"""

import pytest

from agrostock.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from agrostock.models import AuditLogEntry
from agrostock.services import intake_service, inventory_service


def _latest_audit(db_session):
    return db_session.query(AuditLogEntry).order_by(AuditLogEntry.sequence.desc()).first()


class TestApproval:

    def test_approve_pending_entry_credits_stock(self, db_session, manager, audit_count):
        before = audit_count()

        entry = intake_service.approve_stock_entry("st2", manager)

        assert entry.status == "APPROVED"
        assert entry.decided_by == "Manager Sarah"
        assert entry.decided_at is not None
        assert inventory_service.get_product("p2").current_stock == 95
        assert audit_count() == before + 1

        latest = _latest_audit(db_session)
        assert latest.action == "STOCK_APPROVAL"
        assert latest.severity == "INFO"
        assert "F-NPK-99" in latest.details
        assert "50" in latest.details
        assert latest.user_name == "Manager Sarah"

    def test_second_approval_is_rejected(self, db_session, manager, audit_count):
        intake_service.approve_stock_entry("st2", manager)
        after_first = audit_count()

        with pytest.raises(InvalidTransitionError):
            intake_service.approve_stock_entry("st2", manager)

        assert inventory_service.get_product("p2").current_stock == 95
        assert audit_count() == after_first

    def test_already_approved_seed_entry(self, db_session, admin):
        with pytest.raises(InvalidTransitionError):
            intake_service.approve_stock_entry("st1", admin)
        assert inventory_service.get_product("p1").current_stock == 1250

    def test_admin_may_approve(self, db_session, admin):
        entry = intake_service.approve_or_reject_stock_entry("st2", "APPROVED", admin)
        assert entry.status == "APPROVED"


class TestRejection:

    def test_reject_leaves_stock_untouched(self, db_session, manager, audit_count):
        before = audit_count()

        entry = intake_service.reject_stock_entry("st2", manager)

        assert entry.status == "REJECTED"
        assert inventory_service.get_product("p2").current_stock == 45
        assert audit_count() == before + 1
        latest = _latest_audit(db_session)
        assert latest.action == "STOCK_REJECTION"
        assert "F-NPK-99" in latest.details

    def test_rejected_entry_cannot_be_approved(self, db_session, manager):
        intake_service.reject_stock_entry("st2", manager)

        with pytest.raises(InvalidTransitionError):
            intake_service.approve_stock_entry("st2", manager)
        assert inventory_service.get_product("p2").current_stock == 45


class TestApprovalFailures:

    @pytest.mark.parametrize("actor_fixture", ["keeper", "auditor"])
    def test_roles_without_capability_are_denied(self, request, db_session, actor_fixture, audit_count):
        actor = request.getfixturevalue(actor_fixture)
        before = audit_count()

        with pytest.raises(PermissionDeniedError):
            intake_service.approve_stock_entry("st2", actor)

        assert intake_service.get_stock_entry("st2").status == "PENDING"
        assert inventory_service.get_product("p2").current_stock == 45
        assert audit_count() == before

    def test_unknown_entry(self, db_session, manager, audit_count):
        before = audit_count()
        with pytest.raises(NotFoundError):
            intake_service.approve_stock_entry("st-missing", manager)
        assert audit_count() == before

    def test_invalid_decision(self, db_session, manager):
        with pytest.raises(InvalidInputError):
            intake_service.approve_or_reject_stock_entry("st2", "PENDING", manager)
        assert intake_service.get_stock_entry("st2").status == "PENDING"

    def test_failure_mid_operation_rolls_back(self, db_session, manager, audit_count, monkeypatch):
        before = audit_count()

        def _boom(**kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr(intake_service, "append_audit_entry", _boom)

        with pytest.raises(RuntimeError):
            intake_service.approve_stock_entry("st2", manager)

        assert inventory_service.get_product("p2").current_stock == 45
        assert intake_service.get_stock_entry("st2").status == "PENDING"
        assert audit_count() == before


class TestRecordIntake:

    def test_keeper_records_pending_entry(self, db_session, keeper, audit_count):
        before = audit_count()

        entry = intake_service.record_stock_entry(
            product_id="p4",
            supplier_id="s1",
            warehouse_id="w1",
            quantity=200,
            batch_number="CS-2024-07",
            actor=keeper,
            weight=900,
            expiry_date="2025-03-01",
        )

        assert entry.status == "PENDING"
        assert entry.received_by == "StoreKeeper John"
        assert entry.expiry_date.isoformat() == "2025-03-01"
        assert inventory_service.get_product("p4").current_stock == 800
        assert intake_service.count_pending_entries() == 2
        assert audit_count() == before + 1
        assert _latest_audit(db_session).action == "STOCK_INTAKE"

    def test_new_entry_listed_first(self, db_session, keeper):
        entry = intake_service.record_stock_entry(
            product_id="p1", supplier_id="s1", warehouse_id="w1",
            quantity=10, batch_number="BT-002", actor=keeper,
        )
        assert [e.id for e in intake_service.list_stock_entries()] == [entry.id, "st2", "st1"]
        assert [e.id for e in intake_service.list_stock_entries(status="APPROVED")] == ["st1"]

    def test_recorded_entry_can_be_approved(self, db_session, keeper, manager):
        entry = intake_service.record_stock_entry(
            product_id="p3", supplier_id="s1", warehouse_id="w2",
            quantity=3, batch_number="CB-77", actor=keeper,
        )
        intake_service.approve_stock_entry(entry.id, manager)
        assert inventory_service.get_product("p3").current_stock == 15

    def test_auditor_denied(self, db_session, auditor):
        with pytest.raises(PermissionDeniedError):
            intake_service.record_stock_entry(
                product_id="p1", supplier_id="s1", warehouse_id="w1",
                quantity=10, batch_number="BT-X", actor=auditor,
            )

    @pytest.mark.parametrize("quantity", [0, -5, "ten"])
    def test_invalid_quantity(self, db_session, keeper, quantity):
        with pytest.raises(InvalidInputError):
            intake_service.record_stock_entry(
                product_id="p1", supplier_id="s1", warehouse_id="w1",
                quantity=quantity, batch_number="BT-X", actor=keeper,
            )

    def test_unknown_supplier_creates_nothing(self, db_session, keeper):
        with pytest.raises(NotFoundError):
            intake_service.record_stock_entry(
                product_id="p1", supplier_id="s-missing", warehouse_id="w1",
                quantity=10, batch_number="BT-X", actor=keeper,
            )
        assert len(intake_service.list_stock_entries()) == 2

    def test_invalid_status_filter(self, db_session):
        with pytest.raises(InvalidInputError):
            intake_service.list_stock_entries(status="DONE")

    @pytest.mark.parametrize("field,value", [("quantity", 10**20), ("weight", 10**20)])
    def test_oversized_values_rejected(self, db_session, keeper, audit_count, field, value):
        before = audit_count()
        kwargs = {"quantity": 10, "weight": None, field: value}

        with pytest.raises(InvalidInputError):
            intake_service.record_stock_entry(
                product_id="p1", supplier_id="s1", warehouse_id="w1",
                batch_number="BT-BIG", actor=keeper, **kwargs,
            )

        assert len(intake_service.list_stock_entries()) == 2
        assert audit_count() == before
