"""
Supplier, warehouse and user management tests.
"""

import pytest

from agrostock.exceptions import InvalidInputError, NotFoundError, PermissionDeniedError
from agrostock.models import AuditLogEntry
from agrostock.services import session_service, supplier_service, user_service


def _latest_audit(db_session):
    return db_session.query(AuditLogEntry).order_by(AuditLogEntry.sequence.desc()).first()


class TestSuppliers:

    def test_seeded_reference_data(self, db_session):
        assert [s.name for s in supplier_service.list_suppliers()] == ["Global Chemicals Ltd", "GreenEarth Agro"]
        assert [w.id for w in supplier_service.list_warehouses()] == ["w1", "w2"]
        assert supplier_service.count_active_suppliers() == 2

    def test_manager_creates_supplier(self, db_session, manager):
        supplier = supplier_service.create_supplier(
            name="Delta Seeds", actor=manager, contact="+234 700 000 0000", category="Seeds",
        )

        assert supplier.id.startswith("s-")
        assert supplier_service.count_active_suppliers() == 3
        latest = _latest_audit(db_session)
        assert latest.action == "SUPPLIER_CREATED"
        assert "Delta Seeds" in latest.details

    def test_duplicate_name_rejected(self, db_session, admin):
        with pytest.raises(InvalidInputError):
            supplier_service.create_supplier(name="greenearth agro", actor=admin)

    def test_keeper_denied(self, db_session, keeper):
        with pytest.raises(PermissionDeniedError):
            supplier_service.create_supplier(name="Delta Seeds", actor=keeper)

    def test_unknown_lookups(self, db_session):
        with pytest.raises(NotFoundError):
            supplier_service.get_supplier("s9")
        with pytest.raises(NotFoundError):
            supplier_service.get_warehouse("w9")


class TestUsers:

    def test_admin_creates_user(self, db_session, admin):
        user = user_service.create_user(
            name="Keeper Ada", email="Ada@Olatunbosun-Agro.ng", role="STORE_KEEPER", actor=admin,
        )

        assert user.email == "ada@olatunbosun-agro.ng"
        assert session_service.resolve_actor(user.id).role == "STORE_KEEPER"
        assert len(user_service.list_users()) == 5
        latest = _latest_audit(db_session)
        assert latest.action == "USER_CREATED"
        assert latest.severity == "WARNING"

    @pytest.mark.parametrize("actor_fixture", ["manager", "keeper", "auditor"])
    def test_only_admin_manages_users(self, request, db_session, actor_fixture):
        actor = request.getfixturevalue(actor_fixture)
        with pytest.raises(PermissionDeniedError):
            user_service.create_user(name="X", email="x@farm.ng", role="AUDITOR", actor=actor)

    @pytest.mark.parametrize(
        "email,role",
        [
            ("not-an-email", "AUDITOR"),
            ("bosun@olatunbosun-agro.ng", "AUDITOR"),
            ("new@farm.ng", "OWNER"),
        ],
    )
    def test_invalid_input(self, db_session, admin, email, role):
        with pytest.raises(InvalidInputError):
            user_service.create_user(name="X", email=email, role=role, actor=admin)
