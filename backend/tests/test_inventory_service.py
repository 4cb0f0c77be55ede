"""
Product catalog tests.

Verifies:
- adjust_stock is the single write path and never drives stock negative
- adjust_stock joins the caller's transaction (flush, no commit)
- Low-stock derivation
- Product creation permissions and audit
"""

import pytest

from agrostock.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
)
from agrostock.models import AuditLogEntry
from agrostock.services import inventory_service
from agrostock.validation import MAX_STOCK_LEVEL


class TestAdjustStock:

    def test_positive_delta_increases_stock(self, db_session):
        assert inventory_service.adjust_stock("p2", 50) == 95
        assert inventory_service.get_product("p2").current_stock == 95

    def test_negative_delta_decreases_stock(self, db_session):
        assert inventory_service.adjust_stock("p1", -250) == 1000

    def test_can_reach_exactly_zero(self, db_session):
        assert inventory_service.adjust_stock("p3", -12) == 0

    def test_rejects_negative_result(self, db_session):
        with pytest.raises(InsufficientStockError) as exc_info:
            inventory_service.adjust_stock("p3", -13)

        assert exc_info.value.details["current_stock"] == 12
        assert inventory_service.get_product("p3").current_stock == 12

    def test_unknown_product(self, db_session):
        with pytest.raises(NotFoundError):
            inventory_service.adjust_stock("p-missing", 1)

    @pytest.mark.parametrize("delta", [1.5, "2.0", "1e3", True, None])
    def test_rejects_non_integer_delta(self, db_session, delta):
        with pytest.raises(InvalidInputError):
            inventory_service.adjust_stock("p1", delta)

    def test_does_not_commit(self, db_session):
        inventory_service.adjust_stock("p1", -100)
        db_session.rollback()

        assert inventory_service.get_product("p1").current_stock == 1250


class TestLowStock:

    def test_seeded_low_stock(self, db_session):
        assert inventory_service.is_low_stock("p2") is True
        assert inventory_service.is_low_stock("p1") is False
        assert [p.id for p in inventory_service.list_low_stock_products()] == ["p2"]

    def test_threshold_is_inclusive(self, db_session, manager):
        inventory_service.create_product(
            name="Yam Tubers", category="Tubers", unit="Bundles", actor=manager,
            low_stock_threshold=10, initial_stock=10, product_id="p5",
        )
        assert inventory_service.is_low_stock("p5") is True

    def test_unknown_product(self, db_session):
        with pytest.raises(NotFoundError):
            inventory_service.is_low_stock("nope")


class TestCreateProduct:

    def test_manager_creates_product_with_audit(self, db_session, manager):
        product = inventory_service.create_product(
            name="Sorghum", category="Cereals", unit="kg", actor=manager,
            low_stock_threshold=100, initial_stock=300,
        )

        assert product.id.startswith("p-")
        assert product.current_stock == 300
        latest = db_session.query(AuditLogEntry).order_by(AuditLogEntry.sequence.desc()).first()
        assert latest.action == "PRODUCT_CREATED"
        assert latest.user_name == "Manager Sarah"

    def test_keeper_denied(self, db_session, keeper, audit_count):
        before = audit_count()
        with pytest.raises(PermissionDeniedError):
            inventory_service.create_product(name="X", category="Y", unit="kg", actor=keeper)
        assert audit_count() == before

    def test_duplicate_id_rejected(self, db_session, admin):
        with pytest.raises(InvalidInputError):
            inventory_service.create_product(
                name="Maize", category="Cereals", unit="kg", actor=admin, product_id="p1",
            )

    def test_negative_opening_stock_rejected(self, db_session, admin):
        with pytest.raises(InvalidInputError):
            inventory_service.create_product(
                name="Maize", category="Cereals", unit="kg", actor=admin, initial_stock=-1,
            )


class TestStockBounds:

    def test_oversized_delta_rejected(self, db_session):
        with pytest.raises(InvalidInputError):
            inventory_service.adjust_stock("p1", 10**20)
        assert inventory_service.get_product("p1").current_stock == 1250

    def test_oversized_negative_delta_rejected(self, db_session):
        with pytest.raises(InvalidInputError):
            inventory_service.adjust_stock("p1", -(10**20))

    def test_stock_ceiling(self, db_session, admin):
        inventory_service.create_product(
            name="Rice Paddy", category="Cereals", unit="kg", actor=admin,
            initial_stock=MAX_STOCK_LEVEL, product_id="p6",
        )
        with pytest.raises(InvalidInputError):
            inventory_service.adjust_stock("p6", 1)
        assert inventory_service.get_product("p6").current_stock == MAX_STOCK_LEVEL

    def test_opening_stock_above_ceiling_rejected(self, db_session, admin):
        with pytest.raises(InvalidInputError):
            inventory_service.create_product(
                name="Rice Paddy", category="Cereals", unit="kg", actor=admin,
                initial_stock=MAX_STOCK_LEVEL + 1,
            )
