"""
Pytest fixtures for Agro Stock Manager backend tests.

Every test gets its own app with a fresh in-memory store loaded with the
demo data set, plus actors for the four seeded users.
"""

import pytest

from agrostock import create_app
from agrostock.extensions import db
from agrostock.models import AuditLogEntry
from agrostock.services import session_service


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SEED_DEMO_DATA': True,
        'GOOGLE_API_KEY': None,
    })

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def db_session(app):
    """Session bound to the test app's store."""
    yield db.session
    db.session.rollback()


@pytest.fixture(scope='function')
def runner(app):
    """Create CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def admin(db_session):
    """Admin Bosun (ADMIN)."""
    return session_service.resolve_actor("u1")


@pytest.fixture(scope='function')
def manager(db_session):
    """Manager Sarah (STORE_MANAGER)."""
    return session_service.resolve_actor("u2")


@pytest.fixture(scope='function')
def keeper(db_session):
    """StoreKeeper John (STORE_KEEPER)."""
    return session_service.resolve_actor("u3")


@pytest.fixture(scope='function')
def auditor(db_session):
    """Auditor Mike (AUDITOR)."""
    return session_service.resolve_actor("u4")


@pytest.fixture(scope='function')
def audit_count(db_session):
    """Callable returning the current number of audit entries."""
    def _count():
        return db_session.query(AuditLogEntry).count()
    return _count
