"""
Test configuration and fixtures
"""
import pytest
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from db.database import get_session_context
from tests.utils.seed import seed_entries


TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def app():
    """Create application bound to a fresh in-memory database"""
    app = create_app(database_url=TEST_DATABASE_URL)
    app.config.update({
        "TESTING": True,
        "WTF_CSRF_ENABLED": False,
    })

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Session on the test database, closed after the test"""
    with get_session_context() as session:
        yield session


@pytest.fixture
def seeded_entries(db_session):
    """25 entries, enough for three pages of ten"""
    return seed_entries(db_session, 25)


@pytest.fixture
def tagged_entries(db_session):
    """12 entries that each carry every sample tag"""
    return seed_entries(db_session, 12, tags=["python", "flask", "sqlalchemy"])


@pytest.fixture
def many_entries(db_session):
    """200 entries: 20 pages of ten, for window tests"""
    return seed_entries(db_session, 200)
