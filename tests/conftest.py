"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest
from sqlalchemy.orm import sessionmaker

from tests import create_test_engine, teardown_test_database


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_session():
    """Session on a fresh test database; tables are dropped afterwards."""
    engine = create_test_engine()
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        teardown_test_database(engine)
