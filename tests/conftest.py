"""
Shared pytest fixtures for FinEase API tests.
"""

import pytest
import os
import sys
from unittest.mock import MagicMock

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


class TestConfig:
    """Test configuration that bypasses MySQL."""
    TESTING = True
    CLIENT_URL = 'http://localhost:5173'
    LOG_LEVEL = 'WARNING'
    DEFAULT_PAGE_SIZE = 8

    @staticmethod
    def init_db(app):
        """Mock store - no real MySQL needed."""
        app.store = MagicMock()


def make_mock_connection():
    """Create a mock MySQL connection with cursor context manager."""
    conn = MagicMock()
    cursor = MagicMock()
    cursor.__enter__ = MagicMock(return_value=cursor)
    cursor.__exit__ = MagicMock(return_value=False)
    conn.cursor.return_value = cursor
    return conn, cursor


def make_row(**overrides):
    """A ``transactions`` row as returned by a dictionary cursor."""
    from datetime import date, datetime
    from decimal import Decimal

    row = {
        'id': 1,
        'type': 'expense',
        'category': 'Food',
        'amount': Decimal('50.50'),
        'description': 'Lunch',
        'date': date(2024, 3, 15),
        'owner_email': 'alice@example.com',
        'owner_name': 'Alice',
        'created_at': datetime(2024, 3, 15, 12, 30, 0),
        'updated_at': datetime(2024, 3, 15, 12, 30, 0),
    }
    row.update(overrides)
    return row


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def mock_db(app):
    """Provide mock database connection and cursor."""
    conn, cursor = make_mock_connection()
    app.store.get_connection.return_value = conn
    return conn, cursor
