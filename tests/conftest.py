"""
Pytest configuration and shared fixtures.
"""
from datetime import datetime
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_db():
    """A psycopg2-like connection whose cursor works as a context manager."""
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    return conn, cursor


@pytest.fixture
def patch_db(monkeypatch, mock_db):
    """
    Point a repository module's get_connection/release_connection at mock_db.

    Usage:
        conn, cursor = patch_db("repositories.store_repo")
    """
    conn, cursor = mock_db

    def _patch(module: str):
        monkeypatch.setattr(f"{module}.get_connection", lambda: conn)
        monkeypatch.setattr(f"{module}.release_connection", MagicMock())
        return conn, cursor

    return _patch


@pytest.fixture
def visit_dict() -> Dict[str, Any]:
    """A visit as emitted by the receipt parser (camelCase keys)."""
    return {
        "id": "ica-2024-03-01-1832",
        "store": "ICA Nära Linnégatan",
        "datetime": "2024-03-01T18:32:00Z",
        "sourcePdf": "receipts/2024-03-01.pdf",
        "total": 87.4,
        "products": [
            {
                "name": "Mellanmjölk 1,5%",
                "unit": "st",
                "amount": 2,
                "unitPrice": 17.9,
                "totalPrice": 35.8,
            },
            {
                "name": "Bananer",
                "unit": "kg",
                "amount": 1.23,
                "unitPrice": 27.9,
                "totalPrice": 34.32,
            },
            {
                "name": "Pant 2kr",
                "unit": "st",
                "amount": 1,
                "unitPrice": 2.0,
                "totalPrice": 2.0,
            },
        ],
    }


@pytest.fixture
def visit_time() -> datetime:
    """The naive UTC timestamp of visit_dict."""
    return datetime(2024, 3, 1, 18, 32)
