"""Pytest configuration and fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from components.core import init_db
from components.core.database import DatabaseManager
from components.ledger.schemas import LedgerOperation
from restapi.router import create_app


@pytest.fixture
def client(monkeypatch) -> TestClient:
    """API client backed by a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(init_db, "db_manager", DatabaseManager(engine))
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_operation():
    """Factory for engine input operations."""
    def _make(day: date, type: str, amount: float, **kwargs) -> LedgerOperation:
        return LedgerOperation(date=day, type=type, amount=amount, **kwargs)
    return _make


@pytest.fixture
def investment_payload() -> dict:
    return {"name": "Family loan", "lender": "Anna", "borrower": "Piotr", "base_rate": 12}
