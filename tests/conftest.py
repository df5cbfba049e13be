"""Pytest fixtures for the seeder tests.

Uses a file-backed SQLite database and FastAPI TestClient. Overrides the
`get_engine` dependency so tests are isolated from any real database.
"""

import os
import uuid

import pytest
from fastapi.testclient import TestClient

import app.database as database
from app.database import Base, build_engine
from app.main import app
from app.schemas import SeedDataset


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test_dashboard.db")

# Same pool shape as production: a single shared connection
engine = build_engine(TEST_DATABASE_URL)


@pytest.fixture(autouse=True)
def setup_database():
    """Start each test without tables and drop everything afterwards.

    The seeder creates its own tables, so nothing is created up front.
    """
    Base.metadata.drop_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def test_engine():
    return engine


# Override get_engine dependency in the app
def _override_get_engine():
    return engine


app.dependency_overrides[database.get_engine] = _override_get_engine

# Disable the global rate limiter so repeated seed calls are not throttled.
app.state.limiter.enabled = False


@pytest.fixture()
def client():
    """FastAPI test client using the app with overridden dependencies."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def small_dataset():
    """One record per table; the invoice references the customer."""
    customer_id = str(uuid.uuid4())
    return SeedDataset(
        users=[{"id": str(uuid.uuid4()), "name": "Test User", "email": "test@example.com", "password": "s3cret-pass"}],
        customers=[{"id": customer_id, "name": "Test Customer", "email": "customer@example.com", "image_url": "/customers/test.png"}],
        invoices=[{"customer_id": customer_id, "amount": 12345, "status": "pending", "date": "2024-01-15"}],
        revenue=[{"month": "2024", "revenue": 5000}],
    )


@pytest.fixture()
def count_rows():
    from sqlalchemy import text

    def _count(table: str) -> int:
        with engine.connect() as conn:
            return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()

    return _count
