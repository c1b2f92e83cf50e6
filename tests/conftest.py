"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from autovest.api.main import create_app
from autovest.api.dependencies import get_now
from autovest.domain.models import Transaction, UserFinancialProfile


# Fixed evaluation time so recency-based scores are reproducible
FIXED_NOW = datetime(2024, 4, 1)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a pinned clock"""
    app = create_app()
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def flat_spending() -> list[Transaction]:
    """Three months of perfectly flat $1000 spending, nothing recurring"""
    return [
        Transaction(
            transaction_id=f"rent_{month}",
            date=datetime(2024, month, 15),
            amount=1000.0,
            merchant="Landlord",
            category="Housing",
            description="Monthly rent",
        )
        for month in (1, 2, 3)
    ]


@pytest.fixture
def reference_profile(flat_spending: list[Transaction]) -> UserFinancialProfile:
    """Income 5000, savings 8000, expenses 3200 (2.5 months covered)"""
    return UserFinancialProfile(
        monthly_income=5000,
        liquid_savings=8000,
        monthly_expenses=3200,
        transactions=flat_spending,
        market_volatility=0.15,
    )


@pytest.fixture
def netflix_charges() -> list[Transaction]:
    """Two Netflix charges 30 days apart"""
    first = datetime(2024, 1, 14)
    return [
        Transaction(
            transaction_id=f"netflix_{i}",
            date=first + timedelta(days=30 * i),
            amount=649.0,
            merchant="Netflix",
            category="Entertainment",
            description="Netflix",
            is_recurring=True,
        )
        for i in range(2)
    ]
