"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from forecast_engine.api.main import create_app
from forecast_engine.domain.models import (
    Baseline,
    FixedExpense,
    Frequency,
    InstallmentLoan,
    Subscription,
)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def reference_date() -> date:
    return date(2026, 10, 17)


@pytest.fixture
def sample_loans() -> list[InstallmentLoan]:
    """Home loan running well past the horizon, car loan ending in November 2026"""
    return [
        InstallmentLoan(
            id="home",
            name="Home Loan EMI",
            monthly_amount=Decimal("25000"),
            total_months=240,
            start_date=date(2020, 4, 5),
        ),
        InstallmentLoan(
            id="car",
            name="Car Loan EMI",
            monthly_amount=Decimal("8000"),
            total_months=24,
            start_date=date(2024, 12, 10),
            paid_months=22,
        ),
    ]


@pytest.fixture
def sample_fixed_expenses() -> list[FixedExpense]:
    return [
        FixedExpense(id="rent", title="Home Rent", amount=Decimal("15000"), day_of_month=1),
        FixedExpense(id="net", title="Internet", amount=Decimal("2500"), day_of_month=31),
        FixedExpense(id="gym", title="Gym", amount=Decimal("1500"), day_of_month=10),
    ]


@pytest.fixture
def sample_subscriptions() -> list[Subscription]:
    return [
        Subscription(id="music", name="Music", amount=Decimal("199"), frequency=Frequency.MONTHLY, day_of_month=15),
        Subscription(id="cloud", name="Cloud Suite", amount=Decimal("1500"), frequency=Frequency.MONTHLY),
        Subscription(id="domain", name="Domain", amount=Decimal("900"), frequency=Frequency.YEARLY, day_of_month=3),
        Subscription(
            id="old",
            name="Cancelled Video",
            amount=Decimal("649"),
            frequency=Frequency.MONTHLY,
            day_of_month=20,
            is_active=False,
        ),
    ]


@pytest.fixture
def sample_baseline() -> Baseline:
    """Income 50000 against 35000 of expenses: +15000 per month"""
    return Baseline(
        monthly_income=Decimal("50000"),
        fixed_expenses=Decimal("15000"),
        average_variable=Decimal("12000"),
        emi_total=Decimal("8000"),
    )
