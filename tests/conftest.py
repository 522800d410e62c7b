"""Pytest fixtures for testing"""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from finstatus.api.dependencies import get_backend_client, get_notification_client, get_today
from finstatus.api.main import create_app
from finstatus.domain.models import (
    Obligation,
    ObligationType,
    PaymentRecord,
    PaymentStatusLogic,
    PaymentStatusSettings,
)

# Fixed clock for every API test
TODAY = date(2024, 3, 28)


@pytest.fixture
def period_settings() -> PaymentStatusSettings:
    """Global 15-day threshold, subscriptions reset monthly"""
    return PaymentStatusSettings(
        logic=PaymentStatusLogic.PERIOD,
        period="15",
        subscription_logic=PaymentStatusLogic.MONTHLY,
    )


@pytest.fixture
def sample_obligations() -> list[Obligation]:
    """One obligation of each type plus a cancelled subscription"""
    return [
        Obligation(
            id="mtg-1",
            obligation_type=ObligationType.MORTGAGE,
            name="Home Loan",
            billing_day=5,
            amount=Decimal("1450.00"),
            payments=[PaymentRecord(paid_at=datetime(2024, 3, 2, 9, 15), month_year="2024-03")],
        ),
        Obligation(
            id="crd-1",
            obligation_type=ObligationType.CREDIT,
            name="Car Loan",
            billing_day=31,
            amount=Decimal("320.50"),
            payments=[PaymentRecord(paid_at=datetime(2024, 3, 1, 12, 0), month_year="2024-02")],
        ),
        Obligation(
            id="sub-1",
            obligation_type=ObligationType.SUBSCRIPTION,
            name="Streaming",
            billing_day=29,
            amount=Decimal("15.99"),
            payments=[PaymentRecord(paid_at=datetime(2024, 3, 1, 8, 0))],
        ),
        Obligation(
            id="sub-2",
            obligation_type=ObligationType.SUBSCRIPTION,
            name="Gym",
            billing_day=1,
            amount=Decimal("40.00"),
            status="cancelled",
            end_date=date(2024, 1, 31),
        ),
    ]


@pytest.fixture
def backend(period_settings: PaymentStatusSettings, sample_obligations: list[Obligation]) -> MagicMock:
    """Finance backend client returning the sample data"""
    mock_backend = MagicMock()
    mock_backend.get_settings = AsyncMock(return_value=period_settings)
    mock_backend.update_settings = AsyncMock(return_value=period_settings)
    mock_backend.list_obligations = AsyncMock(return_value=sample_obligations)
    mock_backend.get_obligation = AsyncMock(return_value=sample_obligations[0])
    return mock_backend


@pytest.fixture
def notifier() -> MagicMock:
    mock_notifier = MagicMock()
    mock_notifier.send_reminders = AsyncMock(return_value=0)
    return mock_notifier


@pytest.fixture
def client(backend: MagicMock, notifier: MagicMock) -> TestClient:
    """Create FastAPI test client with a fixed clock and mocked upstream clients"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_backend_client] = lambda: backend
    app.dependency_overrides[get_notification_client] = lambda: notifier
    return TestClient(app)
