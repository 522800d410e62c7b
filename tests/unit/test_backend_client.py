"""Unit tests for the finance backend client"""

import asyncio
import json
from datetime import date, datetime
from decimal import Decimal

import httpx
import pytest

from finstatus.domain.exceptions import BackendAPIError, ObligationNotFoundError
from finstatus.domain.models import ObligationType, PaymentStatusLogic
from finstatus.infrastructure.clients.backend import BackendClient, settings_to_wire


def make_client(handler) -> BackendClient:
    return BackendClient(base_url="http://backend", timeout=1.0, transport=httpx.MockTransport(handler))


def test_get_settings_parses_wire_format():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/users/u1/settings"
        return httpx.Response(
            200,
            json={
                "defaultCurrency": "EUR",
                "paymentStatusLogic": "period",
                "paymentStatusPeriod": "15",
                "creditStatusLogic": "global",
                "creditStatusPeriod": None,
                "mortgageStatusLogic": "monthly",
                "subscriptionStatusLogic": "yearly",
                "subscriptionStatusPeriod": "7",
            },
        )

    settings = asyncio.run(make_client(handler).get_settings("u1"))

    assert settings.logic == PaymentStatusLogic.PERIOD
    assert settings.period == "15"
    assert settings.credit_logic is None
    assert settings.mortgage_logic == PaymentStatusLogic.MONTHLY
    assert settings.mortgage_period is None
    assert settings.subscription_logic is None  # unknown value ignored
    assert settings.subscription_period == "7"


def test_get_settings_missing_user_gets_defaults():
    settings = asyncio.run(make_client(lambda request: httpx.Response(404)).get_settings("new-user"))
    assert settings.logic is None
    assert settings.period is None


def test_server_error_raises_backend_error():
    with pytest.raises(BackendAPIError, match="500"):
        asyncio.run(make_client(lambda request: httpx.Response(500)).list_obligations("u1"))


def test_timeout_raises_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(BackendAPIError, match="timeout"):
        asyncio.run(make_client(handler).get_settings("u1"))


def test_get_obligation_parses_payments():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/users/u1/obligations/mortgage/mtg-1"
        return httpx.Response(
            200,
            json={
                "id": "mtg-1",
                "obligationType": "mortgage",
                "name": "Home Loan",
                "paymentDay": 5,
                "amount": "1450.00",
                "currency": "EUR",
                "status": "active",
                "endDate": "2040-01-01",
                "payments": [
                    {"monthYear": "2024-03", "paidAt": "2024-04-02T10:00:00Z", "amount": "1450.00", "note": "late"},
                ],
            },
        )

    obligation = asyncio.run(make_client(handler).get_obligation("u1", ObligationType.MORTGAGE, "mtg-1"))

    assert obligation.obligation_type == ObligationType.MORTGAGE
    assert obligation.billing_day == 5
    assert obligation.amount == Decimal("1450.00")
    assert obligation.end_date == date(2040, 1, 1)
    payment = obligation.payments[0]
    assert payment.month_year == "2024-03"
    assert isinstance(payment.paid_at, datetime)
    assert payment.paid_at.month == 4
    assert payment.note == "late"


def test_get_obligation_not_found():
    with pytest.raises(ObligationNotFoundError):
        asyncio.run(
            make_client(lambda request: httpx.Response(404)).get_obligation("u1", ObligationType.CREDIT, "nope")
        )


def test_list_obligations_rejects_malformed_payload():
    payload = {"obligations": [{"obligationType": "credit", "name": "No id"}]}
    with pytest.raises(BackendAPIError, match="Invalid obligation data"):
        asyncio.run(make_client(lambda request: httpx.Response(200, json=payload)).list_obligations("u1"))


def test_update_settings_sends_wire_names():
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent["method"] = request.method
        sent["body"] = json.loads(request.content)
        return httpx.Response(200, json={"paymentStatusLogic": "monthly", "creditStatusPeriod": "21"})

    changes = {"credit_logic": "period", "credit_period": 21, "mortgage_logic": "global"}
    settings = asyncio.run(make_client(handler).update_settings("u1", changes))

    assert sent["method"] == "PATCH"
    assert sent["body"] == {"creditStatusLogic": "period", "creditStatusPeriod": "21", "mortgageStatusLogic": None}
    assert settings.credit_period == "21"


def test_settings_to_wire_accepts_enum_values():
    assert settings_to_wire({"logic": PaymentStatusLogic.PERIOD, "period": None}) == {
        "paymentStatusLogic": "period",
        "paymentStatusPeriod": None,
    }
