"""Finance backend HTTP client for user settings and obligations with payment history"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import httpx

from finstatus.config import settings
from finstatus.domain.exceptions import BackendAPIError, ObligationNotFoundError
from finstatus.domain.models import (
    Obligation,
    ObligationType,
    PaymentRecord,
    PaymentStatusLogic,
    PaymentStatusSettings,
)

logger = logging.getLogger(__name__)

# PaymentStatusSettings field -> backend wire name
SETTINGS_FIELDS = {
    "logic": "paymentStatusLogic",
    "period": "paymentStatusPeriod",
    "credit_logic": "creditStatusLogic",
    "credit_period": "creditStatusPeriod",
    "mortgage_logic": "mortgageStatusLogic",
    "mortgage_period": "mortgageStatusPeriod",
    "subscription_logic": "subscriptionStatusLogic",
    "subscription_period": "subscriptionStatusPeriod",
}


def _parse_logic(value: Any) -> Optional[PaymentStatusLogic]:
    if value is None or value == "global":
        return None
    try:
        return PaymentStatusLogic(value)
    except ValueError:
        logger.warning("Ignoring unknown payment status logic %r", value)
        return None


def _parse_period(value: Any) -> Optional[int | str]:
    if value is None or value == "global":
        return None
    return value


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _parse_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"invalid amount {value!r}") from e


def parse_settings(data: Dict[str, Any]) -> PaymentStatusSettings:
    """Build settings from the backend's user settings payload"""
    values = {}
    for name, wire_name in SETTINGS_FIELDS.items():
        raw = data.get(wire_name)
        values[name] = _parse_logic(raw) if name.endswith("logic") else _parse_period(raw)
    return PaymentStatusSettings(**values)


def settings_to_wire(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a settings update into backend field names; "global" clears an override"""
    payload = {}
    for name, value in changes.items():
        if isinstance(value, PaymentStatusLogic):
            value = value.value
        if value == "global":
            value = None
        if name.endswith("period") and value is not None:
            value = str(value)
        payload[SETTINGS_FIELDS[name]] = value
    return payload


def parse_payment(data: Dict[str, Any]) -> PaymentRecord:
    return PaymentRecord(
        paid_at=_parse_timestamp(data.get("paidAt")),
        month_year=data.get("monthYear"),
        amount=_parse_decimal(data["amount"]) if data.get("amount") is not None else None,
        note=data.get("note"),
    )


def parse_obligation(data: Dict[str, Any]) -> Obligation:
    """Build an obligation from the backend payload (mortgages send paymentDay)"""
    billing_day = data.get("billingDay", data.get("paymentDay"))
    end_date = data.get("endDate")

    return Obligation(
        id=str(data["id"]),
        obligation_type=ObligationType(data["obligationType"]),
        name=data["name"],
        billing_day=int(billing_day) if billing_day is not None else None,
        amount=_parse_decimal(data.get("amount")),
        currency=data.get("currency", "USD"),
        status=data.get("status", "active"),
        end_date=date.fromisoformat(end_date[:10]) if end_date else None,
        payments=[parse_payment(p) for p in data.get("payments", [])],
    )


class BackendClient:
    """Client for the finance backend that owns settings and payment history"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.backend_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request to the backend.

        Raises:
            BackendAPIError: On timeout, network failure, or 5xx/4xx other than 404
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(method, f"{self.base_url}{path}", **kwargs)
                if response.status_code != 404:
                    response.raise_for_status()
                return response

            except httpx.TimeoutException as e:
                raise BackendAPIError(f"Backend timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BackendAPIError(f"Backend error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BackendAPIError(f"Backend unreachable: {e}") from e

    async def get_settings(self, user_id: str) -> PaymentStatusSettings:
        """Fetch payment status settings; users without stored settings get defaults"""
        response = await self._request("GET", f"/users/{user_id}/settings")
        if response.status_code == 404:
            return PaymentStatusSettings()

        try:
            return parse_settings(response.json())
        except (ValueError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid settings data from backend: {e}") from e

    async def update_settings(self, user_id: str, changes: Dict[str, Any]) -> PaymentStatusSettings:
        """Persist a partial settings update and return the stored settings"""
        response = await self._request("PATCH", f"/users/{user_id}/settings", json=settings_to_wire(changes))
        if response.status_code == 404:
            raise BackendAPIError(f"Backend has no settings record for user {user_id}")

        try:
            return parse_settings(response.json())
        except (ValueError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid settings data from backend: {e}") from e

    async def list_obligations(self, user_id: str) -> List[Obligation]:
        """Fetch all credits, mortgages and subscriptions of a user with their payments"""
        response = await self._request("GET", f"/users/{user_id}/obligations")
        if response.status_code == 404:
            return []

        try:
            return [parse_obligation(o) for o in response.json().get("obligations", [])]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid obligation data from backend: {e}") from e

    async def get_obligation(self, user_id: str, obligation_type: ObligationType, obligation_id: str) -> Obligation:
        """
        Fetch a single obligation.

        Raises:
            ObligationNotFoundError: Backend has no such obligation for the user
            BackendAPIError: Backend failure or malformed payload
        """
        response = await self._request("GET", f"/users/{user_id}/obligations/{obligation_type.value}/{obligation_id}")
        if response.status_code == 404:
            raise ObligationNotFoundError(f"{obligation_type.value} {obligation_id} not found")

        try:
            return parse_obligation(response.json())
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid obligation data from backend: {e}") from e
