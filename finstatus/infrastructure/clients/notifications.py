"""Notification webhook client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict, List

import httpx

from finstatus.config import settings
from finstatus.domain.exceptions import NotificationDeliveryError
from finstatus.domain.models import DueReminder
from finstatus.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram

logger = logging.getLogger(__name__)


def reminder_payload(user_id: str, reminder: DueReminder) -> Dict[str, Any]:
    """Webhook event body for a single due reminder"""
    obligation = reminder.obligation
    return {
        "event": "PAYMENT_DUE",
        "user_id": user_id,
        "title": reminder.title,
        "message": reminder.message,
        "priority": reminder.priority,
        "tag": reminder.tag,
        "entity_type": obligation.obligation_type.value,
        "entity_id": obligation.id,
        "metadata": {
            "amount": str(obligation.amount),
            "currency": obligation.currency,
            "billing_day": obligation.billing_day,
            "due_date": reminder.due_date.isoformat(),
            "days_until_due": reminder.days_until_due,
        },
    }


class NotificationClient:
    """Client for delivering due reminders to the notification service"""

    def __init__(self, webhook_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.webhook_url = webhook_url or settings.notification_webhook_url
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.transport = transport

    async def send_event(self, payload: Dict[str, Any]) -> None:
        """
        Send one event to the notification webhook with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^attempt)
        - Retries on HTTP errors and network failures

        Raises:
            NotificationDeliveryError: After max_retries failed attempts
        """
        attempt = 0
        async with httpx.AsyncClient(transport=self.transport) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(
                            self.webhook_url,
                            json=payload,
                            timeout=settings.http_timeout_seconds,
                        )
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise NotificationDeliveryError(
                            f"Webhook delivery failed after {attempt} attempts: {e}"
                        ) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

    async def send_reminders(self, user_id: str, reminders: List[DueReminder]) -> int:
        """Deliver reminders one by one; a failed reminder doesn't stop the rest"""
        delivered = 0
        for reminder in reminders:
            try:
                await self.send_event(reminder_payload(user_id, reminder))
                delivered += 1
            except NotificationDeliveryError as e:
                logger.error("Reminder delivery failed", extra={"user_id": user_id, "tag": reminder.tag, "error": str(e)})
        return delivered
