"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from finstatus.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_status_evaluation(
    request_id: str,
    user_id: Optional[str],
    obligation_type: str,
    target_period: Optional[str],
    paid: bool,
    duration_ms: float,
) -> None:
    """Log structured payment status outcome"""
    logging.info(
        "Payment status evaluated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "status_evaluated",
            "obligation_type": obligation_type,
            "target_period": target_period,
            "status_outcome": "paid" if paid else "unpaid",
            "duration_ms": duration_ms,
        },
    )


def log_reminders_dispatched(request_id: str, user_id: str, count: int) -> None:
    """Log how many due reminders were queued for delivery"""
    logging.info(
        "Due reminders queued",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "reminders_queued",
            "reminder_count": count,
        },
    )
