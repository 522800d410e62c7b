"""Prometheus metrics for payment status outcomes, reminders and upstream health"""

from prometheus_client import Counter, Histogram

from finstatus.domain.models import ObligationStatus

# Status metrics
status_evaluation_counter = Counter(
    "finstatus_status_evaluations_total",
    "Payment status evaluations",
    ["obligation_type", "outcome"],  # paid | unpaid | indeterminate
)

reminder_counter = Counter(
    "finstatus_reminders_total",
    "Due reminders generated",
    ["priority"],  # urgent | high | medium
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Notification webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Backend API metrics
backend_fetch_failures_counter = Counter(
    "backend_fetch_failures_total",
    "Failed finance backend calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_status(status: ObligationStatus) -> None:
    """Record a status evaluation outcome"""
    if status.target_period is None:
        outcome = "indeterminate"
    elif status.paid:
        outcome = "paid"
    else:
        outcome = "unpaid"

    status_evaluation_counter.labels(obligation_type=status.obligation_type.value, outcome=outcome).inc()


def record_reminder(priority: str) -> None:
    reminder_counter.labels(priority=priority).inc()
