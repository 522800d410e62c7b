"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request

from finstatus.infrastructure.clients.backend import BackendClient
from finstatus.infrastructure.clients.notifications import NotificationClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Clock used for status evaluation; override in tests for reproducible results"""
    return date.today()


def get_backend_client() -> BackendClient:
    """Provide finance backend client instance"""
    return BackendClient()


def get_notification_client() -> NotificationClient:
    """Provide notification webhook client instance"""
    return NotificationClient()
