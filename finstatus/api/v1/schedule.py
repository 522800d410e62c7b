"""Due-date schedule endpoints - upcoming payments, calendar view, reminders"""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request

from finstatus.api.dependencies import get_backend_client, get_notification_client, get_request_id, get_today
from finstatus.api.v1.schemas import (
    CalendarItem,
    CalendarResponse,
    DispatchResponse,
    ObligationSummary,
    ReminderItem,
    RemindersResponse,
    UpcomingItem,
    UpcomingResponse,
)
from finstatus.config import settings
from finstatus.domain.exceptions import BackendAPIError
from finstatus.domain.models import Obligation
from finstatus.domain.schedule import build_calendar, find_due_reminders, list_upcoming
from finstatus.infrastructure.clients.backend import BackendClient
from finstatus.infrastructure.clients.notifications import NotificationClient
from finstatus.infrastructure.observability.logging import log_reminders_dispatched
from finstatus.infrastructure.observability.metrics import backend_fetch_failures_counter, record_reminder

router = APIRouter()


async def _fetch_obligations(backend: BackendClient, user_id: str, request_id: str) -> List[Obligation]:
    try:
        return await backend.list_obligations(user_id)
    except BackendAPIError as e:
        backend_fetch_failures_counter.inc()
        logging.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")


@router.get("/schedule/upcoming", response_model=UpcomingResponse)
async def get_upcoming(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    days: int = Query(settings.default_upcoming_days, ge=1, le=90, description="Look-ahead window in days"),
    today: date = Depends(get_today),
    backend: BackendClient = Depends(get_backend_client),
):
    """Active obligations due within the next ``days`` days, soonest first"""
    obligations = await _fetch_obligations(backend, user_id, get_request_id(request))

    items = [
        UpcomingItem(
            obligation=ObligationSummary.from_domain(u.obligation),
            due_date=u.due_date,
            days_until_due=u.days_until_due,
            is_paid=u.is_paid,
        )
        for u in list_upcoming(obligations, today, days=days)
    ]
    return UpcomingResponse(user_id=user_id, items=items)


@router.get("/schedule/calendar", response_model=CalendarResponse)
async def get_calendar(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    backend: BackendClient = Depends(get_backend_client),
):
    """Obligations of one month grouped by the day they fall due"""
    obligations = await _fetch_obligations(backend, user_id, get_request_id(request))
    calendar_month = build_calendar(obligations, year, month)

    days = {
        day: [CalendarItem(obligation=ObligationSummary.from_domain(e.obligation), is_paid=e.is_paid) for e in entries]
        for day, entries in sorted(calendar_month.days.items())
    }
    return CalendarResponse(
        year=calendar_month.year,
        month=calendar_month.month,
        days_in_month=calendar_month.days_in_month,
        days=days,
    )


@router.get("/schedule/reminders", response_model=RemindersResponse)
async def get_reminders(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    days_ahead: int = Query(settings.default_reminder_days_ahead, ge=1, le=7),
    today: date = Depends(get_today),
    backend: BackendClient = Depends(get_backend_client),
):
    """Unpaid obligations coming due within ``days_ahead`` days"""
    obligations = await _fetch_obligations(backend, user_id, get_request_id(request))

    reminders = [
        ReminderItem(
            obligation=ObligationSummary.from_domain(r.obligation),
            due_date=r.due_date,
            days_until_due=r.days_until_due,
            title=r.title,
            message=r.message,
            priority=r.priority,
            tag=r.tag,
        )
        for r in find_due_reminders(obligations, today, days_ahead=days_ahead)
    ]
    return RemindersResponse(user_id=user_id, reminders=reminders)


@router.post("/schedule/reminders/dispatch", response_model=DispatchResponse, status_code=202)
async def dispatch_reminders(
    background_tasks: BackgroundTasks,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    days_ahead: int = Query(settings.default_reminder_days_ahead, ge=1, le=7),
    today: date = Depends(get_today),
    backend: BackendClient = Depends(get_backend_client),
    notifier: NotificationClient = Depends(get_notification_client),
):
    """
    Compute due reminders and deliver them to the notification webhook.

    Delivery runs after the response is sent, with retry and backoff per reminder.
    """
    request_id = get_request_id(request)
    obligations = await _fetch_obligations(backend, user_id, request_id)
    reminders = find_due_reminders(obligations, today, days_ahead=days_ahead)

    if reminders:
        background_tasks.add_task(notifier.send_reminders, user_id, reminders)

    for reminder in reminders:
        record_reminder(reminder.priority)
    log_reminders_dispatched(request_id, user_id, len(reminders))

    return DispatchResponse(user_id=user_id, queued=len(reminders), tags=[r.tag for r in reminders])
