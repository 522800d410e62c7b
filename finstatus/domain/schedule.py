"""Due-date schedule views built on the payment status rules: upcoming list, calendar, reminders"""

from datetime import date
from typing import Dict, List, Optional

from finstatus.domain.models import (
    CalendarEntry,
    CalendarMonth,
    DueReminder,
    Obligation,
    UpcomingPayment,
)
from finstatus.domain.payment_status import is_paid_for_target, uses_month_year_tag
from finstatus.utils.date_utils import add_months, clamp_day, days_in_month, due_date_in_month, month_str


def next_due_date(billing_day: Optional[int], today: date) -> date:
    """
    Next date the obligation falls due, today included.

    Obligations without a billing day are scheduled on the 1st.
    """
    day = max(1, min(billing_day or 1, 31))
    due = due_date_in_month(today.year, today.month, day)
    if due < today:
        year, month = add_months(today.year, today.month, 1)
        due = due_date_in_month(year, month, day)
    return due


def _is_paid_for_month(obligation: Obligation, period: str) -> bool:
    return is_paid_for_target(obligation.payments, period, uses_month_year_tag(obligation.obligation_type))


def list_upcoming(obligations: List[Obligation], today: date, days: int = 30) -> List[UpcomingPayment]:
    """
    Active obligations falling due within ``days`` days of today.

    Each entry is marked paid when a payment settles its due date's month.
    Sorted by due date, then name.
    """
    upcoming = []
    for obligation in obligations:
        if not obligation.is_active:
            continue

        due = next_due_date(obligation.billing_day, today)
        days_until_due = (due - today).days
        if days_until_due > days:
            continue

        upcoming.append(
            UpcomingPayment(
                obligation=obligation,
                due_date=due,
                days_until_due=days_until_due,
                is_paid=_is_paid_for_month(obligation, month_str(due)),
            )
        )

    upcoming.sort(key=lambda u: (u.due_date, u.obligation.name))
    return upcoming


def build_calendar(obligations: List[Obligation], year: int, month: int) -> CalendarMonth:
    """
    Group active obligations by due day for one month.

    Billing days past the end of the month land on its last day. Obligations
    that ended before the month starts are left out.
    """
    month_start = date(year, month, 1)
    period = f"{year:04d}-{month:02d}"
    days: Dict[int, List[CalendarEntry]] = {}

    for obligation in obligations:
        if not obligation.is_active:
            continue
        if obligation.end_date is not None and obligation.end_date < month_start:
            continue

        day = clamp_day(year, month, obligation.billing_day or 1)
        days.setdefault(day, []).append(
            CalendarEntry(obligation=obligation, is_paid=_is_paid_for_month(obligation, period))
        )

    return CalendarMonth(year=year, month=month, days_in_month=days_in_month(year, month), days=days)


def _reminder_text(obligation: Obligation, days_until_due: int) -> tuple[str, str, str]:
    """Build (title, message, priority) for a due reminder"""
    kind = obligation.obligation_type.value.capitalize()
    amount = f"{obligation.currency} {obligation.amount:,.2f}"

    if days_until_due == 0:
        return (
            f"{kind} Due Today: {obligation.name}",
            f"{obligation.name} payment of {amount} is due today.",
            "urgent",
        )
    if days_until_due == 1:
        return (
            f"{kind} Due Tomorrow: {obligation.name}",
            f"{obligation.name} payment of {amount} is due in 1 day.",
            "high",
        )
    return (
        f"{kind} Due: {obligation.name}",
        f"{obligation.name} payment of {amount} is due in {days_until_due} days.",
        "medium",
    )


def find_due_reminders(obligations: List[Obligation], today: date, days_ahead: int = 3) -> List[DueReminder]:
    """Unpaid active obligations due within ``days_ahead`` days, soonest first"""
    reminders = []
    for item in list_upcoming(obligations, today, days=days_ahead):
        if item.is_paid:
            continue

        title, message, priority = _reminder_text(item.obligation, item.days_until_due)
        reminders.append(
            DueReminder(
                obligation=item.obligation,
                due_date=item.due_date,
                days_until_due=item.days_until_due,
                title=title,
                message=message,
                priority=priority,
                tag=f"{item.obligation.obligation_type.value}-{item.obligation.id}-{month_str(item.due_date)}",
            )
        )

    return reminders
