"""Unit tests for upcoming payments, calendar view and due reminders"""

from datetime import date, datetime
from decimal import Decimal

from finstatus.domain.models import Obligation, ObligationType, PaymentRecord
from finstatus.domain.schedule import build_calendar, find_due_reminders, list_upcoming, next_due_date


def make_obligation(obligation_id, obligation_type, billing_day, payments=None, **kwargs) -> Obligation:
    return Obligation(
        id=obligation_id,
        obligation_type=obligation_type,
        name=kwargs.pop("name", obligation_id),
        billing_day=billing_day,
        amount=kwargs.pop("amount", Decimal("100")),
        payments=payments or [],
        **kwargs,
    )


def test_next_due_date():
    today = date(2024, 3, 28)
    assert next_due_date(5, today) == date(2024, 4, 5)
    assert next_due_date(28, today) == today
    assert next_due_date(None, today) == date(2024, 4, 1)
    assert next_due_date(31, date(2024, 2, 10)) == date(2024, 2, 29)
    assert next_due_date(31, date(2024, 12, 31)) == date(2024, 12, 31)


def test_list_upcoming_window_and_order():
    today = date(2024, 3, 28)
    obligations = [
        make_obligation("mtg", ObligationType.MORTGAGE, 5, [PaymentRecord(month_year="2024-04")]),
        make_obligation("crd", ObligationType.CREDIT, 15),
        make_obligation("sub", ObligationType.SUBSCRIPTION, 29, [PaymentRecord(paid_at=datetime(2024, 3, 1))]),
        make_obligation("old", ObligationType.SUBSCRIPTION, 30, status="paused"),
    ]

    upcoming = list_upcoming(obligations, today, days=30)

    assert [u.obligation.id for u in upcoming] == ["sub", "mtg", "crd"]
    assert [u.days_until_due for u in upcoming] == [1, 8, 18]
    assert [u.is_paid for u in upcoming] == [True, True, False]

    assert [u.obligation.id for u in list_upcoming(obligations, today, days=10)] == ["sub", "mtg"]


def test_list_upcoming_same_day_sorted_by_name():
    today = date(2024, 5, 1)
    obligations = [
        make_obligation("b", ObligationType.SUBSCRIPTION, 3, name="Zeta"),
        make_obligation("a", ObligationType.SUBSCRIPTION, 3, name="Alpha"),
    ]
    assert [u.obligation.name for u in list_upcoming(obligations, today)] == ["Alpha", "Zeta"]


def test_build_calendar_clamps_and_filters():
    obligations = [
        make_obligation("crd", ObligationType.CREDIT, 31, [PaymentRecord(month_year="2024-02")]),
        make_obligation("sub", ObligationType.SUBSCRIPTION, 29, [PaymentRecord(paid_at=datetime(2024, 3, 1))]),
        make_obligation("mtg", ObligationType.MORTGAGE, 5),
        make_obligation("ended", ObligationType.SUBSCRIPTION, 10, end_date=date(2024, 1, 31)),
        make_obligation("cancelled", ObligationType.SUBSCRIPTION, 12, status="cancelled"),
    ]

    calendar_month = build_calendar(obligations, 2024, 2)

    assert calendar_month.days_in_month == 29
    assert sorted(calendar_month.days) == [5, 29]
    assert [e.obligation.id for e in calendar_month.days[29]] == ["crd", "sub"]
    assert [e.is_paid for e in calendar_month.days[29]] == [True, False]
    assert calendar_month.days[5][0].is_paid is False


def test_build_calendar_keeps_obligation_ending_mid_month():
    obligations = [make_obligation("crd", ObligationType.CREDIT, 20, end_date=date(2024, 2, 15))]
    assert 20 in build_calendar(obligations, 2024, 2).days


def test_find_due_reminders():
    today = date(2024, 3, 28)
    obligations = [
        make_obligation("sub-1", ObligationType.SUBSCRIPTION, 28, name="Streaming", amount=Decimal("15.99")),
        make_obligation("crd-1", ObligationType.CREDIT, 29, name="Car Loan", amount=Decimal("1320.5")),
        make_obligation("mtg-1", ObligationType.MORTGAGE, 31, name="Home Loan"),
        make_obligation("sub-2", ObligationType.SUBSCRIPTION, 30, [PaymentRecord(paid_at=date(2024, 3, 2))]),
        make_obligation("sub-3", ObligationType.SUBSCRIPTION, 5),
    ]

    reminders = find_due_reminders(obligations, today, days_ahead=3)

    assert [r.obligation.id for r in reminders] == ["sub-1", "crd-1", "mtg-1"]
    assert [r.priority for r in reminders] == ["urgent", "high", "medium"]

    today_reminder, tomorrow_reminder, later_reminder = reminders
    assert today_reminder.title == "Subscription Due Today: Streaming"
    assert today_reminder.message == "Streaming payment of USD 15.99 is due today."
    assert today_reminder.tag == "subscription-sub-1-2024-03"
    assert tomorrow_reminder.title == "Credit Due Tomorrow: Car Loan"
    assert tomorrow_reminder.message == "Car Loan payment of USD 1,320.50 is due in 1 day."
    assert later_reminder.title == "Mortgage Due: Home Loan"
    assert later_reminder.message.endswith("is due in 3 days.")
