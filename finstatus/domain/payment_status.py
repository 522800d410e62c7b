"""Payment status resolver - decides whether a recurring obligation is paid for its current period"""

from datetime import date, datetime
from typing import Iterable, Optional

from finstatus.domain.models import (
    DEFAULT_LOGIC,
    DEFAULT_PERIOD,
    Obligation,
    ObligationStatus,
    ObligationType,
    PaymentRecord,
    PaymentStatusLogic,
    PaymentStatusOptions,
    PaymentStatusSettings,
)
from finstatus.utils.date_utils import add_months, due_date_in_month, month_str

INHERIT = "global"


def _coerce_logic(value) -> Optional[PaymentStatusLogic]:
    """Turn a stored logic value into the enum; None means inherit"""
    if value is None or isinstance(value, PaymentStatusLogic):
        return value
    try:
        return PaymentStatusLogic(str(value).strip().lower())
    except ValueError:
        return None


def _coerce_period(value) -> Optional[int]:
    """Turn a stored period ("15", 15) into a positive int; None means inherit"""
    if value is None or value == INHERIT:
        return None
    try:
        period = int(value)
    except (TypeError, ValueError):
        return None
    return period if period > 0 else None


def _as_date(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def uses_month_year_tag(obligation_type: ObligationType) -> bool:
    """Credits and mortgages record the month a payment settles; subscriptions don't"""
    return obligation_type in (ObligationType.CREDIT, ObligationType.MORTGAGE)


def resolve_settings(
    global_settings: Optional[PaymentStatusSettings],
    override_logic=None,
    override_period=None,
) -> PaymentStatusOptions:
    """
    Resolve the effective logic/period for one obligation type.

    Chain: type override -> global setting -> hard default (monthly / 15 days).
    Overrides of None or "global" inherit. Values that cannot be parsed are
    treated as unset so the chain always ends in a concrete value.
    """
    global_logic = _coerce_logic(global_settings.logic) if global_settings else None
    global_period = _coerce_period(global_settings.period) if global_settings else None

    logic = _coerce_logic(override_logic) or global_logic or DEFAULT_LOGIC
    period = _coerce_period(override_period) or global_period or DEFAULT_PERIOD

    return PaymentStatusOptions(logic=logic, period=period)


def get_payment_status_options(
    settings: Optional[PaymentStatusSettings],
    obligation_type: ObligationType,
) -> PaymentStatusOptions:
    """Resolve options for an obligation type from the user's settings"""
    if settings is None:
        return resolve_settings(None)
    override_logic, override_period = settings.override_for(obligation_type)
    return resolve_settings(settings, override_logic, override_period)


def compute_target_period(
    billing_day: Optional[int],
    options: PaymentStatusOptions,
    now: date | datetime,
) -> Optional[str]:
    """
    Compute the "YYYY-MM" period an obligation's status is evaluated against.

    - monthly: always the current calendar month.
    - period: find the next due date (today counts as due). If it is at most
      ``options.period`` days away, the upcoming due date's month is the target;
      otherwise the previous due date's month still is.

    Billing days beyond a month's length clamp to its last day.

    Returns:
        "YYYY-MM", or None when the obligation has no billing day
    """
    if billing_day is None:
        return None

    today = _as_date(now)
    day = max(1, min(int(billing_day), 31))

    if options.logic == PaymentStatusLogic.MONTHLY:
        return month_str(today)

    next_due = due_date_in_month(today.year, today.month, day)
    if today > next_due:
        year, month = add_months(today.year, today.month, 1)
        next_due = due_date_in_month(year, month, day)

    days_until_due = (next_due - today).days
    if days_until_due <= options.period:
        return month_str(next_due)

    year, month = add_months(next_due.year, next_due.month, -1)
    return f"{year:04d}-{month:02d}"


def is_paid_for_target(
    payments: Optional[Iterable[PaymentRecord]],
    target_period: Optional[str],
    uses_month_year_tag: bool,
) -> bool:
    """
    Check whether any payment settles the target period.

    Tagged payments (credits, mortgages) match on their recorded month_year only;
    untagged payments match on the month of paid_at.
    """
    if target_period is None or not payments:
        return False

    if uses_month_year_tag:
        return any(p.month_year == target_period for p in payments)

    return any(p.paid_at is not None and month_str(p.paid_at) == target_period for p in payments)


def evaluate_status(
    obligation_type: ObligationType,
    billing_day: Optional[int],
    payments: Optional[Iterable[PaymentRecord]],
    settings: Optional[PaymentStatusSettings],
    now: date | datetime,
    obligation_id: Optional[str] = None,
) -> ObligationStatus:
    """Resolve options, compute the target period and check it against the payment history"""
    options = get_payment_status_options(settings, obligation_type)
    target_period = compute_target_period(billing_day, options, now)
    paid = is_paid_for_target(payments, target_period, uses_month_year_tag(obligation_type))

    return ObligationStatus(
        obligation_id=obligation_id,
        obligation_type=obligation_type,
        logic=options.logic,
        period=options.period,
        target_period=target_period,
        paid=paid,
    )


def evaluate_obligation(
    obligation: Obligation,
    settings: Optional[PaymentStatusSettings],
    now: date | datetime,
) -> ObligationStatus:
    """Main entry point: payment status of a stored obligation at ``now``"""
    return evaluate_status(
        obligation.obligation_type,
        obligation.billing_day,
        obligation.payments,
        settings,
        now,
        obligation_id=obligation.id,
    )
