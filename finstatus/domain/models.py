"""Domain models - pure Python dataclasses representing obligations and payment status"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class PaymentStatusLogic(str, Enum):
    """How the "paid" status of a recurring obligation resets"""

    MONTHLY = "monthly"  # resets on the 1st of every calendar month
    PERIOD = "period"  # enters the due window N days before the due date


class ObligationType(str, Enum):
    """Recurring payable entity kinds that carry a payment status"""

    CREDIT = "credit"
    MORTGAGE = "mortgage"
    SUBSCRIPTION = "subscription"


ALLOWED_PERIODS = (3, 7, 10, 14, 15, 21, 30)
DEFAULT_LOGIC = PaymentStatusLogic.MONTHLY
DEFAULT_PERIOD = 15


@dataclass(frozen=True)
class PaymentStatusOptions:
    """Fully resolved logic/period pair for one obligation type"""

    logic: PaymentStatusLogic
    period: int


@dataclass
class PaymentStatusSettings:
    """
    User preferences for payment status.

    Per-type fields left as None inherit the global logic/period.
    Periods are kept as received (the backend stores them as text).
    """

    logic: Optional[PaymentStatusLogic] = None
    period: Optional[int | str] = None
    credit_logic: Optional[PaymentStatusLogic] = None
    credit_period: Optional[int | str] = None
    mortgage_logic: Optional[PaymentStatusLogic] = None
    mortgage_period: Optional[int | str] = None
    subscription_logic: Optional[PaymentStatusLogic] = None
    subscription_period: Optional[int | str] = None

    def override_for(self, obligation_type: ObligationType) -> tuple:
        """Return the (logic, period) override pair for an obligation type"""
        if obligation_type == ObligationType.CREDIT:
            return self.credit_logic, self.credit_period
        if obligation_type == ObligationType.MORTGAGE:
            return self.mortgage_logic, self.mortgage_period
        return self.subscription_logic, self.subscription_period


@dataclass(frozen=True)
class PaymentRecord:
    """Historical payment made against an obligation"""

    paid_at: Optional[date | datetime] = None
    month_year: Optional[str] = None  # "YYYY-MM", recorded for credits and mortgages
    amount: Optional[Decimal] = None
    note: Optional[str] = None


@dataclass
class Obligation:
    """Credit, mortgage or subscription together with its payment history"""

    id: str
    obligation_type: ObligationType
    name: str
    billing_day: Optional[int]
    amount: Decimal = Decimal("0")
    currency: str = "USD"
    status: str = "active"  # active | paused | cancelled | paid_off
    end_date: Optional[date] = None
    payments: List[PaymentRecord] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status == "active"


@dataclass
class ObligationStatus:
    """Paid/unpaid outcome for an obligation at one evaluation instant"""

    obligation_id: Optional[str]
    obligation_type: ObligationType
    logic: PaymentStatusLogic
    period: int
    target_period: Optional[str]
    paid: bool

    @property
    def can_pay(self) -> bool:
        """Whether a "Pay Now" action makes sense"""
        return not self.paid and self.target_period is not None


@dataclass
class UpcomingPayment:
    """Obligation due within the upcoming window"""

    obligation: Obligation
    due_date: date
    days_until_due: int
    is_paid: bool


@dataclass
class CalendarEntry:
    """Obligation placed on a calendar day"""

    obligation: Obligation
    is_paid: bool


@dataclass
class CalendarMonth:
    """Obligations grouped by due day for a single month"""

    year: int
    month: int
    days_in_month: int
    days: dict = field(default_factory=dict)  # day -> List[CalendarEntry]


@dataclass
class DueReminder:
    """Unpaid obligation that is about to come due"""

    obligation: Obligation
    due_date: date
    days_until_due: int
    title: str
    message: str
    priority: str  # urgent | high | medium
    tag: str  # dedup key for push notifications, one per obligation and due month
