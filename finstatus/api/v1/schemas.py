"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from finstatus.domain.models import (
    ALLOWED_PERIODS,
    Obligation,
    ObligationStatus,
    ObligationType,
    PaymentRecord,
    PaymentStatusLogic,
    PaymentStatusSettings,
)

LogicValue = Optional[Literal["monthly", "period", "global"]]
PeriodValue = Optional[Union[int, Literal["global"]]]


class PaymentStatusSettingsSchema(BaseModel):
    """
    Payment status preferences.

    Per-type fields set to null or "global" inherit the global logic/period.
    Periods must be one of 3, 7, 10, 14, 15, 21 or 30 days.
    """

    logic: LogicValue = None
    period: PeriodValue = None
    credit_logic: LogicValue = None
    credit_period: PeriodValue = None
    mortgage_logic: LogicValue = None
    mortgage_period: PeriodValue = None
    subscription_logic: LogicValue = None
    subscription_period: PeriodValue = None

    @field_validator("period", "credit_period", "mortgage_period", "subscription_period")
    @classmethod
    def check_period(cls, value):
        if isinstance(value, int) and value not in ALLOWED_PERIODS:
            raise ValueError(f"period must be one of {list(ALLOWED_PERIODS)}")
        return value

    def to_domain(self) -> PaymentStatusSettings:
        values = {}
        for name, value in self.model_dump().items():
            if value is None or value == "global":
                values[name] = None
            elif name.endswith("logic"):
                values[name] = PaymentStatusLogic(value)
            else:
                values[name] = value
        return PaymentStatusSettings(**values)


class PaymentSchema(BaseModel):
    """Single recorded payment"""

    paid_at: Optional[Union[datetime, date]] = None
    month_year: Optional[str] = Field(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    amount: Optional[Decimal] = None
    note: Optional[str] = None

    def to_domain(self) -> PaymentRecord:
        return PaymentRecord(paid_at=self.paid_at, month_year=self.month_year, amount=self.amount, note=self.note)


class EvaluateRequest(BaseModel):
    """Request body for POST /v1/status/evaluate"""

    obligation_type: ObligationType
    billing_day: Optional[int] = Field(None, description="Day of month the obligation is due")
    payments: List[PaymentSchema] = Field(default_factory=list)
    settings: Optional[PaymentStatusSettingsSchema] = None
    as_of: Optional[date] = Field(None, description="Evaluation date (default: today)")


class StatusResponse(BaseModel):
    """Payment status of one obligation"""

    obligation_id: Optional[str] = None
    obligation_type: ObligationType
    logic: PaymentStatusLogic
    period: int
    target_period: Optional[str]
    paid: bool
    can_pay: bool

    @classmethod
    def from_domain(cls, status: ObligationStatus) -> "StatusResponse":
        return cls(
            obligation_id=status.obligation_id,
            obligation_type=status.obligation_type,
            logic=status.logic,
            period=status.period,
            target_period=status.target_period,
            paid=status.paid,
            can_pay=status.can_pay,
        )


class StatusSummaryResponse(BaseModel):
    """Response for GET /v1/status"""

    user_id: str
    as_of: date
    statuses: List[StatusResponse]
    all_paid: Dict[ObligationType, bool]


class OptionsSchema(BaseModel):
    """Effective logic/period for one obligation type"""

    logic: PaymentStatusLogic
    period: int


class SettingsResponse(BaseModel):
    """Response for GET/PUT /v1/settings/payment-status"""

    user_id: str
    stored: Dict[str, Optional[str]]
    effective: Dict[ObligationType, OptionsSchema]


class ObligationSummary(BaseModel):
    """Obligation fields shown next to a due date"""

    id: str
    obligation_type: ObligationType
    name: str
    billing_day: Optional[int]
    amount: Decimal
    currency: str

    @classmethod
    def from_domain(cls, obligation: Obligation) -> "ObligationSummary":
        return cls(
            id=obligation.id,
            obligation_type=obligation.obligation_type,
            name=obligation.name,
            billing_day=obligation.billing_day,
            amount=obligation.amount,
            currency=obligation.currency,
        )


class UpcomingItem(BaseModel):
    obligation: ObligationSummary
    due_date: date
    days_until_due: int
    is_paid: bool


class UpcomingResponse(BaseModel):
    """Response for GET /v1/schedule/upcoming"""

    user_id: str
    items: List[UpcomingItem]


class CalendarItem(BaseModel):
    obligation: ObligationSummary
    is_paid: bool


class CalendarResponse(BaseModel):
    """Response for GET /v1/schedule/calendar"""

    year: int
    month: int
    days_in_month: int
    days: Dict[int, List[CalendarItem]]


class ReminderItem(BaseModel):
    obligation: ObligationSummary
    due_date: date
    days_until_due: int
    title: str
    message: str
    priority: str
    tag: str


class RemindersResponse(BaseModel):
    """Response for GET /v1/schedule/reminders"""

    user_id: str
    reminders: List[ReminderItem]


class DispatchResponse(BaseModel):
    """Response for POST /v1/schedule/reminders/dispatch"""

    user_id: str
    queued: int
    tags: List[str]
