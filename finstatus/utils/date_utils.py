"""Date manipulation utilities"""

import calendar
from datetime import date, datetime


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp a day-of-month into 1..last day of the given month"""
    return max(1, min(day, days_in_month(year, month)))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair by a number of months"""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def due_date_in_month(year: int, month: int, billing_day: int) -> date:
    """Due date for a billing day in a month, e.g. day 31 in February -> Feb 28/29"""
    return date(year, month, clamp_day(year, month, billing_day))


def month_str(value: date | datetime) -> str:
    """Truncate a date to its "YYYY-MM" period"""
    return f"{value.year:04d}-{value.month:02d}"
