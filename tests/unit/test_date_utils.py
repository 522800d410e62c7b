"""Unit tests for date helpers"""

from datetime import date, datetime

from finstatus.utils.date_utils import add_months, clamp_day, due_date_in_month, month_str


def test_add_months_rolls_over_years():
    assert add_months(2024, 12, 1) == (2025, 1)
    assert add_months(2025, 1, -1) == (2024, 12)
    assert add_months(2024, 3, 0) == (2024, 3)


def test_clamp_day():
    assert clamp_day(2023, 2, 31) == 28
    assert clamp_day(2024, 2, 30) == 29  # Leap year
    assert clamp_day(2024, 4, 31) == 30
    assert clamp_day(2024, 1, 0) == 1


def test_due_date_in_month():
    assert due_date_in_month(2024, 2, 31) == date(2024, 2, 29)
    assert due_date_in_month(2024, 3, 5) == date(2024, 3, 5)


def test_month_str():
    assert month_str(date(2024, 3, 9)) == "2024-03"
    assert month_str(datetime(987, 11, 30, 23, 59)) == "0987-11"
