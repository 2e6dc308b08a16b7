"""Calendar arithmetic with explicit year/month/day composition"""

import calendar
from datetime import date

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given calendar month"""
    return calendar.monthrange(year, month)[1]


def clamp_day(day: int, year: int, month: int) -> date:
    """
    Build a date in the given month, clamping the day to the month's last valid day.

    Example:
        clamp_day(31, 2024, 2) -> 2024-02-29
        clamp_day(31, 2023, 2) -> 2023-02-28
    """
    return date(year, month, max(1, min(day, days_in_month(year, month))))


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole months, clamping the day instead of rolling over"""
    total = from_date.year * 12 + (from_date.month - 1) + months
    year, month_zero = divmod(total, 12)
    return clamp_day(from_date.day, year, month_zero + 1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start's month to end's month (days ignored)"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_label(year: int, month: int) -> str:
    """English month label independent of locale, e.g. 'October 2026'"""
    return f"{MONTH_NAMES[month - 1]} {year}"
