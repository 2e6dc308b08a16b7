"""Trailing monthly averages over sparse income and expense history"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List

from forecast_engine.domain.exceptions import InvalidArgumentError
from forecast_engine.domain.models import AmountRecord
from forecast_engine.utils.date_utils import add_months

DEFAULT_WINDOW_MONTHS = 3


def _validate_window(window_months: int) -> None:
    if isinstance(window_months, bool) or not isinstance(window_months, int) or window_months < 1:
        raise InvalidArgumentError(f"window_months must be a positive integer, got {window_months!r}")


def window_start(reference_date: date, window_months: int = DEFAULT_WINDOW_MONTHS) -> date:
    """First day of the month `window_months` months before the reference date"""
    _validate_window(window_months)
    return add_months(reference_date.replace(day=1), -window_months)


def records_in_window(
    records: Iterable[AmountRecord],
    reference_date: date,
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> List[AmountRecord]:
    """Keep records dated between window_start() and the reference date (inclusive)"""
    start = window_start(reference_date, window_months)
    return [r for r in records if start <= r.date <= reference_date]


def average_income(records: Iterable[AmountRecord], window_months: int = DEFAULT_WINDOW_MONTHS) -> Decimal:
    """
    Average monthly income over a fixed window.

    The sum is always divided by `window_months`, even when fewer months hold data,
    so a user with a short history gets an understated figure.

    Example:
        [1000, 2000, 0] over 3 months -> 1000
    """
    _validate_window(window_months)
    total = sum((r.amount for r in records), Decimal("0"))
    if total == 0:
        return Decimal("0")
    return total / window_months


def average_variable_expense(
    records: Iterable[AmountRecord],
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> Decimal:
    """
    Average monthly variable spending over the months that actually have records.

    Divisor is the number of distinct calendar months containing at least one record
    (minimum 1), never `window_months`, so sparse histories are not diluted.

    Example:
        records in 2 of 3 months summing to 900 -> 450
    """
    _validate_window(window_months)
    records = list(records)
    if not records:
        return Decimal("0")

    total = sum((r.amount for r in records), Decimal("0"))
    months_with_data = {(r.date.year, r.date.month) for r in records}
    return total / max(1, len(months_with_data))
