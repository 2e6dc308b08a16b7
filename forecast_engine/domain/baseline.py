"""Baseline monthly figures for the simulator, derived from raw user records"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from forecast_engine.domain.averaging import (
    DEFAULT_WINDOW_MONTHS,
    average_income,
    average_variable_expense,
    records_in_window,
)
from forecast_engine.domain.exceptions import MalformedRecordError
from forecast_engine.domain.models import AmountRecord, Baseline, FixedExpense, InstallmentLoan
from forecast_engine.domain.obligations import check_amount, loan_is_active


def active_emi_total(loans: Iterable[InstallmentLoan], reference_date: date) -> Decimal:
    """Sum of monthly installments for loans active in the reference month"""
    total = Decimal("0")
    for loan in loans or ():
        try:
            check_amount("loan", loan.id, loan.monthly_amount)
            if loan_is_active(loan, reference_date.year, reference_date.month):
                total += loan.monthly_amount
        except MalformedRecordError:
            continue
    return total


def fixed_expense_total(fixed_expenses: Iterable[FixedExpense]) -> Decimal:
    """Sum of fixed expense amounts, skipping records with a missing or non-positive amount"""
    total = Decimal("0")
    for expense in fixed_expenses or ():
        try:
            check_amount("fixed", expense.id, expense.amount)
        except MalformedRecordError:
            continue
        total += expense.amount
    return total


def build_baseline(
    income_records: Iterable[AmountRecord],
    variable_records: Iterable[AmountRecord],
    fixed_expenses: Iterable[FixedExpense],
    loans: Iterable[InstallmentLoan],
    reference_date: date,
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> Baseline:
    """
    Derive the simulator baseline.

    - income: trailing window average (fixed divisor)
    - variable: average over months that have spending records
    - fixed: sum of all fixed expenses with a usable amount
    - EMI: sum of installments for loans active as of the reference month
    """
    recent_income = records_in_window(income_records or (), reference_date, window_months)
    recent_variable = records_in_window(variable_records or (), reference_date, window_months)

    return Baseline(
        monthly_income=average_income(recent_income, window_months),
        fixed_expenses=fixed_expense_total(fixed_expenses),
        average_variable=average_variable_expense(recent_variable, window_months),
        emi_total=active_emi_total(loans, reference_date),
    )
