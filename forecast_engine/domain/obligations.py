"""Recurring obligation resolver - which loans, bills and subscriptions fall due in a month"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from forecast_engine.domain.exceptions import MalformedRecordError
from forecast_engine.domain.models import (
    FixedExpense,
    Frequency,
    InstallmentLoan,
    Obligation,
    ObligationType,
    Subscription,
)
from forecast_engine.domain.priority import ClassificationPolicies
from forecast_engine.utils.date_utils import clamp_day, months_between

SkipHandler = Callable[[object, MalformedRecordError], None]


def loan_months_since_start(loan: InstallmentLoan, year: int, month: int) -> int:
    """Calendar months elapsed from the loan's start month to the given month"""
    if loan.start_date is None:
        raise MalformedRecordError("loan", loan.id, "missing start_date")
    return months_between(loan.start_date, date(year, month, 1))


def loan_is_active(loan: InstallmentLoan, year: int, month: int) -> bool:
    """Loan owes an installment in the month iff 0 <= months_since_start < total_months"""
    if loan.total_months is None or loan.total_months <= 0:
        raise MalformedRecordError("loan", loan.id, f"invalid total_months {loan.total_months!r}")
    elapsed = loan_months_since_start(loan, year, month)
    return 0 <= elapsed < loan.total_months


def _check_day(source: str, record_id: str, day: Optional[int]) -> None:
    if day is not None and not 1 <= day <= 31:
        raise MalformedRecordError(source, record_id, f"day_of_month {day} outside 1-31")


def check_amount(source: str, record_id: str, amount: Optional[Decimal]) -> None:
    """Reject a record whose amount is missing or not positive"""
    if amount is None:
        raise MalformedRecordError(source, record_id, "missing amount")
    if amount <= 0:
        raise MalformedRecordError(source, record_id, f"amount {amount} is not positive")


def _resolve_loan(loan: InstallmentLoan, target: date, policies: ClassificationPolicies) -> Optional[Obligation]:
    check_amount("loan", loan.id, loan.monthly_amount)
    if not loan_is_active(loan, target.year, target.month):
        return None
    return Obligation(
        id=f"emi-{loan.id}-{target:%Y-%m}",
        name=loan.name,
        amount=loan.monthly_amount,
        due_date=clamp_day(loan.start_date.day, target.year, target.month),
        type=ObligationType.EMI,
        priority=policies.loan,
    )


def _resolve_fixed(expense: FixedExpense, target: date, policies: ClassificationPolicies) -> Obligation:
    if expense.day_of_month is None:
        raise MalformedRecordError("fixed", expense.id, "missing day_of_month")
    _check_day("fixed", expense.id, expense.day_of_month)
    check_amount("fixed", expense.id, expense.amount)
    return Obligation(
        id=f"fixed-{expense.id}-{target:%Y-%m}",
        name=expense.title,
        amount=expense.amount,
        due_date=clamp_day(expense.day_of_month, target.year, target.month),
        type=ObligationType.FIXED,
        priority=policies.fixed.classify(expense.title, expense.amount),
    )


def _resolve_subscription(
    subscription: Subscription, target: date, policies: ClassificationPolicies
) -> Optional[Obligation]:
    if not subscription.is_active:
        return None
    # TODO: resolve YEARLY subscriptions once records carry an anchor month
    if subscription.frequency != Frequency.MONTHLY:
        return None

    _check_day("subscription", subscription.id, subscription.day_of_month)
    check_amount("subscription", subscription.id, subscription.amount)
    day = subscription.day_of_month if subscription.day_of_month is not None else target.day
    return Obligation(
        id=f"sub-{subscription.id}-{target:%Y-%m}",
        name=subscription.name,
        amount=subscription.amount,
        due_date=clamp_day(day, target.year, target.month),
        type=ObligationType.SUBSCRIPTION,
        priority=policies.subscription.classify(subscription.name, subscription.amount),
    )


def sort_obligations(obligations: List[Obligation]) -> List[Obligation]:
    """Order by due date, CRITICAL before IMPORTANT before ROUTINE on the same day"""
    return sorted(obligations, key=lambda o: (o.due_date, o.priority.rank))


def resolve_obligations(
    loans: Iterable[InstallmentLoan],
    fixed_expenses: Iterable[FixedExpense],
    subscriptions: Iterable[Subscription],
    target: date,
    policies: Optional[ClassificationPolicies] = None,
    on_skip: Optional[SkipHandler] = None,
) -> List[Obligation]:
    """
    Determine every obligation due in the target month.

    Requirements:
    - Loans: due while 0 <= months_since_start < total_months, on the start day, CRITICAL
    - Fixed expenses: due every month on day_of_month, tiered by the fixed policy
    - Subscriptions: only active MONTHLY ones, on day_of_month (target.day if absent)
    - Days past the end of the month are clamped to its last day
    - A malformed record is skipped and reported through `on_skip`; the rest still resolve

    Args:
        loans, fixed_expenses, subscriptions: already user-scoped source records
        target: any day in the target month; its day is the subscription fallback
        policies: priority classification (defaults used when None)
        on_skip: called with (record, error) for every skipped record

    Returns:
        Obligations sorted by due date then priority rank
    """
    policies = policies or ClassificationPolicies()
    obligations: List[Obligation] = []

    def attempt(record, resolver) -> None:
        try:
            obligation = resolver(record, target, policies)
        except MalformedRecordError as e:
            if on_skip is not None:
                on_skip(record, e)
            return
        if obligation is not None:
            obligations.append(obligation)

    for loan in loans or ():
        attempt(loan, _resolve_loan)
    for expense in fixed_expenses or ():
        attempt(expense, _resolve_fixed)
    for subscription in subscriptions or ():
        attempt(subscription, _resolve_subscription)

    return sort_obligations(obligations)
