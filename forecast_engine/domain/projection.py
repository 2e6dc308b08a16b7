"""Projection aggregator - upcoming obligations grouped per month"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from forecast_engine.domain.exceptions import InvalidArgumentError
from forecast_engine.domain.models import (
    FixedExpense,
    InstallmentLoan,
    Obligation,
    Priority,
    ProjectionMonth,
    Subscription,
)
from forecast_engine.domain.obligations import SkipHandler, resolve_obligations
from forecast_engine.domain.priority import ClassificationPolicies
from forecast_engine.utils.date_utils import add_months, month_label

DEFAULT_MONTHS_AHEAD = 3
MAX_MONTHS_AHEAD = 24


def _sum_amounts(obligations: Iterable[Obligation]) -> Decimal:
    return sum((o.amount for o in obligations), Decimal("0"))


def build_projection_month(target: date, obligations: List[Obligation]) -> ProjectionMonth:
    """Wrap one month's sorted obligations with totals bucketed by priority"""
    return ProjectionMonth(
        label=month_label(target.year, target.month),
        year=target.year,
        month=target.month,
        obligations=obligations,
        total_amount=_sum_amounts(obligations),
        critical_total=_sum_amounts(o for o in obligations if o.priority == Priority.CRITICAL),
        important_total=_sum_amounts(o for o in obligations if o.priority == Priority.IMPORTANT),
        routine_total=_sum_amounts(o for o in obligations if o.priority == Priority.ROUTINE),
    )


def project_obligations(
    loans: Iterable[InstallmentLoan],
    fixed_expenses: Iterable[FixedExpense],
    subscriptions: Iterable[Subscription],
    months_ahead: int = DEFAULT_MONTHS_AHEAD,
    reference_date: Optional[date] = None,
    policies: Optional[ClassificationPolicies] = None,
    on_skip: Optional[SkipHandler] = None,
    max_months_ahead: int = MAX_MONTHS_AHEAD,
) -> List[ProjectionMonth]:
    """
    Project scheduled obligations for the next `months_ahead` months.

    Month i is reference_date shifted by i whole months (day clamped), so month 0 is
    the reference month itself. The only clock read is the `date.today()` default.

    Raises:
        InvalidArgumentError: months_ahead is not an int in [1, max_months_ahead]
    """
    if isinstance(months_ahead, bool) or not isinstance(months_ahead, int) or months_ahead < 1:
        raise InvalidArgumentError(f"months_ahead must be a positive integer, got {months_ahead!r}")
    if months_ahead > max_months_ahead:
        raise InvalidArgumentError(f"months_ahead {months_ahead} exceeds limit of {max_months_ahead}")

    if reference_date is None:
        reference_date = date.today()

    # Materialize once so generators survive repeated resolution
    loans = list(loans or ())
    fixed_expenses = list(fixed_expenses or ())
    subscriptions = list(subscriptions or ())

    projection = []
    for i in range(months_ahead):
        target = add_months(reference_date, i)
        obligations = resolve_obligations(
            loans,
            fixed_expenses,
            subscriptions,
            target,
            policies=policies,
            on_skip=on_skip,
        )
        projection.append(build_projection_month(target, obligations))

    return projection
