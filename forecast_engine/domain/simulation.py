"""Cash-flow simulator - month-by-month income, expenses and running balance"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List

from forecast_engine.domain.exceptions import InvalidArgumentError
from forecast_engine.domain.models import (
    Baseline,
    OverrideEvent,
    OverrideKind,
    SimulationMonth,
    SimulationSummary,
)

DEFAULT_HORIZON_MONTHS = 6
MAX_HORIZON_MONTHS = 36

_INCOME_KINDS = {OverrideKind.INCOME_ADJUST}
_DEBIT_KINDS = {OverrideKind.EXPENSE_ADJUST, OverrideKind.ONE_OFF_DEBIT}
_CREDIT_KINDS = {OverrideKind.ONE_OFF_CREDIT}


def _validate_horizon(horizon_months: int, max_horizon_months: int) -> None:
    if isinstance(horizon_months, bool) or not isinstance(horizon_months, int):
        raise InvalidArgumentError(f"horizon_months must be an integer, got {horizon_months!r}")
    if horizon_months < 1:
        raise InvalidArgumentError(f"horizon_months must be >= 1, got {horizon_months}")
    if horizon_months > max_horizon_months:
        raise InvalidArgumentError(f"horizon_months {horizon_months} exceeds limit of {max_horizon_months}")


def _bucket_overrides(overrides: Iterable[OverrideEvent], horizon_months: int) -> Dict[int, Dict[str, Decimal]]:
    """Sum override amounts per month index; indexes outside the horizon are dropped"""
    buckets: Dict[int, Dict[str, Decimal]] = defaultdict(
        lambda: {"income": Decimal("0"), "debit": Decimal("0"), "credit": Decimal("0")}
    )
    for override in overrides or ():
        if not 0 <= override.month_index < horizon_months:
            continue
        if override.kind in _INCOME_KINDS:
            buckets[override.month_index]["income"] += override.amount
        elif override.kind in _DEBIT_KINDS:
            buckets[override.month_index]["debit"] += override.amount
        elif override.kind in _CREDIT_KINDS:
            buckets[override.month_index]["credit"] += override.amount
    return buckets


def simulate_cash_flow(
    baseline: Baseline,
    overrides: Iterable[OverrideEvent],
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    starting_balance: Decimal = Decimal("0"),
    max_horizon_months: int = MAX_HORIZON_MONTHS,
) -> List[SimulationMonth]:
    """
    Simulate cash flow over `horizon_months` months.

    Per month k:
    - income   = baseline income + INCOME_ADJUST at k
    - expenses = fixed + average variable + EMI total
                 + EXPENSE_ADJUST / ONE_OFF_DEBIT at k - ONE_OFF_CREDIT at k
    - net_flow = income - expenses
    - running_balance = previous balance (starting_balance for k = 0) + net_flow

    Overrides whose month_index falls outside [0, horizon_months) are ignored.

    Raises:
        InvalidArgumentError: horizon is not an int in [1, max_horizon_months]
    """
    _validate_horizon(horizon_months, max_horizon_months)
    buckets = _bucket_overrides(overrides, horizon_months)

    months = []
    balance = Decimal(starting_balance)
    for k in range(horizon_months):
        adjustments = buckets.get(k)
        income = baseline.monthly_income
        expenses = baseline.monthly_expenses
        if adjustments is not None:
            income += adjustments["income"]
            expenses += adjustments["debit"] - adjustments["credit"]

        net_flow = income - expenses
        balance += net_flow
        months.append(
            SimulationMonth(
                index=k,
                income=income,
                expenses=expenses,
                net_flow=net_flow,
                running_balance=balance,
            )
        )

    return months


def summarize_simulation(months: List[SimulationMonth]) -> SimulationSummary:
    """
    Roll a simulation up into a risk summary.

    Risk level by count of months with negative net flow:
    - 0:   LOW
    - 1-2: MEDIUM
    - 3+:  HIGH
    """
    if not months:
        return SimulationSummary(
            total_months=0,
            negative_months=0,
            lowest_balance=Decimal("0"),
            final_balance=Decimal("0"),
            risk_level="LOW",
        )

    negative_months = sum(1 for m in months if m.status == "NEGATIVE")
    if negative_months == 0:
        risk_level = "LOW"
    elif negative_months <= 2:
        risk_level = "MEDIUM"
    else:
        risk_level = "HIGH"

    return SimulationSummary(
        total_months=len(months),
        negative_months=negative_months,
        lowest_balance=min(m.running_balance for m in months),
        final_balance=months[-1].running_balance,
        risk_level=risk_level,
    )
