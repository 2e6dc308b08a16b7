"""Unit tests for the projection aggregator"""

import pytest
from datetime import date
from decimal import Decimal
from forecast_engine.domain.exceptions import InvalidArgumentError
from forecast_engine.domain.models import FixedExpense, Frequency, Priority, Subscription
from forecast_engine.domain.projection import project_obligations


def test_three_month_projection_labels(sample_loans, sample_fixed_expenses, sample_subscriptions, reference_date):
    projection = project_obligations(
        sample_loans, sample_fixed_expenses, sample_subscriptions, reference_date=reference_date
    )

    assert [m.label for m in projection] == ["October 2026", "November 2026", "December 2026"]
    assert [(m.year, m.month) for m in projection] == [(2026, 10), (2026, 11), (2026, 12)]


def test_projection_month_contents(sample_loans, sample_fixed_expenses, sample_subscriptions, reference_date):
    october = project_obligations(
        sample_loans, sample_fixed_expenses, sample_subscriptions, months_ahead=1, reference_date=reference_date
    )[0]

    assert [o.name for o in october.obligations] == [
        "Home Rent",  # 1st
        "Home Loan EMI",  # 5th
        "Car Loan EMI",  # 10th, CRITICAL before Gym
        "Gym",  # 10th
        "Music",  # 15th
        "Cloud Suite",  # no anchor day -> reference day 17
        "Internet",  # 31st
    ]
    # 15000 + 25000 + 8000
    assert october.critical_total == Decimal("48000")
    # Internet 2500 + Cloud Suite 1500
    assert october.important_total == Decimal("4000")
    # Gym 1500 + Music 199
    assert october.routine_total == Decimal("1699")
    assert october.total_amount == Decimal("53699")


def test_totals_follow_obligations(sample_loans, sample_fixed_expenses, sample_subscriptions, reference_date):
    projection = project_obligations(
        sample_loans, sample_fixed_expenses, sample_subscriptions, months_ahead=6, reference_date=reference_date
    )

    for month in projection:
        assert month.total_amount == sum((o.amount for o in month.obligations), Decimal("0"))
        assert month.total_amount == month.critical_total + month.important_total + month.routine_total
        critical = sum((o.amount for o in month.obligations if o.priority == Priority.CRITICAL), Decimal("0"))
        assert month.critical_total == critical


def test_finished_loan_drops_out(sample_loans, reference_date):
    projection = project_obligations(sample_loans, [], [], months_ahead=3, reference_date=reference_date)
    names = [[o.name for o in month.obligations] for month in projection]

    assert names[0] == ["Home Loan EMI", "Car Loan EMI"]
    assert names[1] == ["Home Loan EMI", "Car Loan EMI"]
    assert names[2] == ["Home Loan EMI"]


def test_month_end_reference_date_clamps_each_month():
    subscription = Subscription(id="s", name="Cloud", amount=Decimal("99"), frequency=Frequency.MONTHLY)
    projection = project_obligations([], [], [subscription], months_ahead=3, reference_date=date(2026, 1, 31))

    assert [m.obligations[0].due_date for m in projection] == [
        date(2026, 1, 31),
        date(2026, 2, 28),
        date(2026, 3, 31),
    ]


def test_projection_is_idempotent(sample_loans, sample_fixed_expenses, sample_subscriptions, reference_date):
    first = project_obligations(
        sample_loans, sample_fixed_expenses, sample_subscriptions, months_ahead=12, reference_date=reference_date
    )
    second = project_obligations(
        sample_loans, sample_fixed_expenses, sample_subscriptions, months_ahead=12, reference_date=reference_date
    )
    assert first == second
    assert repr(first) == repr(second)


def test_generator_sources_resolved_every_month(reference_date):
    expenses = (e for e in [FixedExpense(id="r", title="Rent", amount=Decimal("100"), day_of_month=1)])
    projection = project_obligations([], expenses, [], months_ahead=3, reference_date=reference_date)
    assert [len(m.obligations) for m in projection] == [1, 1, 1]


def test_empty_sources_give_zeroed_months(reference_date):
    projection = project_obligations([], [], [], months_ahead=2, reference_date=reference_date)

    assert len(projection) == 2
    for month in projection:
        assert month.obligations == []
        assert month.total_amount == Decimal("0")
        assert month.critical_total == Decimal("0")
        assert month.important_total == Decimal("0")


def test_skip_handler_called_per_month(reference_date):
    calls = []
    bad = FixedExpense(id="bad", title="Water", amount=Decimal("10"), day_of_month=None)
    project_obligations([], [bad], [], months_ahead=3, reference_date=reference_date, on_skip=lambda r, e: calls.append(r))
    assert calls == [bad, bad, bad]


@pytest.mark.parametrize("months_ahead", [0, -1, 2.5, True, 25])
def test_invalid_months_ahead(months_ahead, reference_date):
    with pytest.raises(InvalidArgumentError):
        project_obligations([], [], [], months_ahead=months_ahead, reference_date=reference_date)


def test_custom_ceiling(reference_date):
    projection = project_obligations([], [], [], months_ahead=30, reference_date=reference_date, max_months_ahead=36)
    assert len(projection) == 30
