"""Unit tests for priority classification policies"""

import pytest
from decimal import Decimal
from forecast_engine.config import Settings
from forecast_engine.domain.models import Priority
from forecast_engine.domain.priority import (
    PriorityPolicy,
    PriorityRule,
    fixed_expense_policy,
    policies_from_settings,
    subscription_policy,
)


@pytest.mark.parametrize(
    "title, amount, expected",
    [
        ("Home Rent", "15000", Priority.CRITICAL),  # keyword
        ("Gym", "1500", Priority.ROUTINE),
        ("Car Insurance", "3000", Priority.CRITICAL),  # keyword beats IMPORTANT amount tier
        ("HOUSE RENT", "500", Priority.CRITICAL),  # case-insensitive
        ("Personal Loan top-up", "100", Priority.CRITICAL),
        ("School Fees", "12000", Priority.CRITICAL),  # amount > 10000
        ("Internet", "2500", Priority.IMPORTANT),
        ("Maid", "10000", Priority.IMPORTANT),  # thresholds are strict
        ("Newspaper", "2000", Priority.ROUTINE),
    ],
)
def test_fixed_expense_policy(title, amount, expected):
    assert fixed_expense_policy().classify(title, Decimal(amount)) == expected


def test_subscription_policy():
    policy = subscription_policy()
    assert policy.classify("Cloud Suite", Decimal("1500")) == Priority.IMPORTANT
    assert policy.classify("Music", Decimal("1000")) == Priority.ROUTINE
    # Keywords play no part for subscriptions
    assert policy.classify("Rent Tracker", Decimal("99")) == Priority.ROUTINE


def test_first_matching_rule_wins():
    policy = PriorityPolicy(
        rules=(
            PriorityRule(Priority.IMPORTANT, keywords=("tuition",)),
            PriorityRule(Priority.CRITICAL, min_amount=Decimal("100")),
        ),
        default=Priority.ROUTINE,
    )
    assert policy.classify("Tuition", Decimal("50000")) == Priority.IMPORTANT
    assert policy.classify("Other", Decimal("50000")) == Priority.CRITICAL
    assert policy.classify("Other", Decimal("50")) == Priority.ROUTINE


def test_empty_rule_never_matches():
    assert not PriorityRule(Priority.CRITICAL).matches("anything", Decimal("1000000"))


def test_custom_thresholds_and_keywords():
    policy = fixed_expense_policy(
        keywords=["Mortgage"],
        critical_threshold=Decimal("5000"),
        important_threshold=Decimal("500"),
    )
    assert policy.classify("mortgage", Decimal("1")) == Priority.CRITICAL
    assert policy.classify("Home Rent", Decimal("1")) == Priority.ROUTINE
    assert policy.classify("Tuition", Decimal("6000")) == Priority.CRITICAL
    assert policy.classify("Phone", Decimal("600")) == Priority.IMPORTANT


def test_policies_from_settings():
    config = Settings(
        critical_keywords=["emi"],
        fixed_critical_threshold=Decimal("50000"),
        fixed_important_threshold=Decimal("100"),
        subscription_important_threshold=Decimal("10"),
    )
    policies = policies_from_settings(config)

    assert policies.fixed.classify("Bike EMI", Decimal("1")) == Priority.CRITICAL
    assert policies.fixed.classify("Home Rent", Decimal("15000")) == Priority.IMPORTANT
    assert policies.subscription.classify("Music", Decimal("199")) == Priority.IMPORTANT
    assert policies.loan == Priority.CRITICAL
