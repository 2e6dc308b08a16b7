"""Priority classification policy - ordered predicate -> tier rules"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from forecast_engine.domain.models import Priority

DEFAULT_CRITICAL_KEYWORDS: Tuple[str, ...] = ("rent", "insurance", "loan")
DEFAULT_FIXED_CRITICAL_THRESHOLD = Decimal("10000")
DEFAULT_FIXED_IMPORTANT_THRESHOLD = Decimal("2000")
DEFAULT_SUBSCRIPTION_IMPORTANT_THRESHOLD = Decimal("1000")


@dataclass(frozen=True)
class PriorityRule:
    """
    Single classification rule.

    Matches when the lower-cased name contains any of `keywords`, or when the amount
    is strictly greater than `min_amount`. A rule with neither never matches.
    """

    tier: Priority
    keywords: Tuple[str, ...] = ()
    min_amount: Optional[Decimal] = None

    def matches(self, name: str, amount: Decimal) -> bool:
        if self.keywords:
            lowered = (name or "").lower()
            if any(keyword in lowered for keyword in self.keywords):
                return True
        if self.min_amount is not None and amount > self.min_amount:
            return True
        return False


@dataclass(frozen=True)
class PriorityPolicy:
    """First matching rule wins; `default` applies when nothing matches"""

    rules: Tuple[PriorityRule, ...] = field(default_factory=tuple)
    default: Priority = Priority.ROUTINE

    def classify(self, name: str, amount: Decimal) -> Priority:
        for rule in self.rules:
            if rule.matches(name, amount):
                return rule.tier
        return self.default


def fixed_expense_policy(
    keywords: Sequence[str] = DEFAULT_CRITICAL_KEYWORDS,
    critical_threshold: Decimal = DEFAULT_FIXED_CRITICAL_THRESHOLD,
    important_threshold: Decimal = DEFAULT_FIXED_IMPORTANT_THRESHOLD,
) -> PriorityPolicy:
    """
    Policy for fixed recurring expenses.

    Evaluation order:
    1. Title keyword (rent / insurance / loan) -> CRITICAL
    2. amount > 10000 -> CRITICAL
    3. amount > 2000 -> IMPORTANT
    4. otherwise ROUTINE
    """
    return PriorityPolicy(
        rules=(
            PriorityRule(Priority.CRITICAL, keywords=tuple(k.lower() for k in keywords)),
            PriorityRule(Priority.CRITICAL, min_amount=Decimal(critical_threshold)),
            PriorityRule(Priority.IMPORTANT, min_amount=Decimal(important_threshold)),
        ),
        default=Priority.ROUTINE,
    )


def subscription_policy(
    important_threshold: Decimal = DEFAULT_SUBSCRIPTION_IMPORTANT_THRESHOLD,
) -> PriorityPolicy:
    """Subscriptions: amount > 1000 -> IMPORTANT, otherwise ROUTINE"""
    return PriorityPolicy(
        rules=(PriorityRule(Priority.IMPORTANT, min_amount=Decimal(important_threshold)),),
        default=Priority.ROUTINE,
    )


@dataclass(frozen=True)
class ClassificationPolicies:
    """Per-source policies used by the resolver; loans are always CRITICAL"""

    fixed: PriorityPolicy = field(default_factory=fixed_expense_policy)
    subscription: PriorityPolicy = field(default_factory=subscription_policy)
    loan: Priority = Priority.CRITICAL


def policies_from_settings(settings) -> ClassificationPolicies:
    """Build classification policies from application settings"""
    return ClassificationPolicies(
        fixed=fixed_expense_policy(
            keywords=settings.critical_keywords,
            critical_threshold=settings.fixed_critical_threshold,
            important_threshold=settings.fixed_important_threshold,
        ),
        subscription=subscription_policy(settings.subscription_important_threshold),
    )
