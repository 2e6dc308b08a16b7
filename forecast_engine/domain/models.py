"""Domain models - pure Python dataclasses representing obligations and cash flow"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class Frequency(str, Enum):
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class ObligationType(str, Enum):
    EMI = "EMI"
    FIXED = "FIXED"
    SUBSCRIPTION = "SUBSCRIPTION"


class Priority(str, Enum):
    """Consequence-of-non-payment tier, most severe first"""

    CRITICAL = "CRITICAL"
    IMPORTANT = "IMPORTANT"
    ROUTINE = "ROUTINE"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.CRITICAL: 0, Priority.IMPORTANT: 1, Priority.ROUTINE: 2}


class ObligationStatus(str, Enum):
    """Payment state of an obligation; the engine only ever emits UNKNOWN"""

    UNKNOWN = "UNKNOWN"
    PENDING = "PENDING"
    PAID = "PAID"


class OverrideKind(str, Enum):
    INCOME_ADJUST = "INCOME_ADJUST"
    EXPENSE_ADJUST = "EXPENSE_ADJUST"
    ONE_OFF_DEBIT = "ONE_OFF_DEBIT"
    ONE_OFF_CREDIT = "ONE_OFF_CREDIT"


@dataclass
class InstallmentLoan:
    """Fixed-term loan repaid in equal monthly installments (EMI)"""

    id: str
    name: str
    monthly_amount: Decimal
    total_months: int
    start_date: Optional[date]
    paid_months: int = 0  # informational, never gates due-ness


@dataclass
class FixedExpense:
    """Bill due every calendar month on a fixed day"""

    id: str
    title: str
    amount: Decimal
    day_of_month: Optional[int]


@dataclass
class Subscription:
    """Periodic charge with a frequency and anchor day"""

    id: str
    name: str
    amount: Decimal
    frequency: Frequency
    day_of_month: Optional[int] = None
    is_active: bool = True


@dataclass
class AmountRecord:
    """Historical income or variable-expense entry"""

    date: date
    amount: Decimal


@dataclass
class OverrideEvent:
    """User adjustment applied to one relative month of a simulation"""

    month_index: int
    kind: OverrideKind
    amount: Decimal
    label: str = ""


@dataclass
class Obligation:
    """One scheduled payment instance in a specific month"""

    id: str
    name: str
    amount: Decimal
    due_date: date
    type: ObligationType
    priority: Priority
    status: ObligationStatus = ObligationStatus.UNKNOWN


@dataclass
class ProjectionMonth:
    """Obligations due in one calendar month with priority-bucketed totals"""

    label: str
    year: int
    month: int
    obligations: List[Obligation] = field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    critical_total: Decimal = Decimal("0")
    important_total: Decimal = Decimal("0")
    routine_total: Decimal = Decimal("0")


@dataclass
class Baseline:
    """Aggregate monthly figures the simulator starts from"""

    monthly_income: Decimal = Decimal("0")
    fixed_expenses: Decimal = Decimal("0")
    average_variable: Decimal = Decimal("0")
    emi_total: Decimal = Decimal("0")

    @property
    def monthly_expenses(self) -> Decimal:
        return self.fixed_expenses + self.average_variable + self.emi_total


@dataclass
class SimulationMonth:
    """One month of projected cash flow"""

    index: int
    income: Decimal
    expenses: Decimal
    net_flow: Decimal
    running_balance: Decimal

    @property
    def status(self) -> str:
        return "POSITIVE" if self.net_flow >= 0 else "NEGATIVE"


@dataclass
class SimulationSummary:
    """Roll-up of a simulated horizon"""

    total_months: int
    negative_months: int
    lowest_balance: Decimal
    final_balance: Decimal
    risk_level: str  # LOW | MEDIUM | HIGH
