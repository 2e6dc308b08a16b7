"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, PlainSerializer, StrictInt

from forecast_engine.domain.models import (
    AmountRecord,
    Baseline,
    FixedExpense,
    Frequency,
    InstallmentLoan,
    ObligationStatus,
    ObligationType,
    OverrideEvent,
    OverrideKind,
    Priority,
    Subscription,
)

CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000000000")

# Engine values stay unrounded; responses carry 2-digit currency strings
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(v.quantize(CENTS, rounding=ROUND_HALF_UP)), return_type=str, when_used="json"),
]

# Input money; totals derived from it must fit the default 28-digit Decimal context
Amount = Annotated[Decimal, Field(ge=-MAX_AMOUNT, le=MAX_AMOUNT)]


class LoanSchema(BaseModel):
    """Installment loan (EMI) source record"""

    id: str = Field(..., min_length=1)
    name: str
    monthly_amount: Amount = Field(..., gt=0)
    total_months: int = Field(..., gt=0)
    start_date: Optional[date] = None
    paid_months: int = Field(0, ge=0)

    def to_domain(self) -> InstallmentLoan:
        return InstallmentLoan(
            id=self.id,
            name=self.name,
            monthly_amount=self.monthly_amount,
            total_months=self.total_months,
            start_date=self.start_date,
            paid_months=self.paid_months,
        )


class FixedExpenseSchema(BaseModel):
    """Fixed recurring expense source record"""

    id: str = Field(..., min_length=1)
    title: str
    amount: Amount = Field(..., gt=0)
    day_of_month: Optional[int] = None

    def to_domain(self) -> FixedExpense:
        return FixedExpense(id=self.id, title=self.title, amount=self.amount, day_of_month=self.day_of_month)


class SubscriptionSchema(BaseModel):
    """Recurring subscription source record"""

    id: str = Field(..., min_length=1)
    name: str
    amount: Amount = Field(..., gt=0)
    frequency: Frequency = Frequency.MONTHLY
    day_of_month: Optional[int] = None
    is_active: bool = True

    def to_domain(self) -> Subscription:
        return Subscription(
            id=self.id,
            name=self.name,
            amount=self.amount,
            frequency=self.frequency,
            day_of_month=self.day_of_month,
            is_active=self.is_active,
        )


class AmountRecordSchema(BaseModel):
    """Historical income or variable-expense entry"""

    date: date
    amount: Amount

    def to_domain(self) -> AmountRecord:
        return AmountRecord(date=self.date, amount=self.amount)


class OverrideSchema(BaseModel):
    """Simulation override event"""

    month_index: int = Field(..., description="0-based offset from the first projected month")
    kind: OverrideKind
    amount: Amount
    label: str = ""

    def to_domain(self) -> OverrideEvent:
        return OverrideEvent(month_index=self.month_index, kind=self.kind, amount=self.amount, label=self.label)


class BaselineSchema(BaseModel):
    """Precomputed baseline figures"""

    monthly_income: Amount = Decimal("0")
    fixed_expenses: Amount = Decimal("0")
    average_variable: Amount = Decimal("0")
    emi_total: Amount = Decimal("0")

    def to_domain(self) -> Baseline:
        return Baseline(
            monthly_income=self.monthly_income,
            fixed_expenses=self.fixed_expenses,
            average_variable=self.average_variable,
            emi_total=self.emi_total,
        )


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projection"""

    loans: List[LoanSchema] = []
    fixed_expenses: List[FixedExpenseSchema] = []
    subscriptions: List[SubscriptionSchema] = []
    months_ahead: Optional[StrictInt] = Field(None, description="Months to project (default from settings)")
    reference_date: Optional[date] = Field(None, description="First projected month (default today)")


class ObligationSchema(BaseModel):
    """Single upcoming obligation"""

    id: str
    name: str
    amount: Money
    due_date: date
    type: ObligationType
    priority: Priority
    status: ObligationStatus


class ProjectionMonthSchema(BaseModel):
    """One projected month"""

    label: str
    year: int
    month: int
    obligations: List[ObligationSchema]
    total_amount: Money
    critical_total: Money
    important_total: Money
    routine_total: Money


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projection"""

    projection: List[ProjectionMonthSchema]
    skipped_records: int = 0


class SimulationRequest(BaseModel):
    """Request body for POST /v1/simulation"""

    baseline: Optional[BaselineSchema] = Field(None, description="Derived from records when omitted")
    overrides: List[OverrideSchema] = []
    months: Optional[StrictInt] = Field(None, description="Horizon in months (default from settings)")
    starting_balance: Amount = Decimal("0")
    income_records: List[AmountRecordSchema] = []
    variable_expense_records: List[AmountRecordSchema] = []
    fixed_expenses: List[FixedExpenseSchema] = []
    loans: List[LoanSchema] = []
    reference_date: Optional[date] = None


class SimulationMonthSchema(BaseModel):
    """One simulated month"""

    index: int
    income: Money
    expenses: Money
    net_flow: Money
    running_balance: Money
    status: str


class DefaultsSchema(BaseModel):
    """Baseline figures the simulation started from"""

    monthly_income: Money
    monthly_expenses: Money


class SummarySchema(BaseModel):
    """Risk roll-up of the simulated horizon"""

    total_months: int
    negative_months: int
    lowest_balance: Money
    final_balance: Money
    risk_level: str


class SimulationResponse(BaseModel):
    """Response for POST /v1/simulation"""

    cash_flow: List[SimulationMonthSchema]
    defaults: DefaultsSchema
    summary: SummarySchema
