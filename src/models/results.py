from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class MonthlyBreakdown:
    month: int
    balance: Decimal  # Ending balance after the payment
    interest_charged: Decimal
    payment_amount: Decimal
    principal_paid: Decimal


@dataclass
class PayoffProjection:
    months: int = 0
    total_interest: Decimal = Decimal("0")
    final_balance: Decimal = Decimal("0")
    monthly_breakdown: list[MonthlyBreakdown] = field(default_factory=list)
    error: str | None = None

    @property
    def paid_off(self) -> bool:
        return self.error is None and self.final_balance == 0


@dataclass
class PayoffScenario:
    name: str
    monthly_payment: Decimal
    months: int
    total_interest: Decimal
    total_paid: Decimal  # Balance + total interest
    error: str | None = None


@dataclass(frozen=True)
class RequiredPayment:
    target_months: int
    monthly_payment: Decimal = Decimal("0")
    error: str | None = None


@dataclass(frozen=True)
class InterestHistoryEntry:
    month: str  # "Mon YYYY"
    interest_amount: Decimal
    balance: Decimal  # Representative snapshot balance, 0 when the month has none


@dataclass
class InterestForecast:
    history: list[InterestHistoryEntry] = field(default_factory=list)
    total_interest_paid: Decimal = Decimal("0")
    next_month_estimate: Decimal = Decimal("0")
    average_monthly_interest: Decimal = Decimal("0")


# ---- Projection outcome for analytics ----

@dataclass(frozen=True)
class ProjectedPayoff:
    months: int
    payoff_date: date
    total_interest: Decimal


@dataclass(frozen=True)
class ProjectionUnavailable:
    reason: str


PayoffOutlook = ProjectedPayoff | ProjectionUnavailable


@dataclass
class AccountAnalytics:
    current_balance: Decimal = Decimal("0")
    initial_balance: Decimal = Decimal("0")
    total_reduction: Decimal = Decimal("0")  # Negative = debt grew
    reduction_percentage: Decimal = Decimal("0")
    total_payments: Decimal = Decimal("0")
    total_charges: Decimal = Decimal("0")
    total_interest: Decimal = Decimal("0")
    average_monthly_payment: Decimal = Decimal("0")
    average_monthly_reduction: Decimal = Decimal("0")
    days_in_program: int = 0
    outlook: PayoffOutlook = field(
        default_factory=lambda: ProjectionUnavailable("No projection computed")
    )

    @property
    def projected_payoff_date(self) -> date | None:
        if isinstance(self.outlook, ProjectedPayoff):
            return self.outlook.payoff_date
        return None

    @property
    def projected_total_interest(self) -> Decimal:
        if isinstance(self.outlook, ProjectedPayoff):
            return self.outlook.total_interest
        return Decimal("0")


@dataclass
class AccountSummary:
    total_payments: Decimal = Decimal("0")
    total_charges: Decimal = Decimal("0")
    total_reduction: Decimal = Decimal("0")
    progress_percentage: Decimal = Decimal("0")
    average_monthly_reduction: Decimal = Decimal("0")
    projected_debt_free_date: date | None = None


@dataclass(frozen=True)
class MonthlyTrend:
    month: str
    total_balance: Decimal
    reduction: Decimal  # Previous bucket minus this bucket; 0 for the first


@dataclass
class OverallAnalytics:
    total_debt: Decimal = Decimal("0")
    total_reduction: Decimal = Decimal("0")
    reduction_percentage: Decimal = Decimal("0")
    total_accounts: int = 0
    active_accounts: int = 0
    average_monthly_reduction: Decimal = Decimal("0")
    total_interest_paid: Decimal = Decimal("0")
    projected_debt_free_date: date | None = None
    monthly_trend: list[MonthlyTrend] = field(default_factory=list)


@dataclass(frozen=True)
class MonthOverMonth:
    period: str
    balance: Decimal
    change: Decimal  # Positive = debt shrank
    change_percentage: Decimal


@dataclass
class TrendAnalysis:
    payment_consistency: Decimal = Decimal("0")  # 0..1
    reduction_rate: Decimal = Decimal("0")
    month_over_month: list[MonthOverMonth] = field(default_factory=list)


# ---- Chart series ----

class Renderer(Enum):
    LINE = "line"
    BAR = "bar"
    PIE = "pie"


@dataclass
class ChartDataset:
    label: str
    data: list[Decimal | None]
    background_color: str | list[str] | None = None
    border_color: str | None = None
    renderer: Renderer = Renderer.LINE


@dataclass
class ChartSeries:
    labels: list[str] = field(default_factory=list)
    datasets: list[ChartDataset] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.labels and not self.datasets
