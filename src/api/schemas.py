"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.models.results import Renderer


class EngineModel(BaseModel):
    """Response model populated straight from engine dataclasses."""
    model_config = ConfigDict(from_attributes=True)


# ---- Request schemas ----

class CustomProjectionRequest(BaseModel):
    monthly_payment: Decimal = Field(..., gt=0, description="Monthly payment to simulate")


class RequiredPaymentRequest(BaseModel):
    target_months: int = Field(..., le=600, description="Months in which to retire the balance")


# ---- Response schemas ----

class MonthlyBreakdownResponse(EngineModel):
    month: int
    balance: Decimal
    interest_charged: Decimal
    payment_amount: Decimal
    principal_paid: Decimal


class PayoffProjectionResponse(EngineModel):
    months: int
    total_interest: Decimal
    final_balance: Decimal
    monthly_breakdown: list[MonthlyBreakdownResponse]
    error: str | None = None


class PayoffScenarioResponse(EngineModel):
    name: str
    monthly_payment: Decimal
    months: int
    total_interest: Decimal
    total_paid: Decimal
    error: str | None = None


class RequiredPaymentResponse(EngineModel):
    target_months: int
    monthly_payment: Decimal


class InterestHistoryEntryResponse(EngineModel):
    month: str
    interest_amount: Decimal
    balance: Decimal


class InterestForecastResponse(EngineModel):
    history: list[InterestHistoryEntryResponse]
    total_interest_paid: Decimal
    next_month_estimate: Decimal
    average_monthly_interest: Decimal


class AccountAnalyticsResponse(BaseModel):
    current_balance: Decimal
    initial_balance: Decimal
    total_reduction: Decimal
    reduction_percentage: Decimal
    total_payments: Decimal
    total_charges: Decimal
    total_interest: Decimal
    average_monthly_payment: Decimal
    average_monthly_reduction: Decimal
    days_in_program: int
    projected_payoff_date: date | None = None
    projected_months: int | None = None
    projected_total_interest: Decimal = Decimal("0")
    projection_unavailable_reason: str | None = None


class AccountSummaryResponse(EngineModel):
    total_payments: Decimal
    total_charges: Decimal
    total_reduction: Decimal
    progress_percentage: Decimal
    average_monthly_reduction: Decimal
    projected_debt_free_date: date | None = None


class MonthlyTrendResponse(EngineModel):
    month: str
    total_balance: Decimal
    reduction: Decimal


class OverallAnalyticsResponse(EngineModel):
    total_debt: Decimal
    total_reduction: Decimal
    reduction_percentage: Decimal
    total_accounts: int
    active_accounts: int
    average_monthly_reduction: Decimal
    total_interest_paid: Decimal
    projected_debt_free_date: date | None = None
    monthly_trend: list[MonthlyTrendResponse]


class MonthOverMonthResponse(EngineModel):
    period: str
    balance: Decimal
    change: Decimal
    change_percentage: Decimal


class TrendAnalysisResponse(EngineModel):
    payment_consistency: Decimal
    reduction_rate: Decimal
    month_over_month: list[MonthOverMonthResponse]


class ChartDatasetResponse(EngineModel):
    label: str
    data: list[Decimal | None]
    background_color: str | list[str] | None = None
    border_color: str | None = None
    renderer: Renderer


class ChartSeriesResponse(EngineModel):
    labels: list[str]
    datasets: list[ChartDatasetResponse]
