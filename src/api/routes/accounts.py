"""Per-account analytics routes: progress, projections, scenarios and interest."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.deps import get_as_of, get_resolver, get_user_id, load_account_ledger
from src.api.schemas import (
    AccountAnalyticsResponse,
    AccountSummaryResponse,
    CustomProjectionRequest,
    InterestForecastResponse,
    PayoffProjectionResponse,
    PayoffScenarioResponse,
    RequiredPaymentRequest,
    RequiredPaymentResponse,
)
from src.config import settings
from src.data.resolver import LedgerResolver
from src.engine.analytics import account_analytics, account_summary
from src.engine.debt import MAX_MONTHS, required_payment
from src.engine.interest import interest_forecast
from src.engine.scenarios import current_trend_projection, custom_projection, payoff_scenarios
from src.models.ledger import TransactionKind
from src.models.results import AccountAnalytics, ProjectedPayoff

router = APIRouter(prefix="/api/v1/analytics/accounts", tags=["accounts"])


def _analytics_to_response(result: AccountAnalytics) -> AccountAnalyticsResponse:
    """Flatten the payoff outlook into either projected fields or an unavailable reason."""
    outlook = result.outlook
    projected = isinstance(outlook, ProjectedPayoff)
    return AccountAnalyticsResponse(
        current_balance=result.current_balance,
        initial_balance=result.initial_balance,
        total_reduction=result.total_reduction,
        reduction_percentage=result.reduction_percentage,
        total_payments=result.total_payments,
        total_charges=result.total_charges,
        total_interest=result.total_interest,
        average_monthly_payment=result.average_monthly_payment,
        average_monthly_reduction=result.average_monthly_reduction,
        days_in_program=result.days_in_program,
        projected_payoff_date=outlook.payoff_date if projected else None,
        projected_months=outlook.months if projected else None,
        projected_total_interest=result.projected_total_interest,
        projection_unavailable_reason=None if projected else outlook.reason,
    )


@router.get("/{account_id}", response_model=AccountAnalyticsResponse)
async def get_account_analytics(
    account_id: str,
    lookback_months: int = Query(settings.default_lookback_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Lifetime totals, progress and the current-trend payoff outlook for one account."""
    ledger = await load_account_ledger(resolver, account_id, user_id)
    return _analytics_to_response(account_analytics(ledger, lookback_months, as_of))


@router.get("/{account_id}/summary", response_model=AccountSummaryResponse)
async def get_account_summary(
    account_id: str,
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    ledger = await load_account_ledger(resolver, account_id, user_id)
    return AccountSummaryResponse.model_validate(account_summary(ledger, as_of))


@router.get("/{account_id}/projection", response_model=PayoffProjectionResponse)
async def get_trend_projection(
    account_id: str,
    lookback_months: int = Query(settings.default_lookback_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Payoff projection at the average payment made over the lookback window."""
    ledger = await load_account_ledger(resolver, account_id, user_id)
    projection = current_trend_projection(ledger, lookback_months, as_of)
    return PayoffProjectionResponse.model_validate(projection)


@router.get("/{account_id}/interest-forecast", response_model=InterestForecastResponse)
async def get_interest_forecast(
    account_id: str,
    months: int = Query(settings.interest_window_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Interest history and estimates. Only INTEREST rows are needed."""
    ledger = await load_account_ledger(
        resolver, account_id, user_id, kind=TransactionKind.INTEREST
    )
    return InterestForecastResponse.model_validate(interest_forecast(ledger, months, as_of))


@router.get("/{account_id}/payoff-scenarios", response_model=list[PayoffScenarioResponse])
async def get_payoff_scenarios(
    account_id: str,
    lookback_months: int = Query(settings.default_lookback_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    ledger = await load_account_ledger(resolver, account_id, user_id)
    scenarios = payoff_scenarios(ledger, lookback_months, as_of)
    return [PayoffScenarioResponse.model_validate(s) for s in scenarios]


@router.post("/{account_id}/calculate-projection", response_model=PayoffProjectionResponse)
async def calculate_projection(
    account_id: str,
    req: CustomProjectionRequest,
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    """What-if projection at a caller-chosen monthly payment."""
    ledger = await load_account_ledger(resolver, account_id, user_id)
    projection = custom_projection(ledger.account, req.monthly_payment)
    return PayoffProjectionResponse.model_validate(projection)


@router.post("/{account_id}/required-payment", response_model=RequiredPaymentResponse)
async def calculate_required_payment(
    account_id: str,
    req: RequiredPaymentRequest,
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    """Level payment needed to clear the balance within target_months."""
    ledger = await load_account_ledger(resolver, account_id, user_id)
    account = ledger.account
    result = required_payment(account.current_balance, account.interest_rate, req.target_months)
    if result.error:
        raise HTTPException(status_code=400, detail=result.error)
    return RequiredPaymentResponse.model_validate(result)
