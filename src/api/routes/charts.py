"""Per-account chart data routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_as_of, get_resolver, get_user_id, load_account_ledger
from src.api.schemas import ChartSeriesResponse
from src.config import settings
from src.data.resolver import LedgerResolver
from src.engine.charts import (
    balance_reduction_series,
    interest_accumulation_series,
    payment_distribution_series,
    projection_comparison_series,
    snapshot_balance_series,
)
from src.engine.debt import MAX_MONTHS
from src.engine.financial import add_months
from src.engine.scenarios import payoff_scenarios
from src.models.ledger import TransactionKind

router = APIRouter(prefix="/api/v1/analytics/accounts", tags=["charts"])


@router.get("/{account_id}/chart/balance-reduction", response_model=ChartSeriesResponse)
async def balance_reduction_chart(
    account_id: str,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    ledger = await load_account_ledger(resolver, account_id, user_id, start=start_date, end=end_date)
    return ChartSeriesResponse.model_validate(balance_reduction_series(ledger.snapshots))


@router.get("/{account_id}/chart/interest-accumulation", response_model=ChartSeriesResponse)
async def interest_accumulation_chart(
    account_id: str,
    months: int = Query(settings.interest_window_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Only the window's INTEREST rows are loaded."""
    ledger = await load_account_ledger(
        resolver, account_id, user_id,
        kind=TransactionKind.INTEREST,
        start=add_months(as_of, -months),
        end=as_of,
    )
    series = interest_accumulation_series(ledger, months, as_of)
    return ChartSeriesResponse.model_validate(series)


@router.get("/{account_id}/chart/payment-distribution", response_model=ChartSeriesResponse)
async def payment_distribution_chart(
    account_id: str,
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    ledger = await load_account_ledger(resolver, account_id, user_id)
    return ChartSeriesResponse.model_validate(payment_distribution_series(ledger.transactions))


@router.get("/{account_id}/chart/projection-comparison", response_model=ChartSeriesResponse)
async def projection_comparison_chart(
    account_id: str,
    lookback_months: int = Query(settings.default_lookback_months, ge=1, le=MAX_MONTHS),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Balance paths of every payoff scenario on a shared month axis."""
    ledger = await load_account_ledger(resolver, account_id, user_id)
    scenarios = payoff_scenarios(ledger, lookback_months, as_of)
    series = projection_comparison_series(
        ledger.account, scenarios, settings.projection_chart_months
    )
    return ChartSeriesResponse.model_validate(series)


@router.get("/{account_id}/chart/snapshot-balance", response_model=ChartSeriesResponse)
async def snapshot_balance_chart(
    account_id: str,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    ledger = await load_account_ledger(resolver, account_id, user_id, start=start_date, end=end_date)
    return ChartSeriesResponse.model_validate(snapshot_balance_series(ledger.snapshots))
