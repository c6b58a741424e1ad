"""Portfolio-level analytics routes: everything a user owns at once."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.deps import get_as_of, get_resolver, get_user_id
from src.api.schemas import ChartSeriesResponse, OverallAnalyticsResponse, TrendAnalysisResponse
from src.config import settings
from src.data.resolver import LedgerResolver
from src.engine.analytics import overall_analytics, trend_analysis
from src.engine.charts import multi_account_balance_series

router = APIRouter(prefix="/api/v1/analytics", tags=["overview"])


@router.get("/overview", response_model=OverallAnalyticsResponse)
async def overview(
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    """Totals, reduction progress and monthly trend across all of the user's accounts."""
    ledgers = await resolver.user_ledgers(user_id)
    result = overall_analytics(ledgers, settings.trend_window_months, as_of)
    return OverallAnalyticsResponse.model_validate(result)


@router.get("/trends", response_model=TrendAnalysisResponse)
async def trends(
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
    as_of: date = Depends(get_as_of),
):
    ledgers = await resolver.user_ledgers(user_id)
    result = trend_analysis(ledgers, settings.trend_snapshot_limit, as_of)
    return TrendAnalysisResponse.model_validate(result)


@router.get("/chart/multi-account-balance", response_model=ChartSeriesResponse)
async def multi_account_balance_chart(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    user_id: str = Depends(get_user_id),
    resolver: LedgerResolver = Depends(get_resolver),
):
    ledgers = await resolver.user_ledgers(user_id, start_date, end_date)
    series = multi_account_balance_series(ledgers)
    return ChartSeriesResponse.model_validate(series)
