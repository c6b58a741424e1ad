"""Account and portfolio analytics: lifetime totals, progress, trends.

Pure functions. No I/O (ledgers passed in as arguments).
"""

import logging
from datetime import date
from decimal import Decimal

from src.engine.debt import MAX_MONTHS
from src.engine.financial import (
    add_months,
    clamp,
    days_between,
    elapsed_months,
    label_for_key,
    mean,
    month_key,
    months_to_clear,
    percentage,
    round_currency,
    standard_deviation,
)
from src.engine.ledger import tally
from src.engine.scenarios import DEFAULT_LOOKBACK_MONTHS, current_trend_projection
from src.models.ledger import AccountLedger, Snapshot, TransactionKind
from src.models.results import (
    AccountAnalytics,
    AccountSummary,
    MonthlyTrend,
    MonthOverMonth,
    OverallAnalytics,
    PayoffOutlook,
    ProjectedPayoff,
    ProjectionUnavailable,
    TrendAnalysis,
)

logger = logging.getLogger(__name__)

DEFAULT_TREND_MONTHS = 12
DEFAULT_SNAPSHOT_LIMIT = 13


def progress_percentage(baseline: Decimal, current: Decimal) -> Decimal:
    """Share of the baseline already paid off, clamped to [0, 100]."""
    return clamp(percentage(baseline - current, baseline), 0, 100)


def payoff_outlook(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> PayoffOutlook:
    """Current-trend projection expressed as a calendar payoff date."""
    as_of = as_of or date.today()
    projection = current_trend_projection(ledger, lookback_months, as_of)
    if projection.error:
        return ProjectionUnavailable(projection.error)
    if projection.months >= MAX_MONTHS:
        return ProjectionUnavailable(f"Payoff exceeds {MAX_MONTHS} months")
    return ProjectedPayoff(
        months=projection.months,
        payoff_date=add_months(as_of, projection.months),
        total_interest=projection.total_interest,
    )


def account_analytics(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> AccountAnalytics:
    as_of = as_of or date.today()
    current = ledger.account.current_balance
    baseline = ledger.baseline_balance
    totals = tally(ledger.transactions)

    outlook = payoff_outlook(ledger, lookback_months, as_of)
    if isinstance(outlook, ProjectionUnavailable):
        logger.debug("No payoff projection for account %s: %s", ledger.account.id, outlook.reason)

    return AccountAnalytics(
        current_balance=round_currency(current),
        initial_balance=round_currency(baseline),
        total_reduction=totals.total_reduction,
        reduction_percentage=progress_percentage(baseline, current),
        total_payments=round_currency(totals.payments),
        total_charges=round_currency(totals.charges),
        total_interest=round_currency(totals.interest),
        average_monthly_payment=round_currency(mean(totals.payment_amounts)),
        average_monthly_reduction=round_currency(
            totals.total_reduction / elapsed_months(ledger.baseline_date, as_of)
        ),
        days_in_program=days_between(ledger.baseline_date, as_of),
        outlook=outlook,
    )


def account_summary(ledger: AccountLedger, as_of: date | None = None) -> AccountSummary:
    """Lightweight progress figures shown alongside an account.

    Average reduction is measured from the first transaction rather than the
    first snapshot; the debt-free date assumes that reduction continues unchanged.
    """
    as_of = as_of or date.today()
    account = ledger.account
    totals = tally(ledger.transactions)

    start = ledger.transactions[0].effective_date if ledger.transactions else account.created_at
    avg_reduction = round_currency(totals.total_reduction / elapsed_months(start, as_of))

    debt_free_date = None
    if avg_reduction > 0 and account.current_balance > 0:
        debt_free_date = add_months(as_of, months_to_clear(account.current_balance, avg_reduction))

    return AccountSummary(
        total_payments=round_currency(totals.payments),
        total_charges=round_currency(totals.charges),
        total_reduction=totals.total_reduction,
        progress_percentage=progress_percentage(ledger.baseline_balance, account.current_balance),
        average_monthly_reduction=avg_reduction,
        projected_debt_free_date=debt_free_date,
    )


def _monthly_balances(snapshots: list[Snapshot]) -> dict[str, Decimal]:
    """Sum snapshot balances per calendar month."""
    balances: dict[str, Decimal] = {}
    for s in snapshots:
        key = month_key(s.snapshot_date)
        balances[key] = balances.get(key, Decimal("0")) + s.balance
    return balances


def monthly_trend(
    ledgers: list[AccountLedger],
    months: int = DEFAULT_TREND_MONTHS,
    as_of: date | None = None,
) -> list[MonthlyTrend]:
    """Portfolio balance per month over the trailing window, with month-on-month reduction."""
    end = as_of or date.today()
    start = add_months(end, -months)
    snapshots = [
        s for ledger in ledgers for s in ledger.snapshots
        if start <= s.snapshot_date <= end
    ]
    balances = _monthly_balances(snapshots)

    trend: list[MonthlyTrend] = []
    previous: Decimal | None = None
    for key in sorted(balances):
        balance = balances[key]
        reduction = round_currency(previous - balance) if previous is not None else Decimal("0")
        trend.append(MonthlyTrend(
            month=label_for_key(key),
            total_balance=round_currency(balance),
            reduction=reduction,
        ))
        previous = balance
    return trend


def overall_analytics(
    ledgers: list[AccountLedger],
    trend_months: int = DEFAULT_TREND_MONTHS,
    as_of: date | None = None,
) -> OverallAnalytics:
    """Portfolio view across every account a user owns."""
    if not ledgers:
        return OverallAnalytics()

    as_of = as_of or date.today()
    total_debt = sum((ledger.account.current_balance for ledger in ledgers), Decimal("0"))
    total_initial = sum((ledger.baseline_balance for ledger in ledgers), Decimal("0"))
    totals = tally([t for ledger in ledgers for t in ledger.transactions])

    oldest = min(ledger.baseline_date for ledger in ledgers)
    avg_reduction = round_currency(totals.total_reduction / elapsed_months(oldest, as_of))

    debt_free_date = None
    if avg_reduction > 0 and total_debt > 0:
        debt_free_date = add_months(as_of, months_to_clear(total_debt, avg_reduction))

    return OverallAnalytics(
        total_debt=round_currency(total_debt),
        total_reduction=totals.total_reduction,
        reduction_percentage=percentage(total_initial - total_debt, total_initial),
        total_accounts=len(ledgers),
        active_accounts=sum(1 for ledger in ledgers if ledger.account.is_active),
        average_monthly_reduction=avg_reduction,
        total_interest_paid=round_currency(totals.interest),
        projected_debt_free_date=debt_free_date,
        monthly_trend=monthly_trend(ledgers, trend_months, as_of),
    )


def payment_consistency(payments: list[Decimal]) -> Decimal:
    """1 - coefficient of variation, in [0, 1]. Needs at least two payments."""
    if len(payments) < 2:
        return Decimal("0")
    avg = mean(payments)
    cv = min(Decimal("1"), standard_deviation(payments) / avg) if avg > 0 else Decimal("1")
    return clamp(round_currency(1 - cv), 0, 1)


def month_over_month(snapshots: list[Snapshot]) -> list[MonthOverMonth]:
    """Oldest-to-newest monthly balances with change versus the previous month."""
    balances = _monthly_balances(snapshots)

    comparison: list[MonthOverMonth] = []
    previous: Decimal | None = None
    for key in sorted(balances):
        balance = balances[key]
        change = Decimal("0")
        change_pct = Decimal("0")
        if previous is not None:
            change = round_currency(previous - balance)
            change_pct = percentage(change, previous)
        comparison.append(MonthOverMonth(
            period=label_for_key(key),
            balance=round_currency(balance),
            change=change,
            change_percentage=change_pct,
        ))
        previous = balance
    return comparison


def trend_analysis(
    ledgers: list[AccountLedger],
    snapshot_limit: int = DEFAULT_SNAPSHOT_LIMIT,
    as_of: date | None = None,
) -> TrendAnalysis:
    """Payment consistency, reduction rate and month-over-month comparison.

    Only each account's most recent snapshot_limit snapshots are considered.
    """
    as_of = as_of or date.today()
    payments = [
        t.amount
        for ledger in ledgers
        for t in ledger.transactions_of(TransactionKind.PAYMENT)
    ]

    recent = {ledger.account.id: ledger.snapshots[-snapshot_limit:] for ledger in ledgers}

    current_total = sum((ledger.account.current_balance for ledger in ledgers), Decimal("0"))
    initial_total = sum(
        (recent[ledger.account.id][0].balance if recent[ledger.account.id] else ledger.account.current_balance
         for ledger in ledgers),
        Decimal("0"),
    )
    first_dates = [snaps[0].snapshot_date for snaps in recent.values() if snaps]
    elapsed = elapsed_months(min(first_dates), as_of) if first_dates else Decimal("1")

    return TrendAnalysis(
        payment_consistency=payment_consistency(payments),
        reduction_rate=round_currency((initial_total - current_total) / elapsed),
        month_over_month=month_over_month([s for snaps in recent.values() for s in snaps]),
    )
