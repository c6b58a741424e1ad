"""Chart-data shaping: label axes plus numeric series, with colour hints.

Pure transforms over already-loaded ledger data. No business rules beyond
unit conversion and inversion; styling is left to the presentation layer.
"""

from datetime import date
from decimal import Decimal

from src.engine.debt import payoff_step
from src.engine.financial import (
    add_months,
    label_for_key,
    month_key,
    month_label,
    monthly_rate,
    round_currency,
    to_decimal,
)
from src.engine.interest import DEFAULT_WINDOW_MONTHS
from src.engine.ledger import tally
from src.models.ledger import Account, AccountLedger, Snapshot, Transaction, TransactionKind
from src.models.results import ChartDataset, ChartSeries, PayoffScenario, Renderer

MAX_PROJECTION_MONTHS = 60
MAX_SCENARIOS = 5

GREEN = ("rgba(16, 185, 129, 0.2)", "rgba(16, 185, 129, 1)")
BLUE = ("rgba(59, 130, 246, 0.2)", "rgba(59, 130, 246, 1)")
RED = ("rgba(239, 68, 68, 0.2)", "rgba(239, 68, 68, 1)")
ORANGE = ("rgba(245, 158, 11, 0.2)", "rgba(245, 158, 11, 1)")
PURPLE = ("rgba(139, 92, 246, 0.2)", "rgba(139, 92, 246, 1)")
PINK = ("rgba(236, 72, 153, 0.2)", "rgba(236, 72, 153, 1)")

SCENARIO_PALETTE = [RED, ORANGE, BLUE, GREEN, PURPLE]
ACCOUNT_PALETTE = [BLUE, GREEN, ORANGE, PURPLE, PINK]


def _dataset(
    label: str,
    data: list[Decimal | None],
    colors: tuple[str, str],
    renderer: Renderer = Renderer.LINE,
) -> ChartDataset:
    background, border = colors
    return ChartDataset(
        label=label,
        data=data,
        background_color=background,
        border_color=border,
        renderer=renderer,
    )


def balance_reduction_series(snapshots: list[Snapshot]) -> ChartSeries:
    """Balance per snapshot plus the amount reduced since the first snapshot."""
    if not snapshots:
        return ChartSeries()

    initial = snapshots[0].balance
    return ChartSeries(
        labels=[month_label(s.snapshot_date) for s in snapshots],
        datasets=[
            _dataset("Debt Reduction", [round_currency(initial - s.balance) for s in snapshots], GREEN),
            _dataset("Current Balance", [round_currency(s.balance) for s in snapshots], BLUE),
        ],
    )


def interest_accumulation_series(
    ledger: AccountLedger,
    months: int = DEFAULT_WINDOW_MONTHS,
    as_of: date | None = None,
) -> ChartSeries:
    """Interest charged per month over the window, with its running total."""
    end = as_of or date.today()
    start = add_months(end, -months)

    monthly: dict[str, Decimal] = {}
    for t in ledger.transactions_of(TransactionKind.INTEREST):
        if start <= t.effective_date <= end:
            key = month_key(t.effective_date)
            monthly[key] = monthly.get(key, Decimal("0")) + t.amount

    if not monthly:
        return ChartSeries()

    keys = sorted(monthly)
    interest = [round_currency(monthly[k]) for k in keys]
    cumulative: list[Decimal | None] = []
    running = Decimal("0")
    for amount in interest:
        running += amount
        cumulative.append(round_currency(running))

    return ChartSeries(
        labels=[label_for_key(k) for k in keys],
        datasets=[
            _dataset(
                "Interest Paid",
                interest,
                ("rgba(239, 68, 68, 0.6)", RED[1]),
                Renderer.BAR,
            ),
            _dataset("Cumulative Interest", cumulative, ORANGE),
        ],
    )


def payment_distribution_series(transactions: list[Transaction]) -> ChartSeries:
    """Principal / interest / fees split.

    Principal is payments net of the interest they covered, floored at 0.
    """
    totals = tally(transactions)
    principal = max(Decimal("0"), totals.payments - totals.interest)
    return ChartSeries(
        labels=["Principal Paid", "Interest Paid", "Fees/Charges"],
        datasets=[
            ChartDataset(
                label="Payment Distribution",
                data=[
                    round_currency(principal),
                    round_currency(totals.interest),
                    round_currency(totals.fees),
                ],
                background_color=[
                    "rgba(16, 185, 129, 0.8)",
                    "rgba(239, 68, 68, 0.8)",
                    "rgba(245, 158, 11, 0.8)",
                ],
                renderer=Renderer.PIE,
            ),
        ],
    )


def scenario_balance_path(
    balance: Decimal, annual_rate: Decimal, payment: Decimal, months: int
) -> list[Decimal | None]:
    """Month-0..months balances for one payment, stepped exactly as the simulator steps."""
    rate = monthly_rate(annual_rate)
    path: list[Decimal | None] = [round_currency(balance)]
    for _ in range(months):
        if balance <= 0:
            path.append(Decimal("0"))
            continue
        balance, _interest, _applied = payoff_step(balance, rate, payment)
        path.append(balance)
    return path


def projection_comparison_series(
    account: Account,
    scenarios: list[PayoffScenario],
    max_months: int = MAX_PROJECTION_MONTHS,
) -> ChartSeries:
    """Side-by-side balance paths for up to five scenarios on a shared, capped horizon."""
    if not scenarios:
        return ChartSeries()

    display_months = min(max(s.months for s in scenarios), max_months)
    balance = to_decimal(account.current_balance)
    rate = to_decimal(account.interest_rate)

    datasets = [
        _dataset(
            scenario.name,
            scenario_balance_path(balance, rate, scenario.monthly_payment, display_months),
            SCENARIO_PALETTE[i % len(SCENARIO_PALETTE)],
        )
        for i, scenario in enumerate(scenarios[:MAX_SCENARIOS])
    ]
    return ChartSeries(
        labels=[f"Month {m}" for m in range(display_months + 1)],
        datasets=datasets,
    )


def multi_account_balance_series(ledgers: list[AccountLedger]) -> ChartSeries:
    """One balance line per account on a shared month axis.

    Months where an account has no snapshot hold None, never 0, so the
    line breaks instead of dropping to a false zero balance.
    """
    if not ledgers:
        return ChartSeries()

    keys = sorted({month_key(s.snapshot_date) for ledger in ledgers for s in ledger.snapshots})

    datasets = []
    for i, ledger in enumerate(ledgers):
        by_month = {month_key(s.snapshot_date): s.balance for s in ledger.snapshots}
        datasets.append(_dataset(
            ledger.account.name,
            [round_currency(by_month[k]) if k in by_month else None for k in keys],
            ACCOUNT_PALETTE[i % len(ACCOUNT_PALETTE)],
        ))

    return ChartSeries(labels=[label_for_key(k) for k in keys], datasets=datasets)


def snapshot_balance_series(snapshots: list[Snapshot]) -> ChartSeries:
    """Per-snapshot balances on an ISO date axis, with the drop since the previous snapshot."""
    if not snapshots:
        return ChartSeries()

    balances: list[Decimal | None] = []
    reductions: list[Decimal | None] = []
    previous: Decimal | None = None
    for s in snapshots:
        balances.append(round_currency(s.balance))
        reductions.append(round_currency(previous - s.balance) if previous is not None else Decimal("0"))
        previous = s.balance

    return ChartSeries(
        labels=[s.snapshot_date.isoformat() for s in snapshots],
        datasets=[
            _dataset("Account Balance", balances, BLUE),
            _dataset("Balance Reduction", reductions, GREEN, Renderer.BAR),
        ],
    )
