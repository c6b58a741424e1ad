"""Interest history reconstruction and near-term interest estimates.

Pure functions. No I/O (ledger passed in as arguments).
"""

from datetime import date
from decimal import Decimal

from src.engine.financial import (
    Number,
    add_months,
    label_for_key,
    month_key,
    monthly_rate,
    round_currency,
    to_decimal,
)
from src.models.ledger import AccountLedger, TransactionKind
from src.models.results import InterestForecast, InterestHistoryEntry

DEFAULT_WINDOW_MONTHS = 12


def daily_interest(balance: Number, annual_rate: Number) -> Decimal:
    balance = to_decimal(balance)
    annual_rate = to_decimal(annual_rate)
    if balance <= 0 or annual_rate <= 0:
        return Decimal("0")
    return round_currency(balance * annual_rate / 365 / 100)


def monthly_interest(balance: Number, annual_rate: Number) -> Decimal:
    balance = to_decimal(balance)
    annual_rate = to_decimal(annual_rate)
    if balance <= 0 or annual_rate <= 0:
        return Decimal("0")
    return round_currency(balance * monthly_rate(annual_rate))


def compound_interest(principal: Number, annual_rate: Number, months: int) -> Decimal:
    """Interest accrued on principal compounding monthly with no payments."""
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    if principal <= 0 or annual_rate <= 0 or months <= 0:
        return Decimal("0")
    final_amount = principal * (1 + monthly_rate(annual_rate)) ** months
    return round_currency(final_amount - principal)


def interest_history(
    ledger: AccountLedger, start: date, end: date
) -> list[InterestHistoryEntry]:
    """Monthly interest charged between start and end (inclusive).

    Interest amounts come from INTEREST transactions; each month's balance is
    the last snapshot captured in that month. A month present in only one of
    the two sources still appears, with the other field at 0.
    """
    buckets: dict[str, dict[str, Decimal]] = {}

    for t in ledger.transactions_of(TransactionKind.INTEREST):
        if start <= t.effective_date <= end:
            bucket = buckets.setdefault(
                month_key(t.effective_date), {"amount": Decimal("0"), "balance": Decimal("0")}
            )
            bucket["amount"] += t.amount

    for s in ledger.snapshots:
        if start <= s.snapshot_date <= end:
            bucket = buckets.setdefault(
                month_key(s.snapshot_date), {"amount": Decimal("0"), "balance": Decimal("0")}
            )
            bucket["balance"] = s.balance

    return [
        InterestHistoryEntry(
            month=label_for_key(key),
            interest_amount=round_currency(buckets[key]["amount"]),
            balance=round_currency(buckets[key]["balance"]),
        )
        for key in sorted(buckets)
    ]


def total_interest_paid(ledger: AccountLedger) -> Decimal:
    """All INTEREST ever charged to the account."""
    return round_currency(
        sum((t.amount for t in ledger.transactions_of(TransactionKind.INTEREST)), Decimal("0"))
    )


def estimate_next_month_interest(ledger: AccountLedger) -> Decimal:
    """Instantaneous estimate from the live balance and rate."""
    account = ledger.account
    return monthly_interest(account.current_balance, account.interest_rate)


def average_monthly_interest(
    ledger: AccountLedger,
    months: int = DEFAULT_WINDOW_MONTHS,
    as_of: date | None = None,
) -> Decimal:
    """Window interest divided by the number of months that actually had interest.

    Sparse histories therefore average over active months only, not the window length.
    """
    end = as_of or date.today()
    start = add_months(end, -months)
    charges = [
        t for t in ledger.transactions_of(TransactionKind.INTEREST)
        if start <= t.effective_date <= end
    ]
    if not charges:
        return Decimal("0")

    total = sum((t.amount for t in charges), Decimal("0"))
    active_months = {month_key(t.effective_date) for t in charges}
    return round_currency(total / len(active_months))


def interest_forecast(
    ledger: AccountLedger,
    months: int = DEFAULT_WINDOW_MONTHS,
    as_of: date | None = None,
) -> InterestForecast:
    end = as_of or date.today()
    start = add_months(end, -months)
    return InterestForecast(
        history=interest_history(ledger, start, end),
        total_interest_paid=total_interest_paid(ledger),
        next_month_estimate=estimate_next_month_interest(ledger),
        average_monthly_interest=average_monthly_interest(ledger, months, end),
    )
