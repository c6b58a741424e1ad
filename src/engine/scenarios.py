"""Payoff scenario generation: named what-if payments run through the simulator.

Pure functions. No I/O (ledger passed in as arguments).
"""

import logging
from datetime import date
from decimal import Decimal

from src.engine.debt import simulate_payoff
from src.engine.financial import Number, add_months, mean, round_currency, to_decimal
from src.models.ledger import Account, AccountLedger, TransactionKind
from src.models.results import PayoffProjection, PayoffScenario

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_MONTHS = 3
EXTRA_PAYMENTS = (Decimal("50"), Decimal("100"), Decimal("200"))

NO_MINIMUM_PAYMENT = "Account does not have a minimum payment set"
NO_RECENT_PAYMENTS = "No recent payment history available to calculate trend"


def recent_payments(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> list[Decimal]:
    """PAYMENT amounts dated on or after as_of minus the lookback window."""
    since = add_months(as_of or date.today(), -lookback_months)
    return [
        t.amount
        for t in ledger.transactions_of(TransactionKind.PAYMENT)
        if t.effective_date >= since
    ]


def current_trend_payment(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> Decimal:
    """Mean recent payment; 0 when there is no recent payment."""
    return mean(recent_payments(ledger, lookback_months, as_of))


def minimum_payment_projection(account: Account) -> PayoffProjection:
    minimum = account.minimum_payment or Decimal("0")
    if minimum <= 0:
        return PayoffProjection(final_balance=account.current_balance, error=NO_MINIMUM_PAYMENT)
    return simulate_payoff(account.current_balance, account.interest_rate, minimum)


def current_trend_projection(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> PayoffProjection:
    """Projection at the average payment actually made over the lookback window."""
    payments = recent_payments(ledger, lookback_months, as_of)
    account = ledger.account
    if not payments:
        return PayoffProjection(final_balance=account.current_balance, error=NO_RECENT_PAYMENTS)
    return simulate_payoff(account.current_balance, account.interest_rate, mean(payments))


def custom_projection(account: Account, monthly_payment: Number) -> PayoffProjection:
    return simulate_payoff(account.current_balance, account.interest_rate, monthly_payment)


def _scenario(name: str, account: Account, payment: Decimal) -> PayoffScenario:
    # Cent-rounded so the projection chart replays exactly this payment
    payment = round_currency(payment)
    projection = simulate_payoff(account.current_balance, account.interest_rate, payment)
    if projection.error:
        logger.debug("Scenario %r for account %s: %s", name, account.id, projection.error)
    return PayoffScenario(
        name=name,
        monthly_payment=payment,
        months=projection.months,
        total_interest=projection.total_interest,
        total_paid=round_currency(account.current_balance + projection.total_interest),
        error=projection.error,
    )


def payoff_scenarios(
    ledger: AccountLedger,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
    as_of: date | None = None,
) -> list[PayoffScenario]:
    """Build up to five comparison scenarios.

    Minimum Payment (if set), Current Trend (if recent payments exist), then
    Extra $50/$100/$200 on top of the larger of the two when that base is positive.
    A scenario whose simulation fails is still returned with its error.
    """
    account = ledger.account
    minimum = to_decimal(account.minimum_payment or 0)
    trend = current_trend_payment(ledger, lookback_months, as_of)

    scenarios: list[PayoffScenario] = []
    if minimum > 0:
        scenarios.append(_scenario("Minimum Payment", account, minimum))
    if trend > 0:
        scenarios.append(_scenario("Current Trend", account, trend))

    base = max(minimum, trend, Decimal("0"))
    if base > 0:
        for extra in EXTRA_PAYMENTS:
            scenarios.append(_scenario(f"Extra ${extra}/month", account, base + extra))

    return scenarios
