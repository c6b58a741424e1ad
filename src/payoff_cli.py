"""CLI for trying payoff what-ifs without a database.

Usage:
    python -m src.payoff_cli --balance 5000 --rate 18.99 --payment 200
    python -m src.payoff_cli --balance 5000 --rate 18.99 --payment 200 --minimum 75 --target-months 24
    python -m src.payoff_cli --balance 5000 --rate 18.99 --payment 200 --schedule
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from src.config import settings
from src.engine.debt import required_payment, simulate_payoff
from src.engine.scenarios import payoff_scenarios
from src.models.ledger import Account, AccountLedger, Transaction, TransactionKind
from src.models.results import PayoffProjection, PayoffScenario


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def print_projection(projection: PayoffProjection, payment: Decimal) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Payoff at ${payment:,.2f}/mo")
    print(f"{'=' * 60}")
    if projection.error:
        print(f"  {projection.error}")
        print(f"  Balance remaining:  ${projection.final_balance:,.2f}")
        print()
        return
    years, months = divmod(projection.months, 12)
    print(f"  Months to payoff:   {projection.months} ({years}y {months}m)")
    print(f"  Total interest:     ${projection.total_interest:,.2f}")
    print()


def print_scenarios(scenarios: list[PayoffScenario]) -> None:
    print(f"  {'Scenario':<22} {'Payment':>10} {'Months':>7} {'Interest':>12} {'Total':>12}")
    print(f"  {'-' * 22} {'-' * 10} {'-' * 7} {'-' * 12} {'-' * 12}")
    for s in scenarios:
        if s.error:
            print(f"  {s.name:<22} {s.monthly_payment:>10,.2f}  {s.error}")
            continue
        print(
            f"  {s.name:<22} {s.monthly_payment:>10,.2f} {s.months:>7}"
            f" {s.total_interest:>12,.2f} {s.total_paid:>12,.2f}"
        )
    print()


def print_schedule(projection: PayoffProjection) -> None:
    print(f"  {'Month':>5} {'Payment':>10} {'Interest':>10} {'Principal':>10} {'Balance':>12}")
    for row in projection.monthly_breakdown:
        print(
            f"  {row.month:>5} {row.payment_amount:>10,.2f} {row.interest_charged:>10,.2f}"
            f" {row.principal_paid:>10,.2f} {row.balance:>12,.2f}"
        )
    print()


def build_ledger(balance: Decimal, rate: Decimal, payment: Decimal, minimum: Decimal | None) -> AccountLedger:
    """A one-account ledger whose recent history is a single payment of `payment`."""
    today = date.today()
    account = Account(
        id="cli",
        user_id="cli",
        name="What-if",
        current_balance=balance,
        interest_rate=rate,
        minimum_payment=minimum,
        created_at=today,
    )
    trend = Transaction(
        id="cli-payment",
        account_id=account.id,
        amount=payment,
        kind=TransactionKind.PAYMENT,
        effective_date=today,
    )
    return AccountLedger(account=account, transactions=[trend])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Debt payoff what-if calculator")
    parser.add_argument("--balance", type=_decimal, required=True, help="Current balance")
    parser.add_argument("--rate", type=_decimal, required=True, help="Annual interest rate in percent, e.g. 18.99")
    parser.add_argument("--payment", type=_decimal, required=True, help="Monthly payment to simulate")
    parser.add_argument("--minimum", type=_decimal, default=None, help="Minimum payment on the account")
    parser.add_argument("--target-months", type=int, default=None, help="Also solve for the payment that clears the debt in N months")
    parser.add_argument("--schedule", action="store_true", help="Print the month-by-month schedule")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    projection = simulate_payoff(args.balance, args.rate, args.payment)
    print_projection(projection, args.payment)

    ledger = build_ledger(args.balance, args.rate, args.payment, args.minimum)
    print_scenarios(payoff_scenarios(ledger, settings.default_lookback_months))

    if args.target_months is not None:
        result = required_payment(args.balance, args.rate, args.target_months)
        if result.error:
            print(f"  {result.error}", file=sys.stderr)
            return 1
        print(f"  Required payment for {result.target_months} months: ${result.monthly_payment:,.2f}/mo")
        print()

    if args.schedule and not projection.error:
        print_schedule(projection)

    return 0


if __name__ == "__main__":
    sys.exit(main())
