"""Payoff simulation for revolving and installment debt.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal

from src.engine.financial import Number, monthly_rate, round_currency, to_decimal
from src.models.results import MonthlyBreakdown, PayoffProjection, RequiredPayment

MAX_MONTHS = 600  # 50 years
PAID_OFF_FLOOR = Decimal("0.01")

NON_POSITIVE_PAYMENT = "Monthly payment must be greater than zero"
PAYMENT_BELOW_INTEREST = "Payment must exceed monthly interest to pay off debt"
CEILING_REACHED = f"Debt is not paid off within the {MAX_MONTHS}-month limit"
NON_POSITIVE_TARGET = "Target months must be greater than zero"


def payoff_step(
    balance: Decimal, rate: Decimal, payment: Decimal
) -> tuple[Decimal, Decimal, Decimal]:
    """Advance one month: accrue interest, then apply the payment.

    The payment is capped at the post-interest balance so the final month
    never overpays. Returns (ending_balance, interest_charged, payment_applied).
    """
    interest = round_currency(balance * rate)
    owed = balance + interest
    applied = min(payment, owed)
    ending = round_currency(owed - applied)
    if ending < PAID_OFF_FLOOR:
        ending = Decimal("0")
    return ending, interest, applied


def simulate_payoff(
    balance: Number, annual_rate: Number, monthly_payment: Number
) -> PayoffProjection:
    """Simulate month-by-month paydown of a balance at a fixed payment.

    Args:
        balance: Current balance
        annual_rate: Annual interest rate as a percentage (e.g. 18.99)
        monthly_payment: Payment made every month
    """
    balance = to_decimal(balance)
    payment = to_decimal(monthly_payment)

    if balance <= 0:
        return PayoffProjection()

    if payment <= 0:
        return PayoffProjection(final_balance=balance, error=NON_POSITIVE_PAYMENT)

    rate = monthly_rate(annual_rate)
    if payment <= balance * rate:
        return PayoffProjection(
            months=MAX_MONTHS, final_balance=balance, error=PAYMENT_BELOW_INTEREST
        )

    breakdown: list[MonthlyBreakdown] = []
    total_interest = Decimal("0")
    month = 0

    while balance > 0 and month < MAX_MONTHS:
        month += 1
        balance, interest, applied = payoff_step(balance, rate, payment)
        total_interest += interest
        breakdown.append(MonthlyBreakdown(
            month=month,
            balance=balance,
            interest_charged=interest,
            payment_amount=applied,
            principal_paid=round_currency(applied - interest),
        ))

    return PayoffProjection(
        months=month,
        total_interest=round_currency(total_interest),
        final_balance=balance,
        monthly_breakdown=breakdown,
        error=CEILING_REACHED if balance > 0 else None,
    )


def required_payment(
    balance: Number, annual_rate: Number, target_months: int
) -> RequiredPayment:
    """Level monthly payment that retires balance in target_months.

    P = r * PV / (1 - (1 + r)^-n)
    """
    if target_months <= 0:
        return RequiredPayment(target_months=target_months, error=NON_POSITIVE_TARGET)

    balance = to_decimal(balance)
    if balance <= 0:
        return RequiredPayment(target_months=target_months)

    r = monthly_rate(annual_rate)
    if r == 0:
        payment = balance / target_months
    else:
        payment = r * balance / (1 - (1 + r) ** -target_months)

    return RequiredPayment(
        target_months=target_months,
        monthly_payment=round_currency(payment),
    )
