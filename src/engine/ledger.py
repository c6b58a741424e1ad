"""Transaction classification: the one place that decides which way money moves.

Pure functions. No I/O.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from src.engine.financial import round_currency
from src.models.ledger import Transaction, TransactionKind


class Movement(Enum):
    REDUCTION = "reduction"
    INCREASE = "increase"


def classify(transaction: Transaction) -> Movement:
    """PAYMENT and negative ADJUSTMENT reduce debt; everything else increases it."""
    kind = transaction.kind
    if kind is TransactionKind.PAYMENT:
        return Movement.REDUCTION
    if kind is TransactionKind.ADJUSTMENT and transaction.amount <= 0:
        return Movement.REDUCTION
    return Movement.INCREASE


@dataclass
class LedgerTotals:
    payments: Decimal = Decimal("0")  # PAYMENT plus |negative ADJUSTMENT|
    charges: Decimal = Decimal("0")  # CHARGE + INTEREST + positive ADJUSTMENT
    interest: Decimal = Decimal("0")
    fees: Decimal = Decimal("0")  # CHARGE + positive ADJUSTMENT
    payment_amounts: list[Decimal] = field(default_factory=list)

    @property
    def total_reduction(self) -> Decimal:
        """Net paydown. Negative when the debt grew."""
        return round_currency(self.payments - self.charges)

    def add(self, transaction: Transaction) -> None:
        amount = transaction.amount
        if transaction.kind is TransactionKind.ADJUSTMENT:
            amount = abs(amount)

        if classify(transaction) is Movement.REDUCTION:
            self.payments += amount
            if transaction.kind is TransactionKind.PAYMENT:
                self.payment_amounts.append(transaction.amount)
            return

        self.charges += amount
        if transaction.kind is TransactionKind.INTEREST:
            self.interest += amount
        else:
            self.fees += amount


def tally(transactions: list[Transaction]) -> LedgerTotals:
    totals = LedgerTotals()
    for t in transactions:
        totals.add(t)
    return totals
