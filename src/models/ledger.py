"""Read-only views of the ledger records owned by the persistence layer."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class AccountType(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    PERSONAL_LOAN = "PERSONAL_LOAN"
    AUTO_LOAN = "AUTO_LOAN"
    STUDENT_LOAN = "STUDENT_LOAN"
    MORTGAGE = "MORTGAGE"
    OTHER = "OTHER"


class TransactionKind(Enum):
    PAYMENT = "PAYMENT"
    CHARGE = "CHARGE"
    INTEREST = "INTEREST"
    ADJUSTMENT = "ADJUSTMENT"  # Signed: positive raises the balance, negative lowers it


@dataclass(frozen=True)
class Account:
    id: str
    user_id: str
    name: str
    current_balance: Decimal
    interest_rate: Decimal  # Annual percentage, e.g. Decimal("18.99")
    account_type: AccountType = AccountType.CREDIT_CARD
    credit_limit: Decimal | None = None
    minimum_payment: Decimal | None = None
    due_day: int | None = None
    is_active: bool = True
    created_at: date = field(default_factory=date.today)


@dataclass(frozen=True)
class Transaction:
    id: str
    account_id: str
    amount: Decimal
    kind: TransactionKind
    effective_date: date
    description: str | None = None


@dataclass(frozen=True)
class Snapshot:
    id: str
    account_id: str
    balance: Decimal
    snapshot_date: date
    notes: str | None = None


@dataclass(frozen=True)
class AccountLedger:
    """One account with its transactions and snapshots, both ordered by date ascending."""
    account: Account
    transactions: list[Transaction] = field(default_factory=list)
    snapshots: list[Snapshot] = field(default_factory=list)

    @property
    def baseline_balance(self) -> Decimal:
        """Earliest snapshot balance, or the current balance when no snapshot exists."""
        if self.snapshots:
            return self.snapshots[0].balance
        return self.account.current_balance

    @property
    def baseline_date(self) -> date:
        if self.snapshots:
            return self.snapshots[0].snapshot_date
        return self.account.created_at

    def transactions_of(self, kind: TransactionKind) -> list[Transaction]:
        return [t for t in self.transactions if t.kind is kind]
