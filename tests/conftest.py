"""Canonical ledger fixtures used across engine, data and API tests.

Fixture: $4,000 credit card at 18% APR ($100 minimum), tracked since Jan 2025
from a $5,000 first snapshot, with five monthly payments, monthly interest,
one charge and one negative adjustment. A second $1,500 loan at 6% is
closed (inactive) and only has two snapshots and one payment.
Reference date: 2025-06-15.
"""

import pytest
from datetime import date
from decimal import Decimal

from src.data.memory import InMemoryLedgerRepository
from src.models.ledger import (
    Account,
    AccountLedger,
    AccountType,
    Snapshot,
    Transaction,
    TransactionKind,
)

AS_OF = date(2025, 6, 15)
USER_ID = "user-1"


def _txn(n: int, account_id: str, kind: TransactionKind, amount: str, on: date) -> Transaction:
    return Transaction(
        id=f"{account_id}-t{n}",
        account_id=account_id,
        amount=Decimal(amount),
        kind=kind,
        effective_date=on,
    )


def _snap(n: int, account_id: str, balance: str, on: date) -> Snapshot:
    return Snapshot(id=f"{account_id}-s{n}", account_id=account_id, balance=Decimal(balance), snapshot_date=on)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def card_account() -> Account:
    return Account(
        id="card-1",
        user_id=USER_ID,
        name="Rewards Card",
        current_balance=Decimal("4000"),
        interest_rate=Decimal("18"),
        minimum_payment=Decimal("100"),
        due_day=5,
        created_at=date(2024, 12, 1),
    )


@pytest.fixture
def card_transactions() -> list[Transaction]:
    P, C, I, A = (
        TransactionKind.PAYMENT,
        TransactionKind.CHARGE,
        TransactionKind.INTEREST,
        TransactionKind.ADJUSTMENT,
    )
    rows = [
        (P, "300", date(2025, 1, 5)),
        (I, "75", date(2025, 1, 20)),
        (P, "300", date(2025, 2, 5)),
        (I, "70", date(2025, 2, 20)),
        (P, "400", date(2025, 3, 5)),
        (C, "50", date(2025, 3, 10)),
        (I, "65", date(2025, 3, 20)),
        (P, "300", date(2025, 4, 5)),
        (I, "60", date(2025, 4, 20)),
        (P, "300", date(2025, 5, 5)),
        (A, "-25", date(2025, 5, 12)),
        (I, "55", date(2025, 5, 20)),
    ]
    return [_txn(i, "card-1", kind, amount, on) for i, (kind, amount, on) in enumerate(rows)]


@pytest.fixture
def card_snapshots() -> list[Snapshot]:
    rows = [
        ("5000", date(2025, 1, 1)),
        ("4780", date(2025, 2, 1)),
        ("4550", date(2025, 3, 1)),
        ("4270", date(2025, 4, 1)),
        ("4030", date(2025, 5, 1)),
        ("4000", date(2025, 6, 1)),
    ]
    return [_snap(i, "card-1", balance, on) for i, (balance, on) in enumerate(rows)]


@pytest.fixture
def card_ledger(card_account, card_transactions, card_snapshots) -> AccountLedger:
    return AccountLedger(account=card_account, transactions=card_transactions, snapshots=card_snapshots)


@pytest.fixture
def loan_ledger() -> AccountLedger:
    account = Account(
        id="loan-1",
        user_id=USER_ID,
        name="Car Loan",
        current_balance=Decimal("1500"),
        interest_rate=Decimal("6"),
        account_type=AccountType.AUTO_LOAN,
        is_active=False,
        created_at=date(2025, 2, 15),
    )
    return AccountLedger(
        account=account,
        transactions=[_txn(0, "loan-1", TransactionKind.PAYMENT, "500", date(2025, 4, 10))],
        snapshots=[
            _snap(0, "loan-1", "2000", date(2025, 3, 1)),
            _snap(1, "loan-1", "1500", date(2025, 6, 1)),
        ],
    )


@pytest.fixture
def empty_ledger() -> AccountLedger:
    """Fresh account with no history and no minimum payment."""
    account = Account(
        id="new-1",
        user_id=USER_ID,
        name="New Card",
        current_balance=Decimal("800"),
        interest_rate=Decimal("24"),
        created_at=date(2025, 6, 1),
    )
    return AccountLedger(account=account)


@pytest.fixture
def repository(card_ledger, loan_ledger) -> InMemoryLedgerRepository:
    """Both fixture ledgers plus an account owned by someone else."""
    repo = InMemoryLedgerRepository()
    for ledger in (card_ledger, loan_ledger):
        repo.add_account(ledger.account)
        for t in reversed(ledger.transactions):
            repo.add_transaction(t)
        for s in reversed(ledger.snapshots):
            repo.add_snapshot(s)
    repo.add_account(Account(
        id="other-1",
        user_id="user-2",
        name="Someone Else's Card",
        current_balance=Decimal("900"),
        interest_rate=Decimal("20"),
    ))
    return repo
