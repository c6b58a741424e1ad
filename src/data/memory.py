"""In-memory LedgerRepository for fixtures, demos and tests."""

from datetime import date

from src.models.ledger import Account, Snapshot, Transaction, TransactionKind


def _in_range(d: date, start: date | None, end: date | None) -> bool:
    if start is not None and d < start:
        return False
    if end is not None and d > end:
        return False
    return True


class InMemoryLedgerRepository:
    def __init__(
        self,
        accounts: list[Account] | None = None,
        transactions: list[Transaction] | None = None,
        snapshots: list[Snapshot] | None = None,
    ):
        self.accounts: dict[str, Account] = {a.id: a for a in accounts or []}
        self.transactions: list[Transaction] = list(transactions or [])
        self.snapshots: list[Snapshot] = list(snapshots or [])

    def add_account(self, account: Account) -> None:
        self.accounts[account.id] = account

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def add_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    async def get_account(self, account_id: str) -> Account | None:
        return self.accounts.get(account_id)

    async def list_accounts(self, user_id: str) -> list[Account]:
        return [a for a in self.accounts.values() if a.user_id == user_id]

    async def list_transactions(
        self,
        account_id: str,
        kind: TransactionKind | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Transaction]:
        rows = [
            t for t in self.transactions
            if t.account_id == account_id
            and (kind is None or t.kind is kind)
            and _in_range(t.effective_date, start, end)
        ]
        return sorted(rows, key=lambda t: t.effective_date)

    async def list_snapshots(
        self,
        account_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Snapshot]:
        rows = [
            s for s in self.snapshots
            if s.account_id == account_id and _in_range(s.snapshot_date, start, end)
        ]
        return sorted(rows, key=lambda s: s.snapshot_date)
