"""Protocol definitions for ledger storage.

The engine never talks to storage; request handlers load ledgers through a
LedgerRepository and hand plain records to the engine.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from src.models.ledger import Account, Snapshot, Transaction, TransactionKind


class AccountNotFoundError(LookupError):
    """The requested account does not exist."""


class AccountAccessError(PermissionError):
    """The account exists but belongs to another user."""


@runtime_checkable
class LedgerRepository(Protocol):
    async def get_account(self, account_id: str) -> Account | None:
        """Fetch a single account, or None if it does not exist."""
        ...

    async def list_accounts(self, user_id: str) -> list[Account]:
        """All accounts owned by a user."""
        ...

    async def list_transactions(
        self,
        account_id: str,
        kind: TransactionKind | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Transaction]:
        """Transactions for an account, ordered by effective date ascending."""
        ...

    async def list_snapshots(
        self,
        account_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Snapshot]:
        """Snapshots for an account, ordered by snapshot date ascending."""
        ...
