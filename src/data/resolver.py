"""Ledger resolver: loads an account's full ledger and enforces ownership.

Flow: account lookup → existence check → ownership check → transactions + snapshots

Optional kind/start/end filters are pushed down to the repository so charts
and forecasts that only need a slice of history don't load all of it.
"""

import logging
from datetime import date

from src.data.base import AccountAccessError, AccountNotFoundError, LedgerRepository
from src.models.ledger import Account, AccountLedger, TransactionKind

logger = logging.getLogger(__name__)


class LedgerResolver:
    def __init__(self, repository: LedgerRepository):
        self.repository = repository

    async def _assemble(
        self,
        account: Account,
        kind: TransactionKind | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> AccountLedger:
        transactions = await self.repository.list_transactions(account.id, kind, start, end)
        snapshots = await self.repository.list_snapshots(account.id, start, end)
        return AccountLedger(account=account, transactions=transactions, snapshots=snapshots)

    async def account_ledger(
        self,
        account_id: str,
        user_id: str,
        kind: TransactionKind | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> AccountLedger:
        """Load one account's ledger for its owner.

        kind restricts transactions; start/end (inclusive) restrict both
        transactions and snapshots. Raises AccountNotFoundError or
        AccountAccessError before anything is computed.
        """
        account = await self.repository.get_account(account_id)
        if account is None:
            logger.warning("Account not found: %s", account_id)
            raise AccountNotFoundError(f"Account not found: {account_id}")
        if account.user_id != user_id:
            logger.warning("User %s denied access to account %s", user_id, account_id)
            raise AccountAccessError("Unauthorized to access this account")

        ledger = await self._assemble(account, kind, start, end)
        logger.info(
            "Loaded ledger for account %s: %d transactions, %d snapshots",
            account_id, len(ledger.transactions), len(ledger.snapshots),
        )
        return ledger

    async def user_ledgers(
        self, user_id: str, start: date | None = None, end: date | None = None
    ) -> list[AccountLedger]:
        """Every ledger owned by a user. An unknown user simply has none."""
        accounts = await self.repository.list_accounts(user_id)
        ledgers = [await self._assemble(a, start=start, end=end) for a in accounts]
        logger.info("Loaded %d ledgers for user %s", len(ledgers), user_id)
        return ledgers
