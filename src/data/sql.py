"""SQLAlchemy-backed LedgerRepository."""

import logging
import uuid
from datetime import date, datetime, time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.db import AccountRecord, SnapshotRecord, TransactionRecord
from src.models.ledger import Account, AccountType, Snapshot, Transaction, TransactionKind

logger = logging.getLogger(__name__)


def _parse_id(raw: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def _to_account(row: AccountRecord) -> Account:
    return Account(
        id=str(row.id),
        user_id=str(row.user_id),
        name=row.name,
        current_balance=row.current_balance,
        interest_rate=row.interest_rate,
        account_type=AccountType(row.account_type),
        credit_limit=row.credit_limit,
        minimum_payment=row.minimum_payment,
        due_day=row.due_day,
        is_active=row.is_active,
        created_at=row.created_at.date() if row.created_at else date.today(),
    )


def _to_transaction(row: TransactionRecord) -> Transaction:
    return Transaction(
        id=str(row.id),
        account_id=str(row.account_id),
        amount=row.amount,
        kind=TransactionKind(row.transaction_type),
        effective_date=row.transaction_date.date(),
        description=row.description,
    )


def _to_snapshot(row: SnapshotRecord) -> Snapshot:
    return Snapshot(
        id=str(row.id),
        account_id=str(row.account_id),
        balance=row.balance,
        snapshot_date=row.snapshot_date.date(),
        notes=row.notes,
    )


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_account(self, account_id: str) -> Account | None:
        pk = _parse_id(account_id)
        if pk is None:
            logger.debug("Malformed account id: %s", account_id)
            return None
        row = await self.session.get(AccountRecord, pk)
        return _to_account(row) if row is not None else None

    async def list_accounts(self, user_id: str) -> list[Account]:
        pk = _parse_id(user_id)
        if pk is None:
            return []
        result = await self.session.scalars(
            select(AccountRecord)
            .where(AccountRecord.user_id == pk)
            .order_by(AccountRecord.created_at)
        )
        return [_to_account(row) for row in result]

    async def list_transactions(
        self,
        account_id: str,
        kind: TransactionKind | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Transaction]:
        pk = _parse_id(account_id)
        if pk is None:
            return []
        stmt = select(TransactionRecord).where(TransactionRecord.account_id == pk)
        if kind is not None:
            stmt = stmt.where(TransactionRecord.transaction_type == kind.value)
        if start is not None:
            stmt = stmt.where(TransactionRecord.transaction_date >= datetime.combine(start, time.min))
        if end is not None:
            stmt = stmt.where(TransactionRecord.transaction_date <= datetime.combine(end, time.max))
        result = await self.session.scalars(stmt.order_by(TransactionRecord.transaction_date))
        return [_to_transaction(row) for row in result]

    async def list_snapshots(
        self,
        account_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Snapshot]:
        pk = _parse_id(account_id)
        if pk is None:
            return []
        stmt = select(SnapshotRecord).where(SnapshotRecord.account_id == pk)
        if start is not None:
            stmt = stmt.where(SnapshotRecord.snapshot_date >= datetime.combine(start, time.min))
        if end is not None:
            stmt = stmt.where(SnapshotRecord.snapshot_date <= datetime.combine(end, time.max))
        result = await self.session.scalars(stmt.order_by(SnapshotRecord.snapshot_date))
        return [_to_snapshot(row) for row in result]
