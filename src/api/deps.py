"""FastAPI dependency injection."""

from datetime import date

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from src.config import settings
from src.data.base import AccountAccessError, AccountNotFoundError, LedgerRepository
from src.data.resolver import LedgerResolver
from src.data.sql import SqlLedgerRepository
from src.models.ledger import AccountLedger, TransactionKind

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_repository(session: AsyncSession = Depends(get_db)) -> LedgerRepository:
    return SqlLedgerRepository(session)


def get_resolver(repository: LedgerRepository = Depends(get_repository)) -> LedgerResolver:
    return LedgerResolver(repository)


def get_user_id(x_user_id: str = Header(..., description="Authenticated user ID")) -> str:
    return x_user_id


def get_as_of() -> date:
    """Reference date for trailing windows and projected dates."""
    return date.today()


async def load_account_ledger(
    resolver: LedgerResolver,
    account_id: str,
    user_id: str,
    kind: TransactionKind | None = None,
    start: date | None = None,
    end: date | None = None,
) -> AccountLedger:
    """Resolve a ledger, translating precondition failures into HTTP errors."""
    try:
        return await resolver.account_ledger(account_id, user_id, kind, start, end)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AccountAccessError as e:
        raise HTTPException(status_code=403, detail=str(e))
