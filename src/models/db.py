"""SQLAlchemy ORM models for the ledger's four-table schema."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    Numeric,
    DateTime,
    Boolean,
    ForeignKey,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    email: Mapped[str] = mapped_column(String(255), unique=True)
    name: Mapped[str] = mapped_column(String(100), default="")

    accounts: Mapped[list["AccountRecord"]] = relationship(back_populates="user")


class AccountRecord(Base):
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    account_type: Mapped[str] = mapped_column(String(30), default="CREDIT_CARD")

    current_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    credit_limit: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    interest_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2))  # Annual percentage
    minimum_payment: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    due_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    user: Mapped["UserRecord"] = relationship(back_populates="accounts")
    transactions: Mapped[list["TransactionRecord"]] = relationship(back_populates="account")
    snapshots: Mapped[list["SnapshotRecord"]] = relationship(back_populates="account")


class TransactionRecord(Base):
    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    account_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("accounts.id"), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    transaction_type: Mapped[str] = mapped_column(String(20))  # PAYMENT, CHARGE, INTEREST, ADJUSTMENT
    transaction_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    account: Mapped["AccountRecord"] = relationship(back_populates="transactions")


class SnapshotRecord(Base):
    __tablename__ = "snapshots"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    account_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("accounts.id"), index=True)
    balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    snapshot_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    account: Mapped["AccountRecord"] = relationship(back_populates="snapshots")
