"""SQLAlchemy models for the ledgerkit database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.types import TypeDecorator

Base = declarative_base()

CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Money(TypeDecorator):
    """Two-decimal amount stored as integer cents.

    Keeps ``balance = balance + :delta`` exact on every backend, including
    SQLite, which has no fixed-point column type.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        cents = Decimal(value) * 100
        if cents != cents.to_integral_value():
            raise ValueError(f"Amount {value} has more than two decimal places")
        return int(cents)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) / 100).quantize(CENT)


class User(Base):
    """Account owner model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="user")
    statements = relationship("Statement", back_populates="user")


class Account(Base):
    """Bank account model. ``balance`` is only changed by money movements."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    balance = Column(Money, default=Decimal("0.00"), nullable=False)
    currency = Column(String(3), nullable=False)
    account_name = Column(String, nullable=True)
    account_description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Ledger row. Inserted once, never updated or deleted."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    transaction_type = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    status = Column(String, nullable=False)
    reference_id = Column(String(36), unique=True, nullable=False)
    idempotency_key = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("account_id", "idempotency_key", name="uq_account_idempotency_key"),
        Index("ix_transactions_account_created", "account_id", "created_at"),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions")


class Statement(Base):
    """Rendered statement location."""

    __tablename__ = "statements"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    pdf_url = Column(String, nullable=False)
    statement_date = Column(DateTime, default=_utcnow, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="statements")
