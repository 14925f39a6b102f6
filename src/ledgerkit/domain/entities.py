"""Domain model entities for ledgerkit.

These are pure data classes representing business concepts, independent of
database schema. The store layer converts its rows into these before they
leave a unit of work, so nothing outside the database package ever holds an
ORM object.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Currency(str, Enum):
    """Supported account currencies."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class TransactionType(str, Enum):
    """Direction of a money movement."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class TransactionStatus(str, Enum):
    """Transaction status.

    Only COMPLETED is ever written today; PENDING and FAILED are reserved for
    asynchronous flows.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class User:
    """Account owner domain entity."""

    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    user_id: int
    balance: Decimal
    currency: Currency
    name: Optional[str]
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Committed ledger row. Amount is always positive; the type gives the sign."""

    id: int
    account_id: int
    type: TransactionType
    amount: Decimal
    status: TransactionStatus
    reference_id: str
    created_at: datetime
    updated_at: datetime
    idempotency_key: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        if self.type == TransactionType.WITHDRAWAL:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class Statement:
    """Record of a rendered statement document."""

    id: int
    user_id: int
    location: str
    statement_date: datetime
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a committed deposit or withdrawal."""

    transaction_id: int
    reference_id: str


@dataclass(frozen=True)
class TransactionFilter:
    """Conjunction of optional transaction predicates. No predicate matches all."""

    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    account_id: Optional[int] = None


@dataclass(frozen=True)
class AccountFilter:
    """Conjunction of optional account predicates."""

    min_balance: Optional[Decimal] = None
    max_balance: Optional[Decimal] = None
    currency: Optional[Currency] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None


@dataclass(frozen=True)
class SortRequest:
    """Requested ordering as supplied by the caller (not yet validated)."""

    field: Optional[str] = None
    direction: Optional[str] = None


@dataclass(frozen=True)
class SortOrder:
    """Validated ordering: a field from an allow-list and ASC/DESC."""

    field: str
    descending: bool


@dataclass(frozen=True)
class Pagination:
    """1-indexed page request."""

    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Page:
    """One page of results plus the total matching the same filter."""

    items: list
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)


@dataclass(frozen=True)
class StatementRequest:
    """Reporting period and optional narrowing for a statement."""

    start_date: datetime
    end_date: datetime
    account_id: Optional[int] = None
    item_count: Optional[int] = None
    currency: Optional[Currency] = None


@dataclass(frozen=True)
class BalanceSummary:
    """A user's accounts plus their balances totalled per currency."""

    accounts: list[Account]
    balances_by_currency: dict[Currency, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class StatementData:
    """Everything a renderer needs for one statement."""

    user: User
    transactions: list[Transaction]
    closing_balance: Decimal
