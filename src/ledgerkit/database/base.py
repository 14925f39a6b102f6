"""Abstract ledger store interface.

All reads and writes go through :meth:`Database.run_atomic`, which hands the
unit-of-work function a :class:`LedgerHandle` bound to one database
transaction. Returning normally commits; raising rolls everything back.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, TypeVar
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    AccountFilter,
    Currency,
    SortOrder,
    Statement,
    StatementRequest,
    Transaction,
    TransactionFilter,
    TransactionStatus,
    TransactionType,
    User,
)

T = TypeVar("T")


class IsolationLevel(str, Enum):
    """Transaction isolation levels a unit of work may request."""

    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


class LedgerHandle(ABC):
    """Operations available inside one unit of work."""

    @abstractmethod
    def check_deadline(self) -> None:
        """Raise DeadlineExceededError if the unit has run out of time."""
        pass

    # Users
    @abstractmethod
    def insert_user(self, first_name: str, last_name: str, email: str) -> User:
        """Insert a user. Raises ConflictError if the email is taken."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        pass

    # Accounts
    @abstractmethod
    def insert_account(
        self,
        user_id: int,
        currency: Currency,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Account:
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        pass

    @abstractmethod
    def lock_account_balance(self, account_id: int) -> Optional[Decimal]:
        """Read the committed balance under an exclusive row lock.

        Returns None if the account does not exist.
        """
        pass

    @abstractmethod
    def apply_balance_delta(self, account_id: int, delta: Decimal) -> int:
        """Atomically add ``delta`` to the balance. Returns rows affected."""
        pass

    @abstractmethod
    def list_user_accounts(self, user_id: int) -> list[Account]:
        """All accounts of a user ordered by currency, then id."""
        pass

    @abstractmethod
    def count_accounts(self, user_id: int, account_filter: Optional[AccountFilter]) -> int:
        pass

    @abstractmethod
    def select_accounts(
        self,
        user_id: int,
        account_filter: Optional[AccountFilter],
        order: SortOrder,
        limit: int,
        offset: int,
    ) -> list[Account]:
        pass

    @abstractmethod
    def count_account_transactions(self, account_id: int) -> int:
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> int:
        """Delete an account row. Returns rows affected."""
        pass

    # Transactions
    @abstractmethod
    def insert_transaction(
        self,
        account_id: int,
        transaction_type: TransactionType,
        amount: Decimal,
        status: TransactionStatus,
        reference_id: str,
        idempotency_key: Optional[str] = None,
    ) -> int:
        """Insert one ledger row. Returns the transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        pass

    @abstractmethod
    def find_transaction_by_idempotency_key(
        self, account_id: int, idempotency_key: str
    ) -> Optional[Transaction]:
        pass

    @abstractmethod
    def count_transactions(
        self, owner_id: int, transaction_filter: Optional[TransactionFilter]
    ) -> int:
        """Count a user's transactions matching the filter (no limit/offset)."""
        pass

    @abstractmethod
    def select_transactions(
        self,
        owner_id: int,
        transaction_filter: Optional[TransactionFilter],
        order: SortOrder,
        limit: int,
        offset: int,
    ) -> list[Transaction]:
        pass

    @abstractmethod
    def select_statement_transactions(
        self, owner_id: int, request: StatementRequest
    ) -> list[Transaction]:
        """A user's transactions in the statement range, most recent first."""
        pass

    # Statements
    @abstractmethod
    def insert_statement(self, user_id: int, location: str, statement_date: datetime) -> Statement:
        pass

    @abstractmethod
    def get_statement(self, statement_id: int) -> Optional[Statement]:
        pass

    @abstractmethod
    def count_statements(self, user_id: int) -> int:
        pass

    @abstractmethod
    def select_statements(self, user_id: int, limit: int, offset: int) -> list[Statement]:
        pass


class Database(ABC):
    """Abstract ledger store."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database and release pooled connections."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def run_atomic(
        self,
        isolation: IsolationLevel,
        fn: Callable[[LedgerHandle], T],
        *,
        read_only: bool = False,
        timeout: Optional[float] = None,
        operation: str = "unit of work",
        account_id: Optional[int] = None,
    ) -> T:
        """Run ``fn`` as one all-or-nothing unit of work.

        Args:
            isolation: Requested isolation level
            fn: Unit-of-work function receiving a LedgerHandle
            read_only: Run as a read-only snapshot
            timeout: Seconds before the unit is abandoned and rolled back
            operation: Name used in logs and error context
            account_id: Account used in logs and error context

        Returns:
            Whatever ``fn`` returns, after commit

        Raises:
            DomainError: Raised by ``fn``; the unit is rolled back
            PersistenceError: Store fault or expired deadline; the unit is
                rolled back
        """
        pass
