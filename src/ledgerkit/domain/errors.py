"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is not a finite positive number within the configured ceiling."""


class InvalidCurrencyError(ValidationError):
    """Currency code outside the supported set."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class AccountNotFoundError(NotFoundError):
    """Account does not exist (or vanished during a unit of work)."""

    def __init__(self, account_id: int):
        super().__init__(account_not_found(account_id))
        self.account_id = account_id


class UserNotFoundError(NotFoundError):
    """User does not exist."""

    def __init__(self, user_id: int):
        super().__init__(user_not_found(user_id))
        self.user_id = user_id


class TransactionNotFoundError(NotFoundError):
    """Transaction does not exist."""


class StatementNotFoundError(NotFoundError):
    """Statement record does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class OwnershipError(DomainError):
    """Account exists but belongs to a different user."""


class InsufficientFundsError(DomainError):
    """Withdrawal would take the committed balance below zero."""

    def __init__(self, account_id: int, balance: Decimal, requested: Decimal):
        super().__init__(insufficient_funds(account_id, balance, requested))
        self.account_id = account_id
        self.balance = balance
        self.requested = requested


class PersistenceError(Exception):
    """Store-level fault. The unit of work it came from was rolled back.

    Not a DomainError: callers should show a generic failure to end users
    and leave the detail (available via ``__cause__``) to operators.
    """

    def __init__(self, operation: str, message: str, account_id: Optional[int] = None):
        context = f"{operation} failed"
        if account_id is not None:
            context += f" for account {account_id}"
        super().__init__(f"{context}: {message}")
        self.operation = operation
        self.account_id = account_id


class DeadlineExceededError(PersistenceError):
    """Unit of work ran past its deadline and was rolled back."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def statement_not_found(statement_id: int) -> str:
    """Return message for missing statement."""
    return f"Statement {statement_id} not found"


def insufficient_funds(account_id: int, balance: Decimal, requested: Decimal) -> str:
    """Return message for a withdrawal larger than the balance."""
    return (
        f"Insufficient funds in account {account_id}: "
        f"balance {balance}, requested {requested}"
    )


def duplicate_email(email: str) -> str:
    """Return message for duplicate user email."""
    return f"User with email '{email}' already exists"


def account_not_owned(account_id: int, user_id: int) -> str:
    """Return message when an account belongs to someone else."""
    return f"Account {account_id} does not belong to user {user_id}"


def idempotency_key_conflict(key: str, account_id: int) -> str:
    """Return message when an idempotency key is reused for a different request."""
    return (
        f"Idempotency key '{key}' was already used on account {account_id} "
        "for a different request"
    )


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account has ledger rows."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Ledger history is append-only."
    )
