"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so that ORM objects never escape a
unit of work.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Transaction as ORMTransaction,
    Statement as ORMStatement,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        email=orm_user.email,
        created_at=orm_user.created_at,
        updated_at=orm_user.updated_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        balance=orm_account.balance,
        currency=domain.Currency(orm_account.currency),
        name=orm_account.account_name,
        description=orm_account.account_description,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.transaction_type),
        amount=orm_transaction.amount,
        status=domain.TransactionStatus(orm_transaction.status),
        reference_id=orm_transaction.reference_id,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        idempotency_key=orm_transaction.idempotency_key,
    )


def statement_to_domain(orm_statement: ORMStatement) -> domain.Statement:
    """Convert SQLAlchemy Statement model to domain Statement entity."""
    return domain.Statement(
        id=orm_statement.id,
        user_id=orm_statement.user_id,
        location=orm_statement.pdf_url,
        statement_date=orm_statement.statement_date,
        created_at=orm_statement.created_at,
        updated_at=orm_statement.updated_at,
    )
