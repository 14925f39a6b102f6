"""Select builders shared by the SQLAlchemy ledger handle."""

from typing import Optional

from sqlalchemy import Select, select

from ledgerkit.database.models import Account, Transaction
from ledgerkit.domain.entities import (
    AccountFilter,
    SortOrder,
    StatementRequest,
    TransactionFilter,
)

TRANSACTION_SORT_COLUMNS = {
    "amount": Transaction.amount,
    "type": Transaction.transaction_type,
    "status": Transaction.status,
    "created_at": Transaction.created_at,
}

ACCOUNT_SORT_COLUMNS = {
    "balance": Account.balance,
    "currency": Account.currency,
    "created_at": Account.created_at,
}


def owned_account_ids(owner_id: int) -> Select:
    """Subquery of the IDs of every account a user owns."""
    return select(Account.id).where(Account.user_id == owner_id)


def filter_transactions(
    stmt: Select, owner_id: int, transaction_filter: Optional[TransactionFilter]
) -> Select:
    """Restrict a transaction select to one owner and AND in every set predicate."""
    stmt = stmt.where(Transaction.account_id.in_(owned_account_ids(owner_id)))
    if transaction_filter is None:
        return stmt

    f = transaction_filter
    if f.min_amount is not None:
        stmt = stmt.where(Transaction.amount >= f.min_amount)
    if f.max_amount is not None:
        stmt = stmt.where(Transaction.amount <= f.max_amount)
    if f.type is not None:
        stmt = stmt.where(Transaction.transaction_type == f.type.value)
    if f.status is not None:
        stmt = stmt.where(Transaction.status == f.status.value)
    if f.date_from is not None:
        stmt = stmt.where(Transaction.created_at >= f.date_from)
    if f.date_to is not None:
        stmt = stmt.where(Transaction.created_at <= f.date_to)
    if f.account_id is not None:
        stmt = stmt.where(Transaction.account_id == f.account_id)
    return stmt


def filter_accounts(
    stmt: Select, user_id: int, account_filter: Optional[AccountFilter]
) -> Select:
    """Restrict an account select to one owner and AND in every set predicate."""
    stmt = stmt.where(Account.user_id == user_id)
    if account_filter is None:
        return stmt

    f = account_filter
    if f.min_balance is not None:
        stmt = stmt.where(Account.balance >= f.min_balance)
    if f.max_balance is not None:
        stmt = stmt.where(Account.balance <= f.max_balance)
    if f.currency is not None:
        stmt = stmt.where(Account.currency == f.currency.value)
    if f.date_from is not None:
        stmt = stmt.where(Account.created_at >= f.date_from)
    if f.date_to is not None:
        stmt = stmt.where(Account.created_at <= f.date_to)
    return stmt


def order_by(stmt: Select, columns: dict, id_column, order: SortOrder) -> Select:
    """Apply a validated sort order, breaking ties on the primary key."""
    try:
        column = columns[order.field]
    except KeyError:
        raise ValueError(f"Unsupported sort field: {order.field}")
    if order.descending:
        return stmt.order_by(column.desc(), id_column.desc())
    return stmt.order_by(column.asc(), id_column.asc())


def statement_transactions(owner_id: int, request: StatementRequest) -> Select:
    """Transactions in a statement period, most recent first."""
    stmt = (
        select(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(Account.user_id == owner_id)
        .where(Transaction.created_at.between(request.start_date, request.end_date))
    )
    if request.account_id is not None:
        stmt = stmt.where(Transaction.account_id == request.account_id)
    if request.currency is not None:
        stmt = stmt.where(Account.currency == request.currency.value)
    stmt = stmt.order_by(Transaction.created_at.desc(), Transaction.id.desc())
    if request.item_count is not None:
        stmt = stmt.limit(request.item_count)
    return stmt
