"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from ledgerkit.database.models import (
    Account as ORMAccount,
    Statement as ORMStatement,
    Transaction as ORMTransaction,
    User as ORMUser,
)
from ledgerkit.database.mappers import (
    account_to_domain,
    statement_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from ledgerkit.domain.entities import (
    Account,
    Currency,
    Statement,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
)

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


class TestMappers:
    """Tests for ORM to domain conversion."""

    def test_user_to_domain(self):
        orm_user = ORMUser(
            id=1, first_name="Ada", last_name="Lovelace", email="ada@example.com",
            created_at=NOW, updated_at=NOW,
        )

        user = user_to_domain(orm_user)

        assert isinstance(user, User)
        assert user.full_name == "Ada Lovelace"

    def test_account_to_domain_converts_currency(self):
        orm_account = ORMAccount(
            id=7, user_id=1, balance=Decimal("12.30"), currency="GBP",
            account_name="Savings", account_description=None,
            created_at=NOW, updated_at=NOW,
        )

        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.currency is Currency.GBP
        assert account.name == "Savings"
        assert account.balance == Decimal("12.30")

    def test_transaction_to_domain_converts_enums(self):
        orm_txn = ORMTransaction(
            id=3, account_id=7, transaction_type="WITHDRAWAL", amount=Decimal("5.00"),
            status="completed", reference_id="0b0e7c1e-1d5e-4bd5-9a0e-2f6d3c1f2a11",
            idempotency_key="k", created_at=NOW, updated_at=NOW,
        )

        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.type is TransactionType.WITHDRAWAL
        assert txn.status is TransactionStatus.COMPLETED
        assert txn.idempotency_key == "k"

    def test_statement_to_domain_exposes_location(self):
        orm_statement = ORMStatement(
            id=2, user_id=1, pdf_url="s3://bucket/statement.pdf",
            statement_date=NOW, created_at=NOW, updated_at=NOW,
        )

        statement = statement_to_domain(orm_statement)

        assert isinstance(statement, Statement)
        assert statement.location == "s3://bucket/statement.pdf"
