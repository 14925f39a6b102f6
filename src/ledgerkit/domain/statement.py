"""Statement aggregation.

Selects the transactions of a reporting period, resolves the closing balance
to print with them and hands both to an external renderer. The renderer's
returned location is recorded as a statement.
"""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional, Protocol

from ledgerkit.config import LedgerSettings, get_settings
from ledgerkit.database.base import Database, IsolationLevel, LedgerHandle
from ledgerkit.domain.account import total_by_currency
from ledgerkit.domain.entities import (
    Account,
    Currency,
    Page,
    Pagination,
    Statement,
    StatementData,
    StatementRequest,
    Transaction,
)
from ledgerkit.domain.errors import (
    StatementNotFoundError,
    UserNotFoundError,
    statement_not_found,
)
from ledgerkit.domain.transaction import resolve_pagination, resolve_statement_request

logger = logging.getLogger(__name__)


class StatementRenderer(Protocol):
    """Document renderer supplied by the caller."""

    def render(
        self,
        transactions: list[Transaction],
        closing_balance: Decimal,
        owner_id: int,
        owner_name: str,
    ) -> str:
        """Render a statement and return where it was stored."""
        ...


def resolve_closing_balance(
    accounts: list[Account],
    account_id: Optional[int] = None,
    currency: Optional[Currency] = None,
    default_currency: Currency = Currency.USD,
) -> Decimal:
    """Pick the balance a statement closes on.

    A named currency first selects the balance of the user's (last) account
    in that currency. Then, with no account named, the result is the total
    across all accounts in that currency (``default_currency`` when no
    currency is named either); with an account named, that account's live
    balance wins if the user owns it.
    """
    closing = Decimal("0.00")
    if currency is not None:
        for account in accounts:
            if account.currency == currency:
                closing = account.balance

    if account_id is None:
        totals = total_by_currency(accounts)
        closing = totals.get(currency or default_currency, Decimal("0.00"))
    else:
        for account in accounts:
            if account.id == account_id:
                closing = account.balance
    return closing


class StatementService:
    """Service for preparing and recording account statements."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def prepare_statement(self, user_id: int, request: StatementRequest) -> StatementData:
        """Read the statement's user, transactions and closing balance.

        All three come from one read-only snapshot.

        Raises:
            ValidationError: If the period is inverted or the item count is negative
            UserNotFoundError: If the user does not exist
        """
        request = resolve_statement_request(request, self.settings)

        def unit(handle: LedgerHandle) -> StatementData:
            user = handle.get_user(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            accounts = handle.list_user_accounts(user_id)
            transactions = handle.select_statement_transactions(user_id, request)
            closing = resolve_closing_balance(
                accounts,
                account_id=request.account_id,
                currency=request.currency,
                default_currency=self.settings.default_currency,
            )
            return StatementData(user=user, transactions=transactions, closing_balance=closing)

        return self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ,
            unit,
            read_only=True,
            timeout=self.settings.unit_timeout_seconds,
            operation="prepare statement",
        )

    def generate_statement(
        self, user_id: int, request: StatementRequest, renderer: StatementRenderer
    ) -> Statement:
        """Render a statement and record its location.

        Rendering happens outside any unit of work; only the resulting
        location is written.
        """
        data = self.prepare_statement(user_id, request)
        location = renderer.render(
            data.transactions, data.closing_balance, data.user.id, data.user.full_name
        )
        statement = self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            lambda handle: handle.insert_statement(user_id, location, datetime.now(UTC)),
            operation="save statement",
        )
        logger.info(
            "Recorded statement %s for user %s (%d transactions) at %s",
            statement.id, user_id, len(data.transactions), location,
        )
        return statement

    def list_statements(self, user_id: int, pagination: Optional[Pagination] = None) -> Page:
        """List a user's recorded statements, most recent first."""
        page = resolve_pagination(pagination, self.settings)

        def unit(handle: LedgerHandle) -> Page:
            total = handle.count_statements(user_id)
            items = handle.select_statements(user_id, limit=page.page_size, offset=page.offset)
            return Page(items=items, total_count=total, page=page.page, page_size=page.page_size)

        return self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ, unit, read_only=True, operation="list statements"
        )

    def get_statement(self, statement_id: int) -> Statement:
        """Get a recorded statement or raise StatementNotFoundError."""
        statement = self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            lambda handle: handle.get_statement(statement_id),
            read_only=True,
            operation="get statement",
        )
        if statement is None:
            raise StatementNotFoundError(statement_not_found(statement_id))
        return statement
