"""Account domain service."""

from collections import defaultdict
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from ledgerkit.config import LedgerSettings, get_settings
from ledgerkit.database.base import Database, IsolationLevel, LedgerHandle
from ledgerkit.domain.entities import (
    Account as AccountEntity,
    AccountFilter,
    BalanceSummary,
    Currency,
    Page,
    Pagination,
    SortRequest,
)
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    DependencyError,
    OwnershipError,
    UserNotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_owned,
)
from ledgerkit.domain.money import parse_currency, quantize_amount
from ledgerkit.domain.transaction import resolve_pagination, resolve_sort

ACCOUNT_SORT_FIELDS = ("balance", "currency", "created_at")


def _quantize_balance_bounds(
    account_filter: Optional[AccountFilter], rounding: str
) -> Optional[AccountFilter]:
    if account_filter is None:
        return None
    f = account_filter
    if f.min_balance is not None and f.max_balance is not None and f.min_balance > f.max_balance:
        raise ValidationError(
            f"min_balance {f.min_balance} is greater than max_balance {f.max_balance}"
        )
    if f.date_from is not None and f.date_to is not None and f.date_from > f.date_to:
        raise ValidationError("date_from is after date_to")
    return replace(
        f,
        min_balance=None if f.min_balance is None else quantize_amount(f.min_balance, rounding),
        max_balance=None if f.max_balance is None else quantize_amount(f.max_balance, rounding),
    )


def total_by_currency(accounts: list[AccountEntity]) -> dict[Currency, Decimal]:
    """Sum account balances per currency."""
    totals: dict[Currency, Decimal] = defaultdict(lambda: Decimal("0.00"))
    for account in accounts:
        totals[account.currency] += account.balance
    return dict(totals)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize account service.

        Args:
            db: Database instance
            settings: Paging settings. Read from the environment if omitted.
        """
        self.db = db
        self.settings = settings or get_settings()

    def create_account(
        self,
        user_id: int,
        currency: Union[str, Currency],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Open a new account with a zero balance.

        Args:
            user_id: Owning user
            currency: USD, EUR or GBP
            name: Optional display name
            description: Optional description

        Returns:
            Created account entity

        Raises:
            InvalidCurrencyError: If currency is not supported
            UserNotFoundError: If the user does not exist
        """
        currency = parse_currency(currency)

        def unit(handle: LedgerHandle) -> AccountEntity:
            if handle.get_user(user_id) is None:
                raise UserNotFoundError(user_id)
            return handle.insert_account(user_id, currency, name, description)

        return self.db.run_atomic(IsolationLevel.SERIALIZABLE, unit, operation="create account")

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            lambda handle: handle.get_account(account_id),
            read_only=True,
            operation="get account",
        )

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise AccountNotFoundError."""
        account = self.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def verify_ownership(self, account_id: int, user_id: int) -> AccountEntity:
        """Check that an account exists and belongs to a user.

        Raises:
            AccountNotFoundError: If the account does not exist
            OwnershipError: If it belongs to someone else
        """
        account = self.require_account(account_id)
        if account.user_id != user_id:
            raise OwnershipError(account_not_owned(account_id, user_id))
        return account

    def list_accounts(
        self,
        user_id: int,
        account_filter: Optional[AccountFilter] = None,
        sort: Optional[SortRequest] = None,
        pagination: Optional[Pagination] = None,
    ) -> Page:
        """List one page of a user's accounts.

        Sort fields: balance, currency, created_at; anything else falls
        back to created_at DESC. Count and page come from one snapshot.
        """
        page = resolve_pagination(pagination, self.settings)
        order = resolve_sort(sort, ACCOUNT_SORT_FIELDS)
        account_filter = _quantize_balance_bounds(account_filter, self.settings.rounding)

        def unit(handle: LedgerHandle) -> Page:
            total = handle.count_accounts(user_id, account_filter)
            items = handle.select_accounts(
                user_id, account_filter, order, limit=page.page_size, offset=page.offset
            )
            return Page(items=items, total_count=total, page=page.page, page_size=page.page_size)

        return self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ, unit, read_only=True, operation="list accounts"
        )

    def get_balances(self, user_id: int) -> BalanceSummary:
        """Get all of a user's accounts and their per-currency totals."""
        accounts = self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ,
            lambda handle: handle.list_user_accounts(user_id),
            read_only=True,
            operation="view balance",
        )
        return BalanceSummary(accounts=accounts, balances_by_currency=total_by_currency(accounts))

    def delete_account(self, account_id: int) -> None:
        """Delete an account that has no ledger history.

        Raises:
            AccountNotFoundError: If the account does not exist
            DependencyError: If the account has transactions
        """

        def unit(handle: LedgerHandle) -> None:
            if handle.lock_account_balance(account_id) is None:
                raise AccountNotFoundError(account_id)
            transaction_count = handle.count_account_transactions(account_id)
            if transaction_count > 0:
                raise DependencyError(account_delete_blocked(account_id, transaction_count))
            if handle.delete_account(account_id) == 0:
                raise AccountNotFoundError(account_id)

        self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            unit,
            operation="delete account",
            account_id=account_id,
        )
