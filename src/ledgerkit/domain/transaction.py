"""Transaction query service."""

import logging
from dataclasses import replace
from typing import Optional

from ledgerkit.config import LedgerSettings, get_settings
from ledgerkit.database.base import Database, IsolationLevel, LedgerHandle
from ledgerkit.domain.entities import (
    Page,
    Pagination,
    SortOrder,
    SortRequest,
    StatementRequest,
    Transaction,
    TransactionFilter,
)
from ledgerkit.domain.errors import (
    TransactionNotFoundError,
    ValidationError,
    transaction_not_found,
)
from ledgerkit.domain.money import quantize_amount

logger = logging.getLogger(__name__)

TRANSACTION_SORT_FIELDS = ("amount", "type", "status", "created_at")

# Unknown or missing sort fields always fall back to this order.
DEFAULT_SORT = SortOrder(field="created_at", descending=True)


def resolve_sort(sort: Optional[SortRequest], allowed_fields: tuple[str, ...]) -> SortOrder:
    """Validate a sort request against an allow-list.

    An absent or unrecognized field gives ``created_at DESC``. For a
    recognized field the direction is ``ASC`` or ``DESC`` (case-insensitive)
    and anything else means ``DESC``.
    """
    if sort is None or not sort.field:
        return DEFAULT_SORT
    field = sort.field.strip().lower()
    if field not in allowed_fields:
        return DEFAULT_SORT
    direction = (sort.direction or "").strip().upper()
    return SortOrder(field=field, descending=direction != "ASC")


def resolve_pagination(pagination: Optional[Pagination], settings: LedgerSettings) -> Pagination:
    """Fill in the default page size and reject out-of-range pages.

    Raises:
        ValidationError: If page < 1, page size < 1 or page size above the
            configured maximum
    """
    if pagination is None:
        return Pagination(page=1, page_size=settings.default_page_size)
    if pagination.page < 1:
        raise ValidationError(f"Page must be at least 1, got {pagination.page}")
    if pagination.page_size < 1:
        raise ValidationError(f"Page size must be at least 1, got {pagination.page_size}")
    if pagination.page_size > settings.max_page_size:
        raise ValidationError(
            f"Page size {pagination.page_size} exceeds maximum {settings.max_page_size}"
        )
    return pagination


def resolve_statement_request(request: StatementRequest, settings: LedgerSettings) -> StatementRequest:
    """Validate a statement period and fill in the default item count.

    Raises:
        ValidationError: If the period is inverted or the item count is negative
    """
    if request.start_date > request.end_date:
        raise ValidationError("Statement start date is after end date")
    if request.item_count is None:
        return replace(request, item_count=settings.statement_item_count)
    if request.item_count < 0:
        raise ValidationError(f"Item count must not be negative, got {request.item_count}")
    return request


def _quantize_bounds(
    transaction_filter: Optional[TransactionFilter], rounding: str
) -> Optional[TransactionFilter]:
    if transaction_filter is None:
        return None
    f = transaction_filter
    if f.min_amount is not None and f.max_amount is not None and f.min_amount > f.max_amount:
        raise ValidationError(f"min_amount {f.min_amount} is greater than max_amount {f.max_amount}")
    if f.date_from is not None and f.date_to is not None and f.date_from > f.date_to:
        raise ValidationError("date_from is after date_to")
    return TransactionFilter(
        min_amount=None if f.min_amount is None else quantize_amount(f.min_amount, rounding),
        max_amount=None if f.max_amount is None else quantize_amount(f.max_amount, rounding),
        type=f.type,
        status=f.status,
        date_from=f.date_from,
        date_to=f.date_to,
        account_id=f.account_id,
    )


class TransactionQueryService:
    """Read-only queries over the ledger."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize transaction query service.

        Args:
            db: Database instance
            settings: Paging and rounding settings. Read from the
                environment if omitted.
        """
        self.db = db
        self.settings = settings or get_settings()

    def list_transactions(
        self,
        owner_id: int,
        transaction_filter: Optional[TransactionFilter] = None,
        sort: Optional[SortRequest] = None,
        pagination: Optional[Pagination] = None,
    ) -> Page:
        """List one page of a user's transactions.

        The total count and the page are read with the same predicate inside
        one read-only snapshot, so ``total_pages`` always agrees with the
        page returned.

        Args:
            owner_id: User whose accounts' transactions are listed
            transaction_filter: Optional predicates, ANDed together
            sort: Optional sort request; see :func:`resolve_sort`
            pagination: Optional page request; defaults to page 1

        Returns:
            Page of Transaction entities with the total matching count

        Raises:
            ValidationError: If the page request or filter bounds are invalid
        """
        page = resolve_pagination(pagination, self.settings)
        order = resolve_sort(sort, TRANSACTION_SORT_FIELDS)
        bounded = _quantize_bounds(transaction_filter, self.settings.rounding)

        def unit(handle: LedgerHandle) -> Page:
            total = handle.count_transactions(owner_id, bounded)
            items = handle.select_transactions(
                owner_id, bounded, order, limit=page.page_size, offset=page.offset
            )
            return Page(items=items, total_count=total, page=page.page, page_size=page.page_size)

        return self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ,
            unit,
            read_only=True,
            timeout=self.settings.unit_timeout_seconds,
            operation="list transactions",
        )

    def list_transactions_for_statement(
        self, owner_id: int, request: StatementRequest
    ) -> list[Transaction]:
        """Select a user's transactions for a statement period.

        Bounded by the request's date range and optionally narrowed to one
        account, one currency and a maximum number of rows. Always most
        recent first.
        """
        request = resolve_statement_request(request, self.settings)
        return self.db.run_atomic(
            IsolationLevel.REPEATABLE_READ,
            lambda handle: handle.select_statement_transactions(owner_id, request),
            read_only=True,
            timeout=self.settings.unit_timeout_seconds,
            operation="list statement transactions",
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            lambda handle: handle.get_transaction(transaction_id),
            read_only=True,
            operation="get transaction",
        )

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID or raise TransactionNotFoundError."""
        transaction = self.get_transaction(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_not_found(transaction_id))
        return transaction
