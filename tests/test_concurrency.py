"""Concurrent money movements against one account."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from ledgerkit.domain.entities import Pagination
from ledgerkit.domain.errors import InsufficientFundsError


def _run_concurrently(calls):
    """Start every call at once and collect (result, error) pairs."""
    barrier = threading.Barrier(len(calls))

    def run(call):
        barrier.wait()
        try:
            return call(), None
        except InsufficientFundsError as e:
            return None, e

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        return list(pool.map(run, calls))


def test_concurrent_withdrawals_cannot_overdraw(movement_service, account_service, funded_account):
    """Two 60.00 withdrawals from 100.00: exactly one succeeds."""
    account_id = funded_account.id
    outcomes = _run_concurrently(
        [lambda: movement_service.withdraw(account_id, Decimal("60.00"))] * 2
    )

    successes = [result for result, error in outcomes if error is None]
    failures = [error for result, error in outcomes if error is not None]
    assert len(successes) == 1
    assert len(failures) == 1
    assert account_service.require_account(account_id).balance == Decimal("40.00")


def test_mixed_movements_keep_balance_equal_to_ledger(
    movement_service, account_service, query_service, funded_account
):
    """Balance always equals the sum of signed committed rows."""
    account_id = funded_account.id
    calls = []
    for _ in range(6):
        calls.append(lambda: movement_service.deposit(account_id, Decimal("10.00")))
        calls.append(lambda: movement_service.withdraw(account_id, Decimal("25.00")))

    _run_concurrently(calls)

    balance = account_service.require_account(account_id).balance
    ledger = query_service.list_transactions(
        funded_account.user_id, pagination=Pagination(page=1, page_size=100)
    )
    assert balance >= Decimal("0.00")
    assert balance == sum((txn.signed_amount for txn in ledger.items), Decimal("0.00"))
