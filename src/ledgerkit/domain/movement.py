"""Money movement engine: deposits and withdrawals.

Each movement is one unit of work:

1. (withdrawal) lock the account row and check the committed balance
2. generate a reference identifier
3. insert one completed, immutable ledger row
4. apply the signed delta to the account balance
5. commit

Any failure in steps 1-4 rolls the whole unit back.
"""

import logging
from decimal import Decimal
from typing import Optional

from ledgerkit.config import LedgerSettings, get_settings
from ledgerkit.database.base import Database, IsolationLevel, LedgerHandle
from ledgerkit.domain.entities import (
    TransactionResult,
    TransactionStatus,
    TransactionType,
)
from ledgerkit.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    InsufficientFundsError,
    idempotency_key_conflict,
)
from ledgerkit.domain.money import AmountLike, quantize_amount, validate_amount
from ledgerkit.domain.reference import new_reference

logger = logging.getLogger(__name__)


class MoneyMovementService:
    """Service for crediting and debiting accounts."""

    def __init__(self, db: Database, settings: Optional[LedgerSettings] = None):
        """Initialize money movement service.

        Args:
            db: Database instance
            settings: Business rule settings (amount ceiling, rounding,
                default deadline). Read from the environment if omitted.
        """
        self.db = db
        self.settings = settings or get_settings()

    def deposit(
        self,
        account_id: int,
        amount: AmountLike,
        idempotency_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> TransactionResult:
        """Credit an account.

        Runs at READ COMMITTED: the increment is a single atomic column
        update, so it does not depend on any earlier balance read.

        Args:
            account_id: Account to credit (ownership already checked by caller)
            amount: Positive amount; rounded to cents once, here
            idempotency_key: Optional caller key; a repeat returns the
                original result instead of writing again
            timeout: Seconds before the unit is rolled back; defaults to
                the configured unit timeout

        Returns:
            Transaction ID and reference ID

        Raises:
            InvalidAmountError: If amount is not positive or above the ceiling
            AccountNotFoundError: If the account does not exist
            ConflictError: If the idempotency key was used for another request
            PersistenceError: On store failure (unit rolled back)
        """
        return self._move(account_id, amount, TransactionType.DEPOSIT, idempotency_key, timeout)

    def withdraw(
        self,
        account_id: int,
        amount: AmountLike,
        idempotency_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> TransactionResult:
        """Debit an account if the committed balance covers the amount.

        The balance is read under an exclusive row lock held until commit,
        so concurrent withdrawals on one account are serialized and cannot
        both pass the funds check.

        Raises:
            InsufficientFundsError: If balance < amount; nothing is written
            InvalidAmountError, AccountNotFoundError, ConflictError,
            PersistenceError: As for :meth:`deposit`
        """
        return self._move(account_id, amount, TransactionType.WITHDRAWAL, idempotency_key, timeout)

    def _move(
        self,
        account_id: int,
        amount: AmountLike,
        transaction_type: TransactionType,
        idempotency_key: Optional[str],
        timeout: Optional[float],
    ) -> TransactionResult:
        quantized = validate_amount(
            amount, self.settings.max_transaction_amount, self.settings.rounding
        )
        is_withdrawal = transaction_type == TransactionType.WITHDRAWAL
        operation = transaction_type.value.lower()

        def unit(handle: LedgerHandle) -> TransactionResult:
            if is_withdrawal or idempotency_key is not None:
                balance = handle.lock_account_balance(account_id)
                if balance is None:
                    raise AccountNotFoundError(account_id)

                if idempotency_key is not None:
                    existing = handle.find_transaction_by_idempotency_key(
                        account_id, idempotency_key
                    )
                    if existing is not None:
                        if existing.type != transaction_type or existing.amount != quantized:
                            raise ConflictError(
                                idempotency_key_conflict(idempotency_key, account_id)
                            )
                        logger.info(
                            "Replayed %s on account %s for key %s (reference %s)",
                            operation, account_id, idempotency_key, existing.reference_id,
                        )
                        return TransactionResult(existing.id, existing.reference_id)

                if is_withdrawal:
                    balance = quantize_amount(balance, self.settings.rounding)
                    if balance < quantized:
                        raise InsufficientFundsError(account_id, balance, quantized)

            reference_id = new_reference()
            transaction_id = handle.insert_transaction(
                account_id=account_id,
                transaction_type=transaction_type,
                amount=quantized,
                status=TransactionStatus.COMPLETED,
                reference_id=reference_id,
                idempotency_key=idempotency_key,
            )

            delta = -quantized if is_withdrawal else quantized
            if handle.apply_balance_delta(account_id, delta) == 0:
                raise AccountNotFoundError(account_id)

            return TransactionResult(transaction_id, reference_id)

        # Withdrawals rely on the row lock rather than a higher level: under
        # REPEATABLE READ or SERIALIZABLE a lock wait on a concurrently
        # updated row ends in a serialization failure, not a fresh read.
        isolation = IsolationLevel.READ_COMMITTED
        if timeout is None:
            timeout = self.settings.unit_timeout_seconds

        try:
            result = self.db.run_atomic(
                isolation,
                unit,
                timeout=timeout,
                operation=operation,
                account_id=account_id,
            )
        except InsufficientFundsError as e:
            logger.info("Rejected %s on account %s: %s", operation, account_id, e)
            raise

        logger.info(
            "Committed %s of %s on account %s (transaction %s, reference %s)",
            operation, quantized, account_id, result.transaction_id, result.reference_id,
        )
        return result
