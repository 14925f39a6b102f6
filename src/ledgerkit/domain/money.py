"""Monetary amount coercion, validation and quantization.

Amounts are quantized to two decimal places exactly once, when they enter the
money movement engine. Stored values are already exact cents, so later reads
never round again.
"""

import decimal
from decimal import Decimal, InvalidOperation
from typing import Union

from ledgerkit.domain.errors import InvalidAmountError, InvalidCurrencyError
from ledgerkit.domain.entities import Currency

CENT = Decimal("0.01")

ROUNDING_MODES = {
    "ROUND_HALF_UP": decimal.ROUND_HALF_UP,
    "ROUND_HALF_EVEN": decimal.ROUND_HALF_EVEN,
    "ROUND_HALF_DOWN": decimal.ROUND_HALF_DOWN,
    "ROUND_DOWN": decimal.ROUND_DOWN,
    "ROUND_UP": decimal.ROUND_UP,
    "ROUND_FLOOR": decimal.ROUND_FLOOR,
    "ROUND_CEILING": decimal.ROUND_CEILING,
}

AmountLike = Union[Decimal, int, float, str]


def to_decimal(amount: AmountLike) -> Decimal:
    """Convert a caller-supplied amount to Decimal.

    Floats go through ``str`` so that ``10.005`` stays ``10.005`` instead of
    its binary approximation.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    return value


def quantize_amount(amount: AmountLike, rounding: str = "ROUND_HALF_UP") -> Decimal:
    """Round an amount to two decimal places using the named rounding mode."""
    try:
        mode = ROUNDING_MODES[rounding]
    except KeyError:
        raise ValueError(f"Unknown rounding mode: {rounding}")
    return to_decimal(amount).quantize(CENT, rounding=mode)


def validate_amount(
    amount: AmountLike, max_amount: Decimal, rounding: str = "ROUND_HALF_UP"
) -> Decimal:
    """Validate and quantize a movement amount.

    Returns:
        The quantized amount

    Raises:
        InvalidAmountError: If amount is not positive (before or after
            rounding) or exceeds ``max_amount``
    """
    raw = to_decimal(amount)
    if raw <= 0:
        raise InvalidAmountError("Amount must be greater than 0")
    quantized = quantize_amount(raw, rounding)
    if quantized <= 0:
        raise InvalidAmountError(f"Amount {raw} rounds to zero")
    if quantized > max_amount:
        raise InvalidAmountError(f"Amount {quantized} exceeds maximum allowed {max_amount}")
    return quantized


def parse_currency(value: Union[str, Currency]) -> Currency:
    """Resolve a currency code (case-insensitive) to a Currency."""
    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value).strip().upper())
    except ValueError:
        supported = ", ".join(c.value for c in Currency)
        raise InvalidCurrencyError(f"Invalid currency '{value}'. Supported: {supported}")
