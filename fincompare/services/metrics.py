"""Pure math / metric helpers (no I/O).

Every helper returns ``None`` instead of raising or returning zero when an
operand is missing, a denominator is zero, or the result falls outside the
Decimal range, so "unknown" never turns into a valid-looking number.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Callable

from fincompare.config import settings

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)

_context = Context(prec=settings.decimal_precision, rounding=ROUND_HALF_UP)


def _checked(operation: Callable[..., Decimal], *operands: Decimal) -> Decimal | None:
    try:
        return operation(*operands)
    except ArithmeticError as exc:
        logger.warning("Dropping out-of-range result of %s: %r", operation.__name__, exc)
        return None


def to_decimal(value: int | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(value)


def safe_divide(numerator: Decimal | None, denominator: Decimal | None) -> Decimal | None:
    """numerator / denominator, or None if either is missing or the denominator is zero."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return _checked(_context.divide, numerator, denominator)


def multiply(left: Decimal | None, right: Decimal | None) -> Decimal | None:
    if left is None or right is None:
        return None
    return _checked(_context.multiply, left, right)


def magnitude(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    return _checked(_context.abs, value)


def percent_of(numerator: Decimal | None, denominator: Decimal | None) -> Decimal | None:
    """Ratio expressed as a percentage (x100)."""
    return multiply(safe_divide(numerator, denominator), HUNDRED)


def difference(minuend: Decimal | None, subtrahend: Decimal | None) -> Decimal | None:
    if minuend is None or subtrahend is None:
        return None
    return _checked(_context.subtract, minuend, subtrahend)


def _total(*values: Decimal) -> Decimal:
    total = Decimal(0)
    for value in values:
        total = _context.add(total, value)
    return total


def sum_present(*values: Decimal | None) -> Decimal | None:
    """Sum of the values that are present; None if none are."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return _checked(_total, *present)


def sum_all(*values: Decimal | None) -> Decimal | None:
    """Sum that needs every operand present."""
    if any(v is None for v in values):
        return None
    return _checked(_total, *values)  # type: ignore[arg-type]


def first_present(*values: Decimal | None) -> Decimal | None:
    return next((v for v in values if v is not None), None)


def growth_rate(prior: Decimal | None, current: Decimal | None) -> Decimal | None:
    """Period-over-period change: (current - prior) / |prior| x 100.

    Dividing by the magnitude keeps the sign of the change, so a loss that
    narrows or turns into a profit reads as positive growth. Returns None
    when either period is missing or the prior value is zero.
    """
    return percent_of(difference(current, prior), magnitude(prior))


def cagr(start_value: Decimal | None, end_value: Decimal | None, years: int) -> Decimal | None:
    """Compound Annual Growth Rate, as a percentage.

    Returns None when inputs are missing, non-positive or years < 1.
    """
    if start_value is None or end_value is None:
        return None
    if years < 1 or start_value <= 0 or end_value <= 0:
        return None
    ratio = safe_divide(end_value, start_value)
    exponent = safe_divide(Decimal(1), Decimal(years))
    if ratio is None or exponent is None:
        return None
    return multiply(difference(_checked(_context.power, ratio, exponent), Decimal(1)), HUNDRED)
