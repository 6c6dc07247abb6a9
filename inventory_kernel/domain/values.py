"""
Numeric value handling for the inventory kernel.

Every quantity, rate and amount in the kernel is a ``Decimal``. Sums over
mixed magnitudes (a few units of a cheap consumable next to thousands of an
expensive raw material) stay exact because nothing ever round-trips through
binary floating point inside the engines.

Engine arithmetic runs in ``EXACT_CONTEXT`` (additions and multiplications)
or ``RATIO_CONTEXT`` (division), never in the caller's thread context, so a
caller that lowered its own precision gets the same figures as everyone else.

Inputs arrive from callers as ``Decimal``, ``int``, numeric ``str`` or
``float``. Floats are converted through ``repr`` so ``29.999`` becomes
``Decimal("29.999")`` rather than its binary expansion. Booleans, ``None``,
NaN, infinities and non-numeric strings are rejected; the kernel never
substitutes a default for an invalid value. So are magnitudes of 10**18 or
more and values with more than 18 decimal places, which keeps every exact
product and sum a bounded number of digits.
"""

from __future__ import annotations

import math
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
)

from inventory_kernel.exceptions import ValidationError

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Accepted magnitude: below 10**18 with at most 18 decimal places.
MAX_INTEGER_DIGITS = 18
MAX_DECIMAL_PLACES = 18

# Stored derived fields: products of two inputs, and a risk ratio carrying
# 28 significant digits below the smallest such product.
MAX_DERIVED_INTEGER_DIGITS = 2 * MAX_INTEGER_DIGITS
MAX_DERIVED_DECIMAL_PLACES = 128

# Sums, differences and products: never rounded, whatever the caller's context.
# Bounded operands keep exact results small.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Division (the risk ratio) cannot be exact; fixed at 28 significant digits.
RATIO_CONTEXT = Context(prec=28, Emax=MAX_EMAX, Emin=MIN_EMIN)

NumberLike = Decimal | int | float | str


def to_decimal(
    field: str,
    value: object,
    *,
    integer_digits: int = MAX_INTEGER_DIGITS,
    decimal_places: int = MAX_DECIMAL_PLACES,
) -> Decimal:
    """
    Convert a caller-supplied number to ``Decimal``.

    ``integer_digits`` and ``decimal_places`` bound the accepted magnitude;
    stored derived fields are read back with the ``MAX_DERIVED_*`` limits.

    Raises:
        ValidationError: If ``value`` is missing, boolean, non-numeric, not
            finite or out of range. The error names ``field``.
    """
    if value is None:
        raise ValidationError(field, f"{field} is required", value)
    # bool is an int subclass; True is not a quantity
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number", value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(field, f"{field} must be a finite number", value)
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValidationError(field, f"{field} must be a number", value) from e
    else:
        raise ValidationError(field, f"{field} must be a number", value)

    if not result.is_finite():
        raise ValidationError(field, f"{field} must be a finite number", value)
    if not result.is_zero():
        normal = result.normalize(EXACT_CONTEXT)
        if (
            normal.adjusted() >= integer_digits
            or normal.as_tuple().exponent < -decimal_places
        ):
            raise ValidationError(field, f"{field} is out of range", value)
    # -0 passes the non-negative checks; store it as plain zero
    if result.is_zero() and result.is_signed():
        result = result.copy_abs()
    return result


def clamp(value: Decimal, floor: Decimal, ceiling: Decimal) -> Decimal:
    """Bound ``value`` to ``[floor, ceiling]``."""
    return min(ceiling, max(floor, value))


def round_percent(value: Decimal) -> int:
    """Round a percentage to a whole number, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
