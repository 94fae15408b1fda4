"""Paise/rupee conversion helpers

Money is held as an integer number of paise everywhere past the input
boundary. ``rupees_to_paise`` is the only place a decimal amount is turned
into paise.
"""

from decimal import (ROUND_HALF_CEILING, ROUND_HALF_UP, Decimal,
                     DecimalException, InvalidOperation, localcontext)
from typing import Union

from vasooly.core.exceptions import SplitField, SplitValidationError

PAISE_PER_RUPEE = 100
CURRENCY_SYMBOL = "₹"

RupeeAmount = Union[int, float, Decimal, str]


def round_decimal(value: Decimal, decimal_places: int = 2) -> Decimal:
    """
    Round a decimal value to specified decimal places.

    Args:
        value: Decimal value to round
        decimal_places: Number of decimal places (default 2)

    Returns:
        Rounded decimal value
    """
    quantize_value = Decimal(10) ** -decimal_places
    return value.quantize(quantize_value, rounding=ROUND_HALF_UP)


def _to_decimal(rupees: RupeeAmount) -> Decimal:
    if isinstance(rupees, bool):
        raise SplitValidationError("Amount must be a number", SplitField.AMOUNT)
    try:
        if isinstance(rupees, Decimal):
            value = rupees
        elif isinstance(rupees, str):
            value = Decimal(rupees.strip().replace(",", ""))
        else:
            # str() of a float is its shortest round-trip form, i.e. what the user typed
            value = Decimal(str(rupees))
    except (InvalidOperation, ValueError):
        raise SplitValidationError(f"Invalid amount: {rupees!r}", SplitField.AMOUNT)

    if not value.is_finite():
        raise SplitValidationError("Amount must be a finite number", SplitField.AMOUNT)
    return value


def rupees_to_paise(rupees: RupeeAmount) -> int:
    """
    Convert a rupee amount to integer paise.

    Halves round towards positive infinity, so ``1.005 -> 101`` and
    ``-0.005 -> 0``. There is no upper bound; the working precision grows
    with the input.

    Args:
        rupees: Amount in rupees (int, float, Decimal or decimal string)

    Returns:
        Amount in paise

    Raises:
        SplitValidationError: If the amount is not a finite number
    """
    value = _to_decimal(rupees)
    _, digits, exponent = value.as_tuple()

    with localcontext() as ctx:
        # Whole-paise digits plus headroom for the x100 shift
        ctx.prec = max(ctx.prec, len(digits) + max(exponent, 0) + 3)
        ctx.Emax = max(ctx.Emax, ctx.prec + max(exponent, 0))
        try:
            paise = value.scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_CEILING)
        except DecimalException:
            raise SplitValidationError(f"Invalid amount: {rupees!r}", SplitField.AMOUNT)
    return int(paise)


def paise_to_rupees(paise: int) -> Decimal:
    """Convert integer paise to a two-place rupee Decimal."""
    return round_decimal(Decimal(paise) / PAISE_PER_RUPEE)


def format_paise(paise: int, symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Render paise as a rupee string with exactly two decimals.

    Args:
        paise: Amount in paise
        symbol: Currency symbol prefix

    Returns:
        Display string, e.g. ``12345 -> "₹123.45"``
    """
    sign = "-" if paise < 0 else ""
    rupees, remainder = divmod(abs(paise), PAISE_PER_RUPEE)
    return f"{symbol}{sign}{rupees}.{remainder:02d}"
