#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amount handling uses integer arithmetic in the minor currency unit
(øre/cents) to avoid floating-point errors.

Currency Systems:
- The source bank API reports amounts as JSON numbers in major units (42.5)
- Internal calculations use minor units: 100 = 1.00
- The ledger API expects amount strings with exactly two decimals ("42.50")

Key Principles:
- Never compare or subtract floating-point amounts
- Convert source numbers through Decimal at the boundary
- Format amounts for the ledger from integer minor units only
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

_TWO_PLACES = Decimal("0.01")


def amount_to_minor_units(amount: Union[int, float, str, Decimal]) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Floats are converted through their shortest repr so that values such as
    42.5 or 0.1 land on the expected cent instead of a binary approximation.

    Args:
        amount: Amount in major units (e.g. -42.5, "42.50", Decimal("1.005"))

    Returns:
        Amount in minor units (e.g. -4250)

    Raises:
        ValueError: If the amount cannot be parsed as a number

    Examples:
        amount_to_minor_units(-42.5) -> -4250
        amount_to_minor_units("500") -> 50000
    """
    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount: {amount!r}")

    try:
        decimal_amount = Decimal(str(amount).strip().replace(",", "."))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not decimal_amount.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")

    quantized = decimal_amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return int(quantized * 100)


def minor_units_to_amount_str(minor_units: int) -> str:
    """
    Convert minor units to a two-decimal amount string using pure integer arithmetic.

    Args:
        minor_units: Amount in minor units

    Returns:
        Formatted amount string without currency symbol

    Example:
        minor_units_to_amount_str(4250) -> "42.50"
        minor_units_to_amount_str(-5) -> "-0.05"
    """
    is_negative = minor_units < 0
    abs_units = abs(int(minor_units))

    major = abs_units // 100
    remainder = abs_units % 100

    if is_negative:
        return f"-{major}.{remainder:02d}"
    return f"{major}.{remainder:02d}"

