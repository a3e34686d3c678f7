#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer minor units internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import amount_to_minor_units, minor_units_to_amount_str


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in minor units (øre/cents).

    Supports both positive (deposits/credits) and negative (withdrawals/debits) amounts.
    Uses integer arithmetic throughout to prevent floating-point errors.

    Examples:
        >>> credit = Money.from_amount(500)
        >>> str(credit)
        '500.00'

        >>> debit = Money.from_amount(-42.5)  # source bank amount
        >>> debit.to_minor_units()
        -4250

        >>> debit.abs().to_amount_str()
        '42.50'
    """

    minor_units: int

    @classmethod
    def from_amount(cls, amount: int | float | str | Decimal) -> "Money":
        """
        Create Money from a major-unit amount as reported by the source bank.

        Args:
            amount: Number or numeric string in major units

        Returns:
            Money object with sign preserved
        """
        return cls(minor_units=amount_to_minor_units(amount))

    def to_minor_units(self) -> int:
        """Get value in minor units."""
        return self.minor_units

    def to_amount_str(self) -> str:
        """Get two-decimal amount string as the ledger expects it."""
        return minor_units_to_amount_str(self.minor_units)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(minor_units=abs(self.minor_units))

    def is_negative(self) -> bool:
        """True for debits."""
        return self.minor_units < 0

    def __neg__(self) -> "Money":
        return Money(minor_units=-self.minor_units)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.minor_units == other.minor_units

    def __hash__(self) -> int:
        return hash(self.minor_units)

    def __str__(self) -> str:
        """Format as amount string."""
        return self.to_amount_str()

    def __repr__(self) -> str:
        return f"Money(minor_units={self.minor_units})"
