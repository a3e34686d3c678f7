#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for financial operations.
Provides standardized date handling for source bank timestamps, ledger
posting dates and the sync checkpoint.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = DATE_FORMAT) -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            ValueError: If the string does not match the format
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def from_timestamp_string(cls, timestamp: str) -> "FinancialDate":
        """
        Create from an ISO timestamp, keeping only the date part.

        The source bank reports accounting dates as "YYYY-MM-DDTHH:MM:SS";
        only the first 10 characters are significant.
        """
        return cls.from_string(timestamp[:10])

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    @classmethod
    def year_start(cls, year: int) -> "FinancialDate":
        """January 1st of the given year."""
        return cls(date=date(year, 1, 1))

    @classmethod
    def year_end(cls, year: int) -> "FinancialDate":
        """December 31st of the given year."""
        return cls(date=date(year, 12, 31))

    @property
    def year(self) -> int:
        return self.date.year

    def minus_days(self, days: int) -> "FinancialDate":
        """Return the date the given number of days earlier."""
        return FinancialDate(date=self.date - timedelta(days=days))

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
