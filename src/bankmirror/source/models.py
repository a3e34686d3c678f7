#!/usr/bin/env python3
"""
Source Bank Domain Models

Type-safe models representing the source banking API data structures.
Amounts and dates are converted to Money/FinancialDate primitives at the
boundary; everything here is a read-only snapshot of one run.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass(frozen=True)
class SourceAccount:
    """
    Account as reported by the source bank.

    external_id is the bank's stable account id and is the join key
    against ledger accounts.
    """

    external_id: str
    display_name: str
    account_type: str  # "Standard account", "High interest account", "BSU account", ...
    account_number: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceAccount":
        """
        Create SourceAccount from API dict.

        Args:
            data: Account item from the accounts endpoint

        Returns:
            SourceAccount instance
        """
        return cls(
            external_id=data["accountId"],
            display_name=data["name"],
            account_type=data["accountType"],
            account_number=data.get("accountNumber", ""),
        )


@dataclass(frozen=True)
class SourceTransaction:
    """Single booked transaction on one source account."""

    account_external_id: str
    amount: Money  # Signed: negative for money leaving the account
    accounting_date: FinancialDate
    text: str
    type_code: str  # e.g. "OVFNETTB", "VISA VARE"

    @classmethod
    def from_dict(cls, data: dict[str, Any], account_external_id: str) -> "SourceTransaction":
        """
        Create SourceTransaction from API dict.

        Args:
            data: Transaction item from the transactions endpoint
            account_external_id: Id of the account the transaction was fetched for

        Returns:
            SourceTransaction instance
        """
        return cls(
            account_external_id=account_external_id,
            amount=Money.from_amount(data["amount"]),
            accounting_date=FinancialDate.from_timestamp_string(data["accountingDate"]),
            text=data.get("text") or "",
            type_code=data.get("transactionType") or "",
        )


@dataclass
class TransactionPage:
    """
    One response from the transactions endpoint.

    is_error defaults to True when the field is absent; such a page is
    treated as a failed fetch.
    """

    is_error: bool
    error_message: str | None = None
    available_items: int = 0
    items: list[SourceTransaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], account_external_id: str) -> "TransactionPage":
        is_error = data.get("isError")
        if is_error is None:
            is_error = True

        if is_error:
            return cls(
                is_error=True,
                error_message=data.get("errorMessage") or "unknown error",
            )

        items = [SourceTransaction.from_dict(item, account_external_id) for item in data.get("items") or []]
        return cls(
            is_error=False,
            error_message=data.get("errorMessage"),
            available_items=data.get("availableItems", len(items)),
            items=items,
        )

    @property
    def is_truncated(self) -> bool:
        """True when the bank has more items than this page returned."""
        return not self.is_error and self.available_items > len(self.items)
