#!/usr/bin/env python3
"""
Ledger Domain Models

Models for the personal-finance ledger the sync writes to: asset accounts
and the postings created for each imported or merged transaction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


class AccountRole(Enum):
    """Role of an asset account in the ledger."""

    DEFAULT_ASSET = "defaultAsset"
    SAVING_ASSET = "savingAsset"


class PostingKind(Enum):
    """Ledger transaction types produced by the sync."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class LedgerAccount:
    """
    Asset account in the ledger.

    external_note holds the source bank account id; it is how a ledger
    account is recognised as the mirror of a source account.
    """

    id: str | None
    name: str
    role: AccountRole | None = None
    external_note: str | None = None
    account_number: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerAccount":
        """
        Create LedgerAccount from an API resource object.

        Args:
            data: Item of the accounts endpoint ({"id": ..., "attributes": {...}})

        Returns:
            LedgerAccount instance
        """
        attributes = data.get("attributes", {})
        role_value = attributes.get("account_role")
        try:
            role = AccountRole(role_value) if role_value else None
        except ValueError:
            # Roles this tool never creates (e.g. "sharedAsset") are kept as unknown
            role = None

        notes = attributes.get("notes")
        return cls(
            id=str(data["id"]),
            name=attributes["name"],
            role=role,
            external_note=notes.strip() if notes else None,
            account_number=attributes.get("account_number"),
        )

    def to_create_payload(self) -> dict[str, Any]:
        """Request body for creating this account."""
        payload: dict[str, Any] = {
            "name": self.name,
            "type": "asset",
        }
        if self.role is not None:
            payload["account_role"] = self.role.value
        if self.account_number:
            payload["account_number"] = self.account_number
        if self.external_note:
            payload["notes"] = self.external_note
        return payload


@dataclass(frozen=True)
class PostingSide:
    """
    One side of a posting: either an own ledger account or a free-text counterparty.

    Exactly one of account_id and name is set.
    """

    account_id: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if (self.account_id is None) == (self.name is None):
            raise ValueError("PostingSide needs exactly one of account_id and name")

    @classmethod
    def account(cls, ledger_account: LedgerAccount) -> "PostingSide":
        if ledger_account.id is None:
            raise ValueError(f"Ledger account '{ledger_account.name}' has no id")
        return cls(account_id=ledger_account.id)

    @classmethod
    def counterparty(cls, name: str) -> "PostingSide":
        return cls(name=name)

    @property
    def label(self) -> str:
        """Short display form for logs."""
        if self.account_id is not None:
            return f"<account {self.account_id}>"
        return self.name or "<missing>"


@dataclass(frozen=True)
class LedgerPosting:
    """
    A single ledger transaction ready for submission.

    amount is always the absolute value; direction is expressed by the
    source and destination sides.
    """

    date: FinancialDate
    amount: Money
    description: str
    kind: PostingKind
    source: PostingSide
    destination: PostingSide
    category_name: str | None = None

    def __post_init__(self) -> None:
        if self.amount.is_negative():
            raise ValueError(f"Posting amount must be absolute, got {self.amount}")

    def to_split_dict(self) -> dict[str, Any]:
        """Convert to the ledger's transaction split format."""
        split: dict[str, Any] = {
            "type": self.kind.value,
            "date": self.date.to_iso_string(),
            "amount": self.amount.to_amount_str(),
            "description": self.description,
        }
        if self.source.account_id is not None:
            split["source_id"] = self.source.account_id
        else:
            split["source_name"] = self.source.name
        if self.destination.account_id is not None:
            split["destination_id"] = self.destination.account_id
        else:
            split["destination_name"] = self.destination.name
        if self.category_name:
            split["category_name"] = self.category_name
        return split

    def summary(self) -> str:
        """One-line description used in logs and dry-run output."""
        return (
            f"{self.date} {self.kind.value}: {self.source.label} -- "
            f"{self.amount} --> {self.destination.label} ({self.description})"
        )
