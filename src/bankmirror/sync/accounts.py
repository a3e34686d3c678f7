#!/usr/bin/env python3
"""
Account Mirroring

Makes sure every source bank account has a matching ledger asset account.
The two are joined by the source account id stored in the ledger account's
notes field.
"""

import logging
from dataclasses import dataclass, field

from ..ledger.client import LedgerApiError, LedgerClient
from ..ledger.models import AccountRole, LedgerAccount
from ..source.models import SourceAccount

logger = logging.getLogger(__name__)

ACCOUNT_TYPE_ROLES = {
    "High interest account": AccountRole.SAVING_ASSET,
    "Standard account": AccountRole.DEFAULT_ASSET,
    "BSU account": AccountRole.SAVING_ASSET,
}


class UnsupportedAccountTypeError(ValueError):
    """Raised for a source account type with no ledger role mapping."""

    def __init__(self, account: SourceAccount):
        super().__init__(
            f"conversion not implemented for account type '{account.account_type}' "
            f"(account '{account.display_name}')"
        )
        self.account = account


class DuplicateExternalIdError(ValueError):
    """Raised when two ledger accounts claim the same source account id."""

    pass


def convert_account(source_account: SourceAccount) -> LedgerAccount:
    """
    Build the ledger account that mirrors a source account.

    Raises:
        UnsupportedAccountTypeError: If the account type has no role mapping
    """
    role = ACCOUNT_TYPE_ROLES.get(source_account.account_type)
    if role is None:
        raise UnsupportedAccountTypeError(source_account)

    return LedgerAccount(
        id=None,
        name=source_account.display_name,
        role=role,
        external_note=source_account.external_id,
        account_number=source_account.account_number,
    )


@dataclass
class AccountMap:
    """
    Explicit source-id to ledger-account mapping built once per pass.

    Ledger accounts without a note are not part of the mapping.
    """

    by_external_id: dict[str, LedgerAccount] = field(default_factory=dict)

    @classmethod
    def build(cls, ledger_accounts: list[LedgerAccount]) -> "AccountMap":
        """
        Index ledger accounts by their external note.

        Raises:
            DuplicateExternalIdError: If a note appears on more than one account
        """
        mapping: dict[str, LedgerAccount] = {}
        for account in ledger_accounts:
            if not account.external_note:
                continue
            existing = mapping.get(account.external_note)
            if existing is not None:
                raise DuplicateExternalIdError(
                    f"ledger accounts '{existing.name}' (id {existing.id}) and '{account.name}' "
                    f"(id {account.id}) both reference source account {account.external_note}"
                )
            mapping[account.external_note] = account
        return cls(by_external_id=mapping)

    def get(self, external_id: str) -> LedgerAccount | None:
        return self.by_external_id.get(external_id)

    def __getitem__(self, external_id: str) -> LedgerAccount:
        try:
            return self.by_external_id[external_id]
        except KeyError:
            raise KeyError(f"no ledger account references source account {external_id}") from None

    def __contains__(self, external_id: object) -> bool:
        return external_id in self.by_external_id

    def __len__(self) -> int:
        return len(self.by_external_id)


@dataclass
class MirrorResult:
    """Outcome of one account mirroring pass."""

    account_map: AccountMap
    created: list[LedgerAccount] = field(default_factory=list)
    failed: list[SourceAccount] = field(default_factory=list)
    missing: list[SourceAccount] = field(default_factory=list)


class AccountMirror:
    """Creates missing ledger accounts for source accounts."""

    def __init__(self, ledger: LedgerClient, dry_run: bool = False):
        self.ledger = ledger
        self.dry_run = dry_run

    def ensure_accounts(self, source_accounts: list[SourceAccount]) -> MirrorResult:
        """
        Create a ledger account for every unmapped source account.

        The ledger accounts are fetched again after any creation so the
        returned mapping contains the new entries with their ledger ids.

        Raises:
            UnsupportedAccountTypeError: For an unmappable account type (aborts the run)
            DuplicateExternalIdError: If the ledger has ambiguous notes
            LedgerApiError: If the ledger accounts cannot be listed
        """
        account_map = AccountMap.build(self.ledger.list_accounts())
        missing = [acc for acc in source_accounts if acc.external_id not in account_map]

        result = MirrorResult(account_map=account_map)
        if not missing:
            return result

        # Convert everything first so an unsupported type aborts before any remote change
        to_create = [(acc, convert_account(acc)) for acc in missing]

        for source_account, ledger_account in to_create:
            if self.dry_run:
                logger.info(f"[dry run] Account '{source_account.display_name}' does not exist, would create it")
                result.missing.append(source_account)
                continue

            logger.info(f"Account '{source_account.display_name}' does not already exist, creating...")
            try:
                result.created.append(self.ledger.create_account(ledger_account))
            except LedgerApiError as e:
                logger.warning(f"Unable to create account '{source_account.display_name}', skipping: {e}")
                result.failed.append(source_account)

        if result.created:
            result.account_map = AccountMap.build(self.ledger.list_accounts())

        return result
