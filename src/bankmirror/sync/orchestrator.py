#!/usr/bin/env python3
"""
Sync Orchestrator

Drives one incremental sync run:

    Idle -> AccountsReconciled -> Year(first..last) -> CheckpointWritten

Each calendar year in the sync window is processed on its own. Direct
deposits and withdrawals are posted as they are fetched; internal transfer
candidates are collected across all accounts of the year and reconciled
once the year's fetches are done. The checkpoint is written only after every
year has been processed.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..ledger.client import LedgerClient
from ..source.client import SourceApiError, SourceBankClient
from ..source.models import SourceAccount, TransactionPage
from .accounts import AccountMap, AccountMirror
from .checkpoint import CheckpointStore
from .classifier import TransactionClass, classify_transaction
from .reconciler import ReconciliationResult, TransferCandidate, reconcile_transfers
from .writer import LedgerWriter, build_direct_posting, build_transfer_posting

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncSettings:
    """Run parameters the orchestrator needs from configuration."""

    delay_days: int = 10
    first_year: int = 2019
    page_size: int = 1000


class SyncState(Enum):
    """States of a sync run."""

    IDLE = "idle"
    ACCOUNTS_RECONCILED = "accounts_reconciled"
    SYNCING = "syncing"
    NOTHING_TO_SYNC = "nothing_to_sync"
    CHECKPOINT_WRITTEN = "checkpoint_written"
    DRY_RUN_COMPLETE = "dry_run_complete"


@dataclass(frozen=True)
class SyncWindow:
    """Inclusive fetch window for one calendar year."""

    year: int
    start: FinancialDate
    end: FinancialDate

    def to_dict(self) -> dict[str, Any]:
        return {"year": self.year, "start": str(self.start), "end": str(self.end)}


def plan_windows(
    previous_checkpoint: FinancialDate | None,
    last_sync_day: FinancialDate,
    default_first_year: int,
) -> list[SyncWindow]:
    """
    Split the unsynced range into per-year fetch windows.

    The first window starts at the previous checkpoint (or January 1st of the
    default first year), the last one ends at last_sync_day, and every year in
    between covers January 1st to December 31st.
    """
    first_year = previous_checkpoint.year if previous_checkpoint else default_first_year
    last_year = last_sync_day.year

    windows = []
    for year in range(first_year, last_year + 1):
        if year == first_year and previous_checkpoint is not None:
            start = previous_checkpoint
        else:
            start = FinancialDate.year_start(year)
        end = last_sync_day if year == last_year else FinancialDate.year_end(year)
        windows.append(SyncWindow(year=year, start=start, end=end))
    return windows


@dataclass
class SyncReport:
    """Summary of one sync run."""

    state: SyncState = SyncState.IDLE
    last_sync_day: FinancialDate | None = None
    previous_checkpoint: FinancialDate | None = None
    windows: list[SyncWindow] = field(default_factory=list)
    accounts_created: list[str] = field(default_factory=list)
    accounts_missing: list[str] = field(default_factory=list)
    failed_fetches: list[str] = field(default_factory=list)
    transactions_fetched: int = 0
    postings_submitted: int = 0
    postings_failed: int = 0
    postings_dry_run: int = 0
    transfer_pairs: int = 0
    leftovers: int = 0
    unbalanced_pairs: int = 0
    checkpoint_written: FinancialDate | None = None

    @property
    def years(self) -> list[int]:
        return [window.year for window in self.windows]

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form for the report file."""
        return {
            "state": self.state.value,
            "last_sync_day": str(self.last_sync_day) if self.last_sync_day else None,
            "previous_checkpoint": str(self.previous_checkpoint) if self.previous_checkpoint else None,
            "windows": [window.to_dict() for window in self.windows],
            "accounts_created": self.accounts_created,
            "accounts_missing": self.accounts_missing,
            "failed_fetches": self.failed_fetches,
            "transactions_fetched": self.transactions_fetched,
            "postings_submitted": self.postings_submitted,
            "postings_failed": self.postings_failed,
            "postings_dry_run": self.postings_dry_run,
            "transfer_pairs": self.transfer_pairs,
            "leftovers": self.leftovers,
            "unbalanced_pairs": self.unbalanced_pairs,
            "checkpoint_written": str(self.checkpoint_written) if self.checkpoint_written else None,
        }


class SyncOrchestrator:
    """
    Runs an incremental sync from the source bank into the ledger.

    All collaborators are injected; the orchestrator reads no environment
    variables and touches no files itself.
    """

    def __init__(
        self,
        source: SourceBankClient,
        ledger: LedgerClient,
        checkpoint_store: CheckpointStore,
        customer_id: str,
        settings: SyncSettings | None = None,
        today: FinancialDate | None = None,
        dry_run: bool = False,
    ):
        self.source = source
        self.ledger = ledger
        self.checkpoint_store = checkpoint_store
        self.customer_id = customer_id
        self.settings = settings or SyncSettings()
        self.today = today or FinancialDate.today()
        self.dry_run = dry_run

        self.writer = LedgerWriter(ledger, dry_run=dry_run)
        self.report = SyncReport()
        # Start date of the earliest window in which an account could not be synced
        self._earliest_failure: FinancialDate | None = None

    @property
    def last_sync_day(self) -> FinancialDate:
        return self.today.minus_days(self.settings.delay_days)

    def run(self) -> SyncReport:
        """
        Execute the sync.

        Raises:
            CheckpointError: If the stored checkpoint cannot be parsed
            UnsupportedAccountTypeError: If a source account cannot be mirrored
            DuplicateExternalIdError: If the ledger's account notes are ambiguous
            SourceApiError: If the source accounts cannot be listed
            LedgerApiError: If the ledger accounts cannot be listed
        """
        report = self.report
        previous = self.checkpoint_store.read()
        last_sync_day = self.last_sync_day
        report.previous_checkpoint = previous
        report.last_sync_day = last_sync_day

        source_accounts = self.source.list_accounts(self.customer_id)
        mirror_result = AccountMirror(self.ledger, dry_run=self.dry_run).ensure_accounts(source_accounts)
        report.accounts_created = [acc.name for acc in mirror_result.created]
        report.accounts_missing = [acc.display_name for acc in mirror_result.missing + mirror_result.failed]
        account_map = mirror_result.account_map
        report.state = SyncState.ACCOUNTS_RECONCILED

        if previous is not None and previous >= last_sync_day:
            logger.info(f"Already updated everything until {previous}")
            report.state = SyncState.NOTHING_TO_SYNC
            return report

        report.windows = plan_windows(previous, last_sync_day, self.settings.first_year)
        report.state = SyncState.SYNCING
        for window in report.windows:
            logger.info(f"Syncing {window.year}: {window.start} to {window.end}")
            self._sync_window(window, source_accounts, account_map)

        stats = self.writer.stats
        report.postings_submitted = stats.submitted
        report.postings_failed = stats.failed
        report.postings_dry_run = stats.dry_run

        if self.dry_run:
            logger.info("Dry run complete, checkpoint left untouched")
            report.state = SyncState.DRY_RUN_COMPLETE
            return report

        checkpoint = self._next_checkpoint(last_sync_day)
        self.checkpoint_store.write(checkpoint)
        report.checkpoint_written = checkpoint
        report.state = SyncState.CHECKPOINT_WRITTEN
        return report

    def _next_checkpoint(self, last_sync_day: FinancialDate) -> FinancialDate:
        if self._earliest_failure is None:
            return last_sync_day

        logger.warning(
            f"Some accounts could not be synced; checkpoint held back to {self._earliest_failure} "
            f"instead of {last_sync_day}"
        )
        return self._earliest_failure

    def _record_failure(self, window: SyncWindow, label: str) -> None:
        self.report.failed_fetches.append(f"{window.year}:{label}")
        if self._earliest_failure is None or window.start < self._earliest_failure:
            self._earliest_failure = window.start

    def _fetch(self, account: SourceAccount, window: SyncWindow) -> TransactionPage | None:
        try:
            page = self.source.list_transactions(
                account.external_id,
                self.customer_id,
                window.start,
                window.end,
                page_size=self.settings.page_size,
            )
        except SourceApiError as e:
            logger.warning(f"Error when accessing transactions for '{account.display_name}', skipping: {e}")
            return None

        if page.is_error:
            logger.warning(f"Error when accessing transactions, skipping: {page.error_message}")
            return None

        if page.is_truncated:
            logger.warning(
                f"Only {len(page.items)} of {page.available_items} transaction(s) returned for "
                f"'{account.display_name}' in {window.year}; increase the page size"
            )
        return page

    def _sync_window(
        self,
        window: SyncWindow,
        source_accounts: list[SourceAccount],
        account_map: AccountMap,
    ) -> ReconciliationResult:
        candidates: list[TransferCandidate] = []

        for account in source_accounts:
            ledger_account = account_map.get(account.external_id)
            if ledger_account is None:
                logger.warning(f"No ledger account for '{account.display_name}', skipping its transactions")
                self._record_failure(window, account.display_name)
                continue

            page = self._fetch(account, window)
            if page is None:
                self._record_failure(window, account.display_name)
                continue

            logger.info(f"Found {len(page.items)} transaction(s) for account {account.display_name}")
            self.report.transactions_fetched += len(page.items)

            for transaction in page.items:
                if classify_transaction(transaction) is TransactionClass.INTERNAL_TRANSFER_CANDIDATE:
                    logger.info(
                        f"{transaction.accounting_date} {transaction.type_code}: {ledger_account.name} -- "
                        f"{transaction.amount} -- {transaction.text} **internal transaction for dedup**"
                    )
                    candidates.append(TransferCandidate(transaction=transaction))
                    continue

                self.writer.submit(build_direct_posting(transaction, ledger_account))

        result = reconcile_transfers(candidates)
        self._post_transfers(result, account_map)
        return result

    def _post_transfers(self, result: ReconciliationResult, account_map: AccountMap) -> None:
        report = self.report

        for pair in result.pairs:
            # Candidates are only collected for mapped accounts
            debit_account = account_map[pair.debit.account_external_id]
            credit_account = account_map[pair.credit.account_external_id]

            logger.info(
                f"{pair.date} : {debit_account.name} -- {pair.amount} --> {credit_account.name} : {pair.text}"
            )
            self.writer.submit(build_transfer_posting(pair, debit_account, credit_account))
            report.transfer_pairs += 1

        for pair in result.unbalanced:
            logger.warning(
                f"\tgot unbalanced transaction (not equal amount/date/text), skipping: "
                f"{pair.debit.transaction.text!r} / {pair.credit.transaction.text!r}"
            )
            report.unbalanced_pairs += 1

        for leftover in result.leftovers:
            tx = leftover.transaction
            account = account_map.get(leftover.account_external_id)
            logger.warning(
                f"Leftover transfer candidate: {tx.accounting_date} : "
                f"{account.name if account else leftover.account_external_id} -- {tx.amount} : {tx.text}"
            )
            report.leftovers += 1
