#!/usr/bin/env python3
"""
Ledger Writer

Converts classified source transactions and matched transfer pairs into
ledger postings and submits them one at a time. A rejected posting is logged
and skipped; it never aborts the run.
"""

import logging
from dataclasses import dataclass, field

from ..ledger.client import LedgerApiError, LedgerClient
from ..ledger.models import LedgerAccount, LedgerPosting, PostingKind, PostingSide
from ..source.models import SourceTransaction
from .normalizer import normalize_description
from .reconciler import TransferPair

logger = logging.getLogger(__name__)


def build_direct_posting(transaction: SourceTransaction, account: LedgerAccount) -> LedgerPosting:
    """
    Build a deposit or withdrawal posting for a transaction on an own account.

    The own account is the known side; the other side is the normalized
    transaction text. The description keeps the raw text.

    Args:
        transaction: Source transaction that is not a transfer candidate
        account: Ledger account mirroring the transaction's source account

    Returns:
        LedgerPosting with an absolute amount
    """
    counterparty = PostingSide.counterparty(normalize_description(transaction.text))
    own = PostingSide.account(account)

    if transaction.amount.is_negative():
        kind, source, destination = PostingKind.WITHDRAWAL, own, counterparty
    else:
        kind, source, destination = PostingKind.DEPOSIT, counterparty, own

    return LedgerPosting(
        date=transaction.accounting_date,
        amount=transaction.amount.abs(),
        description=transaction.text,
        kind=kind,
        source=source,
        destination=destination,
        category_name=transaction.type_code or None,
    )


def build_transfer_posting(
    pair: TransferPair,
    debit_account: LedgerAccount,
    credit_account: LedgerAccount,
) -> LedgerPosting:
    """Build the single transfer posting for a matched debit/credit pair."""
    debit_tx = pair.debit.transaction
    return LedgerPosting(
        date=pair.date,
        amount=pair.amount,
        description=pair.text,
        kind=PostingKind.TRANSFER,
        source=PostingSide.account(debit_account),
        destination=PostingSide.account(credit_account),
        category_name=debit_tx.type_code or None,
    )


@dataclass
class WriteStats:
    """Counters for one run's submissions."""

    submitted: int = 0
    failed: int = 0
    duplicates: int = 0
    dry_run: int = 0
    errors: list[str] = field(default_factory=list)


class LedgerWriter:
    """Submits postings to the ledger, one remote call per posting."""

    def __init__(self, ledger: LedgerClient, dry_run: bool = False):
        self.ledger = ledger
        self.dry_run = dry_run
        self.stats = WriteStats()

    def submit(self, posting: LedgerPosting) -> bool:
        """
        Submit a posting.

        Returns:
            True if the ledger accepted the posting (always False in dry-run)
        """
        if self.dry_run:
            logger.info(f"[dry run] {posting.summary()}")
            self.stats.dry_run += 1
            return False

        logger.info(posting.summary())
        try:
            self.ledger.create_transaction(posting)
        except LedgerApiError as e:
            self.stats.failed += 1
            if e.is_duplicate:
                self.stats.duplicates += 1
                logger.warning(f"\tduplicate transaction rejected by ledger, skipping: {posting.summary()}")
            else:
                logger.warning(f"\tunable to store transaction, skipping: {e}")
            self.stats.errors.append(str(e))
            return False

        self.stats.submitted += 1
        return True
