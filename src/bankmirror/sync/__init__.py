"""
Sync Package

The sync engine: keeps ledger accounts in step with source accounts,
classifies fetched transactions, reconciles internal transfers and drives
the per-year incremental run.

Key Components:
- checkpoint: Last-synced date storage
- accounts: Account mirroring and the external-id mapping
- normalizer: Merchant description cleanup
- classifier: Deposit / withdrawal / transfer-candidate labelling
- reconciler: Pairing of internal transfer halves
- writer: Posting construction and submission
- orchestrator: The sync run itself
"""

from .accounts import (
    AccountMap,
    AccountMirror,
    DuplicateExternalIdError,
    MirrorResult,
    UnsupportedAccountTypeError,
    convert_account,
)
from .checkpoint import CheckpointError, CheckpointStore, FileCheckpointStore
from .classifier import INTERNAL_TRANSFER_CODES, TransactionClass, classify_transaction
from .normalizer import normalize_description
from .orchestrator import SyncOrchestrator, SyncReport, SyncSettings, SyncState, SyncWindow, plan_windows
from .reconciler import ReconciliationResult, TransferCandidate, TransferPair, reconcile_transfers
from .writer import LedgerWriter, build_direct_posting, build_transfer_posting

__all__ = [
    "INTERNAL_TRANSFER_CODES",
    "AccountMap",
    "AccountMirror",
    "CheckpointError",
    "CheckpointStore",
    "DuplicateExternalIdError",
    "FileCheckpointStore",
    "LedgerWriter",
    "MirrorResult",
    "ReconciliationResult",
    "SyncOrchestrator",
    "SyncReport",
    "SyncSettings",
    "SyncState",
    "SyncWindow",
    "TransactionClass",
    "TransferCandidate",
    "TransferPair",
    "UnsupportedAccountTypeError",
    "build_direct_posting",
    "build_transfer_posting",
    "classify_transaction",
    "convert_account",
    "normalize_description",
    "plan_windows",
    "reconcile_transfers",
]
