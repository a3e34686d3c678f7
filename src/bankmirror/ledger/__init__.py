"""
Ledger Package

Client and models for the personal-finance ledger the sync writes to.
"""

from .client import LedgerApiError, LedgerClient
from .models import AccountRole, LedgerAccount, LedgerPosting, PostingKind, PostingSide

__all__ = [
    "AccountRole",
    "LedgerAccount",
    "LedgerApiError",
    "LedgerClient",
    "LedgerPosting",
    "PostingKind",
    "PostingSide",
]
