"""
Source Bank Package

Read-only access to the source banking API: OAuth token acquisition,
account listing and per-account transaction listing.
"""

from .auth import SourceAuthError, get_auth_token
from .client import SourceApiError, SourceBankClient
from .models import SourceAccount, SourceTransaction, TransactionPage

__all__ = [
    "SourceAccount",
    "SourceApiError",
    "SourceAuthError",
    "SourceBankClient",
    "SourceTransaction",
    "TransactionPage",
    "get_auth_token",
]
