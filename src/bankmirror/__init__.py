"""
Bank Mirror - Incremental Bank to Ledger Sync

Mirrors a customer's bank accounts and transactions from the source banking
API into a personal-finance ledger.

Key Features:
- Creates missing ledger asset accounts for every bank account
- Imports new transactions since the last successful run, one year at a time
- Merges the two halves of internal transfers into a single ledger transfer
- Cleans merchant descriptions into counterparty names

Domain Packages:
- core: Money and date primitives, configuration, JSON helpers
- source: Source bank API client and models
- ledger: Ledger API client and models
- sync: Account mirroring, classification, transfer reconciliation, orchestration
- cli: Command-line interface

Example Usage:
    from bankmirror.sync import normalize_description, reconcile_transfers
    from bankmirror.core.money import Money
"""

__version__ = "0.1.0"
__author__ = "Bank Mirror contributors"

from .core.config import Environment, get_config
from .core.dates import FinancialDate
from .core.money import Money

__all__ = [
    "Environment",
    "FinancialDate",
    "Money",
    "get_config",
]
