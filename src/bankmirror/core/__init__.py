"""
Core Utilities Package

Shared primitives and utilities used by the source, ledger and sync packages.

This package provides:
- Currency handling with integer minor units for precision
- Date handling for accounting dates and the sync checkpoint
- Configuration management for environment-specific settings
- JSON helpers for reports
"""

from .config import (
    Config,
    Environment,
    LedgerConfig,
    SourceConfig,
    SyncConfig,
    get_config,
    reload_config,
)
from .currency import amount_to_minor_units, minor_units_to_amount_str
from .dates import FinancialDate
from .json_utils import write_json
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "FinancialDate",
    "LedgerConfig",
    "Money",
    "SourceConfig",
    "SyncConfig",
    # Currency utilities
    "amount_to_minor_units",
    "get_config",
    "minor_units_to_amount_str",
    "reload_config",
    "write_json",
]
