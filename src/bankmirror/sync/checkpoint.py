#!/usr/bin/env python3
"""
Sync Checkpoint Storage

Persists the last date that was fully synced. The orchestrator only sees the
CheckpointStore protocol, so runs can be tested without touching the disk.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from ..core.dates import FinancialDate

logger = logging.getLogger(__name__)


class CheckpointError(ValueError):
    """Raised when a stored checkpoint cannot be read or parsed."""

    pass


class CheckpointStore(Protocol):
    """
    Read/write capability for the last-synced date.

    Absence of a checkpoint is a valid initial state and reads as None.
    """

    def read(self) -> FinancialDate | None:
        """
        Return the last synced date, or None if no sync has completed yet.

        Raises:
            CheckpointError: If a checkpoint exists but is invalid
        """
        ...

    def write(self, synced_until: FinancialDate) -> None:
        """Persist the last synced date."""
        ...


class FileCheckpointStore:
    """
    Checkpoint kept as a single YYYY-MM-DD value in a text file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> FinancialDate | None:
        if not self.exists():
            return None

        try:
            content = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise CheckpointError(f"invalid encoding in {self.path}: {e}") from e

        try:
            return FinancialDate.from_string(content)
        except ValueError as e:
            raise CheckpointError(f"invalid date in {self.path}: {content!r}") from e

    def write(self, synced_until: FinancialDate) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(synced_until.to_iso_string(), encoding="utf-8")
        logger.info(f"Checkpoint advanced to {synced_until} ({self.path})")

    def last_modified(self) -> datetime | None:
        """Get timestamp of the checkpoint file."""
        if not self.exists():
            return None
        return datetime.fromtimestamp(self.path.stat().st_mtime)

    def summary_text(self) -> str:
        """Get human-readable summary."""
        if not self.exists():
            return "No checkpoint: next run syncs from the configured first year"
        try:
            return f"Synced until {self.read()}"
        except CheckpointError as e:
            return f"Unreadable checkpoint: {e}"
