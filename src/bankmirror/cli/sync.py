#!/usr/bin/env python3
"""
Sync CLI - Bank to Ledger Import

Runs one incremental sync: mirrors accounts, imports new transactions since
the last checkpoint and merges internal transfers.
"""

import logging
from pathlib import Path

import click

from ..core.config import get_config
from ..core.json_utils import write_json
from ..ledger.client import LedgerApiError, LedgerClient
from ..source.auth import SourceAuthError, get_auth_token
from ..source.client import SourceApiError, SourceBankClient
from ..sync.accounts import DuplicateExternalIdError, UnsupportedAccountTypeError
from ..sync.checkpoint import CheckpointError, FileCheckpointStore
from ..sync.orchestrator import SyncOrchestrator, SyncReport, SyncSettings, SyncState

logger = logging.getLogger(__name__)

FATAL_ERRORS = (
    SourceAuthError,
    SourceApiError,
    LedgerApiError,
    CheckpointError,
    UnsupportedAccountTypeError,
    DuplicateExternalIdError,
)


def print_summary(report: SyncReport) -> None:
    """Echo a short run summary."""
    if report.state is SyncState.NOTHING_TO_SYNC:
        click.echo(f"Already updated everything until {report.previous_checkpoint}")
        return

    click.echo("Sync Summary:")
    click.echo(f"  Years: {', '.join(str(year) for year in report.years)}")
    click.echo(f"  Transactions fetched: {report.transactions_fetched}")
    click.echo(f"  Postings submitted: {report.postings_submitted}")
    if report.postings_dry_run:
        click.echo(f"  Postings (dry run): {report.postings_dry_run}")
    click.echo(f"  Postings failed: {report.postings_failed}")
    click.echo(f"  Transfer pairs: {report.transfer_pairs}")

    if report.accounts_created:
        click.echo(f"  Accounts created: {', '.join(report.accounts_created)}")
    if report.accounts_missing:
        click.echo(f"  Accounts missing: {', '.join(report.accounts_missing)}")
    if report.leftovers or report.unbalanced_pairs:
        click.echo(f"  ⚠️  Unmatched transfer candidates: {report.leftovers} leftover(s), "
                   f"{report.unbalanced_pairs} unbalanced pair(s)")
    if report.failed_fetches:
        click.echo(f"  ⚠️  Failed fetches: {', '.join(report.failed_fetches)}")

    if report.checkpoint_written:
        click.echo(f"✅ Checkpoint advanced to {report.checkpoint_written}")
    else:
        click.echo("Checkpoint left untouched")


@click.command()
@click.option("--delay-days", type=int, help="Days of bank reporting lag to leave unsynced")
@click.option("--first-year", type=int, help="Year to start from when no checkpoint exists")
@click.option("--checkpoint-file", type=click.Path(path_type=Path), help="Checkpoint file path")
@click.option("--dry-run", is_flag=True, help="Log postings without submitting or advancing the checkpoint")
@click.option("--report-file", type=click.Path(path_type=Path), help="Write the run report as JSON")
@click.pass_context
def sync(
    ctx: click.Context,
    delay_days: int | None,
    first_year: int | None,
    checkpoint_file: Path | None,
    dry_run: bool,
    report_file: Path | None,
) -> None:
    """
    Import new bank transactions into the ledger.

    Example:
      bankmirror sync --dry-run
      bankmirror sync --first-year 2020 --report-file sync_report.json
    """
    config = get_config()

    missing = config.missing_credentials()
    if missing:
        raise click.ClickException(f"Missing credentials: {'; '.join(missing)}")

    settings = SyncSettings(
        delay_days=delay_days if delay_days is not None else config.sync.delay_days,
        first_year=first_year if first_year is not None else config.sync.first_year,
        page_size=config.source.page_size,
    )
    if settings.delay_days < 0:
        raise click.BadParameter("must be non-negative", param_hint="--delay-days")

    store = FileCheckpointStore(checkpoint_file or config.sync.checkpoint_file)

    try:
        token = get_auth_token(
            config.source.auth_url,
            config.source.client_id,
            config.source.client_secret,
            timeout=config.source.timeout,
        )
        source = SourceBankClient(config.source.base_url, token, timeout=config.source.timeout)
        ledger = LedgerClient(
            config.ledger.base_url,
            config.ledger.access_token,
            timeout=config.ledger.timeout,
            error_if_duplicate_hash=config.ledger.error_if_duplicate_hash,
        )

        orchestrator = SyncOrchestrator(
            source=source,
            ledger=ledger,
            checkpoint_store=store,
            customer_id=config.source.customer_id,
            settings=settings,
            dry_run=dry_run,
        )
        report = orchestrator.run()
    except FATAL_ERRORS as e:
        logger.error(f"Sync aborted: {e}")
        raise click.ClickException(str(e)) from e

    print_summary(report)

    if report_file:
        write_json(report_file, report.to_dict())
        click.echo(f"Report written to {report_file}")
