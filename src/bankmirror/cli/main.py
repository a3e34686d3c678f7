#!/usr/bin/env python3
"""
Main CLI Entry Point for Bank Mirror

Provides the command-line interface for the bank to ledger sync.
"""

import click

from ..core.config import get_config
from ..sync.checkpoint import FileCheckpointStore


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Bank Mirror - Incremental Bank to Ledger Sync

    Mirrors bank accounts and transactions into a personal-finance ledger,
    merging transfers between your own accounts into single entries.
    """
    ctx.ensure_object(dict)

    if config_env:
        import os

        os.environ["BANKMIRROR_ENV"] = config_env

    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("bankmirror").setLevel(logging.DEBUG)

    try:
        config_obj = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {config_obj.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from bankmirror import __author__, __version__

    click.echo(f"Bank Mirror v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Source API: {config_obj.source.base_url}")
    click.echo(f"  Ledger API: {config_obj.ledger.base_url}")
    click.echo(f"  Checkpoint File: {config_obj.sync.checkpoint_file}")

    store = FileCheckpointStore(config_obj.sync.checkpoint_file)
    click.echo(f"  Checkpoint: {store.summary_text()}")
    last_modified = store.last_modified()
    if last_modified:
        click.echo(f"  Last Sync Run: {last_modified:%Y-%m-%d %H:%M:%S}")

    click.echo(f"  Delay Days: {config_obj.sync.delay_days}")
    click.echo(f"  First Year: {config_obj.sync.first_year}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .sync import sync  # noqa: E402

main.add_command(sync)


if __name__ == "__main__":
    main()
