#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with the API clients replaced by the
in-memory fakes.
"""

import json

import pytest
from click.testing import CliRunner

from bankmirror.cli.main import main
from bankmirror.source.auth import SourceAuthError
from tests.fixtures.fakes import FakeLedger, FakeSourceBank, make_source_account, make_transaction


@pytest.fixture
def fake_apis(monkeypatch):
    """Route the sync command to in-memory source bank and ledger."""
    bank = FakeSourceBank()
    bank.add_account(make_source_account("A", "Brukskonto"))
    bank.add_transaction(make_transaction("A", "-42.50", date="2021-03-01", text="KIWI", type_code="VISA VARE"))
    ledger = FakeLedger()

    monkeypatch.setattr("bankmirror.cli.sync.get_auth_token", lambda *args, **kwargs: "source-token")
    monkeypatch.setattr("bankmirror.cli.sync.SourceBankClient", lambda *args, **kwargs: bank)
    monkeypatch.setattr("bankmirror.cli.sync.LedgerClient", lambda *args, **kwargs: ledger)
    return bank, ledger


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Bank Mirror" in result.output
        for command in ["sync", "config", "version"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "Bank Mirror v" in result.output
        assert "Author:" in result.output

    def test_config_command_shows_configuration(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Checkpoint File:" in result.output
        assert "Delay Days: 10" in result.output
        assert "First Year: 2019" in result.output
        assert "test-token" not in result.output

    def test_config_command_shows_checkpoint_state(self, monkeypatch, temp_dir):
        checkpoint = temp_dir / "firefly_last_sync"
        monkeypatch.setenv("SYNC_CHECKPOINT_FILE", str(checkpoint))

        before = self.runner.invoke(main, ["config"])
        checkpoint.write_text("2021-06-20")
        after = self.runner.invoke(main, ["config"])

        assert before.exit_code == 0, before.output
        assert "Checkpoint: No checkpoint" in before.output
        assert "Last Sync Run:" not in before.output
        assert after.exit_code == 0, after.output
        assert "Checkpoint: Synced until 2021-06-20" in after.output
        assert "Last Sync Run:" in after.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["nonexistent-command"])

        assert result.exit_code != 0
        assert "No such command" in result.output


@pytest.mark.integration
class TestSyncCommand:
    """Test the sync command against fake APIs."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_sync_posts_and_writes_checkpoint_and_report(self, fake_apis, temp_dir):
        bank, ledger = fake_apis
        checkpoint = temp_dir / "firefly_last_sync"
        report_file = temp_dir / "report.json"

        result = self.runner.invoke(
            main,
            [
                "sync",
                "--first-year", "2021",
                "--checkpoint-file", str(checkpoint),
                "--report-file", str(report_file),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Sync Summary:" in result.output
        assert "Checkpoint advanced to" in result.output
        assert len(ledger.postings) == 1
        assert checkpoint.exists()
        report = json.loads(report_file.read_text(encoding="utf-8"))
        assert report["state"] == "checkpoint_written"
        assert report["postings_submitted"] == 1
        assert report["checkpoint_written"] == checkpoint.read_text()

    def test_dry_run_leaves_checkpoint_untouched(self, fake_apis, temp_dir):
        bank, ledger = fake_apis
        checkpoint = temp_dir / "firefly_last_sync"

        result = self.runner.invoke(
            main, ["sync", "--dry-run", "--first-year", "2021", "--checkpoint-file", str(checkpoint)]
        )

        assert result.exit_code == 0, result.output
        assert "Checkpoint left untouched" in result.output
        assert ledger.postings == []
        assert ledger.create_account_calls == 0
        assert not checkpoint.exists()

    def test_up_to_date_checkpoint(self, fake_apis, temp_dir):
        bank, _ = fake_apis
        checkpoint = temp_dir / "firefly_last_sync"
        checkpoint.write_text("2999-01-01")

        result = self.runner.invoke(main, ["sync", "--checkpoint-file", str(checkpoint)])

        assert result.exit_code == 0, result.output
        assert "Already updated everything until 2999-01-01" in result.output
        assert bank.calls == []

    def test_invalid_checkpoint_is_fatal(self, fake_apis, temp_dir):
        checkpoint = temp_dir / "firefly_last_sync"
        checkpoint.write_text("not a date")

        result = self.runner.invoke(main, ["sync", "--checkpoint-file", str(checkpoint)])

        assert result.exit_code == 1
        assert "invalid date" in result.output

    def test_unsupported_account_type_is_fatal(self, fake_apis, temp_dir):
        bank, ledger = fake_apis
        bank.add_account(make_source_account("C", "Kredittkort", "Credit card account"))

        result = self.runner.invoke(main, ["sync", "--checkpoint-file", str(temp_dir / "cp")])

        assert result.exit_code == 1
        assert "Credit card account" in result.output
        assert ledger.create_account_calls == 0

    def test_auth_failure_is_fatal(self, fake_apis, monkeypatch, temp_dir):
        def fail(*args, **kwargs):
            raise SourceAuthError("received error from api: invalid_client")

        monkeypatch.setattr("bankmirror.cli.sync.get_auth_token", fail)

        result = self.runner.invoke(main, ["sync", "--checkpoint-file", str(temp_dir / "cp")])

        assert result.exit_code == 1
        assert "invalid_client" in result.output

    def test_missing_credentials(self, fake_apis, monkeypatch, temp_dir):
        monkeypatch.delenv("LEDGER_ACCESS_TOKEN")

        result = self.runner.invoke(main, ["sync", "--checkpoint-file", str(temp_dir / "cp")])

        assert result.exit_code == 1
        assert "LEDGER_ACCESS_TOKEN is required" in result.output

    def test_negative_delay_rejected(self, fake_apis, temp_dir):
        result = self.runner.invoke(main, ["sync", "--delay-days", "-1", "--checkpoint-file", str(temp_dir / "cp")])

        assert result.exit_code == 2
        assert "--delay-days" in result.output
