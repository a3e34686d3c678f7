"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures.fakes import FakeLedger, FakeSourceBank, MemoryCheckpointStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_account_item() -> dict[str, Any]:
    """Sample source bank account item."""
    return {
        "accountId": "ACC-CHECKING",
        "accountNumber": "97100000001",
        "name": "Brukskonto",
        "accountType": "Standard account",
        "available": 1234.5,
        "balance": 1234.5,
    }


@pytest.fixture
def sample_transaction_item() -> dict[str, Any]:
    """Sample source bank transaction item."""
    return {
        "accountingDate": "2021-03-01T00:00:00",
        "interestDate": "2021-03-01T00:00:00",
        "amount": -42.5,
        "text": "12.02 KIWI OSLO Betalt: 01.03.21",
        "transactionType": "VISA VARE",
        "transactionTypeCode": 714,
    }


@pytest.fixture
def source_bank() -> FakeSourceBank:
    return FakeSourceBank()


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def checkpoint_store() -> MemoryCheckpointStore:
    return MemoryCheckpointStore()


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data or credentials
    monkeypatch.setenv("BANKMIRROR_ENV", "test")
    monkeypatch.setenv("BANKMIRROR_DATA_DIR", str(tmp_path / "bankmirror_data"))

    monkeypatch.setenv("SOURCE_CLIENT_ID", "test-client")
    monkeypatch.setenv("SOURCE_CLIENT_SECRET", "test-secret")
    monkeypatch.setenv("SOURCE_CUSTOMER_ID", "12345678901")
    monkeypatch.setenv("LEDGER_ACCESS_TOKEN", "test-token")

    # The configuration is cached per process
    import bankmirror.core.config as config_module

    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for currency handling and precision"
    )
    config.addinivalue_line(
        "markers", "sync: Tests for the sync engine"
    )
    config.addinivalue_line(
        "markers", "source: Tests for the source bank API client"
    )
    config.addinivalue_line(
        "markers", "ledger: Tests for the ledger API client"
    )
