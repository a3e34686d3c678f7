#!/usr/bin/env python3
"""
Configuration Management for Bank Mirror

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production) with appropriate
security measures for each.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class SourceConfig:
    """Source bank API configuration."""

    auth_url: str = "https://auth.sbanken.no/identityserver/connect/token"
    base_url: str = "https://api.sbanken.no/exec.bank"
    client_id: str | None = None
    client_secret: str | None = None
    customer_id: str | None = None
    page_size: int = 1000
    timeout: int = 30


@dataclass
class LedgerConfig:
    """Ledger (personal-finance manager) API configuration."""

    base_url: str = "http://localhost:8000"
    access_token: str | None = None
    timeout: int = 30
    error_if_duplicate_hash: bool = True


@dataclass
class SyncConfig:
    """Incremental sync settings."""

    checkpoint_file: Path
    delay_days: int = 10  # Source bank reports transactions with a lag
    first_year: int = 2019


@dataclass
class Config:
    """
    Main configuration class for the bank mirror.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    data_dir: Path

    # Component configurations
    source: SourceConfig
    ledger: LedgerConfig
    sync: SyncConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BANKMIRROR_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_bankmirror"
            data_dir = Path(os.getenv("BANKMIRROR_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("BANKMIRROR_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        source = SourceConfig(
            auth_url=os.getenv("SOURCE_AUTH_URL", SourceConfig.auth_url),
            base_url=os.getenv("SOURCE_BASE_URL", SourceConfig.base_url),
            client_id=os.getenv("SOURCE_CLIENT_ID"),
            client_secret=os.getenv("SOURCE_CLIENT_SECRET"),
            customer_id=os.getenv("SOURCE_CUSTOMER_ID"),
            page_size=int(os.getenv("SOURCE_PAGE_SIZE", "1000")),
            timeout=int(os.getenv("SOURCE_TIMEOUT", "30")),
        )

        ledger = LedgerConfig(
            base_url=os.getenv("LEDGER_BASE_URL", LedgerConfig.base_url),
            access_token=os.getenv("LEDGER_ACCESS_TOKEN"),
            timeout=int(os.getenv("LEDGER_TIMEOUT", "30")),
            error_if_duplicate_hash=os.getenv("LEDGER_ERROR_IF_DUPLICATE_HASH", "true").lower() == "true",
        )

        checkpoint_file = Path(os.getenv("SYNC_CHECKPOINT_FILE", "firefly_last_sync"))
        if not checkpoint_file.is_absolute():
            checkpoint_file = data_dir / checkpoint_file

        sync = SyncConfig(
            checkpoint_file=checkpoint_file,
            delay_days=int(os.getenv("SYNC_DELAY_DAYS", "10")),
            first_year=int(os.getenv("SYNC_FIRST_YEAR", "2019")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            source=source,
            ledger=ledger,
            sync=sync,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        # Credentials are only mandatory in production; the CLI checks them again before syncing
        if self.environment == Environment.PRODUCTION:
            errors.extend(self.missing_credentials())

        if self.sync.delay_days < 0:
            errors.append("Sync delay days must be non-negative")
        if self.source.page_size <= 0:
            errors.append("Source page size must be positive")
        if self.source.timeout <= 0 or self.ledger.timeout <= 0:
            errors.append("API timeouts must be positive")

        return errors

    def missing_credentials(self) -> list:
        """Return errors for every credential a sync run needs but is unset."""
        errors = []
        for env_name, value in [
            ("SOURCE_CLIENT_ID", self.source.client_id),
            ("SOURCE_CLIENT_SECRET", self.source.client_secret),
            ("SOURCE_CUSTOMER_ID", self.source.customer_id),
            ("LEDGER_ACCESS_TOKEN", self.ledger.access_token),
        ]:
            if not value:
                errors.append(f"{env_name} is required")
        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "source.client_id",
            "source.client_secret",
            "source.customer_id",
            "ledger.access_token",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    elif isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
