#!/usr/bin/env python3
"""
Ledger API Client

requests-based client for the ledger's account and transaction endpoints.
"""

import logging
from typing import Any

import requests

from .models import LedgerAccount, LedgerPosting

logger = logging.getLogger(__name__)

DUPLICATE_MARKER = "duplicate of transaction"


class LedgerApiError(Exception):
    """Raised when a ledger API call fails."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_duplicate(self) -> bool:
        """True when the ledger rejected a transaction by its duplicate-hash check."""
        return self.status_code == 422 and DUPLICATE_MARKER in str(self.body).lower()


class LedgerClient:
    """
    Client for the ledger REST API.

    All calls are sequential and blocking; no retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        session: requests.Session | None = None,
        timeout: int = 30,
        error_if_duplicate_hash: bool = True,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.error_if_duplicate_hash = error_if_duplicate_hash
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise LedgerApiError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            raise LedgerApiError(
                f"{method} {url} returned HTTP {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise LedgerApiError(f"{method} {url} returned invalid JSON: {e}", status_code=response.status_code) from e

    def list_accounts(self, account_type: str = "asset") -> list[LedgerAccount]:
        """
        Fetch all accounts of a type, following pagination.

        Raises:
            LedgerApiError: If any page cannot be fetched
        """
        accounts: list[LedgerAccount] = []
        page = 1
        while True:
            data = self._request("GET", "/api/v1/accounts", params={"type": account_type, "page": page})
            accounts.extend(LedgerAccount.from_dict(item) for item in data.get("data", []))

            pagination = data.get("meta", {}).get("pagination", {})
            total_pages = int(pagination.get("total_pages", 1) or 1)
            if page >= total_pages:
                break
            page += 1

        logger.debug(f"Fetched {len(accounts)} ledger {account_type} account(s)")
        return accounts

    def create_account(self, account: LedgerAccount) -> LedgerAccount:
        """
        Create an account and return it as stored by the ledger.

        Raises:
            LedgerApiError: On transport failure or rejection
        """
        data = self._request("POST", "/api/v1/accounts", json=account.to_create_payload())
        return LedgerAccount.from_dict(data["data"])

    def create_transaction(self, posting: LedgerPosting) -> dict[str, Any]:
        """
        Submit a single-split transaction.

        Raises:
            LedgerApiError: On transport failure, duplicate rejection or validation error
        """
        payload = {
            "error_if_duplicate_hash": self.error_if_duplicate_hash,
            "transactions": [posting.to_split_dict()],
        }
        data = self._request("POST", "/api/v1/transactions", json=payload)
        return data.get("data", {})
