#!/usr/bin/env python3
"""
Source Bank API Client

Thin requests-based client for the two read endpoints the sync needs:
account listing and per-account transaction listing.
"""

import logging
from typing import Any

import requests

from ..core.dates import FinancialDate
from .models import SourceAccount, TransactionPage

logger = logging.getLogger(__name__)


class SourceApiError(Exception):
    """Raised when the source bank API cannot be reached or answers with an HTTP error."""

    pass


class SourceBankClient:
    """
    Client for the source banking API.

    All calls are sequential and blocking; no retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        session: requests.Session | None = None,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            }
        )

    def _get(self, path: str, customer_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                headers={"customerId": customer_id},
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise SourceApiError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise SourceApiError(f"GET {url} returned invalid JSON: {e}") from e

    def list_accounts(self, customer_id: str) -> list[SourceAccount]:
        """
        Fetch every account of the customer.

        Raises:
            SourceApiError: On transport failure or an error response
        """
        data = self._get("/api/v1/Accounts", customer_id)
        if data.get("isError"):
            raise SourceApiError(f"unable to fetch accounts: {data.get('errorMessage')}")

        accounts = [SourceAccount.from_dict(item) for item in data.get("items") or []]
        logger.debug(f"Fetched {len(accounts)} source account(s)")
        return accounts

    def list_transactions(
        self,
        account_id: str,
        customer_id: str,
        from_date: FinancialDate,
        to_date: FinancialDate,
        page_size: int = 1000,
    ) -> TransactionPage:
        """
        Fetch transactions for one account within an inclusive date window.

        An error reported in the response body is returned as an error page,
        not raised; the caller decides to skip the account.

        Raises:
            SourceApiError: On transport failure or HTTP error status
        """
        data = self._get(
            f"/api/v1/Transactions/{account_id}",
            customer_id,
            params={
                "startDate": from_date.to_iso_string(),
                "endDate": to_date.to_iso_string(),
                "length": page_size,
            },
        )
        return TransactionPage.from_dict(data, account_id)
