#!/usr/bin/env python3
"""Tests for the source bank API client and token acquisition."""

from unittest.mock import MagicMock

import pytest
import requests

from bankmirror.core.dates import FinancialDate
from bankmirror.source.auth import SourceAuthError, get_auth_token
from bankmirror.source.client import SourceApiError, SourceBankClient


def mock_response(payload=None, status_code=200, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


@pytest.mark.unit
@pytest.mark.source
class TestGetAuthToken:
    """Test client-credentials token acquisition."""

    def test_returns_access_token(self):
        session = MagicMock()
        session.post.return_value = mock_response({"access_token": "abc", "expires_in": 3600})

        token = get_auth_token("https://auth.example.test/token", "my client", "s3cr/t", session=session)

        assert token == "abc"
        _, kwargs = session.post.call_args
        assert kwargs["auth"] == ("my%20client", "s3cr%2Ft")
        assert kwargs["data"] == {"grant_type": "client_credentials"}

    def test_error_response(self):
        session = MagicMock()
        session.post.return_value = mock_response({"error": "invalid_client"}, status_code=400)

        with pytest.raises(SourceAuthError, match="invalid_client"):
            get_auth_token("https://auth.example.test/token", "id", "secret", session=session)

    def test_transport_failure(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(SourceAuthError, match="connection refused"):
            get_auth_token("https://auth.example.test/token", "id", "secret", session=session)


@pytest.mark.unit
@pytest.mark.source
class TestSourceBankClient:
    """Test account and transaction listing."""

    def setup_method(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = SourceBankClient("https://api.example.test/exec.bank/", "token", session=self.session)

    def test_sets_bearer_header(self):
        assert self.session.headers["Authorization"] == "Bearer token"

    def test_list_accounts(self, sample_account_item):
        self.session.get.return_value = mock_response({"availableItems": 1, "items": [sample_account_item]})

        accounts = self.client.list_accounts("12345678901")

        assert [acc.external_id for acc in accounts] == ["ACC-CHECKING"]
        args, kwargs = self.session.get.call_args
        assert args[0] == "https://api.example.test/exec.bank/api/v1/Accounts"
        assert kwargs["headers"] == {"customerId": "12345678901"}

    def test_list_accounts_error_body(self):
        self.session.get.return_value = mock_response({"isError": True, "errorMessage": "Not authorized"})

        with pytest.raises(SourceApiError, match="Not authorized"):
            self.client.list_accounts("12345678901")

    def test_list_transactions_params(self, sample_transaction_item):
        self.session.get.return_value = mock_response(
            {"availableItems": 1, "items": [sample_transaction_item], "isError": False}
        )

        page = self.client.list_transactions(
            "ACC-CHECKING",
            "12345678901",
            FinancialDate.from_string("2021-01-01"),
            FinancialDate.from_string("2021-06-20"),
            page_size=500,
        )

        assert len(page.items) == 1
        args, kwargs = self.session.get.call_args
        assert args[0].endswith("/api/v1/Transactions/ACC-CHECKING")
        assert kwargs["params"] == {"startDate": "2021-01-01", "endDate": "2021-06-20", "length": 500}

    def test_http_error_raises(self):
        self.session.get.return_value = mock_response({}, status_code=503)

        with pytest.raises(SourceApiError):
            self.client.list_transactions(
                "A", "1", FinancialDate.from_string("2021-01-01"), FinancialDate.from_string("2021-01-31")
            )

    def test_invalid_json_raises(self):
        self.session.get.return_value = mock_response(json_error=True)

        with pytest.raises(SourceApiError, match="invalid JSON"):
            self.client.list_accounts("1")
