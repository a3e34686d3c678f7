#!/usr/bin/env python3
"""
Source Bank Authentication

OAuth2 client-credentials token acquisition for the source banking API.
"""

import logging
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class SourceAuthError(Exception):
    """Raised when an access token cannot be obtained."""

    pass


def get_auth_token(
    auth_url: str,
    client_id: str,
    client_secret: str,
    session: requests.Session | None = None,
    timeout: int = 30,
) -> str:
    """
    Request an access token using the client-credentials grant.

    The identity server expects the client id and secret URL-encoded before
    they are placed in the basic-auth header.

    Args:
        auth_url: Token endpoint URL
        client_id: OAuth client id
        client_secret: OAuth client secret
        session: Optional requests session (default: a new one)
        timeout: Request timeout in seconds

    Returns:
        Bearer access token

    Raises:
        SourceAuthError: If the request fails or the server returns an error
    """
    session = session or requests.Session()

    try:
        response = session.post(
            auth_url,
            headers={"Accept": "application/json"},
            auth=(quote(client_id, safe=""), quote(client_secret, safe="")),
            data={"grant_type": "client_credentials"},
            timeout=timeout,
        )
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise SourceAuthError(f"unable to get source auth token: {e}") from e

    if isinstance(payload, dict) and payload.get("access_token"):
        logger.debug("Obtained source API access token")
        return str(payload["access_token"])

    error = payload.get("error") if isinstance(payload, dict) else None
    raise SourceAuthError(f"received error from api: {error or f'HTTP {response.status_code}'}")
