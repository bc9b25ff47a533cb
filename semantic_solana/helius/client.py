"""
Helius Enhanced Transactions API client.

GET {base}/v0/addresses/{address}/transactions?api-key={key} returns a JSON
array of enhanced transactions, newest first. A 429 raises
HeliusRateLimitError; any other failure raises HeliusAPIError. No retries: the
caller decides whether to try again.
"""

from __future__ import annotations

from typing import Any

import requests

from semantic_solana.config.env import (
    get_helius_api_key,
    get_helius_api_url,
    get_helius_timeout,
)
from semantic_solana.core.exceptions import HeliusAPIError, HeliusRateLimitError
from semantic_solana.semantic_logging import get_logger

logger = get_logger(__name__)

TRANSACTIONS_PATH = "/v0/addresses/{address}/transactions"


class HeliusClient:
    """Thin wrapper over the address-transactions endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else get_helius_api_key()
        self.base_url = (base_url or get_helius_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_helius_timeout()
        self._session = session or requests.Session()

    def transactions_url(self, address: str) -> str:
        return self.base_url + TRANSACTIONS_PATH.format(address=address)

    def fetch_transactions(self, address: str, limit: int | None = None) -> list[dict[str, Any]]:
        """Raw enhanced transactions for address. Raises HeliusAPIError on any failure."""
        if not self.api_key:
            raise HeliusAPIError("HELIUS_API_KEY is not configured")
        params: dict[str, Any] = {"api-key": self.api_key}
        if limit:
            params["limit"] = limit
        try:
            resp = self._session.get(self.transactions_url(address), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("helius_request_failed", wallet_id=address, error=str(e))
            raise HeliusAPIError(f"Helius request failed: {e}") from e

        if resp.status_code == 429:
            logger.warning("helius_rate_limited", wallet_id=address)
            raise HeliusRateLimitError()
        if resp.status_code >= 400:
            logger.warning(
                "helius_http_error",
                wallet_id=address,
                status_code=resp.status_code,
                body=(resp.text or "")[:200],
            )
            raise HeliusAPIError(f"Helius returned HTTP {resp.status_code}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise HeliusAPIError("Helius returned invalid JSON", status_code=resp.status_code) from e
        if not isinstance(data, list):
            raise HeliusAPIError("Helius returned an unexpected payload", status_code=resp.status_code)

        items = [item for item in data if isinstance(item, dict)]
        logger.info("helius_fetch_ok", wallet_id=address, count=len(items))
        return items

    def close(self) -> None:
        self._session.close()


def fetch_transactions(address: str, limit: int | None = None) -> list[dict[str, Any]]:
    """Fetch with a one-off client built from environment config."""
    client = HeliusClient()
    try:
        return client.fetch_transactions(address, limit=limit)
    finally:
        client.close()
