"""
Tests for the Helius client: URL/params, error mapping, payload validation.

The HTTP session is a MagicMock; no network access.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from semantic_solana.core.exceptions import HeliusAPIError, HeliusRateLimitError
from semantic_solana.helius import HeliusClient, demo_transactions

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"


def _response(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = payload
    return resp


def _client(session: MagicMock, api_key: str = "test-key") -> HeliusClient:
    return HeliusClient(api_key=api_key, base_url="https://helius.example/", timeout=3, session=session)


def test_fetch_ok():
    session = MagicMock()
    session.get.return_value = _response(payload=[{"signature": "a"}, "junk", {"signature": "b"}])
    items = _client(session).fetch_transactions(WALLET)
    assert [i["signature"] for i in items] == ["a", "b"]
    session.get.assert_called_once_with(
        f"https://helius.example/v0/addresses/{WALLET}/transactions",
        params={"api-key": "test-key"},
        timeout=3,
    )


def test_limit_param():
    session = MagicMock()
    session.get.return_value = _response(payload=[])
    _client(session).fetch_transactions(WALLET, limit=50)
    assert session.get.call_args.kwargs["params"] == {"api-key": "test-key", "limit": 50}


def test_rate_limit():
    session = MagicMock()
    session.get.return_value = _response(status_code=429)
    with pytest.raises(HeliusRateLimitError) as exc:
        _client(session).fetch_transactions(WALLET)
    assert exc.value.status_code == 429


def test_http_error():
    session = MagicMock()
    session.get.return_value = _response(status_code=500, text="boom")
    with pytest.raises(HeliusAPIError) as exc:
        _client(session).fetch_transactions(WALLET)
    assert exc.value.status_code == 500
    assert not isinstance(exc.value, HeliusRateLimitError)


def test_network_error():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("down")
    with pytest.raises(HeliusAPIError):
        _client(session).fetch_transactions(WALLET)


def test_bad_payloads():
    session = MagicMock()
    session.get.return_value = _response(payload={"error": "nope"})
    with pytest.raises(HeliusAPIError):
        _client(session).fetch_transactions(WALLET)

    bad_json = _response()
    bad_json.json.side_effect = ValueError("not json")
    session.get.return_value = bad_json
    with pytest.raises(HeliusAPIError):
        _client(session).fetch_transactions(WALLET)


def test_missing_key_raises_without_request():
    session = MagicMock()
    with pytest.raises(HeliusAPIError):
        _client(session, api_key="").fetch_transactions(WALLET)
    session.get.assert_not_called()


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("HELIUS_API_KEY", "env-key")
    monkeypatch.setenv("HELIUS_TIMEOUT_SEC", "7")
    client = HeliusClient(session=MagicMock())
    assert client.api_key == "env-key"
    assert client.base_url == "https://helius.test"
    assert client.timeout == 7.0


def test_demo_transactions():
    txs = demo_transactions(now=1_000_000)
    assert len(txs) == 5
    assert [t.type for t in txs] == ["SWAP", "TRANSFER", "NFT_SALE", "STAKE_SOL", "TOKEN_MINT"]
    assert txs[0].timestamp == 1_000_000 - 120
    assert all(t.fee == 5000 for t in txs)
