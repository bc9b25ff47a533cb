"""
Pytest fixtures for Semantic Solana tests.

Builders for indexer-shaped transaction dicts, and a FastAPI TestClient whose
Helius client and domain resolver are replaced by in-memory fakes.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

import pytest

from semantic_solana.core.exceptions import HeliusAPIError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """No real indexer key or endpoints leak into tests."""
    monkeypatch.setenv("HELIUS_API_KEY", "")
    monkeypatch.setenv("HELIUS_API_URL", "https://helius.test")
    monkeypatch.setenv("SNS_PROXY_URL", "https://sns.test")


@pytest.fixture
def make_tx() -> Callable[..., dict[str, Any]]:
    """Return a builder for Helius enhanced-transaction dicts; kwargs override top-level keys."""

    def build(**overrides: Any) -> dict[str, Any]:
        tx: dict[str, Any] = {
            "signature": overrides.pop("signature", "sig-1"),
            "timestamp": overrides.pop("timestamp", 1_700_000_000),
            "type": overrides.pop("type", "UNKNOWN"),
            "source": overrides.pop("source", ""),
            "description": overrides.pop("description", ""),
            "fee": overrides.pop("fee", 5000),
            "feePayer": overrides.pop("feePayer", ""),
            "nativeTransfers": overrides.pop("nativeTransfers", []),
            "tokenTransfers": overrides.pop("tokenTransfers", []),
            "accountData": overrides.pop("accountData", []),
            "instructions": overrides.pop("instructions", []),
            "events": overrides.pop("events", {}),
        }
        tx.update(overrides)
        return tx

    return build


def native(sender: str, receiver: str, lamports: int) -> dict[str, Any]:
    return {"fromUserAccount": sender, "toUserAccount": receiver, "amount": lamports}


def token(sender: str, receiver: str, amount: Any, mint: str) -> dict[str, Any]:
    return {"fromUserAccount": sender, "toUserAccount": receiver, "tokenAmount": amount, "mint": mint}


@pytest.fixture
def native_transfer() -> Callable[[str, str, int], dict[str, Any]]:
    return native


@pytest.fixture
def token_transfer() -> Callable[[str, str, Any, str], dict[str, Any]]:
    return token


class FakeHelius:
    """Stands in for HeliusClient: returns canned items or raises a canned error."""

    def __init__(self, items: list[dict[str, Any]] | None = None, error: HeliusAPIError | None = None) -> None:
        self.items = items or []
        self.error = error
        self.calls: list[str] = []

    def fetch_transactions(self, address: str, limit: int | None = None) -> list[dict[str, Any]]:
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return list(self.items)


class FakeResolver:
    """Stands in for DomainResolver with fixed forward and reverse tables."""

    def __init__(self, forward: dict[str, str] | None = None, reverse: dict[str, str] | None = None) -> None:
        self.forward = forward or {}
        self.reverse = reverse or {}

    def resolve(self, domain: str) -> str | None:
        return self.forward.get((domain or "").strip().lower())

    def reverse_lookup(self, address: str) -> str | None:
        return self.reverse.get(address)

    def reverse_lookup_many(self, addresses: Iterable[str], max_workers: int | None = None) -> dict[str, str]:
        return {a: self.reverse[a] for a in addresses if a in self.reverse}

    def close(self) -> None:
        pass


@pytest.fixture
def fake_helius() -> FakeHelius:
    return FakeHelius()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def client(fake_helius, fake_resolver):
    """FastAPI TestClient with the indexer and resolver dependencies overridden."""
    from fastapi.testclient import TestClient

    from semantic_solana.api_server.server import app, get_domain_resolver, get_helius_client

    app.dependency_overrides[get_helius_client] = lambda: fake_helius
    app.dependency_overrides[get_domain_resolver] = lambda: fake_resolver
    yield TestClient(app)
    app.dependency_overrides.clear()
