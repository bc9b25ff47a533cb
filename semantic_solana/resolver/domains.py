"""
Best-effort .sol name resolution through the Bonfida SNS proxy.

- resolve("alice.sol")           GET {proxy}/resolve/alice          -> owner address
- reverse_lookup(address)        GET {proxy}/favorite-domain/{addr} -> "alice.sol"

Every failure (network, HTTP status, unexpected payload) is logged and turned
into None; nothing here raises to the caller. attach_domains() fans reverse
lookups out over a thread pool and returns new ParsedTransaction instances.
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable, Sequence

import requests

from semantic_solana.classifier.models import ParsedTransaction
from semantic_solana.config.env import (
    get_domain_resolve_timeout,
    get_domain_resolve_workers,
    get_sns_proxy_url,
)
from semantic_solana.core.exceptions import DomainResolutionError
from semantic_solana.semantic_logging import get_logger
from semantic_solana.utils.wallet_utils import BASE58_REGEX

logger = get_logger(__name__)

SOL_SUFFIX = ".sol"


class DomainResolver:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or get_sns_proxy_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_domain_resolve_timeout()
        self._session = session or requests.Session()

    def _get_result(self, path: str) -> Any:
        """Return the proxy's `result` for an {"s": "ok"} response; raise DomainResolutionError otherwise."""
        try:
            resp = self._session.get(self.base_url + path, timeout=self.timeout)
        except requests.RequestException as e:
            raise DomainResolutionError(f"SNS proxy request failed: {e}") from e
        if resp.status_code != 200:
            raise DomainResolutionError(f"SNS proxy returned HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise DomainResolutionError("SNS proxy returned invalid JSON") from e
        if not isinstance(data, dict) or data.get("s") != "ok" or not data.get("result"):
            raise DomainResolutionError("SNS proxy returned no result")
        return data["result"]

    def resolve(self, domain: str) -> str | None:
        """
        Owner address for a .sol name; None when unknown or on any failure.

        Only Bonfida .sol names are resolved. AllDomains TLDs (.abc, .bonk, ...)
        have no HTTP resolver here and always return None.
        """
        cleaned = (domain or "").strip().lower()
        if not cleaned.endswith(SOL_SUFFIX):
            return None
        name = cleaned[: -len(SOL_SUFFIX)]
        if not name:
            return None
        try:
            result = self._get_result(f"/resolve/{name}")
        except DomainResolutionError as e:
            logger.debug("domain_resolve_failed", domain=cleaned, error=str(e))
            return None
        address = result if isinstance(result, str) else ""
        if not BASE58_REGEX.match(address):
            logger.debug("domain_resolve_failed", domain=cleaned, error="not an address")
            return None
        logger.info("domain_resolved", domain=cleaned, address=address)
        return address

    def reverse_lookup(self, address: str) -> str | None:
        """Favorite .sol name of an address; None when it has none or on any failure."""
        address = (address or "").strip()
        if not address or not BASE58_REGEX.match(address):
            return None
        try:
            result = self._get_result(f"/favorite-domain/{address}")
        except DomainResolutionError as e:
            logger.debug("domain_reverse_failed", address=address, error=str(e))
            return None
        name = result.get("reverse") if isinstance(result, dict) else result
        if not isinstance(name, str) or not name.strip():
            return None
        name = name.strip().lower()
        return name if name.endswith(SOL_SUFFIX) else name + SOL_SUFFIX

    def reverse_lookup_many(
        self,
        addresses: Iterable[str],
        max_workers: int | None = None,
    ) -> dict[str, str]:
        """address -> domain for every address that has one. Lookups run in parallel."""
        unique = [a for a in dict.fromkeys(addresses) if a and BASE58_REGEX.match(a)]
        if not unique:
            return {}
        workers = max(1, min(max_workers or get_domain_resolve_workers(), len(unique)))
        found: dict[str, str] = {}
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.reverse_lookup, a): a for a in unique}
            for fut in as_completed(futures):
                domain = fut.result()
                if domain:
                    found[futures[fut]] = domain
        logger.debug("domain_reverse_batch", requested=len(unique), found=len(found))
        return found

    def close(self) -> None:
        self._session.close()


def attach_domains(
    transactions: Sequence[ParsedTransaction],
    resolver: DomainResolver,
    max_workers: int | None = None,
    known: dict[str, str] | None = None,
) -> list[ParsedTransaction]:
    """
    Return copies of transactions with from_domain / to_domain set where a
    reverse lookup succeeded. known pre-seeds address -> domain pairs and is
    not looked up again.
    """
    known = dict(known or {})
    addresses: list[str] = []
    for tx in transactions:
        for addr in (tx.from_address, tx.to_address):
            if addr and addr not in known:
                addresses.append(addr)
    known.update(resolver.reverse_lookup_many(addresses, max_workers=max_workers))
    if not known:
        return list(transactions)

    out: list[ParsedTransaction] = []
    for tx in transactions:
        from_domain = known.get(tx.from_address)
        to_domain = known.get(tx.to_address)
        if from_domain or to_domain:
            tx = dataclasses.replace(
                tx,
                from_domain=from_domain or tx.from_domain,
                to_domain=to_domain or tx.to_domain,
            )
        out.append(tx)
    return out
