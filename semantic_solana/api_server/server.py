"""
FastAPI server: wallet history search and domain resolution.

GET /api/search fetches a wallet's enhanced transactions from Helius, classifies
them, collapses spam, attaches .sol names and applies the category filter and
sort order. GET /api/resolve resolves a .sol name. Without HELIUS_API_KEY the
search endpoint serves a fixed demo history.
"""

from __future__ import annotations

from typing import Any, Iterator

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from semantic_solana.classifier import (
    ParsedTransaction,
    RawTransaction,
    classify_all,
    filter_by_category,
    filter_spam,
    sort_transactions,
)
from semantic_solana.config.env import get_domain_resolve_workers, is_demo_mode
from semantic_solana.core.exceptions import HeliusAPIError, HeliusRateLimitError
from semantic_solana.helius import HeliusClient, demo_transactions
from semantic_solana.resolver import DomainResolver, attach_domains
from semantic_solana.semantic_logging import bind_wallet, get_logger
from semantic_solana.utils.wallet_utils import (
    is_valid_wallet,
    looks_like_domain,
    truncate_address,
)

logger = get_logger(__name__)

HELP_MESSAGE = (
    "Natural language search requires a valid Solana wallet address. "
    "Paste a base58 address or a .sol domain to search."
)
RATE_LIMIT_MESSAGE = "Rate limited. Please try again in a moment."
UPSTREAM_ERROR_MESSAGE = "Failed to fetch transaction data"


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_helius_client() -> Iterator[HeliusClient | None]:
    """Indexer client per request; None in demo mode."""
    if is_demo_mode():
        yield None
        return
    client = HeliusClient()
    try:
        yield client
    finally:
        client.close()


def get_domain_resolver() -> Iterator[DomainResolver]:
    resolver = DomainResolver()
    try:
        yield resolver
    finally:
        resolver.close()


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class TransactionModel(BaseModel):
    """One classified transaction as shown in the history list."""

    model_config = ConfigDict(populate_by_name=True)

    signature: str = Field(..., description="Transaction signature, or a generated id for summaries")
    timestamp: int = Field(..., description="Unix timestamp (seconds)")
    type: str = Field(..., description="Canonical type code, e.g. SWAP, TRANSFER, DOMAIN, SPAM")
    typeLabel: str = Field(..., description="Display label for the type")
    description: str = Field(..., description="One-sentence human-readable summary")
    amount: str = Field("", description="Formatted primary amount, may be empty")
    from_: str = Field("", alias="from", description="Counterparty the value came from")
    to: str = Field("", description="Counterparty the value went to")
    fee: int = Field(0, description="Network fee in lamports")
    source: str = Field("", description="Indexer source (protocol) code")
    fromDomain: str | None = Field(None, description=".sol name of `from`, when known")
    toDomain: str | None = Field(None, description=".sol name of `to`, when known")

    @classmethod
    def from_parsed(cls, tx: ParsedTransaction) -> "TransactionModel":
        return cls.model_validate(tx.to_dict())


class SearchResponse(BaseModel):
    """GET /api/search response."""

    query: str = Field(..., description="Query as received (trimmed)")
    isAddress: bool = Field(..., description="True when the query resolved to a wallet address")
    address: str | None = Field(None, description="Wallet address searched")
    inputDomain: str | None = Field(None, description="Domain the query named, when it was a domain")
    addressDomain: str | None = Field(None, description=".sol name of the searched address, when known")
    demo: bool | None = Field(None, description="True when serving demo data (no indexer key)")
    message: str | None = Field(None, description="Help text when the query is not searchable")
    transactions: list[TransactionModel] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    """GET /api/resolve response."""

    resolved: bool = Field(..., description="True when the domain has an owner address")
    domain: str | None = Field(None, description="Normalized domain")
    address: str | None = Field(None, description="Owner address (base58)")
    truncated: str | None = Field(None, description="Abcd...wxyz form of the address")


def _json(model: BaseModel) -> JSONResponse:
    return JSONResponse(status_code=200, content=model.model_dump(by_alias=True, exclude_none=True))


def _not_searchable(query: str, message: str) -> JSONResponse:
    return _json(SearchResponse(query=query, isAddress=False, message=message))


def _present(
    transactions: list[ParsedTransaction],
    category: str | None,
    sort: str | None,
) -> list[TransactionModel]:
    shown = sort_transactions(filter_by_category(transactions, category), sort)
    return [TransactionModel.from_parsed(tx) for tx in shown]


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Semantic Solana API",
    description="Human-readable Solana wallet history: classification, spam filtering and .sol names.",
    version="0.1.0",
)


@app.get("/api/search")
def search(
    q: str = Query("", description="Wallet address or .sol domain"),
    category: str | None = Query(None, description="Swap, Transfer, DeFi, NFT, Domain, Spam, Other or ALL"),
    sort: str | None = Query(None, description="newest, oldest, amount-high or amount-low"),
    client: HeliusClient | None = Depends(get_helius_client),
    resolver: DomainResolver = Depends(get_domain_resolver),
) -> JSONResponse:
    """
    Search a wallet's history by address or .sol domain.

    Domains are resolved first; unsearchable queries return isAddress=false and
    a help message instead of an error.
    """
    query = (q or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")

    address = query
    input_domain: str | None = None
    if not is_valid_wallet(query):
        if not looks_like_domain(query):
            return _not_searchable(query, HELP_MESSAGE)
        resolved = resolver.resolve(query)
        if not resolved:
            return _not_searchable(query, f"Could not resolve {query} to a wallet address")
        address, input_domain = resolved, query.lower()

    log = bind_wallet(address)
    if client is None:
        log.info("search_demo")
        return _json(
            SearchResponse(
                query=query,
                isAddress=True,
                address=address,
                inputDomain=input_domain,
                demo=True,
                transactions=_present(demo_transactions(), category, sort),
            )
        )

    try:
        items = client.fetch_transactions(address)
    except HeliusRateLimitError as e:
        raise HTTPException(status_code=429, detail=RATE_LIMIT_MESSAGE) from e
    except HeliusAPIError as e:
        log.warning("search_upstream_failed", status_code=e.status_code, error=str(e))
        raise HTTPException(status_code=502, detail=UPSTREAM_ERROR_MESSAGE) from e

    raws = [RawTransaction.from_dict(item) for item in items]
    parsed = filter_spam(classify_all(raws, address), address, raws)

    address_domain = input_domain or resolver.reverse_lookup(address)
    known = {address: address_domain} if address_domain else None
    parsed = attach_domains(parsed, resolver, max_workers=get_domain_resolve_workers(), known=known)

    log.info("search_ok", count=len(parsed), domain=address_domain)
    return _json(
        SearchResponse(
            query=query,
            isAddress=True,
            address=address,
            inputDomain=input_domain,
            addressDomain=address_domain,
            demo=False,
            transactions=_present(parsed, category, sort),
        )
    )


@app.get("/api/resolve")
def resolve_domain(
    domain: str = Query("", description=".sol domain to resolve"),
    resolver: DomainResolver = Depends(get_domain_resolver),
) -> JSONResponse:
    """Resolve a .sol name to its owner. Unknown names return resolved=false."""
    cleaned = (domain or "").strip().lower()
    if not cleaned:
        raise HTTPException(status_code=400, detail="Missing domain param")
    address = resolver.resolve(cleaned)
    if not address:
        return _json(ResolveResponse(resolved=False))
    return _json(
        ResolveResponse(
            resolved=True,
            domain=cleaned,
            address=address,
            truncated=truncate_address(address),
        )
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error body: {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )
