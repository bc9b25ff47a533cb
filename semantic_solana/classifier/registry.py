"""
Static registries: known program ids, token mints, indexer source names, and the
protocol families the classifier treats specially.

All tables are read-only mappings built once at import; lookups never raise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class TokenInfo:
    symbol: str
    decimals: int


# Infrastructure programs: present in almost every transaction, never a "protocol".
GENERIC_PROGRAM_IDS = frozenset({
    "11111111111111111111111111111111",              # System Program
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",   # SPL Token
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb",   # Token-2022
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL",  # Associated Token Account
    "ComputeBudget111111111111111111111111111111",   # Compute Budget
    "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr",   # Memo
})

KNOWN_PROGRAMS: Mapping[str, str] = MappingProxyType({
    # Swap routers / DEX
    "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4": "Jupiter",
    "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB": "Jupiter",
    "jupoNjAxXgZ4rjzxzPMP4oxduvQsQtZzyknqvzYNrNu": "Jupiter Limit Order",
    "DCA265Vj8a9CEuX1eb1LWRnDT7uK6q1xMipnNyatn23M": "Jupiter DCA",
    "PERPHjGBqRHArX4DySjwM6UJHiR3sWAatqfdBS2qQJu": "Jupiter Perps",
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8": "Raydium",
    "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK": "Raydium CLMM",
    "CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP1C": "Raydium CPMM",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc": "Orca",
    "9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP": "Orca",
    "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo": "Meteora DLMM",
    "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB": "Meteora",
    "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P": "Pump.fun",
    # Perps
    "dRiftyHA39MWEi3m9aunc5MzRF1JYuBsbn6VPcn33UH": "Drift",
    # Multisig
    "SMPLecH534NA9acpos4G6x7uf3LWbCAwZQE9e8ZekMu": "Squads",
    "SQDS4ep65T869zMMBKyuUq6aD6EgTu8psMjkvj52pCf": "Squads",
    # NFT marketplaces / minting
    "M2mx93ekt1fmXSVkTrUL9xVFHkmME8HTUi5Cyc5aF7K": "Magic Eden",
    "TSWAPaqyCSx2KABk68Shruf4rp7CxcNi8hAsbdwmHQN": "Tensor",
    "CndyV3LdqHUfDLmE5naZjVN8rBZz4tqhdefbAnjHG3JR": "Metaplex Candy Machine",
    "BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY": "Bubblegum",
    # Staking
    "Stake11111111111111111111111111111111111111": "Stake Program",
    "MarBmsSgKXdrN1egZf5sqe1TMai9K1rChYNDJgjq7aD": "Marinade",
})

WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"

KNOWN_TOKENS: Mapping[str, TokenInfo] = MappingProxyType({
    WRAPPED_SOL_MINT: TokenInfo("SOL", 9),
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": TokenInfo("USDC", 6),
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": TokenInfo("USDT", 6),
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": TokenInfo("BONK", 5),
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": TokenInfo("JUP", 6),
    "jtojtomepa8beP8AuQc6eXt5FriJwfFMwQx2v2f9mCL": TokenInfo("JTO", 9),
    "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm": TokenInfo("WIF", 6),
    "HZ1JovNiVvGrGNiiYvEozEVgZ58xaU3RKwX8eACQBCt3": TokenInfo("PYTH", 6),
    "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R": TokenInfo("RAY", 6),
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": TokenInfo("mSOL", 9),
    "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn": TokenInfo("JitoSOL", 9),
    "bSo13r4TkiE4KumL71LsHTPpL2euBYLFx6h9HP3piy1": TokenInfo("bSOL", 9),
})

# Indexer `source` codes with a fixed display name.
SOURCE_NAMES: Mapping[str, str] = MappingProxyType({
    "JUPITER": "Jupiter",
    "JUPITER_LIMIT_ORDER": "Jupiter Limit Order",
    "JUPITER_DCA": "Jupiter DCA",
    "JUPITER_PERPETUALS": "Jupiter Perps",
    "RAYDIUM": "Raydium",
    "RAYDIUM_CLMM": "Raydium CLMM",
    "RAYDIUM_CPMM": "Raydium CPMM",
    "ORCA": "Orca",
    "WHIRLPOOL": "Orca",
    "METEORA": "Meteora",
    "METEORA_DLMM": "Meteora DLMM",
    "PUMP_FUN": "Pump.fun",
    "DRIFT": "Drift",
    "SQUADS": "Squads",
    "MAGIC_EDEN": "Magic Eden",
    "TENSOR": "Tensor",
    "MARINADE": "Marinade",
    "METAPLEX": "Metaplex",
    "CANDY_MACHINE_V3": "Metaplex Candy Machine",
    "BUBBLEGUM": "Bubblegum",
})

# Sources that describe plumbing rather than a protocol the user interacted with.
GENERIC_SOURCES = frozenset({
    "",
    "UNKNOWN",
    "SYSTEM_PROGRAM",
    "SOLANA_PROGRAM_LIBRARY",
    "TOKEN_PROGRAM",
    "STAKE_PROGRAM",
    "ASSOCIATED_TOKEN_PROGRAM",
    "COMPUTE_BUDGET",
})

LP_PROTOCOLS = frozenset({
    "Raydium", "Raydium CLMM", "Raydium CPMM",
    "Orca", "Orca Whirlpool",
    "Meteora", "Meteora DLMM",
})
MULTISIG_PROTOCOLS = frozenset({"Squads"})
PERPS_PROTOCOLS = frozenset({"Jupiter Perps", "Drift"})
DCA_PROTOCOLS = frozenset({"Jupiter DCA"})
SWAP_ROUTER_PROTOCOLS = frozenset({"Jupiter"})

# Domain name services: label -> program ids; label -> whole underscore-delimited words of the indexer source
DOMAIN_ALLDOMAINS = "AllDomains"
DOMAIN_BONFIDA = "Bonfida SNS"
DOMAIN_SOLANA_ID = "Solana ID"

ALLDOMAINS_PROGRAM_IDS = frozenset({
    "TLDHkysf5pCnKsVA4gXpNvmy7psXLPEu4LAdDJthT9S",   # TLD House
    "ALTNSZ46uaAUU7XUV6awvdorLGqAsPwa9shm7h4uP2FK",  # AllDomains name service
})
BONFIDA_PROGRAM_IDS = frozenset({
    "namesLPneVptA9Z5rqUDD9tMTWEJwofgaYwp8cawRkX",   # SPL Name Service
    "jCebN34bUfdeUYJT13J1yG16XWQpt5PDx6Mse9GUqhR",   # SNS registrar
    "85iDfUvr3HJyLM2LcWNKi9A4F6jkLFpUZXXr47aZLm3p",  # SNS offers
    "nftD3vbNkNqfj2Sd3HZwbpw4BxxKWr4AjGb9X38JeZk",   # SNS name tokenizer
})
# No public program ids confirmed; detected through the source field only.
SOLANA_ID_PROGRAM_IDS: frozenset[str] = frozenset()

DOMAIN_SERVICES: tuple[tuple[str, frozenset[str]], ...] = (
    (DOMAIN_ALLDOMAINS, ALLDOMAINS_PROGRAM_IDS),
    (DOMAIN_BONFIDA, BONFIDA_PROGRAM_IDS),
    (DOMAIN_SOLANA_ID, SOLANA_ID_PROGRAM_IDS),
)
DOMAIN_SOURCE_TOKENS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (DOMAIN_ALLDOMAINS, ("ALLDOMAINS", "ALL_DOMAINS", "TLD_HOUSE")),
    (DOMAIN_BONFIDA, ("BONFIDA", "NAME_SERVICE", "SNS")),
    (DOMAIN_SOLANA_ID, ("SOLANA_ID", "SOLANAID")),
)

_SUFFIX_TOKEN_RE = re.compile(r"^(ROUTER|PROGRAM|CONTRACT|V\d+)$")


def lookup_program(program_id: str) -> str:
    """Human name for a program id; "" on miss."""
    if not program_id:
        return ""
    return KNOWN_PROGRAMS.get(program_id, "")


def lookup_token(mint: str) -> TokenInfo | None:
    if not mint:
        return None
    return KNOWN_TOKENS.get(mint)


def token_symbol(mint: str) -> str:
    """Registry symbol, else a truncated mint (Abcd...wxyz)."""
    info = lookup_token(mint)
    if info is not None:
        return info.symbol
    if not mint:
        return "tokens"
    if len(mint) <= 10:
        return mint
    return f"{mint[:4]}...{mint[-4:]}"


def humanize_source(source: str) -> str:
    """
    Title-case a raw indexer source after dropping generic suffix tokens.

    "RAYDIUM_V4_PROGRAM" -> "Raydium", "LIFINITY_ROUTER" -> "Lifinity".
    """
    tokens = [t for t in re.split(r"[_\s]+", (source or "").strip()) if t]
    kept = [t for t in tokens if not _SUFFIX_TOKEN_RE.match(t.upper())]
    return " ".join(t[:1].upper() + t[1:].lower() for t in kept)


def resolve_protocol(source: str) -> str:
    """
    Friendly protocol name for an indexer source.

    Registry keyed by source first (sources are sometimes program ids), then
    the fixed source table, then the title-case heuristic. Plumbing sources
    resolve to "".
    """
    raw = (source or "").strip()
    name = lookup_program(raw)
    if name:
        return name
    key = raw.upper()
    if key in GENERIC_SOURCES:
        return ""
    if key in SOURCE_NAMES:
        return SOURCE_NAMES[key]
    return humanize_source(raw)
