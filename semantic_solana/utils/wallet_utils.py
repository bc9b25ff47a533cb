"""Wallet address validation and display utilities."""

from __future__ import annotations

import re

from solders.pubkey import Pubkey

# Base58 character set for Solana addresses
BASE58_REGEX = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid Solana wallet (Pubkey) address."""
    if not w or not BASE58_REGEX.match(w.strip()):
        return False
    try:
        Pubkey.from_string(w.strip())
        return True
    except Exception:
        return False


def looks_like_domain(query: str) -> bool:
    """A non-address query containing a dot is treated as a name-service domain."""
    q = (query or "").strip()
    return bool(q) and "." in q and not BASE58_REGEX.match(q)


def truncate_address(addr: str) -> str:
    """Abcd...wxyz form used in summaries and the resolve endpoint."""
    if not addr or len(addr) < 12:
        return addr or ""
    return f"{addr[:4]}...{addr[-4:]}"
