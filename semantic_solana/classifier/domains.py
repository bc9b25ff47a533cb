"""
Domain name service detection.

A transaction is a domain operation when any instruction (or one level of inner
instructions) calls a known name-service program, or when the indexer source
names the service. Detection is independent of the indexer's type code.
"""

from __future__ import annotations

import re

from semantic_solana.classifier.models import RawTransaction
from semantic_solana.classifier.registry import DOMAIN_SERVICES, DOMAIN_SOURCE_TOKENS

DOMAIN_SUFFIXES = (
    "sol", "abc", "bonk", "id", "solana", "skr", "poor", "backpack",
    "com", "io", "xyz", "app", "org", "net", "dev",
)

DOMAIN_RE = re.compile(
    r"(?<![\w.-])([a-z0-9][\w-]*\.(?:" + "|".join(DOMAIN_SUFFIXES) + r"))\b",
    re.IGNORECASE,
)


def _has_word(source: str, word: str) -> bool:
    """Whole-word match on underscore-delimited source codes: SNS matches SNS_REGISTRAR, not SNSX."""
    return re.search(rf"(?:^|_){re.escape(word)}(?:_|$)", source) is not None


def _program_ids(tx: RawTransaction) -> list[str]:
    ids: list[str] = []
    for ix in tx.instructions:
        ids.append(ix.program_id)
        ids.extend(inner.program_id for inner in ix.inner_instructions)
    return ids


def detect_domain_service(tx: RawTransaction) -> str:
    """Return the name-service label ("AllDomains", "Bonfida SNS", "Solana ID") or ""."""
    program_ids = set(_program_ids(tx))
    for label, known in DOMAIN_SERVICES:
        if program_ids & known:
            return label
    source = (tx.source or "").upper()
    if source:
        for label, tokens in DOMAIN_SOURCE_TOKENS:
            if any(_has_word(source, token) for token in tokens):
                return label
    return ""


def extract_domain_name(text: str) -> str:
    """First domain-like literal in free text (lowercased), e.g. "alice.sol"; "" when none."""
    if not text:
        return ""
    match = DOMAIN_RE.search(text)
    return match.group(1).lower() if match else ""
