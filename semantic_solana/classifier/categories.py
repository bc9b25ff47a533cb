"""
Display grouping, filtering and ordering of classified transactions.

Type codes fold into a handful of UI categories (Swap, Transfer, DeFi, NFT,
Domain, Spam, Other). Sorting by amount compares the leading number of the
display string, whatever the unit.
"""

from __future__ import annotations

import re
from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

from semantic_solana.classifier.models import ParsedTransaction

CATEGORY_ALL = "ALL"
CATEGORIES = ("Swap", "Transfer", "DeFi", "NFT", "Domain", "Spam", "Other")

DEFI_TYPES = frozenset({
    "LP_DEPOSIT",
    "LP_WITHDRAW",
    "DEPOSIT",
    "CLAIM",
    "ADD_LIQUIDITY",
    "REMOVE_LIQUIDITY",
    "OPEN_POSITION",
    "CLOSE_POSITION",
    "PERPS",
    "DCA",
    "STAKE_SOL",
    "UNSTAKE_SOL",
    "MULTISIG",
})
NFT_TYPES = frozenset({
    "NFT_SALE",
    "NFT_LISTING",
    "NFT_MINT",
    "COMPRESSED_NFT_MINT",
    "NFT_BID",
    "NFT_CANCEL_LISTING",
})

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_AMOUNT_HIGH = "amount-high"
SORT_AMOUNT_LOW = "amount-low"
SORT_ORDERS = (SORT_NEWEST, SORT_OLDEST, SORT_AMOUNT_HIGH, SORT_AMOUNT_LOW)

_NUMBER_RE = re.compile(r"[\d.,]+")


def filter_category(type_code: str) -> str:
    if type_code == "SWAP":
        return "Swap"
    if type_code == "TRANSFER":
        return "Transfer"
    if type_code in DEFI_TYPES:
        return "DeFi"
    if type_code in NFT_TYPES:
        return "NFT"
    if type_code == "DOMAIN":
        return "Domain"
    if type_code == "SPAM":
        return "Spam"
    return "Other"


def parse_amount(amount: str) -> Decimal:
    """Leading number of a display amount ("1,234.5 USDC" -> 1234.5); 0 when none."""
    if not amount:
        return Decimal(0)
    match = _NUMBER_RE.search(amount)
    if not match:
        return Decimal(0)
    try:
        return Decimal(match.group(0).replace(",", ""))
    except InvalidOperation:
        return Decimal(0)


def filter_by_category(
    transactions: Iterable[ParsedTransaction],
    category: str | None,
) -> list[ParsedTransaction]:
    if not category or category.upper() == CATEGORY_ALL:
        return list(transactions)
    return [tx for tx in transactions if filter_category(tx.type) == category]


def sort_transactions(
    transactions: Iterable[ParsedTransaction],
    order: str | None = SORT_NEWEST,
) -> list[ParsedTransaction]:
    """Stable sort; unknown orders behave like newest-first."""
    items = list(transactions)
    if order == SORT_OLDEST:
        return sorted(items, key=lambda tx: tx.timestamp)
    if order == SORT_AMOUNT_HIGH:
        return sorted(items, key=lambda tx: parse_amount(tx.amount), reverse=True)
    if order == SORT_AMOUNT_LOW:
        return sorted(items, key=lambda tx: parse_amount(tx.amount))
    return sorted(items, key=lambda tx: tx.timestamp, reverse=True)


def category_counts(transactions: Sequence[ParsedTransaction]) -> dict[str, int]:
    """Count per category, in display order, omitting empty categories."""
    counts = Counter(filter_category(tx.type) for tx in transactions)
    return {name: counts[name] for name in CATEGORIES if counts[name]}
