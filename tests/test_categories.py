"""
Tests for display categories, amount parsing, sorting and category filtering.
"""

from __future__ import annotations

from decimal import Decimal

from semantic_solana.classifier import (
    ParsedTransaction,
    category_counts,
    filter_by_category,
    filter_category,
    parse_amount,
    sort_transactions,
)


def _tx(sig: str, ts: int, type_code: str, amount: str = "") -> ParsedTransaction:
    return ParsedTransaction(sig, ts, type_code, type_code.title(), "d", amount=amount)


def test_filter_category_mapping():
    assert filter_category("SWAP") == "Swap"
    assert filter_category("TRANSFER") == "Transfer"
    for code in ("LP_DEPOSIT", "CLAIM", "PERPS", "DCA", "STAKE_SOL", "MULTISIG", "OPEN_POSITION"):
        assert filter_category(code) == "DeFi"
    for code in ("NFT_SALE", "NFT_MINT", "COMPRESSED_NFT_MINT", "NFT_CANCEL_LISTING"):
        assert filter_category(code) == "NFT"
    assert filter_category("DOMAIN") == "Domain"
    assert filter_category("SPAM") == "Spam"
    assert filter_category("BURN") == "Other"
    assert filter_category("") == "Other"


def test_parse_amount():
    assert parse_amount("1,234.5 USDC") == Decimal("1234.5")
    assert parse_amount("< 0.0001 SOL") == Decimal("0.0001")
    assert parse_amount("") == 0
    assert parse_amount("tokens") == 0
    assert parse_amount("...") == 0


def test_sort_orders():
    txs = [_tx("a", 1, "SWAP", "5.0 SOL"), _tx("b", 3, "SWAP", "1,000.0 USDC"), _tx("c", 2, "SWAP", "")]
    assert [t.signature for t in sort_transactions(txs)] == ["b", "c", "a"]
    assert [t.signature for t in sort_transactions(txs, "oldest")] == ["a", "c", "b"]
    assert [t.signature for t in sort_transactions(txs, "amount-high")] == ["b", "a", "c"]
    assert [t.signature for t in sort_transactions(txs, "amount-low")] == ["c", "a", "b"]
    assert [t.signature for t in sort_transactions(txs, "bogus")] == ["b", "c", "a"]


def test_filter_by_category_and_counts():
    txs = [_tx("a", 1, "SWAP"), _tx("b", 2, "LP_DEPOSIT"), _tx("c", 3, "SPAM"), _tx("d", 4, "SWAP")]
    assert filter_by_category(txs, "ALL") == txs
    assert filter_by_category(txs, None) == txs
    assert [t.signature for t in filter_by_category(txs, "Swap")] == ["a", "d"]
    assert filter_by_category(txs, "NFT") == []
    assert category_counts(txs) == {"Swap": 2, "DeFi": 1, "Spam": 1}
