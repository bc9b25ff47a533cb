"""
Tests for the dust/spam filter: matching rules, summary record, idempotence.
"""

from __future__ import annotations

from decimal import Decimal

from semantic_solana.classifier import DUST_THRESHOLD_SOL, ParsedTransaction, RawTransaction, classify, filter_spam

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
OTHER = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
SPAMMER = "SpamSender11111111111111111111111111111111"
MINTER = "SpamMinter11111111111111111111111111111111"


def _history(make_tx, native_transfer):
    """Wallet receives 0.0002, 0.0003, 0.0001, 500 and 0.00005 SOL."""
    amounts = [200_000, 300_000, 100_000, 500_000_000_000, 50_000]
    raws = []
    for i, lamports in enumerate(amounts):
        sender = OTHER if lamports >= 1_000_000_000 else SPAMMER
        raws.append(
            make_tx(
                signature=f"sig-{i}",
                timestamp=1_700_000_000 + i,
                type="TRANSFER",
                source="SYSTEM_PROGRAM",
                feePayer=sender,
                nativeTransfers=[native_transfer(sender, WALLET, lamports)],
            )
        )
    return raws


def test_dust_collapsed_into_one_summary(make_tx, native_transfer):
    raws = [RawTransaction.from_dict(r) for r in _history(make_tx, native_transfer)]
    parsed = [classify(r, WALLET) for r in raws]

    out = filter_spam(parsed, WALLET, raws)

    assert len(out) == 2
    assert out[0] is parsed[3]
    summary = out[1]
    assert summary.type == "SPAM"
    assert summary.type_label == "Spam"
    assert summary.signature.startswith("spam-summary-")
    assert summary.description.startswith("Filtered 4 spam transactions")
    assert summary.description == "Filtered 4 spam transactions totaling 0.0006 SOL from 1 source"
    assert summary.amount == "0.0006 SOL"
    assert summary.amount_sol == Decimal("0.00065")
    assert summary.from_address == SPAMMER
    assert summary.to_address == WALLET
    assert summary.fee == 0
    assert summary.source == "SPAM"
    assert summary.timestamp == parsed[-1].timestamp


def test_filter_is_idempotent(make_tx, native_transfer):
    raws = _history(make_tx, native_transfer)
    parsed = [classify(r, WALLET) for r in raws]
    once = filter_spam(parsed, WALLET, raws)
    twice = filter_spam(once, WALLET)
    assert twice == once


def test_signatures_unique_per_call(make_tx, native_transfer):
    raws = _history(make_tx, native_transfer)
    parsed = [classify(r, WALLET) for r in raws]
    a = filter_spam(parsed, WALLET, raws)[-1]
    b = filter_spam(parsed, WALLET, raws)[-1]
    assert a.signature != b.signature


def test_nothing_filtered_returns_equal_list():
    txs = [
        ParsedTransaction("a", 2, "SWAP", "Swap", "Swapped 1.0 SOL", amount="1.0 SOL", amount_sol=Decimal("1")),
        ParsedTransaction("b", 1, "TRANSFER", "Transfer", "Received 5.0 SOL", to_address=WALLET, amount_sol=Decimal("5")),
    ]
    out = filter_spam(txs, WALLET)
    assert out == txs
    assert out is not txs
    assert filter_spam([], WALLET) == []


def test_amount_rule_without_raw():
    dust = ParsedTransaction(
        "d", 5, "TRANSFER", "Transfer", "Received < 0.0001 SOL",
        amount="< 0.0001 SOL", from_address=SPAMMER, to_address=WALLET, amount_sol=Decimal("0.00001"),
    )
    outgoing = ParsedTransaction(
        "o", 4, "TRANSFER", "Transfer", "Sent 0.0005 SOL",
        amount="0.0005 SOL", from_address=WALLET, to_address=OTHER, amount_sol=Decimal("0.0005"),
    )
    token = ParsedTransaction(
        "t", 3, "TRANSFER", "Transfer", "Received 0.0001 USDC",
        amount="0.0001 USDC", from_address=OTHER, to_address=WALLET,
    )
    out = filter_spam([dust, outgoing, token], WALLET)
    assert out[:2] == [outgoing, token]
    assert out[2].description == "Filtered 1 spam transaction totaling < 0.0001 SOL from 1 source"
    assert out[2].from_address == SPAMMER


def test_threshold_is_exclusive():
    at_threshold = ParsedTransaction(
        "x", 1, "TRANSFER", "Transfer", "Received 0.001 SOL",
        to_address=WALLET, amount_sol=DUST_THRESHOLD_SOL,
    )
    assert filter_spam([at_threshold], WALLET) == [at_threshold]


def test_unsolicited_mints():
    own = ParsedTransaction("m1", 1, "NFT_MINT", "NFT Mint", "Minted an NFT", from_address=WALLET)
    spam = ParsedTransaction("m2", 2, "COMPRESSED_NFT_MINT", "cNFT Mint", "Minted a compressed NFT", from_address=MINTER)
    raws = [RawTransaction(signature="m1", fee_payer=WALLET), RawTransaction(signature="m2", fee_payer=MINTER)]
    out = filter_spam([own, spam], WALLET, raws)
    assert out[0] is own
    assert len(out) == 2
    assert out[1].amount == "< 0.0001 SOL"
    assert out[1].from_address == MINTER
    assert out[1].timestamp == 2


def test_wallet_paid_dust_is_kept_by_raw_rule(make_tx, native_transfer):
    raw = RawTransaction.from_dict(
        make_tx(type="TRANSFER", feePayer=WALLET, nativeTransfers=[native_transfer(OTHER, WALLET, 100_000)])
    )
    parsed = ParsedTransaction("w", 1, "TRANSFER", "Transfer", "Received", to_address=WALLET)
    assert filter_spam([parsed], WALLET, [raw]) == [parsed]


def test_misaligned_raw_list_is_ignored(make_tx, native_transfer):
    raws = _history(make_tx, native_transfer)
    parsed = [classify(r, WALLET) for r in raws]
    out = filter_spam(parsed, WALLET, raws[:2])
    # Amount rule still applies: the four small receipts carry amount_sol.
    assert len(out) == 2
    assert out[-1].type == "SPAM"


def test_multiple_senders_leave_from_empty():
    a = ParsedTransaction("a", 1, "TRANSFER", "Transfer", "r", from_address=SPAMMER, to_address=WALLET, amount_sol=Decimal("0.0002"))
    b = ParsedTransaction("b", 2, "TRANSFER", "Transfer", "r", from_address=OTHER, to_address=WALLET, amount_sol=Decimal("0.0003"))
    out = filter_spam([a, b], WALLET)
    assert len(out) == 1
    assert out[0].from_address == ""
    assert out[0].description == "Filtered 2 spam transactions totaling 0.0005 SOL from 2 sources"


def test_non_finite_raw_amounts_are_not_fatal(make_tx, native_transfer):
    raws = [
        make_tx(
            signature="inf",
            type="TRANSFER",
            feePayer=SPAMMER,
            nativeTransfers=[{"fromUserAccount": SPAMMER, "toUserAccount": WALLET, "amount": "Infinity"}],
        ),
        make_tx(
            signature="dust",
            type="TRANSFER",
            feePayer=SPAMMER,
            nativeTransfers=[native_transfer(SPAMMER, WALLET, 10_000)],
        ),
    ]
    parsed = [classify(r, WALLET) for r in raws]
    out = filter_spam(parsed, WALLET, raws)
    assert [t.signature for t in out[:-1]] == ["inf"]
    assert out[-1].type == "SPAM"
