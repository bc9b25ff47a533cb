"""
Tests for SWAP classification: swap event legs, transfer fallbacks, balance-change fallback.
"""

from __future__ import annotations

from decimal import Decimal

from semantic_solana.classifier import classify

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
POOL = "PoolAccount1111111111111111111111111111111"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
JUP = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
ORCA_PROGRAM = "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"


def test_native_input_only(make_tx):
    tx = make_tx(
        type="SWAP",
        source="JUPITER",
        events={"swap": {"nativeInput": {"account": WALLET, "amount": "2500000000"}}},
    )
    parsed = classify(tx, WALLET)
    assert parsed.type == "SWAP"
    assert parsed.type_label == "Swap"
    assert parsed.amount == "2.5 SOL"
    assert parsed.description.startswith("Swapped 2.5 SOL")
    assert parsed.description == "Swapped 2.5 SOL on Jupiter"
    assert parsed.amount_sol == Decimal("2.5")


def test_event_both_sides(make_tx):
    tx = make_tx(
        type="SWAP",
        source="JUPITER",
        events={
            "swap": {
                "nativeInput": {"account": WALLET, "amount": "1000000000"},
                "tokenOutputs": [{"mint": USDC, "userAccount": WALLET, "tokenAmount": 142.8}],
            },
        },
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 1.0 SOL for 142.8 USDC on Jupiter"
    assert parsed.amount == "1.0 SOL"


def test_received_only_event(make_tx):
    tx = make_tx(
        type="SWAP",
        source="RAYDIUM",
        events={"swap": {"tokenOutputs": [{"mint": JUP, "tokenAmount": "5"}]}},
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Received 5.0 JUP from swap on Raydium"
    assert parsed.amount == "5.0 JUP"
    assert parsed.amount_sol is None


def test_token_transfer_fallback(make_tx, token_transfer):
    tx = make_tx(
        type="SWAP",
        source="RAYDIUM",
        tokenTransfers=[
            token_transfer(WALLET, POOL, 100, USDC),
            token_transfer(POOL, WALLET, "5", JUP),
        ],
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 100.0 USDC for 5.0 JUP on Raydium"
    assert parsed.from_address == WALLET


def test_balance_change_fallback_adds_fee_back(make_tx):
    tx = make_tx(
        type="SWAP",
        fee=5000,
        feePayer=WALLET,
        accountData=[
            {"account": WALLET, "nativeBalanceChange": -1_000_005_000},
            {
                "account": "TokenAcct111111111111111111111111111111111",
                "nativeBalanceChange": 0,
                "tokenBalanceChanges": [
                    {"mint": BONK, "userAccount": WALLET, "rawTokenAmount": {"tokenAmount": "123456789", "decimals": 5}},
                ],
            },
        ],
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 1.0 SOL for 1,234.5678 BONK"
    assert parsed.amount == "1.0 SOL"


def test_protocol_from_instructions_when_source_is_generic(make_tx, token_transfer):
    tx = make_tx(
        type="SWAP",
        source="UNKNOWN",
        instructions=[{"programId": "ComputeBudget111111111111111111111111111111"}, {"programId": ORCA_PROGRAM}],
        tokenTransfers=[
            token_transfer(WALLET, POOL, 10, USDC),
            token_transfer(POOL, WALLET, 20, JUP),
        ],
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 10.0 USDC for 20.0 JUP on Orca"
    assert parsed.source == "UNKNOWN"


def test_unknown_mint_is_truncated(make_tx, token_transfer):
    mint = "Abcd1111111111111111111111111111111111wxyz"
    tx = make_tx(
        type="SWAP",
        tokenTransfers=[token_transfer(WALLET, POOL, 3, mint)],
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 3.0 Abcd...wxyz"


def test_no_legs_uses_raw_description_or_generic(make_tx):
    parsed = classify(make_tx(type="SWAP", description="User swapped on some new DEX"), WALLET)
    assert parsed.description == "User swapped on some new DEX"

    parsed = classify(make_tx(type="SWAP", description="short"), WALLET)
    assert parsed.description == "Swapped tokens"
    assert parsed.amount == ""


def test_zero_valued_legs_dropped(make_tx):
    tx = make_tx(
        type="SWAP",
        events={
            "swap": {
                "nativeInput": {"account": WALLET, "amount": "0"},
                "tokenInputs": [{"mint": USDC, "tokenAmount": "25"}],
                "tokenOutputs": [{"mint": JUP, "tokenAmount": "0"}],
            },
        },
    )
    parsed = classify(tx, WALLET)
    assert parsed.description == "Swapped 25.0 USDC"
