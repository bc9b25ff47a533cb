"""Fixed sample history served when no indexer key is configured."""

from __future__ import annotations

import time
from decimal import Decimal

from semantic_solana.classifier.models import ParsedTransaction

DEMO_WALLET = "DemoWa11etXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX"
DEMO_FEE = 5000


def demo_transactions(now: int | None = None) -> list[ParsedTransaction]:
    """Five representative entries, newest first, timestamped relative to now."""
    now = int(time.time()) if now is None else now
    return [
        ParsedTransaction(
            signature="5xGh8K...mock1",
            timestamp=now - 120,
            type="SWAP",
            type_label="Swap",
            description="Swapped 2.5 SOL for 142.8 USDC on Jupiter",
            amount="2.5 SOL",
            from_address=DEMO_WALLET,
            to_address="JUP6Lk...aggregator",
            fee=DEMO_FEE,
            source="JUPITER",
            amount_sol=Decimal("2.5"),
        ),
        ParsedTransaction(
            signature="3mNp2Q...mock2",
            timestamp=now - 3600,
            type="TRANSFER",
            type_label="Transfer",
            description="Sent 10.0 SOL",
            amount="10.0 SOL",
            from_address=DEMO_WALLET,
            to_address="RecvWa11etYYYYYYYYYYYYYYYYYYYYYYYYYYYYYY",
            fee=DEMO_FEE,
            source="SYSTEM_PROGRAM",
            amount_sol=Decimal("10"),
        ),
        ParsedTransaction(
            signature="7kRt5V...mock3",
            timestamp=now - 7200,
            type="NFT_SALE",
            type_label="NFT Sale",
            description="Sold an NFT for 85.0 SOL on Magic Eden",
            amount="85.0 SOL",
            from_address="SellerXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX",
            to_address="BuyerYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYY",
            fee=DEMO_FEE,
            source="MAGIC_EDEN",
            amount_sol=Decimal("85"),
        ),
        ParsedTransaction(
            signature="9pLm4W...mock4",
            timestamp=now - 14400,
            type="STAKE_SOL",
            type_label="Stake",
            description="Staked 50.0 SOL",
            amount="50.0 SOL",
            from_address=DEMO_WALLET,
            to_address="ValidatorZZZZZZZZZZZZZZZZZZZZZZZZZZZZZZZZ",
            fee=DEMO_FEE,
            source="STAKE_PROGRAM",
            amount_sol=Decimal("50"),
        ),
        ParsedTransaction(
            signature="2cBn8X...mock5",
            timestamp=now - 28800,
            type="TOKEN_MINT",
            type_label="Token Mint",
            description="Minted 1,000,000.0 tokens",
            amount="1,000,000.0 tokens",
            from_address="MintAuthXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX",
            to_address=DEMO_WALLET,
            fee=DEMO_FEE,
            source="TOKEN_PROGRAM",
        ),
    ]
