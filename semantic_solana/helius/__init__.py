"""
Helius Enhanced Transactions client and demo data.

fetch_transactions() returns the raw JSON objects for an address; the API layer
classifies them. Demo transactions are served when no API key is configured.
"""

from semantic_solana.helius.client import HeliusClient, fetch_transactions
from semantic_solana.helius.demo import DEMO_WALLET, demo_transactions

__all__ = [
    "DEMO_WALLET",
    "HeliusClient",
    "demo_transactions",
    "fetch_transactions",
]
