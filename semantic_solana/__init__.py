"""
Semantic Solana: human-readable summaries of Solana wallet activity.

Classifies raw indexer transactions into categorized, plain-language records,
collapses dust/spam noise into a single summary entry, and serves the result
over a small FastAPI service.
"""

__version__ = "0.1.0"
