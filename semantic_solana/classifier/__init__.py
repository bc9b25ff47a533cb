"""
Classification core: raw indexer transactions to human-readable summaries.

classify() turns one enhanced transaction into a ParsedTransaction for a given
wallet; filter_spam() collapses dust and unsolicited mints into one summary
record. Both are pure and never raise on malformed input.
"""

from semantic_solana.classifier.categories import (
    category_counts,
    filter_by_category,
    filter_category,
    parse_amount,
    sort_transactions,
)
from semantic_solana.classifier.classifier import (
    TYPE_LABELS,
    classify,
    classify_all,
    label_for_type,
)
from semantic_solana.classifier.models import ParsedTransaction, RawTransaction
from semantic_solana.classifier.spam_filter import DUST_THRESHOLD_SOL, filter_spam

__all__ = [
    "DUST_THRESHOLD_SOL",
    "ParsedTransaction",
    "RawTransaction",
    "TYPE_LABELS",
    "category_counts",
    "classify",
    "classify_all",
    "filter_by_category",
    "filter_category",
    "filter_spam",
    "label_for_type",
    "parse_amount",
    "sort_transactions",
]
