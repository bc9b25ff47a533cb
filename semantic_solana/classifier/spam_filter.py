"""
Spam / dust filter.

Drops unsolicited low-value transfers and unsolicited NFT mints from a wallet's
classified history and appends one synthetic SPAM record summarizing what was
removed (count, exact native total, distinct senders).

Amounts are read from ParsedTransaction.amount_sol, the numeric value the
classifier carries next to the display string, never from the string itself.
"""

from __future__ import annotations

import time
import uuid
from decimal import Decimal
from typing import Sequence

from semantic_solana.classifier.flows import inbound_lamports, inbound_senders
from semantic_solana.classifier.formatting import (
    DUST_DISPLAY,
    NATIVE_SYMBOL,
    floor_amount,
    format_sol,
    lamports_to_sol,
)
from semantic_solana.classifier.models import ParsedTransaction, RawTransaction
from semantic_solana.semantic_logging import get_logger

logger = get_logger(__name__)

DUST_THRESHOLD_SOL = Decimal("0.001")
SPAM_TYPE = "SPAM"
SPAM_LABEL = "Spam"
SPAM_SOURCE = "SPAM"
NFT_MINT_TYPES = frozenset({"NFT_MINT", "COMPRESSED_NFT_MINT"})


def _is_dust(value: Decimal | None) -> bool:
    return value is not None and 0 < value < DUST_THRESHOLD_SOL


def _match(
    tx: ParsedTransaction,
    raw: RawTransaction | None,
    wallet: str,
) -> tuple[bool, Decimal]:
    """(is_spam, native value contributed to the summary total)."""
    if tx.type == "TRANSFER":
        if raw is not None and raw.fee_payer != wallet:
            inbound = lamports_to_sol(inbound_lamports(raw, wallet))
            if _is_dust(inbound):
                return True, inbound
        if tx.to_address == wallet and _is_dust(tx.amount_sol):
            return True, tx.amount_sol or Decimal(0)
    if tx.type in NFT_MINT_TYPES and raw is not None and raw.fee_payer != wallet:
        return True, tx.amount_sol or Decimal(0)
    return False, Decimal(0)


def _senders(tx: ParsedTransaction, raw: RawTransaction | None, wallet: str) -> list[str]:
    if raw is not None:
        senders = inbound_senders(raw, wallet)
        if senders:
            return senders
    if tx.from_address and tx.from_address != wallet:
        return [tx.from_address]
    return []


def _summary_amount(total: Decimal) -> str:
    if floor_amount(total) == 0:
        return f"{DUST_DISPLAY} {NATIVE_SYMBOL}"
    return format_sol(total)


def filter_spam(
    transactions: Sequence[ParsedTransaction],
    wallet_address: str,
    raw_transactions: Sequence[RawTransaction] | None = None,
) -> list[ParsedTransaction]:
    """
    Remove dust/spam entries and append one summary record when any were removed.

    raw_transactions, when given, must be positionally aligned with
    transactions; a length mismatch disables the raw-record rules.
    Non-spam entries keep their order and identity.
    """
    wallet = (wallet_address or "").strip()
    raws: Sequence[RawTransaction] | None = raw_transactions
    if raws is not None and len(raws) != len(transactions):
        logger.warning(
            "spam_filter_raw_mismatch",
            parsed_count=len(transactions),
            raw_count=len(raws),
        )
        raws = None

    kept: list[ParsedTransaction] = []
    filtered = 0
    total = Decimal(0)
    senders: list[str] = []
    for index, tx in enumerate(transactions):
        raw = RawTransaction.from_dict(raws[index]) if raws is not None else None
        is_spam, value = _match(tx, raw, wallet)
        if not is_spam:
            kept.append(tx)
            continue
        filtered += 1
        total += value
        for sender in _senders(tx, raw, wallet):
            if sender not in senders:
                senders.append(sender)

    if not filtered:
        return kept

    amount = _summary_amount(total)
    timestamp = transactions[-1].timestamp if transactions else int(time.time())
    summary = ParsedTransaction(
        signature=f"spam-summary-{uuid.uuid4().hex}",
        timestamp=timestamp,
        type=SPAM_TYPE,
        type_label=SPAM_LABEL,
        description=(
            f"Filtered {filtered} spam transaction{'s' if filtered != 1 else ''} "
            f"totaling {amount} from {len(senders)} source{'s' if len(senders) != 1 else ''}"
        ),
        amount=amount,
        from_address=senders[0] if len(senders) == 1 else "",
        to_address=wallet,
        fee=0,
        source=SPAM_SOURCE,
        amount_sol=total,
    )
    logger.info(
        "spam_filter_applied",
        wallet_id=wallet,
        filtered=filtered,
        total_sol=str(total),
        sources=len(senders),
    )
    return kept + [summary]
