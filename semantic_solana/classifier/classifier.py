"""
Transaction classifier: raw indexer records to human-readable summaries.

classify() maps one loosely-typed enhanced transaction plus the wallet being
viewed to a ParsedTransaction: canonical type, display label, sentence
description, amount and counterparties. Dispatch is on the indexer type code;
each handler walks its own fallback chain from the strongest signal (swap
events, protocol identity) down to the indexer's free text. The emitted type
may differ from the input code (LP deposits, claims, domains, ...).

Pure: no I/O, no mutation of the input. Never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Sequence

from semantic_solana.classifier.domains import detect_domain_service, extract_domain_name
from semantic_solana.classifier.flows import (
    TokenAmount,
    WalletFlows,
    balance_deltas,
    collect_flows,
)
from semantic_solana.classifier.formatting import (
    format_sol,
    lamports_to_sol,
    title_case_code,
)
from semantic_solana.classifier.models import ParsedTransaction, RawTransaction
from semantic_solana.classifier.registry import (
    DCA_PROTOCOLS,
    GENERIC_PROGRAM_IDS,
    LP_PROTOCOLS,
    MULTISIG_PROTOCOLS,
    PERPS_PROTOCOLS,
    SWAP_ROUTER_PROTOCOLS,
    WRAPPED_SOL_MINT,
    lookup_program,
    resolve_protocol,
)
from semantic_solana.semantic_logging import get_logger

logger = get_logger(__name__)

TYPE_LABELS: dict[str, str] = {
    "TRANSFER": "Transfer",
    "SWAP": "Swap",
    "NFT_SALE": "NFT Sale",
    "NFT_LISTING": "NFT Listing",
    "NFT_BID": "NFT Bid",
    "NFT_CANCEL_LISTING": "NFT Delist",
    "NFT_MINT": "NFT Mint",
    "COMPRESSED_NFT_MINT": "cNFT Mint",
    "TOKEN_MINT": "Token Mint",
    "BURN": "Burn",
    "BURN_NFT": "NFT Burn",
    "STAKE_SOL": "Stake",
    "UNSTAKE_SOL": "Unstake",
    "INIT_STAKE": "Init Stake",
    "MERGE_STAKE": "Merge Stake",
    "SPLIT_STAKE": "Split Stake",
    "CREATE_ORDER": "Create Order",
    "CANCEL_ORDER": "Cancel Order",
    "FILL_ORDER": "Fill Order",
    "OPEN_POSITION": "Open Position",
    "CLOSE_POSITION": "Close Position",
    "LOAN": "Loan",
    "REPAY_LOAN": "Repay Loan",
    "ADD_LIQUIDITY": "Add Liquidity",
    "REMOVE_LIQUIDITY": "Remove Liquidity",
    "CLOSE_ACCOUNT": "Close Account",
    "INITIALIZE_ACCOUNT": "Init Account",
    "DOMAIN": "Domain",
    "LP_DEPOSIT": "LP Deposit",
    "LP_WITHDRAW": "LP Withdraw",
    "DEPOSIT": "Deposit",
    "CLAIM": "Claim",
    "PERPS": "Perps",
    "DCA": "DCA",
    "MULTISIG": "Multisig",
    "SPAM": "Spam",
    "UNKNOWN": "Transaction",
}

# Labels chosen by a handler that reclassify the emitted type.
LABEL_TYPES: dict[str, str] = {
    "LP Deposit": "LP_DEPOSIT",
    "LP Withdraw": "LP_WITHDRAW",
    "Claim": "CLAIM",
    "Deposit": "DEPOSIT",
    "Multisig": "MULTISIG",
    "Perps": "PERPS",
    "DCA": "DCA",
    "Domain": "DOMAIN",
    "Swap": "SWAP",
}

MIN_RAW_DESCRIPTION_LEN = 12
# Upper bound for a native outflow to still count as account rent.
RENT_MAX_SOL = Decimal("0.01")


def label_for_type(type_code: str) -> str:
    """Display label for a type code; unknown codes become Title Case words."""
    return TYPE_LABELS.get(type_code) or title_case_code(type_code) or TYPE_LABELS["UNKNOWN"]


@dataclass
class _Outcome:
    description: str
    amount: str = ""
    type_label: str | None = None
    from_address: str = ""
    to_address: str = ""
    amount_sol: Decimal | None = None


@dataclass(frozen=True)
class _Context:
    tx: RawTransaction
    wallet: str
    type_code: str
    type_label: str
    protocol: str
    domain_service: str
    flows: WalletFlows


def _join(legs: Sequence[TokenAmount]) -> tuple[str, Decimal | None]:
    """Render legs joined by " + "; the SOL value is kept only for a single native leg."""
    legs = [leg for leg in legs if leg.amount > 0]
    text = " + ".join(leg.format() for leg in legs)
    sol = legs[0].amount if len(legs) == 1 and legs[0].is_native else None
    return text, sol


def _with_protocol(text: str, protocol: str, preposition: str = "on") -> str:
    return f"{text} {preposition} {protocol}" if protocol else text


def _raw_description(tx: RawTransaction) -> str:
    text = (tx.description or "").strip()
    return text if len(text) >= MIN_RAW_DESCRIPTION_LEN else ""


def _first(*candidates: Sequence[str]) -> str:
    for seq in candidates:
        if seq:
            return seq[0]
    return ""


def _protocol_from_instructions(tx: RawTransaction) -> str:
    for ix in tx.instructions:
        for program_id in (ix.program_id, *(inner.program_id for inner in ix.inner_instructions)):
            if program_id in GENERIC_PROGRAM_IDS:
                continue
            name = lookup_program(program_id)
            if name:
                return name
    return ""


def _is_multisig(ctx: _Context) -> bool:
    source = (ctx.tx.source or "").upper()
    return ctx.protocol in MULTISIG_PROTOCOLS or "MULTISIG" in source or "SQUADS" in source


# -----------------------------------------------------------------------------
# Shared outcomes
# -----------------------------------------------------------------------------


def _multisig_outcome(ctx: _Context) -> _Outcome:
    f = ctx.flows
    name = ctx.protocol or "multisig"
    received, received_sol = _join(f.incoming())
    if received:
        return _Outcome(
            f"Received {received} via {name}",
            amount=received,
            type_label="Multisig",
            from_address=_first(f.received_from, f.token_received_from),
            to_address=ctx.wallet,
            amount_sol=received_sol,
        )
    sent, sent_sol = _join(f.outgoing())
    if sent:
        return _Outcome(
            f"Sent {sent} via {name}",
            amount=sent,
            type_label="Multisig",
            to_address=_first(f.sent_to, f.token_sent_to),
            amount_sol=sent_sol,
        )
    return _Outcome(f"Multisig transaction on {name}", type_label="Multisig")


def _lp_deposit_outcome(ctx: _Context) -> _Outcome:
    f = ctx.flows
    text, sol = _join(f.outgoing())
    return _Outcome(
        f"Deposited {text} into {ctx.protocol} pool",
        amount=text,
        type_label="LP Deposit",
        to_address=_first(f.token_sent_to, f.sent_to),
        amount_sol=sol,
    )


def _lp_withdraw_outcome(ctx: _Context) -> _Outcome:
    f = ctx.flows
    text, sol = _join(f.incoming())
    return _Outcome(
        f"Withdrew {text} from {ctx.protocol} pool",
        amount=text,
        type_label="LP Withdraw",
        from_address=_first(f.token_received_from, f.received_from),
        to_address=ctx.wallet,
        amount_sol=sol,
    )


def _domain_outcome(ctx: _Context, action: str) -> _Outcome:
    """
    Domain-service phrasing. action is the indexer code driving the verb:
    CREATE registers, CLOSE releases, UPDATE updates, anything else buys.
    """
    f = ctx.flows
    service = ctx.domain_service
    domain = extract_domain_name(ctx.tx.description)
    cost, cost_sol = _join(f.outgoing()[:1])
    cost_suffix = f" for {cost}" if cost else ""

    if action == "CREATE":
        text = f"Registered {domain}{cost_suffix}" if domain else f"Registered a domain{cost_suffix} on {service}"
    elif action == "CLOSE":
        text = f"Released {domain}" if domain else f"Closed a domain record on {service}"
    elif action == "UPDATE":
        text = f"Updated {domain}" if domain else f"Updated a domain record on {service}"
    elif domain and cost:
        text = f"Bought {domain} for {cost}"
    elif domain:
        text = f"Registered {domain}"
    elif cost:
        text = f"Bought a domain for {cost} on {service}"
    else:
        text = f"Domain transaction on {service}"
    return _Outcome(text, amount=cost, type_label="Domain", amount_sol=cost_sol)


# -----------------------------------------------------------------------------
# Handlers (one per indexer type code)
# -----------------------------------------------------------------------------


def _swap_event_legs(tx: RawTransaction) -> tuple[list[TokenAmount], list[TokenAmount]]:
    event = tx.swap_event
    if event is None:
        return [], []
    sent: list[TokenAmount] = []
    received: list[TokenAmount] = []
    if event.native_input is not None and event.native_input.amount > 0:
        sent.append(TokenAmount(WRAPPED_SOL_MINT, lamports_to_sol(event.native_input.amount)))
    sent.extend(TokenAmount(t.mint, t.token_amount) for t in event.token_inputs if t.token_amount > 0)
    if event.native_output is not None and event.native_output.amount > 0:
        received.append(TokenAmount(WRAPPED_SOL_MINT, lamports_to_sol(event.native_output.amount)))
    received.extend(TokenAmount(t.mint, t.token_amount) for t in event.token_outputs if t.token_amount > 0)
    return sent, received


def _describe_swap(ctx: _Context) -> _Outcome:
    f = ctx.flows
    sent, received = _swap_event_legs(ctx.tx)
    if not sent and not received:
        sent = list(f.tokens_sent) or f.outgoing()
        received = list(f.tokens_received) or f.incoming()
    if not sent and not received:
        sent, received = balance_deltas(ctx.tx, ctx.wallet)

    sent_text, sent_sol = _join(sent)
    received_text, received_sol = _join(received)
    if sent_text and received_text:
        text = f"Swapped {sent_text} for {received_text}"
    elif sent_text:
        text = f"Swapped {sent_text}"
    elif received_text:
        text = f"Received {received_text} from swap"
    else:
        raw = _raw_description(ctx.tx)
        if raw:
            return _Outcome(raw)
        text = "Swapped tokens"
    return _Outcome(
        _with_protocol(text, ctx.protocol),
        amount=sent_text or received_text,
        amount_sol=sent_sol if sent_text else received_sol,
    )


def _describe_transfer(ctx: _Context) -> _Outcome:
    f = ctx.flows
    if _is_multisig(ctx):
        return _multisig_outcome(ctx)
    if ctx.protocol in LP_PROTOCOLS and f.tokens_sent and f.sol_sent > 0:
        return _lp_deposit_outcome(ctx)
    if ctx.domain_service:
        return _domain_outcome(ctx, ctx.type_code)

    if f.sol_sent > 0 and not f.has_token_movement:
        amount = format_sol(f.sol_sent)
        destination = lookup_program(f.first_sent_to) or ctx.protocol
        return _Outcome(
            _with_protocol(f"Sent {amount}", destination, "to"),
            amount=amount,
            from_address=ctx.wallet,
            to_address=f.first_sent_to,
            amount_sol=f.sol_sent,
        )
    if f.sol_received > 0 and not f.has_token_movement:
        amount = format_sol(f.sol_received)
        return _Outcome(
            _with_protocol(f"Received {amount}", ctx.protocol, "from"),
            amount=amount,
            from_address=f.first_received_from,
            to_address=ctx.wallet,
            amount_sol=f.sol_received,
        )
    if f.tokens_sent:
        text, _ = _join(f.tokens_sent)
        return _Outcome(
            f"Sent {text}",
            amount=text,
            from_address=ctx.wallet,
            to_address=_first(f.token_sent_to),
        )
    if f.tokens_received:
        text, _ = _join(f.tokens_received)
        return _Outcome(
            f"Received {text}",
            amount=text,
            from_address=_first(f.token_received_from),
            to_address=ctx.wallet,
        )
    return _Outcome(_raw_description(ctx.tx) or "Transferred funds")


def _describe_nft_sale(ctx: _Context) -> _Outcome:
    event = ctx.tx.nft_event
    if event is None:
        return _Outcome(_raw_description(ctx.tx) or "NFT sale")
    price = lamports_to_sol(event.amount)
    amount = format_sol(price) if price > 0 else ""
    price_suffix = f" for {amount}" if amount else ""
    if event.buyer and event.buyer == ctx.wallet:
        text = _with_protocol(f"Bought an NFT{price_suffix}", ctx.protocol)
    elif event.seller and event.seller == ctx.wallet:
        text = _with_protocol(f"Sold an NFT{price_suffix}", ctx.protocol)
    else:
        text = event.description or _raw_description(ctx.tx) or _with_protocol(f"NFT sale{price_suffix}", ctx.protocol)
    return _Outcome(
        text,
        amount=amount,
        from_address=event.seller,
        to_address=event.buyer,
        amount_sol=price if amount else None,
    )


def _describe_close_account(ctx: _Context) -> _Outcome:
    f = ctx.flows
    if ctx.protocol in LP_PROTOCOLS:
        if f.tokens_sent:
            return _lp_deposit_outcome(ctx)
        if f.tokens_received:
            return _lp_withdraw_outcome(ctx)
    if f.sol_received > 0:
        amount = format_sol(f.sol_received)
        return _Outcome(
            f"Closed token account, reclaimed {amount} rent",
            amount=amount,
            from_address=f.first_received_from,
            to_address=ctx.wallet,
            amount_sol=f.sol_received,
        )
    return _Outcome("Closed token account")


def _describe_stake(ctx: _Context) -> _Outcome:
    f = ctx.flows
    if f.sol_sent <= 0:
        return _Outcome("Staked SOL")
    amount = format_sol(f.sol_sent)
    return _Outcome(f"Staked {amount}", amount=amount, to_address=f.first_sent_to, amount_sol=f.sol_sent)


def _describe_unstake(ctx: _Context) -> _Outcome:
    f = ctx.flows
    if f.sol_received <= 0:
        return _Outcome("Unstaked SOL")
    amount = format_sol(f.sol_received)
    return _Outcome(
        f"Unstaked {amount}",
        amount=amount,
        from_address=f.first_received_from,
        to_address=ctx.wallet,
        amount_sol=f.sol_received,
    )


def _liquidity_handler(base: str, adding: bool) -> Callable[[_Context], _Outcome]:
    def describe(ctx: _Context) -> _Outcome:
        legs = ctx.flows.outgoing() if adding else ctx.flows.incoming()
        text, sol = _join(legs)
        sentence = f"{base}: {text}" if text else base
        return _Outcome(_with_protocol(sentence, ctx.protocol), amount=text, amount_sol=sol)

    return describe


def _describe_initialize_account(ctx: _Context) -> _Outcome:
    f = ctx.flows
    rent = f.sol_sent if 0 < f.sol_sent <= RENT_MAX_SOL else Decimal(0)
    rent_amount = format_sol(rent) if rent else ""
    if f.tokens_received:
        text, _ = _join(f.tokens_received)
        return _Outcome(
            _with_protocol(f"Claimed {text}", ctx.protocol, "from"),
            amount=text,
            type_label="Claim",
            from_address=_first(f.token_received_from),
            to_address=ctx.wallet,
        )
    if f.tokens_sent:
        text, _ = _join(f.tokens_sent)
        return _Outcome(
            _with_protocol(f"Deposited {text}", ctx.protocol, "into"),
            amount=text,
            type_label="Deposit",
            to_address=_first(f.token_sent_to),
        )
    rent_suffix = f" ({rent_amount} rent)" if rent_amount else ""
    if ctx.protocol:
        text = f"Set up account on {ctx.protocol}{rent_suffix}"
    else:
        text = f"Initialized token account{rent_suffix}"
    return _Outcome(text, amount=rent_amount, amount_sol=rent or None)


def _describe_nft_mint(ctx: _Context) -> _Outcome:
    f = ctx.flows
    base = "Minted a compressed NFT" if ctx.type_code == "COMPRESSED_NFT_MINT" else "Minted an NFT"
    cost = format_sol(f.sol_sent) if f.sol_sent > 0 else ""
    text = f"{base} for {cost}" if cost else base
    return _Outcome(
        _with_protocol(text, ctx.protocol),
        amount=cost,
        to_address=ctx.wallet,
        amount_sol=f.sol_sent if cost else None,
    )


def _account_op_handler(verb: str) -> Callable[[_Context], _Outcome]:
    def describe(ctx: _Context) -> _Outcome:
        if ctx.domain_service:
            return _domain_outcome(ctx, ctx.type_code)
        if ctx.protocol:
            return _Outcome(f"{verb} account on {ctx.protocol}")
        return _Outcome(f"{verb} an account")

    return describe


def _describe_perps(ctx: _Context) -> _Outcome:
    f = ctx.flows
    sent, sent_sol = _join(f.outgoing())
    received, received_sol = _join(f.incoming())
    if sent:
        text, amount, sol = f"Opened perps position with {sent}", sent, sent_sol
    elif received:
        text, amount, sol = f"Closed perps position for {received}", received, received_sol
    else:
        text, amount, sol = "Perps trade", "", None
    return _Outcome(_with_protocol(text, ctx.protocol), amount=amount, type_label="Perps", amount_sol=sol)


def _describe_dca(ctx: _Context) -> _Outcome:
    f = ctx.flows
    sent, sent_sol = _join(f.outgoing())
    received, received_sol = _join(f.incoming())
    if sent:
        text, amount, sol = f"Created DCA order with {sent}", sent, sent_sol
    elif received:
        text, amount, sol = f"DCA order filled: received {received}", received, received_sol
    else:
        text, amount, sol = "DCA order", "", None
    return _Outcome(_with_protocol(text, ctx.protocol), amount=amount, type_label="DCA", amount_sol=sol)


def _describe_router(ctx: _Context) -> _Outcome:
    f = ctx.flows
    sent, sent_sol = _join(f.outgoing())
    received, received_sol = _join(f.incoming())
    if sent and received:
        text = f"Swapped {sent} for {received}"
    elif sent:
        text = f"Swapped {sent}"
    elif received:
        text = f"Received {received} from swap"
    else:
        return _Outcome(f"Interacted with {ctx.protocol}")
    return _Outcome(
        _with_protocol(text, ctx.protocol),
        amount=sent or received,
        type_label="Swap",
        amount_sol=sent_sol if sent else received_sol,
    )


def _describe_other(ctx: _Context) -> _Outcome:
    """UNKNOWN and any code without a dedicated handler."""
    f = ctx.flows
    if ctx.domain_service:
        return _domain_outcome(ctx, ctx.type_code)
    if ctx.protocol in PERPS_PROTOCOLS:
        return _describe_perps(ctx)
    if ctx.protocol in DCA_PROTOCOLS:
        return _describe_dca(ctx)
    if ctx.protocol in SWAP_ROUTER_PROTOCOLS:
        return _describe_router(ctx)
    if _is_multisig(ctx):
        return _multisig_outcome(ctx)

    if f.sol_sent > 0 and not f.has_token_movement:
        amount = format_sol(f.sol_sent)
        return _Outcome(
            _with_protocol(f"Sent {amount}", ctx.protocol, "to"),
            amount=amount,
            to_address=f.first_sent_to,
            amount_sol=f.sol_sent,
        )
    if f.sol_received > 0 and not f.has_token_movement:
        amount = format_sol(f.sol_received)
        return _Outcome(
            _with_protocol(f"Received {amount}", ctx.protocol, "from"),
            amount=amount,
            from_address=f.first_received_from,
            to_address=ctx.wallet,
            amount_sol=f.sol_received,
        )
    if f.tokens_sent and f.tokens_received:
        sent, _ = _join(f.tokens_sent)
        received, _ = _join(f.tokens_received)
        return _Outcome(_with_protocol(f"Swapped {sent} for {received}", ctx.protocol), amount=sent)
    if f.tokens_sent:
        text, _ = _join(f.tokens_sent)
        return _Outcome(
            _with_protocol(f"Sent {text}", ctx.protocol, "to"),
            amount=text,
            to_address=_first(f.token_sent_to),
        )
    if f.tokens_received:
        text, _ = _join(f.tokens_received)
        return _Outcome(
            _with_protocol(f"Received {text}", ctx.protocol, "from"),
            amount=text,
            from_address=_first(f.token_received_from),
            to_address=ctx.wallet,
        )
    return _Outcome(_raw_description(ctx.tx) or ctx.type_label)


_HANDLERS: dict[str, Callable[[_Context], _Outcome]] = {
    "SWAP": _describe_swap,
    "TRANSFER": _describe_transfer,
    "NFT_SALE": _describe_nft_sale,
    "CLOSE_ACCOUNT": _describe_close_account,
    "STAKE_SOL": _describe_stake,
    "INIT_STAKE": _describe_stake,
    "UNSTAKE_SOL": _describe_unstake,
    "ADD_LIQUIDITY": _liquidity_handler("Added liquidity", adding=True),
    "REMOVE_LIQUIDITY": _liquidity_handler("Removed liquidity", adding=False),
    "OPEN_POSITION": _liquidity_handler("Opened LP position", adding=True),
    "CLOSE_POSITION": _liquidity_handler("Closed LP position", adding=False),
    "INITIALIZE_ACCOUNT": _describe_initialize_account,
    "NFT_MINT": _describe_nft_mint,
    "COMPRESSED_NFT_MINT": _describe_nft_mint,
    "CREATE": _account_op_handler("Created"),
    "CLOSE": _account_op_handler("Closed"),
    "UPDATE": _account_op_handler("Updated"),
}


def _classify(tx: RawTransaction, wallet: str, type_code: str, type_label: str) -> ParsedTransaction:
    flows = collect_flows(tx, wallet)
    ctx = _Context(
        tx=tx,
        wallet=wallet,
        type_code=type_code,
        type_label=type_label,
        protocol=resolve_protocol(tx.source) or _protocol_from_instructions(tx),
        domain_service=detect_domain_service(tx),
        flows=flows,
    )
    outcome = _HANDLERS.get(type_code, _describe_other)(ctx)

    final_label = outcome.type_label or type_label
    final_type = LABEL_TYPES.get(outcome.type_label or "", type_code)
    if ctx.domain_service:
        final_type, final_label = "DOMAIN", TYPE_LABELS["DOMAIN"]

    return ParsedTransaction(
        signature=tx.signature,
        timestamp=tx.timestamp,
        type=final_type,
        type_label=final_label,
        description=outcome.description or final_label,
        amount=outcome.amount,
        from_address=outcome.from_address or wallet,
        to_address=outcome.to_address or flows.first_sent_to or flows.first_received_from,
        fee=tx.fee,
        source=tx.source or "UNKNOWN",
        amount_sol=outcome.amount_sol,
    )


def classify(tx: RawTransaction | dict[str, Any], wallet_address: str) -> ParsedTransaction:
    """
    Classify one indexer transaction from the point of view of wallet_address.

    Accepts a RawTransaction or the indexer's JSON object. Missing or malformed
    fields degrade to empty strings and zeros; the result always has a
    signature, timestamp, type and type label.
    """
    wallet = (wallet_address or "").strip()
    raw = RawTransaction()
    type_code = "UNKNOWN"
    type_label = label_for_type(type_code)
    try:
        raw = RawTransaction.from_dict(tx)
        type_code = (raw.type or "").strip().upper() or "UNKNOWN"
        type_label = label_for_type(type_code)
        parsed = _classify(raw, wallet, type_code, type_label)
    except Exception as e:
        logger.warning(
            "classify_failed",
            signature=raw.signature,
            tx_type=type_code,
            error=str(e),
            exc_info=True,
        )
        return ParsedTransaction(
            signature=raw.signature,
            timestamp=raw.timestamp,
            type=type_code,
            type_label=type_label,
            description=type_label,
            from_address=wallet,
            fee=raw.fee,
            source=raw.source or "UNKNOWN",
        )
    logger.debug("transaction_classified", signature=parsed.signature, tx_type=parsed.type)
    return parsed


def classify_all(transactions: Sequence[RawTransaction | dict[str, Any]], wallet_address: str) -> list[ParsedTransaction]:
    """Classify a batch, preserving order."""
    return [classify(tx, wallet_address) for tx in transactions]
