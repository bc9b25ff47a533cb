"""
Wallet-relative value flows extracted from one raw transaction.

Sums native SOL sent/received by the wallet, per-mint token amounts sent and
received (first-encounter order), the distinct counterparties on each side, and
the signed balance deltas used as a last-resort swap signal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from semantic_solana.classifier.formatting import format_amount, lamports_to_sol
from semantic_solana.classifier.models import RawTransaction
from semantic_solana.classifier.registry import WRAPPED_SOL_MINT, token_symbol


@dataclass(frozen=True)
class TokenAmount:
    """Decimal-adjusted amount of one mint."""

    mint: str
    amount: Decimal

    @property
    def symbol(self) -> str:
        return token_symbol(self.mint)

    @property
    def is_native(self) -> bool:
        return self.mint == WRAPPED_SOL_MINT

    def format(self) -> str:
        return format_amount(self.amount, self.symbol)


@dataclass(frozen=True)
class WalletFlows:
    sol_sent: Decimal
    sol_received: Decimal
    sent_to: tuple[str, ...]
    received_from: tuple[str, ...]
    tokens_sent: tuple[TokenAmount, ...]
    tokens_received: tuple[TokenAmount, ...]
    token_sent_to: tuple[str, ...]
    token_received_from: tuple[str, ...]

    @property
    def has_token_movement(self) -> bool:
        return bool(self.tokens_sent or self.tokens_received)

    @property
    def first_sent_to(self) -> str:
        return self.sent_to[0] if self.sent_to else ""

    @property
    def first_received_from(self) -> str:
        return self.received_from[0] if self.received_from else ""

    def outgoing(self) -> list[TokenAmount]:
        """Native + token legs leaving the wallet, native first."""
        legs = [TokenAmount(WRAPPED_SOL_MINT, self.sol_sent)] if self.sol_sent > 0 else []
        return legs + list(self.tokens_sent)

    def incoming(self) -> list[TokenAmount]:
        legs = [TokenAmount(WRAPPED_SOL_MINT, self.sol_received)] if self.sol_received > 0 else []
        return legs + list(self.tokens_received)


def _append_unique(items: list[str], value: str, wallet: str) -> None:
    if value and value != wallet and value not in items:
        items.append(value)


def _accumulate(order: list[str], totals: dict[str, Decimal], mint: str, amount: Decimal) -> None:
    if mint not in totals:
        order.append(mint)
        totals[mint] = Decimal(0)
    totals[mint] += amount


def collect_flows(tx: RawTransaction, wallet: str) -> WalletFlows:
    """Aggregate the wallet's side of every native and token transfer (positive amounts only)."""
    lamports_sent = 0
    lamports_received = 0
    sent_to: list[str] = []
    received_from: list[str] = []
    for transfer in tx.native_transfers:
        if transfer.amount <= 0:
            continue
        if transfer.from_account == wallet and transfer.to_account != wallet:
            lamports_sent += transfer.amount
            _append_unique(sent_to, transfer.to_account, wallet)
        elif transfer.to_account == wallet and transfer.from_account != wallet:
            lamports_received += transfer.amount
            _append_unique(received_from, transfer.from_account, wallet)

    sent_order: list[str] = []
    sent_totals: dict[str, Decimal] = {}
    recv_order: list[str] = []
    recv_totals: dict[str, Decimal] = {}
    token_sent_to: list[str] = []
    token_received_from: list[str] = []
    for transfer in tx.token_transfers:
        if transfer.token_amount <= 0:
            continue
        if transfer.from_account == wallet and transfer.to_account != wallet:
            _accumulate(sent_order, sent_totals, transfer.mint, transfer.token_amount)
            _append_unique(token_sent_to, transfer.to_account, wallet)
        elif transfer.to_account == wallet and transfer.from_account != wallet:
            _accumulate(recv_order, recv_totals, transfer.mint, transfer.token_amount)
            _append_unique(token_received_from, transfer.from_account, wallet)

    return WalletFlows(
        sol_sent=lamports_to_sol(lamports_sent),
        sol_received=lamports_to_sol(lamports_received),
        sent_to=tuple(sent_to),
        received_from=tuple(received_from),
        tokens_sent=tuple(TokenAmount(m, sent_totals[m]) for m in sent_order),
        tokens_received=tuple(TokenAmount(m, recv_totals[m]) for m in recv_order),
        token_sent_to=tuple(token_sent_to),
        token_received_from=tuple(token_received_from),
    )


def inbound_lamports(tx: RawTransaction, wallet: str) -> int:
    """Total native lamports transferred into the wallet from other accounts."""
    return sum(
        t.amount
        for t in tx.native_transfers
        if t.amount > 0 and t.to_account == wallet and t.from_account != wallet
    )


def inbound_senders(tx: RawTransaction, wallet: str) -> list[str]:
    senders: list[str] = []
    for t in tx.native_transfers:
        if t.amount > 0 and t.to_account == wallet:
            _append_unique(senders, t.from_account, wallet)
    return senders


def balance_deltas(tx: RawTransaction, wallet: str) -> tuple[list[TokenAmount], list[TokenAmount]]:
    """
    Signed per-account balance changes for the wallet, split into (sent, received).

    Native deltas exclude the network fee when the wallet paid it. Token deltas
    come from token accounts whose owner is the wallet.
    """
    sent: list[TokenAmount] = []
    received: list[TokenAmount] = []
    native_delta = 0
    token_order: list[str] = []
    token_totals: dict[str, Decimal] = {}
    for entry in tx.account_data:
        if entry.account == wallet:
            native_delta += entry.native_balance_change
        for change in entry.token_balance_changes:
            if change.user_account != wallet or not change.raw_amount:
                continue
            _accumulate(token_order, token_totals, change.mint, change.amount())
    if native_delta < 0 and tx.fee_payer == wallet:
        native_delta = min(0, native_delta + tx.fee)
    if native_delta < 0:
        sent.append(TokenAmount(WRAPPED_SOL_MINT, lamports_to_sol(-native_delta)))
    elif native_delta > 0:
        received.append(TokenAmount(WRAPPED_SOL_MINT, lamports_to_sol(native_delta)))
    for mint in token_order:
        total = token_totals[mint]
        if total < 0:
            sent.append(TokenAmount(mint, -total))
        elif total > 0:
            received.append(TokenAmount(mint, total))
    return sent, received
