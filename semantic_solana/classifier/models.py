"""
Data models for indexer input and classified output.

RawTransaction mirrors the Helius Enhanced Transactions payload (camelCase JSON);
from_dict() is lenient and never raises, so every downstream access can assume
well-typed fields. ParsedTransaction is the classifier's immutable output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

# SPL mint decimals are a u8; lamports, slots and raw token amounts fit in a u64
MAX_TOKEN_DECIMALS = 255
MAX_U64 = 2**64 - 1


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if abs(value) <= MAX_U64 else 0
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return 0
    if not result.is_finite() or abs(result) > MAX_U64:
        return 0
    return int(result)


def _as_decimals(value: Any) -> int:
    decimals = _as_int(value)
    return decimals if 0 <= decimals <= MAX_TOKEN_DECIMALS else 0


def _as_decimal(value: Any) -> Decimal:
    """Coerce numbers and numeric strings to Decimal; anything else is zero."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _pick(item: Mapping[str, Any], *keys: str) -> Any:
    """First present, non-empty value among keys (indexer field-name variants)."""
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(frozen=True)
class NativeTransfer:
    """SOL movement; amount in lamports."""

    from_account: str
    to_account: str
    amount: int

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "NativeTransfer":
        return cls(
            from_account=_as_str(_pick(item, "fromUserAccount", "from")),
            to_account=_as_str(_pick(item, "toUserAccount", "to")),
            amount=_as_int(item.get("amount")),
        )


@dataclass(frozen=True)
class TokenTransfer:
    """SPL token movement; token_amount is already decimal-adjusted."""

    from_account: str
    to_account: str
    token_amount: Decimal
    mint: str
    token_standard: str = ""

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "TokenTransfer":
        return cls(
            from_account=_as_str(_pick(item, "fromUserAccount", "from")),
            to_account=_as_str(_pick(item, "toUserAccount", "to")),
            token_amount=_as_decimal(item.get("tokenAmount")),
            mint=_as_str(item.get("mint")),
            token_standard=_as_str(item.get("tokenStandard")),
        )


@dataclass(frozen=True)
class SwapNativeAmount:
    """Native side of a swap event; amount in lamports (sent as a string by the indexer)."""

    account: str
    amount: int

    @classmethod
    def from_dict(cls, item: Any) -> "SwapNativeAmount | None":
        if not isinstance(item, Mapping):
            return None
        return cls(account=_as_str(item.get("account")), amount=_as_int(item.get("amount")))


@dataclass(frozen=True)
class SwapTokenAmount:
    """
    Token side of a swap event.

    token_amount is decimal-adjusted. When the indexer only supplies
    rawTokenAmount {tokenAmount, decimals}, the adjustment is applied here.
    """

    mint: str
    token_amount: Decimal
    user_account: str
    decimals: int | None = None

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "SwapTokenAmount":
        raw = _as_dict(item.get("rawTokenAmount"))
        decimals: int | None = None
        if "tokenAmount" in item and not isinstance(item.get("tokenAmount"), Mapping):
            amount = _as_decimal(item.get("tokenAmount"))
        elif raw:
            decimals = _as_decimals(raw.get("decimals"))
            amount = _as_decimal(raw.get("tokenAmount")).scaleb(-decimals)
        else:
            amount = Decimal(0)
        return cls(
            mint=_as_str(item.get("mint")),
            token_amount=amount,
            user_account=_as_str(item.get("userAccount")),
            decimals=decimals,
        )


@dataclass(frozen=True)
class SwapEvent:
    native_input: SwapNativeAmount | None = None
    native_output: SwapNativeAmount | None = None
    token_inputs: tuple[SwapTokenAmount, ...] = ()
    token_outputs: tuple[SwapTokenAmount, ...] = ()

    @classmethod
    def from_dict(cls, item: Any) -> "SwapEvent | None":
        if not isinstance(item, Mapping):
            return None
        return cls(
            native_input=SwapNativeAmount.from_dict(item.get("nativeInput")),
            native_output=SwapNativeAmount.from_dict(item.get("nativeOutput")),
            token_inputs=tuple(
                SwapTokenAmount.from_dict(t) for t in _as_list(item.get("tokenInputs")) if isinstance(t, Mapping)
            ),
            token_outputs=tuple(
                SwapTokenAmount.from_dict(t) for t in _as_list(item.get("tokenOutputs")) if isinstance(t, Mapping)
            ),
        )


@dataclass(frozen=True)
class NftEvent:
    """NFT sale/listing event; amount in lamports."""

    description: str = ""
    type: str = ""
    buyer: str = ""
    seller: str = ""
    amount: int = 0
    nfts: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, item: Any) -> "NftEvent | None":
        if not isinstance(item, Mapping):
            return None
        mints = tuple(
            _as_str(n.get("mint")) for n in _as_list(item.get("nfts")) if isinstance(n, Mapping)
        )
        return cls(
            description=_as_str(item.get("description")),
            type=_as_str(item.get("type")),
            buyer=_as_str(item.get("buyer")),
            seller=_as_str(item.get("seller")),
            amount=_as_int(item.get("amount")),
            nfts=mints,
        )


@dataclass(frozen=True)
class TokenBalanceChange:
    """Signed raw token delta for one token account; amount() applies decimals."""

    mint: str
    raw_amount: int
    decimals: int
    user_account: str

    def amount(self) -> Decimal:
        return Decimal(self.raw_amount).scaleb(-self.decimals)

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "TokenBalanceChange":
        raw = _as_dict(item.get("rawTokenAmount"))
        return cls(
            mint=_as_str(item.get("mint")),
            raw_amount=_as_int(raw.get("tokenAmount")),
            decimals=_as_decimals(raw.get("decimals")),
            user_account=_as_str(item.get("userAccount")),
        )


@dataclass(frozen=True)
class AccountData:
    account: str
    native_balance_change: int
    token_balance_changes: tuple[TokenBalanceChange, ...] = ()

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "AccountData":
        return cls(
            account=_as_str(item.get("account")),
            native_balance_change=_as_int(item.get("nativeBalanceChange")),
            token_balance_changes=tuple(
                TokenBalanceChange.from_dict(c)
                for c in _as_list(item.get("tokenBalanceChanges"))
                if isinstance(c, Mapping)
            ),
        )


@dataclass(frozen=True)
class Instruction:
    program_id: str
    accounts: tuple[str, ...] = ()
    data: str = ""
    inner_instructions: tuple["Instruction", ...] = ()

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "Instruction":
        return cls(
            program_id=_as_str(item.get("programId")),
            accounts=tuple(_as_str(a) for a in _as_list(item.get("accounts"))),
            data=_as_str(item.get("data")),
            inner_instructions=tuple(
                cls.from_dict(i) for i in _as_list(item.get("innerInstructions")) if isinstance(i, Mapping)
            ),
        )


@dataclass(frozen=True)
class RawTransaction:
    """
    One enhanced transaction as returned by the indexer for a wallet.

    Immutable input to the classifier. Every field has an empty default so a
    partial payload still yields a usable record.
    """

    signature: str = ""
    type: str = ""
    source: str = ""
    description: str = ""
    fee: int = 0
    fee_payer: str = ""
    timestamp: int = 0
    slot: int = 0
    native_transfers: tuple[NativeTransfer, ...] = ()
    token_transfers: tuple[TokenTransfer, ...] = ()
    swap_event: SwapEvent | None = None
    nft_event: NftEvent | None = None
    account_data: tuple[AccountData, ...] = ()
    instructions: tuple[Instruction, ...] = ()

    @classmethod
    def from_dict(cls, item: Any) -> "RawTransaction":
        """Build from a single indexer JSON object. Never raises; non-dict input gives an empty record."""
        if isinstance(item, RawTransaction):
            return item
        if not isinstance(item, Mapping):
            return cls()
        events = _as_dict(item.get("events"))
        return cls(
            signature=_as_str(item.get("signature")),
            type=_as_str(item.get("type")),
            source=_as_str(item.get("source")),
            description=_as_str(item.get("description")),
            fee=_as_int(item.get("fee")),
            fee_payer=_as_str(item.get("feePayer")),
            timestamp=_as_int(item.get("timestamp")),
            slot=_as_int(item.get("slot")),
            native_transfers=tuple(
                NativeTransfer.from_dict(t) for t in _as_list(item.get("nativeTransfers")) if isinstance(t, Mapping)
            ),
            token_transfers=tuple(
                TokenTransfer.from_dict(t) for t in _as_list(item.get("tokenTransfers")) if isinstance(t, Mapping)
            ),
            swap_event=SwapEvent.from_dict(events.get("swap")),
            nft_event=NftEvent.from_dict(events.get("nft")),
            account_data=tuple(
                AccountData.from_dict(a) for a in _as_list(item.get("accountData")) if isinstance(a, Mapping)
            ),
            instructions=tuple(
                Instruction.from_dict(i) for i in _as_list(item.get("instructions")) if isinstance(i, Mapping)
            ),
        )


@dataclass(frozen=True)
class ParsedTransaction:
    """
    Canonical, human-readable summary of one transaction (or one synthetic spam summary).

    `type` is the reclassified category and may differ from the indexer's code.
    `amount_sol` is the exact native value behind a SOL-denominated `amount`
    string; the spam filter reads it instead of re-parsing the presentation text.
    """

    signature: str
    timestamp: int
    type: str
    type_label: str
    description: str
    amount: str = ""
    from_address: str = ""
    to_address: str = ""
    fee: int = 0
    source: str = ""
    amount_sol: Decimal | None = field(default=None, compare=False)
    from_domain: str | None = None
    to_domain: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON shape consumed by the UI; domain keys appear only once attached."""
        out: dict[str, Any] = {
            "signature": self.signature,
            "timestamp": self.timestamp,
            "type": self.type,
            "typeLabel": self.type_label,
            "description": self.description,
            "amount": self.amount,
            "from": self.from_address,
            "to": self.to_address,
            "fee": self.fee,
            "source": self.source,
        }
        if self.from_domain:
            out["fromDomain"] = self.from_domain
        if self.to_domain:
            out["toDomain"] = self.to_domain
        return out
