"""
Numeric formatting for amounts shown to users.

Amounts are floored (never rounded) to four decimal places, rendered with
thousands separators and without scientific notation. A positive amount that
floors to zero renders as "< 0.0001".
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext

LAMPORTS_PER_SOL = 1_000_000_000
NATIVE_SYMBOL = "SOL"
DISPLAY_PLACES = Decimal("0.0001")
DUST_DISPLAY = "< 0.0001"


def lamports_to_sol(lamports: int | Decimal) -> Decimal:
    """Exact conversion from lamports to SOL."""
    return Decimal(lamports) / LAMPORTS_PER_SOL


def floor_amount(value: Decimal) -> Decimal:
    """Floor to 4 places, with enough precision for the integer part of value."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 6)
        return value.quantize(DISPLAY_PLACES, rounding=ROUND_DOWN)


def format_number(value: Decimal) -> str:
    """
    Floor to 4 places and render with separators, keeping at least one decimal.

    Decimal("1") -> "1.0", Decimal("1234.56789") -> "1,234.5678",
    Decimal("0.00005") -> "< 0.0001".
    """
    value = Decimal(value)
    if value.is_nan() or value.is_infinite():
        return "0.0"
    floored = floor_amount(value)
    if floored == 0:
        return DUST_DISPLAY if value > 0 else "0.0"
    text = f"{floored:,.4f}"
    whole, frac = text.split(".")
    frac = frac.rstrip("0") or "0"
    return f"{whole}.{frac}"


def format_amount(value: Decimal, symbol: str) -> str:
    return f"{format_number(value)} {symbol}".strip()


def format_sol(value: Decimal) -> str:
    """Native amount in SOL units, e.g. "2.5 SOL"."""
    return format_amount(value, NATIVE_SYMBOL)


def format_lamports(lamports: int) -> str:
    return format_sol(lamports_to_sol(lamports))


def title_case_code(code: str) -> str:
    """FOO_BAR -> Foo Bar."""
    words = [w for w in (code or "").replace("_", " ").split(" ") if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)
