"""
Currency helpers for Brazilian Real (BRL).

Money is handled as Decimal in base units (reais). The negotiation offer
flow works in integer cents and converts at the boundary.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

CENT = Decimal("0.01")

NEGOTIATION_MIN_VALUE_CENTS = 300  # R$ 3,00
NEGOTIATION_STEP_CENTS = 100  # R$ 1,00

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert without rounding. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Number) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_brl(amount: Number) -> str:
    """
    Format an amount in reais for display.

    Example: Decimal("1234.5") -> "R$ 1.234,50"
    """
    money = to_money(amount)
    sign = "-" if money < 0 else ""
    # Python groups with "," and separates decimals with "."; swap both.
    text = f"{abs(money):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_brl_cents(cents: int) -> str:
    """Format an amount in cents, e.g. 1470 -> "R$ 14,70"."""
    return format_brl(cents_to_reais(cents))


def parse_brl_to_cents(text: Optional[str]) -> Optional[int]:
    """
    Parse user input into cents.

    Accepts "50", "50,9", "50.00" and "R$ 50,00". A dot is read as a
    decimal separator, same as a comma. More than one separator is invalid.
    Decimals beyond two digits are truncated.
    """
    if not text:
        return None

    sanitized = re.sub(r"[^\d.,]", "", text).replace(".", ",")
    if not sanitized:
        return None

    parts = sanitized.split(",")
    if len(parts) == 1:
        reais = re.sub(r"\D", "", parts[0])
        if not reais:
            return None
        return int(reais) * 100
    if len(parts) == 2:
        reais = re.sub(r"\D", "", parts[0]) or "0"
        decimals = re.sub(r"\D", "", parts[1])
        decimals = (decimals + "00")[:2]
        return int(reais) * 100 + int(decimals)
    return None


def cents_to_reais(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def reais_to_cents(amount: Number) -> int:
    return int(to_money(amount) * 100)


def clamp_negotiation_minimum(cents: int) -> int:
    return max(cents, NEGOTIATION_MIN_VALUE_CENTS)


def step_offer(cents: int, direction: int) -> int:
    """Move an offer one step up (direction > 0) or down, never below the minimum."""
    if direction > 0:
        return cents + NEGOTIATION_STEP_CENTS
    return clamp_negotiation_minimum(cents - NEGOTIATION_STEP_CENTS)


def format_eta(minutes: int) -> str:
    """Format an estimated duration: "45 min", "1h", "1h 5min"."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}min" if mins > 0 else f"{hours}h"
