"""
Display Formatting
==================
Rounding and label helpers applied only at display time.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CONTEXT_UNITS = (("m", 1_000_000), ("k", 1_000))


def format_usd(amount: Decimal, places: int = 2) -> str:
    """
    Format a dollar amount for display.

    Rounds half-up at the last shown digit, e.g. ``Decimal("0.745")`` with
    two places renders as ``"$0.75"``.
    """
    exponent = Decimal(1).scaleb(-places)
    rounded = amount.quantize(exponent, rounding=ROUND_HALF_UP)
    return f"${rounded:,.{places}f}"


def parse_context_window(value: Any) -> Any:
    """Convert labels such as ``"128k"`` or ``"1m"`` to a token count."""
    if not isinstance(value, str):
        return value

    text = value.strip().lower().replace(",", "")
    if text.endswith("tokens"):
        text = text[: -len("tokens")].strip()

    multiplier = 1
    for suffix, size in _CONTEXT_UNITS:
        if text.endswith(suffix):
            multiplier = size
            text = text[: -len(suffix)].strip()
            break

    try:
        tokens = Decimal(text) * multiplier
    except InvalidOperation as e:
        raise ValueError(f"Invalid context window: {value!r}") from e

    if not tokens.is_finite():
        raise ValueError(f"Invalid context window: {value!r}")
    return int(tokens)


def format_context_window(tokens: int) -> str:
    """Render a context window the way catalogs label it (``128k``, ``1m``)."""
    for suffix, size in _CONTEXT_UNITS:
        if tokens >= size and tokens % size == 0:
            return f"{tokens // size}{suffix}"
    return f"{tokens:,}"
