"""Display helpers for market data values."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .shaping import get_field

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_VOLUME_UNITS: tuple[tuple[float, str], ...] = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_volume(volume: float, decimals: int = 2) -> str:
    """Format a USD volume with a B/M/K suffix, e.g. `$1.50M`."""
    for threshold, suffix in _VOLUME_UNITS:
        if volume >= threshold:
            return f"${volume / threshold:,.{decimals}f}{suffix}"
    return f"${volume:,.{decimals}f}"


def format_change(change: float, decimals: int = 2) -> str:
    """Format a percentage change with an explicit sign for non-negative values."""
    prefix = "+" if change >= 0 else ""
    return f"{prefix}{change:,.{decimals}f}%"


def format_price(price: float, decimals: int = 6) -> str:
    """Format a USD price, using fewer decimals for larger prices."""
    if price >= 1000:
        decimals = min(2, decimals)
    elif price >= 1:
        decimals = min(4, decimals)
    return f"${price:,.{decimals}f}"


def format_pair(tokens: Sequence[object]) -> str:
    """Render a pool's token pair as `BASE/QUOTE`."""
    if len(tokens) < 2:
        return "Unknown Pair"
    return f"{get_field(tokens[0], 'symbol', '')}/{get_field(tokens[1], 'symbol', '')}"


def format_date(value: str, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Reformat an ISO-8601 timestamp."""
    return datetime.fromisoformat(value).strftime(fmt)
