"""Formatting utilities for currency, dates and tags."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional, Union


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX delimiter, which italicizes
    everything between two amounts.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_currency(amount: Union[float, int, None], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators.

    Negative amounts render as ``-$12.00``.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    value = float(amount or 0)
    formatted = f"{abs(value):,.2f}"
    if include_sign:
        formatted = f"${formatted}"
    return f"-{formatted}" if value < 0 else formatted


def format_date(value: Optional[Union[dt.date, str]], fallback: str = "N/A") -> str:
    """Render a date as ``Jan 05, 2024``; timestamps keep only the date part."""
    if value is None or value == "":
        return fallback
    if isinstance(value, dt.datetime):
        value = value.date()
    if isinstance(value, str):
        try:
            value = dt.date.fromisoformat(value[:10])
        except ValueError:
            return value
    return value.strftime("%b %d, %Y")


def format_month(month: str) -> str:
    """``2024-05`` -> ``May 2024``."""
    try:
        return dt.datetime.strptime(month, "%Y-%m").strftime("%B %Y")
    except (TypeError, ValueError):
        return month or ""


def format_tags(tags: Iterable[str], empty: str = "No tags") -> str:
    cleaned = [t for t in tags if t]
    return ", ".join(cleaned) if cleaned else empty
