"""Display helpers for calculator results and blog dates."""

from __future__ import annotations

from datetime import date
from typing import Optional

from feedparser.datetimes import _parse_date


def format_currency(amount: float) -> str:
    """US dollars with thousands separators and no cents, e.g. ``-$1,910``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_percent(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_long_date(value: date) -> str:
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def parse_post_date(raw: Optional[str]) -> Optional[date]:
    """Parse an RSS date string with feedparser's handlers; ``None`` if unparseable."""
    if not raw or not raw.strip():
        return None
    parsed = _parse_date(raw.strip())
    if parsed is None:
        return None
    return date(parsed.tm_year, parsed.tm_mon, parsed.tm_mday)


def format_post_date(raw: Optional[str]) -> str:
    """``"Mon, 06 Jan 2025 ..."`` becomes ``"January 6, 2025"``; junk is returned as-is."""
    parsed = parse_post_date(raw)
    if parsed is None:
        return raw or ""
    return format_long_date(parsed)
