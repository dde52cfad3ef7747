"""Markdown and number formatting shared by the analytics tools.

Numbers follow the conventions the API's consumers already see: whole floats
print without a decimal part, and a zero denominator gives NaN or Infinity
instead of an error.
"""
from __future__ import annotations

import json
import math
from datetime import date, datetime, timezone
from typing import Any

NOT_AVAILABLE = "N/A"
DAY_SECONDS = 24 * 60 * 60


def format_value(value: Any, default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_fixed(value: float, digits: int) -> str:
    """Fixed-point rendering that lets NaN and Infinity through."""
    if math.isnan(value) or math.isinf(value):
        return format_value(value)
    return f"{value:.{digits}f}"


def divide(numerator: Any, denominator: Any) -> float:
    """Float division where missing operands give NaN and x/0 gives NaN or +-Infinity."""
    if numerator is None or denominator is None:
        return math.nan
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def round_half_up(value: float) -> float | int:
    if math.isnan(value) or math.isinf(value):
        return value
    return math.floor(value + 0.5)


def plural(count: Any, word: str, suffix: str = "s") -> str:
    return word if count == 1 else word + suffix


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def raw_json_block(data: Any) -> str:
    return f"**Raw Data:**\n\n```json\n{json.dumps(data, indent=2, ensure_ascii=False)}\n```\n"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO date or datetime; date-only and naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text[:10]), datetime.min.time())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until(moment: datetime, now: datetime) -> int:
    """Whole days from `now` to `moment`, rounded up."""
    return math.ceil((moment - now).total_seconds() / DAY_SECONDS)
