"""Fail-soft coercion of loosely typed payload fields.

Every helper here is total: malformed numbers become ``nan`` and malformed
dates become one of the placeholder tokens, so a single bad field never
aborts the surrounding computation.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Literal, Union


logger = logging.getLogger(__name__)

UNKNOWN_DATE = "Unknown Date"
INVALID_DATE = "Invalid Date"

Kind = Literal["int", "float", "date"]
DateStyle = Literal["long", "short", "compact", "day_month", "month_day", "iso"]


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def to_float(raw: Any) -> float:
    """Coerce ``raw`` to a float; anything unparsable becomes ``nan``."""

    if raw is None:
        return math.nan
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            logger.debug("Integer too large for a float; treating as nan")
            return math.nan
    if not isinstance(raw, str):
        return math.nan
    text = raw.strip()
    if text.endswith("%"):
        text = text[:-1].rstrip()
    if not text:
        return math.nan
    try:
        value = float(text)
    except ValueError:
        logger.debug("Unable to coerce %r to a number", raw)
        return math.nan
    if math.isinf(value):
        logger.debug("Number text %r is out of float range; treating as nan", raw)
        return math.nan
    return value


def to_int(raw: Any) -> Union[int, float]:
    """Coerce ``raw`` to an int (truncating), or ``nan`` on failure."""

    value = to_float(raw)
    if math.isnan(value) or math.isinf(value):
        return math.nan
    return int(value)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _parse_datetime_text(text: str) -> datetime | None:
    cleaned = text.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned.replace(" ", "T", 1))
    except ValueError:
        return None


def parse_date(raw: Any) -> Union[date, str]:
    """Return the date portion of ``raw`` or a placeholder token."""

    if _is_blank(raw):
        return UNKNOWN_DATE
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return INVALID_DATE
    parsed = _parse_datetime_text(raw)
    if parsed is None:
        logger.debug("Unable to parse date %r", raw)
        return INVALID_DATE
    return parsed.date()


def parse_datetime(raw: Any) -> Union[datetime, str]:
    """Return an aware UTC datetime; naive inputs are taken to be UTC."""

    if _is_blank(raw):
        return UNKNOWN_DATE
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        parsed = _parse_datetime_text(raw)
        if parsed is None:
            logger.debug("Unable to parse datetime %r", raw)
            return INVALID_DATE
    else:
        return INVALID_DATE
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(raw: Any, style: DateStyle = "long") -> str:
    """Render ``raw`` for display, e.g. ``"July 20, 2022"`` for ``long``."""

    parsed = parse_date(raw)
    if isinstance(parsed, str):
        return parsed
    if style == "long":
        return f"{parsed:%B} {parsed.day}, {parsed.year}"
    if style == "short":
        return parsed.strftime("%d %b %Y")
    if style == "compact":
        return parsed.strftime("%d %b %y")
    if style == "day_month":
        return parsed.strftime("%d/%m")
    if style == "month_day":
        return f"{parsed:%b} {parsed.day}"
    return parsed.isoformat()


def coerce(raw: Any, kind: Kind) -> Union[int, float, date, str]:
    if kind == "int":
        return to_int(raw)
    if kind == "float":
        return to_float(raw)
    if kind == "date":
        return parse_date(raw)
    raise ValueError(f"Unsupported kind {kind!r}")


def to_percent(raw: Any, scale: Literal["percent", "fraction"] = "percent") -> float:
    """Normalize a percentage-like value to the 0-100 convention."""

    value = to_float(raw)
    if scale == "fraction":
        return value * 100.0
    return value
