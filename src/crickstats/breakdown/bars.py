"""Proportional leaderboard bar widths."""

from __future__ import annotations

import math
from typing import Any, Iterable, List

from crickstats.ingest.normalize import to_float


MIN_VISIBLE_WIDTH = 5.0
FULL_WIDTH = 100.0


def _maximum(comparison: Iterable[Any]) -> float:
    finite = [value for value in (to_float(raw) for raw in comparison) if math.isfinite(value)]
    return max(finite, default=math.nan)


def bar_width_percent(value: Any, comparison: Iterable[Any]) -> float:
    """Width of ``value``'s bar relative to the largest value in ``comparison``.

    Non-positive values get no bar; positive values never drop below
    ``MIN_VISIBLE_WIDTH`` and never exceed ``FULL_WIDTH``.
    """

    number = to_float(value)
    if math.isnan(number) or number <= 0:
        return 0.0
    maximum = _maximum(comparison)
    if not math.isfinite(maximum) or maximum <= 0:
        return FULL_WIDTH
    return min(FULL_WIDTH, max(MIN_VISIBLE_WIDTH, number / maximum * 100.0))


def format_width(percent: float) -> str:
    return f"{round(percent, 2):g}%"


def bar_width(value: Any, comparison: Iterable[Any]) -> str:
    return format_width(bar_width_percent(value, comparison))


def scaled_widths(values: Iterable[Any]) -> List[float]:
    values = list(values)
    return [bar_width_percent(value, values) for value in values]
