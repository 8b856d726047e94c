"""Chronologically ordered chart series built from match samples."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from crickstats.config.charts import get_chart, iter_charts
from crickstats.models import ChartPoint, ChartSeries, MatchSample


Direction = Literal["asc", "desc"]

DOMAIN_PADDING = 1.0


def _check_direction(direction: str) -> None:
    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")


def _ordered(points: Iterable[ChartPoint], direction: str) -> List[ChartPoint]:
    points = list(points)
    # Undated points trail the series in their original order either way.
    dated = [point for point in points if point.timestamp is not None]
    undated = [point for point in points if point.timestamp is None]
    dated.sort(key=lambda point: point.timestamp, reverse=direction == "desc")
    return dated + undated


def padded_domain(values: Iterable[float], padding: float = DOMAIN_PADDING) -> Optional[Tuple[float, float]]:
    """``(min - padding, max + padding)`` over finite values, else ``None``."""

    finite = [value for value in values if math.isfinite(value)]
    if not finite:
        return None
    return (min(finite) - padding, max(finite) + padding)


def build_series(
    samples: Optional[Sequence[MatchSample]],
    field: str,
    *,
    direction: Direction = "asc",
    domain: Optional[Tuple[float, float]] = None,
    key: Optional[str] = None,
) -> ChartSeries:
    """Build a chart series for ``field`` ordered by match date.

    An empty input produces ``status="no_data"`` so callers can show an
    empty state instead of a degenerate chart.
    """

    _check_direction(direction)
    if field not in MatchSample.model_fields or field in ("scheduled", "scheduled_raw", "home", "away"):
        raise ValueError(f"{field!r} is not a numeric MatchSample field")
    series_key = key or field
    if not samples:
        return ChartSeries(key=series_key, direction=direction, status="no_data")

    points = _ordered(
        (
            ChartPoint(timestamp=sample.scheduled, value=getattr(sample, field), label=sample.label)
            for sample in samples
        ),
        direction,
    )
    if domain is not None:
        low, high = float(domain[0]), float(domain[1])
        resolved: Optional[Tuple[float, float]] = (low, high)
        is_reversed = low > high
    else:
        resolved = padded_domain(point.value for point in points)
        is_reversed = False
    return ChartSeries(
        key=series_key,
        points=points,
        domain=resolved,
        reversed=is_reversed,
        direction=direction,
    )


def resort(series: ChartSeries, direction: Direction) -> ChartSeries:
    """Return ``series`` re-ordered in ``direction``; inputs are untouched."""

    _check_direction(direction)
    return series.model_copy(update={"points": _ordered(series.points, direction), "direction": direction})


def build_chart(chart_key: str, samples: Optional[Sequence[MatchSample]], *, direction: Direction = "asc") -> ChartSeries:
    chart = get_chart(chart_key)
    return build_series(samples, chart.field, direction=direction, domain=chart.domain, key=chart.key)


def build_charts(
    samples: Optional[Sequence[MatchSample]],
    group: str,
    *,
    direction: Direction = "asc",
) -> Dict[str, ChartSeries]:
    return {
        chart.key: build_series(samples, chart.field, direction=direction, domain=chart.domain, key=chart.key)
        for chart in iter_charts(group)
    }
