"""Zero-safe percentage shares and severity bands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from crickstats.ingest.normalize import to_float
from crickstats.models import TossTrendCounts, VenueResultCounts


DEFAULT_THRESHOLDS: Tuple[float, ...] = (33.0, 66.0)
DEFAULT_BANDS: Tuple[str, ...] = ("low", "medium", "high")
POSITIONS: Tuple[str, ...] = ("WK", "BAT", "AR", "BOW")


@dataclass(frozen=True)
class ShareBreakdown:
    """Percentage shares (0-100) with the band of the leading share."""

    shares: Tuple[float, ...]
    band: str


@dataclass(frozen=True)
class PositionBreakdown:
    """Fantasy points per playing position and each position's share."""

    positions: Tuple[str, ...]
    points: Tuple[float, ...]
    breakdown: ShareBreakdown

    @property
    def leader(self) -> str:
        return self.positions[self.breakdown.shares.index(max(self.breakdown.shares))]


@dataclass(frozen=True)
class TossTrendBreakdown:
    counts: TossTrendCounts
    choice: ShareBreakdown
    result: ShareBreakdown
    toss_win_match_win: ShareBreakdown


@dataclass(frozen=True)
class VenueResultBreakdown:
    counts: VenueResultCounts
    overall: ShareBreakdown
    batting_first: ShareBreakdown
    chasing: ShareBreakdown


def _counter(raw: Any) -> float:
    value = to_float(raw)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def percentage_shares(*counters: Any) -> Tuple[float, ...]:
    """Each counter's share of the total; all zeros when the total is zero."""

    values = [_counter(counter) for counter in counters]
    total = sum(values)
    if total <= 0:
        return tuple(0.0 for _ in values)
    shares = [value / total * 100.0 for value in values]
    # The last non-zero share absorbs rounding so the sum never exceeds 100.
    last = max(index for index, value in enumerate(values) if value > 0)
    shares[last] = max(0.0, 100.0 - sum(shares[:last]))
    while sum(shares) > 100.0 and shares[last] > 0.0:
        shares[last] = math.nextafter(shares[last], 0.0)
    return tuple(shares)


def percentage(part: Any, whole: Any) -> float:
    """``part`` as a percentage of ``whole``; zero for an empty whole."""

    denominator = _counter(whole)
    if denominator <= 0:
        return 0.0
    return _counter(part) / denominator * 100.0


def severity_band(
    ratio: Any,
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
    labels: Sequence[str] = DEFAULT_BANDS,
) -> str:
    """Classify a 0-100 ratio against ascending ``thresholds``."""

    if len(labels) != len(thresholds) + 1:
        raise ValueError("labels must have exactly one more entry than thresholds")
    value = to_float(ratio)
    if math.isnan(value):
        return labels[0]
    for threshold, label in zip(thresholds, labels):
        if value < threshold:
            return label
    return labels[-1]


def share_breakdown(
    *counters: Any,
    band_index: int = 0,
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
    labels: Sequence[str] = DEFAULT_BANDS,
) -> ShareBreakdown:
    shares = percentage_shares(*counters)
    ratio = shares[band_index] if shares else 0.0
    return ShareBreakdown(shares=shares, band=severity_band(ratio, thresholds, labels))


def toss_trend_breakdown(counts: Optional[TossTrendCounts]) -> Optional[TossTrendBreakdown]:
    if counts is None:
        return None
    return TossTrendBreakdown(
        counts=counts,
        choice=share_breakdown(counts.choose_bat_first, counts.choose_bowl_first),
        result=share_breakdown(counts.bat_first_win, counts.bat_second_win),
        toss_win_match_win=share_breakdown(
            counts.toss_win_match_win,
            counts.total_matches - counts.toss_win_match_win,
        ),
    )


def venue_result_breakdown(counts: Optional[VenueResultCounts]) -> Optional[VenueResultBreakdown]:
    if counts is None:
        return None
    total = counts.bat_first_total + counts.bowl_first_total
    wins = counts.bat_first_win + counts.bowl_first_win
    return VenueResultBreakdown(
        counts=counts,
        overall=share_breakdown(wins, total - wins),
        batting_first=share_breakdown(counts.bat_first_win, counts.bat_first_total - counts.bat_first_win),
        chasing=share_breakdown(counts.bowl_first_win, counts.bowl_first_total - counts.bowl_first_win),
    )


def strike_rate(runs: Any, balls: Any) -> float:
    """Runs per hundred balls; zero when no balls were faced."""

    faced = to_float(balls)
    if not math.isfinite(faced) or faced <= 0:
        return 0.0
    return to_float(runs) / faced * 100.0


def economy(runs: Any, overs: Any) -> float:
    bowled = to_float(overs)
    if not math.isfinite(bowled) or bowled <= 0:
        return 0.0
    return to_float(runs) / bowled


def position_breakdown(
    raw: Any, positions: Sequence[str] = POSITIONS
) -> Optional[PositionBreakdown]:
    """Split ``{"WK": .., "BAT": .., "AR": .., "BOW": ..}`` points into shares.

    The band follows the leading position's share. ``None`` when no position
    scored.
    """

    if not isinstance(raw, Mapping):
        return None
    points = tuple(_counter(raw.get(position)) for position in positions)
    if sum(points) <= 0:
        return None
    shares = percentage_shares(*points)
    leading = shares.index(max(shares))
    return PositionBreakdown(
        positions=tuple(positions),
        points=points,
        breakdown=share_breakdown(*points, band_index=leading),
    )


def win_probability_split(away_percentage: Any) -> Optional[ShareBreakdown]:
    """Home/away win chances from the away side's published percentage."""

    away = to_float(away_percentage)
    if not math.isfinite(away):
        return None
    away = min(100.0, max(0.0, away))
    return share_breakdown(100.0 - away, away)
