"""Top-N selection and filtering over player metric records."""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Sequence, Union

from crickstats.config.boards import BoardSpec, get_board
from crickstats.ingest.normalize import to_float
from crickstats.models import PlayerMetricRecord, RankedList


MetricAccessor = Callable[[PlayerMetricRecord], float]
Metric = Union[str, MetricAccessor]
Predicate = Callable[[PlayerMetricRecord], bool]

OVERALL_TAB = "overall"


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().casefold()


def resolve_metric(metric: Metric) -> MetricAccessor:
    if callable(metric):
        return metric
    if isinstance(metric, str):
        return lambda record: record.metric(metric)
    raise TypeError("metric must be a metric name or a callable")


def per_match(
    total_key: str, matches_key: str, fallback: Optional[float] = None
) -> MetricAccessor:
    """Accessor for ``total / matches``.

    Without matches the value is zero, or ``total / fallback`` when a
    fallback match count is given.
    """

    def accessor(record: PlayerMetricRecord) -> float:
        matches = record.metric(matches_key)
        if not math.isfinite(matches) or matches <= 0:
            if fallback is None:
                return 0.0
            matches = fallback
        return record.metric(total_key) / matches

    return accessor


def _sort_value(
    accessor: MetricAccessor, record: PlayerMetricRecord, ascending: bool = False
) -> float:
    value = to_float(accessor(record))
    if math.isnan(value):
        return math.inf if ascending else -math.inf
    return value


def top_n(
    records: Optional[Iterable[PlayerMetricRecord]],
    metric: Metric,
    k: int = 5,
    *,
    where: Optional[Predicate] = None,
    ascending: bool = False,
) -> RankedList:
    """Return the ``k`` highest records by ``metric``, stable on ties.

    ``ascending`` returns the lowest instead, e.g. for batting order. The
    input is copied before sorting. Records whose metric is missing or
    malformed rank after every valid value in either direction.
    """

    if k < 0:
        raise ValueError("k must be non-negative")
    if records is None:
        return ()
    accessor = resolve_metric(metric)
    candidates = [record for record in records if where is None or where(record)]
    candidates.sort(key=lambda record: _sort_value(accessor, record, ascending), reverse=not ascending)
    return tuple(candidates[:k])


def filter_by_category(
    records: Optional[Iterable[PlayerMetricRecord]], target: str
) -> List[PlayerMetricRecord]:
    wanted = _normalize(target)
    return [record for record in records or () if _normalize(record.category) == wanted]


def filter_with_text(
    records: Optional[Iterable[PlayerMetricRecord]], attribute: str = "x_factor"
) -> List[PlayerMetricRecord]:
    """Keep records whose text ``attribute`` is non-empty after trimming."""

    kept: List[PlayerMetricRecord] = []
    for record in records or ():
        value = getattr(record, attribute, None)
        if isinstance(value, str) and value.strip():
            kept.append(record)
    return kept


def filter_by_team(
    records: Optional[Iterable[PlayerMetricRecord]],
    team: Union[None, str, Sequence[Optional[str]]],
) -> List[PlayerMetricRecord]:
    """Apply an Overall/home/away tab; ``None`` or "Overall" keeps everyone.

    ``team`` may also be several aliases for one side (abbreviation and uid).
    """

    aliases = [team] if team is None or isinstance(team, str) else list(team)
    wanted = {_normalize(alias) for alias in aliases} - {""}
    if not wanted or OVERALL_TAB in wanted:
        return list(records or ())
    return [
        record
        for record in records or ()
        if _normalize(record.team) in wanted or _normalize(record.team_uid) in wanted
    ]


def filter_by_position(
    records: Optional[Iterable[PlayerMetricRecord]], position: Optional[str]
) -> List[PlayerMetricRecord]:
    wanted = _normalize(position)
    if not wanted or wanted == OVERALL_TAB:
        return list(records or ())
    return [record for record in records or () if _normalize(record.position) == wanted]


def bottom_fraction(
    records: Optional[Iterable[PlayerMetricRecord]],
    metric: Metric,
    fraction: float = 0.2,
) -> List[PlayerMetricRecord]:
    """Keep records at or below the value marking the lowest ``fraction``."""

    accessor = resolve_metric(metric)
    candidates = list(records or ())
    values = sorted(
        value for value in (to_float(accessor(record)) for record in candidates) if math.isfinite(value)
    )
    if not values:
        return []
    index = max(math.ceil(len(candidates) * fraction) - 1, 0)
    threshold = values[min(index, len(values) - 1)]
    return [
        record
        for record in candidates
        if math.isfinite(to_float(accessor(record))) and to_float(accessor(record)) <= threshold
    ]


def board_metric(board: BoardSpec) -> Optional[MetricAccessor]:
    if board.per_match is not None:
        return per_match(*board.per_match, fallback=board.matches_fallback)
    if board.metric is not None:
        return resolve_metric(board.metric)
    return None


def rank_board(
    board: Union[str, BoardSpec],
    records: Optional[Sequence[PlayerMetricRecord]],
    *,
    team: Union[None, str, Sequence[Optional[str]]] = None,
    position: Optional[str] = None,
    k: Optional[int] = None,
) -> RankedList:
    """Run a configured leaderboard over ``records``.

    Board filters (category, text tag, bottom fraction) see the whole input;
    the team and position tabs narrow the result afterwards.
    """

    spec = get_board(board) if isinstance(board, str) else board
    candidates = list(records or ())

    if spec.category is not None:
        candidates = filter_by_category(candidates, spec.category)
    if spec.text_attribute is not None:
        candidates = filter_with_text(candidates, spec.text_attribute)
    if spec.bottom_fraction is not None and spec.metric is not None:
        candidates = bottom_fraction(candidates, spec.metric, spec.bottom_fraction)
    candidates = filter_by_position(filter_by_team(candidates, team), position)

    if spec.per_match is not None and spec.matches_fallback is None:
        matches_key = spec.per_match[1]
        candidates = [record for record in candidates if record.metric(matches_key) > 0]

    accessor = board_metric(spec)
    if accessor is None:
        return tuple(candidates)
    if spec.positive_only:
        candidates = [record for record in candidates if to_float(accessor(record)) > 0]

    limit = k if k is not None else spec.k
    if limit is None:
        limit = len(candidates)
    return top_n(candidates, accessor, limit, ascending=spec.ascending)


def board_values(board: Union[str, BoardSpec], ranked: Sequence[PlayerMetricRecord]) -> List[float]:
    """Metric values of ``ranked`` in board order, for bar widths and labels."""

    spec = get_board(board) if isinstance(board, str) else board
    accessor = board_metric(spec)
    if accessor is None:
        return [math.nan for _ in ranked]
    return [to_float(accessor(record)) for record in ranked]
