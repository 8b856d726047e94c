"""Turn raw Statistics Service documents into canonical records."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from crickstats.ingest.normalize import parse_date, to_float, to_int
from crickstats.models import MatchSample, PlayerMetricRecord, TossTrendCounts, VenueResultCounts


logger = logging.getLogger(__name__)

_MISSING = object()

_IDENTITY_KEYS = {
    "uid": ("player_uid", "uid", "player_id", "stats_player_id"),
    "name": ("full_name", "player_name", "name", "display_name"),
    "team": ("team_abbr", "team", "team_name"),
    "team_uid": ("team_uid",),
    "style": ("batting_style", "bowling_style", "style"),
    "position": ("child_position", "position"),
    "category": ("category", "form_category"),
    "x_factor": ("x_factor",),
}
_IDENTITY_FIELDS = {key for keys in _IDENTITY_KEYS.values() for key in keys}

# Containers whose children are flattened into the metric namespace as-is.
_FLATTEN_SECTIONS = ("stats", "graph")

_SAMPLE_FIELDS = (
    ("salary", ("player_salary", "salary")),
    ("fantasy_points", ("fantasy_points",)),
    ("position_rank", ("position_rank",)),
    ("team_rank", ("team_rank",)),
    ("overall_rank", ("overall_rank",)),
    ("value", ("value",)),
    ("power_rank", ("power_rank",)),
    ("player_contribution", ("player_contribution",)),
    ("recent_form", ("normalised_recent_form", "recent_form")),
    ("dream_team", ("dream_team",)),
)


def section(payload: Any, *path: str, default: Any = None) -> Any:
    """Walk ``path`` through nested mappings, returning ``default`` on any gap."""

    current = payload
    for key in path:
        if not isinstance(current, Mapping):
            return default
        current = current.get(key, _MISSING)
        if current is _MISSING or current is None:
            return default
    return current


def rows(payload: Any, *path: str) -> List[Mapping[str, Any]]:
    """Return the list at ``path`` keeping only mapping entries."""

    value = section(payload, *path, default=[])
    if not isinstance(value, (list, tuple)):
        logger.debug("Expected a list at %s, got %s", "/".join(path), type(value).__name__)
        return []
    return [row for row in value if isinstance(row, Mapping)]


def _first_text(row: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _collect_metrics(row: Mapping[str, Any], metrics: dict[str, float]) -> None:
    for key, value in row.items():
        if key in _IDENTITY_FIELDS:
            continue
        if isinstance(value, Mapping):
            if "value" in value:
                number = to_float(value.get("value"))
                if not math.isnan(number):
                    metrics[key] = number
            elif key in _FLATTEN_SECTIONS:
                _collect_metrics(value, metrics)
            continue
        if isinstance(value, bool) or isinstance(value, (list, tuple)):
            continue
        number = to_float(value)
        if not math.isnan(number):
            metrics.setdefault(key, number)


def record_from_row(
    row: Mapping[str, Any],
    *,
    numeric_fields: Iterable[str] = (),
) -> Optional[PlayerMetricRecord]:
    """Build a record from one roster row, or ``None`` when it has no identity."""

    uid = _first_text(row, _IDENTITY_KEYS["uid"])
    name = _first_text(row, _IDENTITY_KEYS["name"])
    if uid is None and name is None:
        logger.debug("Skipping row without player identity: %s", sorted(row))
        return None

    metrics: dict[str, float] = {}
    _collect_metrics(row, metrics)
    for field_name in numeric_fields:
        if field_name not in metrics:
            raw = row.get(field_name)
            if raw is None:
                raw = section(row, "stats", field_name)
            metrics[field_name] = to_float(raw)

    return PlayerMetricRecord(
        uid=uid or name or "",
        name=name or uid or "",
        team=_first_text(row, _IDENTITY_KEYS["team"]) or "",
        team_uid=_first_text(row, _IDENTITY_KEYS["team_uid"]),
        style=_first_text(row, _IDENTITY_KEYS["style"]),
        position=_first_text(row, _IDENTITY_KEYS["position"]),
        category=_first_text(row, _IDENTITY_KEYS["category"]),
        x_factor=row.get("x_factor") if isinstance(row.get("x_factor"), str) else None,
        metrics=metrics,
    )


def records_from_rows(
    raw_rows: Any,
    *,
    numeric_fields: Iterable[str] = (),
) -> List[PlayerMetricRecord]:
    """Normalize a roster list; absent or malformed input yields ``[]``."""

    if not isinstance(raw_rows, (list, tuple)):
        return []
    numeric_fields = tuple(numeric_fields)
    records: List[PlayerMetricRecord] = []
    for row in raw_rows:
        if not isinstance(row, Mapping):
            logger.debug("Skipping non-mapping roster row: %r", row)
            continue
        record = record_from_row(row, numeric_fields=numeric_fields)
        if record is not None:
            records.append(record)
    return records


def sample_from_row(row: Mapping[str, Any]) -> MatchSample:
    raw_scheduled = row.get("season_scheduled_date")
    text = str(raw_scheduled).strip() if raw_scheduled is not None else ""
    # Only the date portion of "YYYY-MM-DD HH:MM:SS" orders the series.
    parsed = parse_date(text.split(" ")[0] if text else None)
    values: dict[str, Any] = {}
    for field_name, keys in _SAMPLE_FIELDS:
        raw: Any = None
        for key in keys:
            if row.get(key) is not None:
                raw = row.get(key)
                break
        values[field_name] = to_float(raw)
    return MatchSample(
        scheduled=parsed if not isinstance(parsed, str) else None,
        scheduled_raw=text,
        home=str(row.get("home") or ""),
        away=str(row.get("away") or ""),
        **values,
    )


def samples_from_rows(raw_rows: Any) -> List[MatchSample]:
    if not isinstance(raw_rows, (list, tuple)):
        return []
    return [sample_from_row(row) for row in raw_rows if isinstance(row, Mapping)]


def _count(raw: Any) -> int:
    value = to_int(raw)
    if isinstance(value, float):
        return 0
    return value


def toss_trend_from_payload(raw: Any) -> Optional[TossTrendCounts]:
    """Parse a ``toss_trend`` section; ``None`` means nothing to show."""

    if not isinstance(raw, Mapping) or not raw:
        return None
    try:
        return TossTrendCounts(
            choose_bat_first=_count(raw.get("choose_bat_first")),
            choose_bowl_first=_count(raw.get("choose_bowl_first")),
            bat_first_win=_count(raw.get("bat_first_win")),
            bat_second_win=_count(raw.get("bat_second_win")),
            toss_win_match_win=_count(raw.get("toss_win_match_win")),
            total_matches=_count(raw.get("total_matches")),
        )
    except ValidationError as exc:
        logger.warning("Discarding inconsistent toss trend counts: %s", exc.errors()[0]["msg"])
        return None


def venue_results_from_payload(raw: Any) -> Optional[VenueResultCounts]:
    if not isinstance(raw, Mapping) or not raw:
        return None
    try:
        return VenueResultCounts(
            bat_first_total=_count(raw.get("bat_first_total")),
            bat_first_win=_count(raw.get("bat_first_win")),
            bowl_first_total=_count(raw.get("bowl_first_total")),
            bowl_first_win=_count(raw.get("bowl_first_win")),
        )
    except ValidationError as exc:
        logger.warning("Discarding inconsistent venue results: %s", exc.errors()[0]["msg"])
        return None
