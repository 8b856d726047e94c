"""Compose player-card and fixture payloads into view-ready insights."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from crickstats.breakdown import (
    PositionBreakdown,
    ShareBreakdown,
    TossTrendBreakdown,
    VenueResultBreakdown,
    bar_width_percent,
    percentage,
    position_breakdown,
    severity_band,
    toss_trend_breakdown,
    venue_result_breakdown,
    win_probability_split,
)
from crickstats.config.boards import BoardSpec, iter_boards
from crickstats.countdown import TIMEZONE_OFFSET, countdown, fixture_status_text
from crickstats.ingest import (
    format_date,
    parse_date,
    records_from_rows,
    rows,
    samples_from_rows,
    section,
    to_float,
    toss_trend_from_payload,
    venue_results_from_payload,
)
from crickstats.models import ChartSeries, MatchSample, PlayerMetricRecord
from crickstats.navigation import format_label
from crickstats.rank import board_values, rank_board
from crickstats.series import build_chart, build_charts


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_KEY = "player_list"


@dataclass(frozen=True)
class FormBar:
    label: str
    date_label: str
    fantasy_points: float
    width: float
    band: str


@dataclass(frozen=True)
class RateSummary:
    """``value`` occurrences out of ``total_matches`` as a banded percentage."""

    value: float
    total_matches: float
    percent: float
    band: str


@dataclass(frozen=True)
class NewsItem:
    headline: str
    team_name: str
    date_label: str
    published: Optional[date] = None
    notes: Optional[str] = None
    analysis: Optional[str] = None


@dataclass(frozen=True)
class CompetitionRow:
    league: str
    date_label: str
    team_name: str
    total_fp: float
    total_rank: float
    batting_fp: float
    bowling_fp: float
    fielding_fp: float


@dataclass(frozen=True)
class BoardEntry:
    record: PlayerMetricRecord
    value: float
    width: float
    band: str


@dataclass(frozen=True)
class BoardResult:
    key: str
    title: str
    entries: List[BoardEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class PlayerInsights:
    uid: Optional[str]
    name: Optional[str]
    format_label: str
    power_rank: float
    power_rate: Optional[str]
    form_bars: List[FormBar]
    dream_team: Optional[RateSummary]
    underperformed: Optional[RateSummary]
    charts: Dict[str, ChartSeries]
    recent_matches: List[MatchSample]
    power_rank_chart: ChartSeries
    overview_charts: Dict[str, ChartSeries]
    news: List[NewsItem]
    competition: List[CompetitionRow]


@dataclass(frozen=True)
class FixtureInsights:
    home: str
    away: str
    scheduled: str
    countdown: str
    status_text: str
    boards: Dict[str, BoardResult]
    toss_trend: Optional[TossTrendBreakdown]
    venue_results: Optional[VenueResultBreakdown]
    win_probability: Optional[ShareBreakdown] = None
    positions: Optional[PositionBreakdown] = None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _date_or_none(raw: Any) -> Optional[date]:
    parsed = parse_date(raw)
    return parsed if isinstance(parsed, date) else None


def _form_bars(format_stats: Sequence[Mapping[str, Any]]) -> List[FormBar]:
    points = [to_float(item.get("fantasy_points")) for item in format_stats]
    bars: List[FormBar] = []
    for item, value in zip(format_stats, points):
        width = bar_width_percent(value, points)
        bars.append(
            FormBar(
                label=f"{item.get('home') or ''} vs {item.get('away') or ''}",
                date_label=format_date(item.get("season_scheduled_date"), "month_day"),
                fantasy_points=value,
                width=width,
                band=severity_band(width),
            )
        )
    return bars


def _rate(raw: Any) -> Optional[RateSummary]:
    if not isinstance(raw, Mapping):
        return None
    value = to_float(raw.get("value"))
    total = to_float(raw.get("total_matches"))
    percent = percentage(value, total)
    return RateSummary(value=value, total_matches=total, percent=percent, band=severity_band(percent))


def _news(items: Sequence[Mapping[str, Any]]) -> List[NewsItem]:
    news = [
        NewsItem(
            headline=_text(item.get("headline")) or "No headline available",
            team_name=_text(item.get("team_name")) or "Unknown Team",
            date_label=format_date(item.get("news_date_time"), "long"),
            published=_date_or_none(item.get("news_date_time")),
            notes=_text(item.get("notes")),
            analysis=_text(item.get("analysis")),
        )
        for item in items
    ]
    dated = [item for item in news if item.published is not None]
    undated = [item for item in news if item.published is None]
    dated.sort(key=lambda item: item.published, reverse=True)
    return dated + undated


def _competition(stats: Sequence[Mapping[str, Any]], year: Optional[int]) -> List[CompetitionRow]:
    result: List[CompetitionRow] = []
    for league in stats:
        scheduled = parse_date(league.get("league_schedule_date"))
        if year is not None and (not isinstance(scheduled, date) or scheduled.year != year):
            continue
        result.append(
            CompetitionRow(
                league=_text(league.get("league_display_name")) or "N/A",
                date_label=format_date(league.get("league_schedule_date"), "month_day"),
                team_name=_text(league.get("team_name")) or "",
                total_fp=to_float(league.get("total_fp")),
                total_rank=to_float(league.get("total_rank")),
                batting_fp=to_float(league.get("batting_fp")),
                bowling_fp=to_float(league.get("bowling_fp")),
                fielding_fp=to_float(league.get("fielding_fp")),
            )
        )
    return result


def build_player_insights(payload: Any, *, year: Optional[int] = None) -> PlayerInsights:
    """Derive every player-card view from one Statistics Service document.

    Missing sections degrade to empty lists, ``None`` summaries and
    ``no_data`` charts.
    """

    if not isinstance(payload, Mapping):
        logger.debug("Player payload missing; building empty insights")
        payload = {}

    detail = section(payload, "player_detail", default={})
    power = section(payload, "player_power_rank", default={})
    samples = samples_from_rows(section(payload, "stats_data", "stats", default=[]))
    charts = build_charts(samples, "graph")
    recent_matches = sorted(
        (sample for sample in samples if sample.scheduled is not None),
        key=lambda sample: sample.scheduled,
        reverse=True,
    ) + [sample for sample in samples if sample.scheduled is None]

    return PlayerInsights(
        uid=_text(section(detail, "player_uid")),
        name=_text(section(detail, "full_name")) or _text(section(detail, "player_name")),
        format_label=format_label(section(detail, "format")),
        power_rank=to_float(section(power, "power_rank")),
        power_rate=_text(section(power, "power_rate")),
        form_bars=_form_bars(rows(payload, "stats_data", "form", "format_stats")),
        dream_team=_rate(section(payload, "stats_data", "graph", "format_stats", "dream_team")),
        underperformed=_rate(section(payload, "stats_data", "graph", "format_stats", "underperformed")),
        charts=charts,
        recent_matches=recent_matches,
        power_rank_chart=build_chart(
            "power_rank",
            samples_from_rows(section(payload, "stats_data", "power_rank_over_time", default=[])),
        ),
        overview_charts=build_charts(
            samples_from_rows(section(payload, "stats_data", "recent_match_overview", default=[])),
            "overview",
        ),
        news=_news(rows(payload, "stats_data", "news")),
        competition=_competition(rows(payload, "stats_data", "competition", "stats"), year),
    )


def board_result(
    board: BoardSpec,
    records: Sequence[PlayerMetricRecord],
    *,
    team: Union[None, str, Sequence[Optional[str]]] = None,
    position: Optional[str] = None,
    k: Optional[int] = None,
) -> BoardResult:
    ranked = rank_board(board, records, team=team, position=position, k=k)
    values = board_values(board, ranked)
    entries = []
    for record, value in zip(ranked, values):
        width = bar_width_percent(value, values) if board.ranked else 0.0
        entries.append(BoardEntry(record=record, value=value, width=width, band=severity_band(width)))
    return BoardResult(key=board.key, title=board.title, entries=entries)


def _board_records(
    payload: Mapping[str, Any],
    board: BoardSpec,
    cache: Dict[Tuple[str, ...], List[PlayerMetricRecord]],
) -> List[PlayerMetricRecord]:
    source: Tuple[str, ...] = (DEFAULT_ROSTER_KEY,)
    for candidate in ((board.key,), board.source):
        if candidate and isinstance(section(payload, *candidate), list):
            source = candidate
            break
    if source not in cache:
        cache[source] = records_from_rows(section(payload, *source, default=[]))
    return cache[source]


def _side_aliases(fixture: Any, side: str) -> Tuple[str, ...]:
    """Team uid and abbreviation naming one side of the fixture."""

    aliases = (_text(section(fixture, f"{side}_uid")), _text(section(fixture, side)))
    return tuple(alias for alias in aliases if alias)


def _fixture_board(
    payload: Mapping[str, Any],
    fixture: Any,
    board: BoardSpec,
    cache: Dict[Tuple[str, ...], List[PlayerMetricRecord]],
    team: Optional[str],
) -> BoardResult:
    records = _board_records(payload, board, cache)
    if board.side is None:
        return board_result(board, records, team=team)
    # Side boards ignore the team tab and stay empty without a known side.
    aliases = _side_aliases(fixture, board.side)
    if not aliases:
        return BoardResult(key=board.key, title=board.title)
    return board_result(board, records, team=aliases)


def build_fixture_insights(
    payload: Any,
    *,
    team: Optional[str] = None,
    now: Optional[datetime] = None,
    show_lineup: bool = True,
    offset: timedelta = TIMEZONE_OFFSET,
) -> FixtureInsights:
    """Derive leaderboards, toss/venue breakdowns and header text for a fixture.

    Boards read a list stored under their own key when the payload has one
    (for example ``powerplay_bat``), then their configured source (the venue
    leaderboard's ``player_list``) and the shared ``player_list`` otherwise.
    Home and away boards follow ``fixture_info`` rather than the ``team`` tab.
    """

    if not isinstance(payload, Mapping):
        logger.debug("Fixture payload missing; building empty insights")
        payload = {}

    fixture = section(payload, "fixture_info", default={})
    scheduled = _text(section(fixture, "season_scheduled_date")) or ""
    cache: Dict[Tuple[str, ...], List[PlayerMetricRecord]] = {}
    boards = {board.key: _fixture_board(payload, fixture, board, cache, team) for board in iter_boards()}
    position_points = section(payload, "venue_leaderboard", "position_wise_fpts")
    if position_points is None:
        position_points = section(payload, "position_wise_fpts")

    return FixtureInsights(
        home=_text(section(fixture, "home")) or "HOME",
        away=_text(section(fixture, "away")) or "AWAY",
        scheduled=scheduled,
        countdown=countdown(scheduled or None, now=now, offset=offset),
        status_text=fixture_status_text(
            section(payload, "toss_data"),
            section(payload, "playing_announce"),
            show_lineup=show_lineup,
        ),
        boards=boards,
        toss_trend=toss_trend_breakdown(toss_trend_from_payload(section(payload, "toss_trend"))),
        venue_results=venue_result_breakdown(venue_results_from_payload(section(payload, "win_stats"))),
        win_probability=win_probability_split(section(fixture, "win_probability", "winning_percentage")),
        positions=position_breakdown(position_points),
    )

