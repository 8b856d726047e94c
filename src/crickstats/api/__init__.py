"""REST API exposing crickstats insights as JSON."""

from __future__ import annotations

import math
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from fastapi import Body, FastAPI, HTTPException, Query

from crickstats.api.schemas import (
    BoardEntryResponse,
    BoardRequest,
    BoardResponse,
    BoardSpecResponse,
    ChartPointResponse,
    ChartSeriesResponse,
    CompetitionRowResponse,
    CountdownResponse,
    FixtureInsightsResponse,
    FormBarResponse,
    NewsItemResponse,
    PlayerCardRequest,
    PlayerInsightsResponse,
    PlayerRecordResponse,
    PositionsResponse,
    RateResponse,
    ShareResponse,
    TossTrendResponse,
    VenueResultsResponse,
)
from crickstats.breakdown import (
    PositionBreakdown,
    ShareBreakdown,
    TossTrendBreakdown,
    VenueResultBreakdown,
    format_width,
)
from crickstats.client import AsyncStatsClient, FetchResult
from crickstats.config import get_board, iter_boards, load_settings
from crickstats.config.settings import Settings
from crickstats.countdown import EVENT_STARTED, countdown
from crickstats.ingest import records_from_rows
from crickstats.insights import (
    BoardResult,
    FixtureInsights,
    PlayerInsights,
    RateSummary,
    board_result,
    build_fixture_insights,
    build_player_insights,
)
from crickstats.models import ChartSeries, PlayerMetricRecord
from crickstats.navigation import SelectionContext


def _finite(value: Any) -> Optional[float]:
    if value is None:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def _unwrap(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    data = payload.get("data")
    return data if isinstance(data, Mapping) else payload


def _record_to_response(record: PlayerMetricRecord) -> PlayerRecordResponse:
    return PlayerRecordResponse(
        uid=record.uid,
        name=record.name,
        team=record.team,
        team_uid=record.team_uid,
        style=record.style,
        position=record.position,
        category=record.category,
        x_factor=record.x_factor,
        metrics={key: _finite(value) for key, value in record.metrics.items()},
    )


def _board_to_response(result: BoardResult) -> BoardResponse:
    return BoardResponse(
        key=result.key,
        title=result.title,
        status="no_data" if result.is_empty else "ok",
        entries=[
            BoardEntryResponse(
                rank=index,
                player=_record_to_response(entry.record),
                value=_finite(entry.value),
                width=entry.width,
                width_label=format_width(entry.width),
                band=entry.band,
            )
            for index, entry in enumerate(result.entries, start=1)
        ],
    )


def _share_to_response(share: ShareBreakdown) -> ShareResponse:
    return ShareResponse(shares=list(share.shares), band=share.band)


def _positions_to_response(breakdown: Optional[PositionBreakdown]) -> Optional[PositionsResponse]:
    if breakdown is None:
        return None
    return PositionsResponse(
        positions=list(breakdown.positions),
        points=list(breakdown.points),
        shares=_share_to_response(breakdown.breakdown),
        leader=breakdown.leader,
    )


def _toss_to_response(breakdown: Optional[TossTrendBreakdown]) -> Optional[TossTrendResponse]:
    if breakdown is None:
        return None
    return TossTrendResponse(
        counts=breakdown.counts.model_dump(),
        choice=_share_to_response(breakdown.choice),
        result=_share_to_response(breakdown.result),
        toss_win_match_win=_share_to_response(breakdown.toss_win_match_win),
    )


def _venue_to_response(breakdown: Optional[VenueResultBreakdown]) -> Optional[VenueResultsResponse]:
    if breakdown is None:
        return None
    return VenueResultsResponse(
        counts=breakdown.counts.model_dump(),
        overall=_share_to_response(breakdown.overall),
        batting_first=_share_to_response(breakdown.batting_first),
        chasing=_share_to_response(breakdown.chasing),
    )


def _series_to_response(series: ChartSeries) -> ChartSeriesResponse:
    domain = None
    if series.domain is not None and all(_finite(bound) is not None for bound in series.domain):
        domain = series.domain
    return ChartSeriesResponse(
        key=series.key,
        status=series.status,
        direction=series.direction,
        domain=domain,
        reversed=series.reversed,
        points=[
            ChartPointResponse(timestamp=point.timestamp, value=_finite(point.value), label=point.label)
            for point in series.points
        ],
    )


def _rate_to_response(rate: Optional[RateSummary]) -> Optional[RateResponse]:
    if rate is None:
        return None
    return RateResponse(
        value=_finite(rate.value),
        total_matches=_finite(rate.total_matches),
        percent=rate.percent,
        band=rate.band,
    )


def player_insights_to_response(insights: PlayerInsights) -> PlayerInsightsResponse:
    has_data = bool(insights.uid or insights.form_bars or insights.news or insights.competition) or any(
        not series.is_empty for series in insights.charts.values()
    )
    return PlayerInsightsResponse(
        status="ok" if has_data else "no_data",
        uid=insights.uid,
        name=insights.name,
        format_label=insights.format_label,
        power_rank=_finite(insights.power_rank),
        power_rate=insights.power_rate,
        form_bars=[
            FormBarResponse(
                label=bar.label,
                date_label=bar.date_label,
                fantasy_points=_finite(bar.fantasy_points),
                width=bar.width,
                band=bar.band,
            )
            for bar in insights.form_bars
        ],
        dream_team=_rate_to_response(insights.dream_team),
        underperformed=_rate_to_response(insights.underperformed),
        charts={key: _series_to_response(series) for key, series in insights.charts.items()},
        power_rank_chart=_series_to_response(insights.power_rank_chart),
        overview_charts={key: _series_to_response(series) for key, series in insights.overview_charts.items()},
        news=[
            NewsItemResponse(
                headline=item.headline,
                team_name=item.team_name,
                date_label=item.date_label,
                notes=item.notes,
                analysis=item.analysis,
            )
            for item in insights.news
        ],
        competition=[
            CompetitionRowResponse(
                league=row.league,
                date_label=row.date_label,
                team_name=row.team_name,
                total_fp=_finite(row.total_fp),
                total_rank=_finite(row.total_rank),
                batting_fp=_finite(row.batting_fp),
                bowling_fp=_finite(row.bowling_fp),
                fielding_fp=_finite(row.fielding_fp),
            )
            for row in insights.competition
        ],
    )


def fixture_insights_to_response(insights: FixtureInsights) -> FixtureInsightsResponse:
    return FixtureInsightsResponse(
        home=insights.home,
        away=insights.away,
        scheduled=insights.scheduled,
        countdown=insights.countdown,
        status_text=insights.status_text,
        boards={key: _board_to_response(result) for key, result in insights.boards.items()},
        toss_trend=_toss_to_response(insights.toss_trend),
        venue_results=_venue_to_response(insights.venue_results),
        win_probability=None if insights.win_probability is None else _share_to_response(insights.win_probability),
        positions=_positions_to_response(insights.positions),
    )


def _fetch_to_response(result: FetchResult, year: Optional[int]) -> PlayerInsightsResponse:
    if result.status == "error":
        return PlayerInsightsResponse(status="error", error=result.error)
    if result.status == "empty":
        return PlayerInsightsResponse(status="no_data")
    return player_insights_to_response(build_player_insights(result.payload, year=year))


def create_app(settings: Settings | None = None, client: AsyncStatsClient | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        # Only a client the app created itself is closed here.
        if app.state.client is not None and client is None:
            await app.state.client.aclose()

    app = FastAPI(title="crickstats insights", lifespan=lifespan)
    app.state.settings = settings or load_settings()
    app.state.client = client

    def stats_client() -> AsyncStatsClient:
        if app.state.client is None:
            app.state.client = AsyncStatsClient(app.state.settings)
        return app.state.client

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/insights/player", response_model=PlayerInsightsResponse)
    async def player_insights(
        payload: Dict[str, Any] = Body(...),
        year: Optional[int] = Query(default=None),
    ) -> PlayerInsightsResponse:
        insights = build_player_insights(_unwrap(payload), year=year)
        return player_insights_to_response(insights)

    @app.post("/insights/fixture", response_model=FixtureInsightsResponse)
    async def fixture_insights(
        payload: Dict[str, Any] = Body(...),
        team: Optional[str] = Query(default=None),
        show_lineup: bool = Query(default=True),
    ) -> FixtureInsightsResponse:
        insights = build_fixture_insights(
            _unwrap(payload),
            team=team,
            show_lineup=show_lineup,
            offset=app.state.settings.timezone_offset,
        )
        return fixture_insights_to_response(insights)

    @app.get("/boards", response_model=list[BoardSpecResponse])
    async def list_boards(group: Optional[str] = Query(default=None)) -> list[BoardSpecResponse]:
        return [
            BoardSpecResponse(key=board.key, group=board.group, title=board.title, k=board.k, ranked=board.ranked)
            for board in iter_boards(group)
        ]

    @app.post("/boards/{board_key}", response_model=BoardResponse)
    async def run_board(board_key: str, request: BoardRequest) -> BoardResponse:
        try:
            board = get_board(board_key)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown board {board_key!r}") from exc
        records = records_from_rows(request.records)
        result = board_result(board, records, team=request.team, position=request.position, k=request.k)
        return _board_to_response(result)

    @app.get("/countdown", response_model=CountdownResponse)
    async def countdown_text(scheduled: str = Query(...)) -> CountdownResponse:
        text = countdown(scheduled, offset=app.state.settings.timezone_offset)
        return CountdownResponse(scheduled=scheduled, text=text, started=text == EVENT_STARTED)

    @app.post("/players/card", response_model=PlayerInsightsResponse)
    async def player_card(request: PlayerCardRequest) -> PlayerInsightsResponse:
        try:
            selection = SelectionContext(**request.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        result = await stats_client().fetch_player_card(selection)
        return _fetch_to_response(result, request.year)

    return app


__all__ = [
    "create_app",
    "fixture_insights_to_response",
    "player_insights_to_response",
]
