from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, Field

from .boards import BoardResponse


class ShareResponse(BaseModel):
    shares: List[float]
    band: str


class TossTrendResponse(BaseModel):
    counts: Dict[str, int]
    choice: ShareResponse
    result: ShareResponse
    toss_win_match_win: ShareResponse


class VenueResultsResponse(BaseModel):
    counts: Dict[str, int]
    overall: ShareResponse
    batting_first: ShareResponse
    chasing: ShareResponse


class PositionsResponse(BaseModel):
    positions: List[str]
    points: List[float]
    shares: ShareResponse
    leader: str


class ChartPointResponse(BaseModel):
    timestamp: date | None
    value: float | None
    label: str


class ChartSeriesResponse(BaseModel):
    key: str
    status: Literal["ok", "no_data"]
    direction: Literal["asc", "desc"]
    domain: Tuple[float, float] | None
    reversed: bool
    points: List[ChartPointResponse]


class FormBarResponse(BaseModel):
    label: str
    date_label: str
    fantasy_points: float | None
    width: float
    band: str


class RateResponse(BaseModel):
    value: float | None
    total_matches: float | None
    percent: float
    band: str


class NewsItemResponse(BaseModel):
    headline: str
    team_name: str
    date_label: str
    notes: str | None = None
    analysis: str | None = None


class CompetitionRowResponse(BaseModel):
    league: str
    date_label: str
    team_name: str
    total_fp: float | None
    total_rank: float | None
    batting_fp: float | None
    bowling_fp: float | None
    fielding_fp: float | None


class PlayerInsightsResponse(BaseModel):
    status: Literal["ok", "no_data", "error"] = "ok"
    error: str | None = None
    uid: str | None = None
    name: str | None = None
    format_label: str = "N/A"
    power_rank: float | None = None
    power_rate: str | None = None
    form_bars: List[FormBarResponse] = Field(default_factory=list)
    dream_team: RateResponse | None = None
    underperformed: RateResponse | None = None
    charts: Dict[str, ChartSeriesResponse] = Field(default_factory=dict)
    power_rank_chart: ChartSeriesResponse | None = None
    overview_charts: Dict[str, ChartSeriesResponse] = Field(default_factory=dict)
    news: List[NewsItemResponse] = Field(default_factory=list)
    competition: List[CompetitionRowResponse] = Field(default_factory=list)


class FixtureInsightsResponse(BaseModel):
    home: str
    away: str
    scheduled: str
    countdown: str
    status_text: str
    boards: Dict[str, BoardResponse]
    toss_trend: TossTrendResponse | None = None
    venue_results: VenueResultsResponse | None = None
    win_probability: ShareResponse | None = None
    positions: PositionsResponse | None = None


class CountdownResponse(BaseModel):
    scheduled: str
    text: str
    started: bool


class PlayerCardRequest(BaseModel):
    player_uid: str
    match_uid: str
    year: int | None = None
    tab: str = "form"
