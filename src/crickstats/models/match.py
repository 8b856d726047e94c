"""Per-match samples, toss counters and chart series."""

from __future__ import annotations

import math
from datetime import date
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class MatchSample(BaseModel):
    """A player's line from one historical match."""

    scheduled: Optional[date] = None
    scheduled_raw: str = ""
    home: str = ""
    away: str = ""
    salary: float = math.nan
    fantasy_points: float = math.nan
    position_rank: float = math.nan
    team_rank: float = math.nan
    overall_rank: float = math.nan
    value: float = math.nan
    power_rank: float = math.nan
    player_contribution: float = math.nan
    recent_form: float = math.nan
    dream_team: float = math.nan

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return f"{self.home} vs {self.away}"


class TossTrendCounts(BaseModel):
    """Toss decisions and outcomes at a venue; percentages are derived."""

    choose_bat_first: int = Field(default=0, ge=0)
    choose_bowl_first: int = Field(default=0, ge=0)
    bat_first_win: int = Field(default=0, ge=0)
    bat_second_win: int = Field(default=0, ge=0)
    toss_win_match_win: int = Field(default=0, ge=0)
    total_matches: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _components_within_total(self) -> "TossTrendCounts":
        for name in (
            "choose_bat_first",
            "choose_bowl_first",
            "bat_first_win",
            "bat_second_win",
            "toss_win_match_win",
        ):
            if getattr(self, name) > self.total_matches:
                raise ValueError(
                    f"{name}={getattr(self, name)} exceeds total_matches={self.total_matches}"
                )
        return self


class VenueResultCounts(BaseModel):
    """Win counts at a venue split by batting first and chasing."""

    bat_first_total: int = Field(default=0, ge=0)
    bat_first_win: int = Field(default=0, ge=0)
    bowl_first_total: int = Field(default=0, ge=0)
    bowl_first_win: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _wins_within_totals(self) -> "VenueResultCounts":
        if self.bat_first_win > self.bat_first_total:
            raise ValueError("bat_first_win exceeds bat_first_total")
        if self.bowl_first_win > self.bowl_first_total:
            raise ValueError("bowl_first_win exceeds bowl_first_total")
        return self


class ChartPoint(BaseModel):
    timestamp: Optional[date] = None
    value: float
    label: str = ""

    model_config = ConfigDict(frozen=True)


class ChartSeries(BaseModel):
    """Chart-ready points plus the y-axis domain the renderer should use."""

    key: str = ""
    points: List[ChartPoint] = Field(default_factory=list)
    domain: Optional[Tuple[float, float]] = None
    reversed: bool = False
    direction: Literal["asc", "desc"] = "asc"
    status: Literal["ok", "no_data"] = "ok"

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.status == "no_data"
