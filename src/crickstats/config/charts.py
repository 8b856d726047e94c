"""Chart definitions for the player graph and power-ranking tabs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple


POWER_RANK_DOMAIN: Tuple[float, float] = (40.0, 0.0)


@dataclass(frozen=True)
class ChartSpec:
    key: str
    group: str
    title: str
    field: str
    y_label: str
    domain: Optional[Tuple[float, float]] = None


_CHARTS: Dict[str, ChartSpec] = {
    spec.key: spec
    for spec in (
        ChartSpec("salary", "graph", "SALARY", "salary", "SALARY"),
        ChartSpec("fantasy_points", "graph", "Fantasy Point", "fantasy_points", "Fantasy Points"),
        ChartSpec("team_rank", "graph", "Team Rank", "team_rank", "Team Rank"),
        ChartSpec("position_rank", "graph", "Position Rank", "position_rank", "Position Rank"),
        ChartSpec("overall_rank", "graph", "Overall Rank", "overall_rank", "Overall Rank"),
        ChartSpec("value", "graph", "Value", "value", "Value"),
        ChartSpec(
            "power_rank",
            "power_ranking",
            "Power Ranking Over Time",
            "power_rank",
            "Power Rank",
            domain=POWER_RANK_DOMAIN,
        ),
        ChartSpec("player_contribution", "overview", "Player Contribution", "player_contribution", "Contribution"),
        ChartSpec("recent_form", "overview", "Recent Form", "recent_form", "Recent Form"),
        ChartSpec("dream_team", "overview", "Dream Team", "dream_team", "Dream Team"),
        ChartSpec("overview_rank", "overview", "Overall Rank", "overall_rank", "Overall Rank"),
        ChartSpec("overview_value", "overview", "Value", "value", "Value"),
    )
}


def iter_charts(group: str | None = None) -> Iterable[ChartSpec]:
    if group is None:
        return _CHARTS.values()
    return [chart for chart in _CHARTS.values() if chart.group == group]


def get_chart(key: str) -> ChartSpec:
    """Fetch a chart definition, raising KeyError if missing."""

    if key not in _CHARTS:
        raise KeyError(f"No chart configured for key={key!r}")
    return _CHARTS[key]
