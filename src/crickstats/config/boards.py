"""Leaderboard definitions for the fixture and venue insight tabs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union


VENUE_LEADER_SOURCE: Tuple[str, ...] = ("venue_leaderboard", "player_list")


@dataclass(frozen=True)
class BoardSpec:
    key: str
    group: str
    title: str
    metric: Optional[str] = None
    per_match: Optional[Tuple[str, str]] = None
    k: Optional[int] = 5
    category: Optional[str] = None
    text_attribute: Optional[str] = None
    bottom_fraction: Optional[float] = None
    # Used as the match count when a per-match denominator is zero or missing.
    matches_fallback: Optional[float] = None
    positive_only: bool = False
    ascending: bool = False
    # "home" or "away": restrict to that side of the fixture.
    side: Optional[str] = None
    # Payload path of the player list; the shared roster when absent.
    source: Optional[Tuple[str, ...]] = None

    @property
    def ranked(self) -> bool:
        return self.metric is not None or self.per_match is not None


def _boards(*specs: BoardSpec) -> Dict[str, BoardSpec]:
    return {spec.key: spec for spec in specs}


_BOARDS: Dict[str, BoardSpec] = _boards(
    BoardSpec(
        key="top_players",
        group="venue",
        title="Top Players",
        per_match=("total_fantasy_points", "total_matches"),
    ),
    BoardSpec(
        key="batting_first",
        group="venue",
        title="Batting First",
        per_match=("batting_first_fpts", "batting_first_matches"),
    ),
    BoardSpec(
        key="chasing",
        group="venue",
        title="Chasing",
        per_match=("chasing_fpts", "chasing_matches"),
    ),
    BoardSpec(
        key="venue_bat",
        group="venue",
        title="Venue Leaders: BAT",
        per_match=("bat_pt", "total_match_count"),
        matches_fallback=1,
        k=7,
        source=VENUE_LEADER_SOURCE,
    ),
    BoardSpec(
        key="venue_bowl",
        group="venue",
        title="Venue Leaders: BOW",
        per_match=("bowl_pt", "total_match_count"),
        matches_fallback=1,
        k=7,
        source=VENUE_LEADER_SOURCE,
    ),
    BoardSpec(
        key="venue_total",
        group="venue",
        title="Venue Leaders: TOTAL",
        metric="fantasy_points",
        k=7,
        source=VENUE_LEADER_SOURCE,
    ),
    BoardSpec(
        key="captain_count",
        group="venue",
        title="Most Picked Captains",
        metric="captain_count",
        positive_only=True,
        source=VENUE_LEADER_SOURCE,
    ),
    BoardSpec(key="head_to_head", group="insights", title="Vs Opposition", metric="avg_opp_fpts"),
    BoardSpec(key="venue", group="insights", title="At This Venue", metric="avg_venue_fpts"),
    BoardSpec(key="powerplay_bat", group="insights", title="Powerplay Batting", metric="avg_fantasy_points"),
    BoardSpec(key="powerplay_bowl", group="insights", title="Powerplay Bowling", metric="p_wickets"),
    BoardSpec(key="death_overs_bowl", group="insights", title="Death Overs Bowling", metric="d_wickets"),
    BoardSpec(
        key="recent_form",
        group="insights",
        title="Recent Form",
        metric="avg_fantasy_points",
        category="top form",
    ),
    BoardSpec(key="top_form", group="insights", title="Top Form", category="top form", k=None),
    BoardSpec(
        key="x_factor_tagged",
        group="insights",
        title="X-Factor Players",
        text_attribute="x_factor",
        k=None,
    ),
    BoardSpec(
        key="batting_order_home",
        group="insights",
        title="Batting Order (home)",
        metric="player_order",
        ascending=True,
        side="home",
    ),
    BoardSpec(
        key="batting_order_away",
        group="insights",
        title="Batting Order (away)",
        metric="player_order",
        ascending=True,
        side="away",
    ),
    BoardSpec(key="total_points", group="cheat_sheet", title="Total Fantasy Points", metric="fantasy_pts", k=8),
    BoardSpec(key="avg_points", group="cheat_sheet", title="Avg Fantasy Points", metric="avg_fantasy_pts", k=8),
    BoardSpec(key="perfect_lineup", group="cheat_sheet", title="Part of Perfectlineup", metric="in_perfect_lineup", k=8),
    BoardSpec(key="most_valuable", group="cheat_sheet", title="Most Valuable Player", metric="value", k=8),
    BoardSpec(
        key="team_rank_home",
        group="cheat_sheet",
        title="Team Rank (home)",
        metric="avg_team_rank",
        k=8,
        side="home",
    ),
    BoardSpec(
        key="team_rank_away",
        group="cheat_sheet",
        title="Team Rank (away)",
        metric="avg_team_rank",
        k=8,
        side="away",
    ),
    BoardSpec(key="position_rank", group="cheat_sheet", title="Position Rank", metric="avg_overall_rank", k=8),
    BoardSpec(
        key="bottom_20",
        group="cheat_sheet",
        title="Bottom 20%",
        metric="fantasy_pts",
        k=8,
        bottom_fraction=0.2,
    ),
    BoardSpec(
        key="x_factor",
        group="cheat_sheet",
        title="Players with X Factor",
        metric="value",
        k=8,
        text_attribute="x_factor",
    ),
)


def iter_boards(group: str | None = None) -> Iterable[BoardSpec]:
    """Return configured boards, optionally limited to one group."""

    if group is None:
        return _BOARDS.values()
    return [board for board in _BOARDS.values() if board.group == group]


def get_board(key: str) -> BoardSpec:
    """Fetch a board by key, raising KeyError if missing."""

    normalized = key.strip().lower()
    if normalized not in _BOARDS:
        raise KeyError(f"No leaderboard configured for key={key!r}")
    return _BOARDS[normalized]


def get_board_by_key(board_key: Union[str, Tuple[str, str]]) -> BoardSpec:
    """Resolve a board using either "group:key" or (group, key)."""

    if isinstance(board_key, tuple):
        group, key = board_key
    elif isinstance(board_key, str):
        if ":" not in board_key:
            return get_board(board_key)
        group, key = board_key.split(":", 1)
    else:
        raise TypeError("board_key must be a str or (group, key) tuple")

    board = get_board(key)
    if board.group != group.strip().lower():
        raise KeyError(f"Board {key!r} does not belong to group {group!r}")
    return board


BOARD_GROUPS: Mapping[str, Tuple[str, ...]] = {
    group: tuple(board.key for board in _BOARDS.values() if board.group == group)
    for group in ("venue", "insights", "cheat_sheet")
}
