"""Leaderboard utilities (top-N selection, filters, configured boards)."""

from .selection import (
    board_values,
    bottom_fraction,
    filter_by_category,
    filter_by_position,
    filter_by_team,
    filter_with_text,
    per_match,
    rank_board,
    resolve_metric,
    top_n,
)

__all__ = [
    "board_values",
    "bottom_fraction",
    "filter_by_category",
    "filter_by_position",
    "filter_by_team",
    "filter_with_text",
    "per_match",
    "rank_board",
    "resolve_metric",
    "top_n",
]
