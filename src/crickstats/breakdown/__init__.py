"""Percentage breakdowns and bar scaling for leaderboard views."""

from .bars import bar_width, bar_width_percent, format_width, scaled_widths
from .shares import (
    POSITIONS,
    PositionBreakdown,
    ShareBreakdown,
    TossTrendBreakdown,
    VenueResultBreakdown,
    economy,
    percentage,
    percentage_shares,
    position_breakdown,
    severity_band,
    share_breakdown,
    strike_rate,
    toss_trend_breakdown,
    venue_result_breakdown,
    win_probability_split,
)

__all__ = [
    "POSITIONS",
    "PositionBreakdown",
    "ShareBreakdown",
    "TossTrendBreakdown",
    "VenueResultBreakdown",
    "bar_width",
    "bar_width_percent",
    "economy",
    "format_width",
    "percentage",
    "percentage_shares",
    "position_breakdown",
    "scaled_widths",
    "severity_band",
    "share_breakdown",
    "strike_rate",
    "toss_trend_breakdown",
    "venue_result_breakdown",
    "win_probability_split",
]
