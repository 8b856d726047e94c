"""Canonical records shared across ingestion, ranking and charting layers."""

from .match import (
    ChartPoint,
    ChartSeries,
    MatchSample,
    TossTrendCounts,
    VenueResultCounts,
)
from .player import PlayerMetricRecord, RankedList

__all__ = [
    "ChartPoint",
    "ChartSeries",
    "MatchSample",
    "PlayerMetricRecord",
    "RankedList",
    "TossTrendCounts",
    "VenueResultCounts",
]
