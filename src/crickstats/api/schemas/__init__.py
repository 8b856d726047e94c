"""Pydantic models for API I/O."""

from .boards import BoardEntryResponse, BoardRequest, BoardResponse, BoardSpecResponse, PlayerRecordResponse
from .insights import (
    ChartPointResponse,
    ChartSeriesResponse,
    CompetitionRowResponse,
    CountdownResponse,
    FixtureInsightsResponse,
    FormBarResponse,
    NewsItemResponse,
    PlayerCardRequest,
    PlayerInsightsResponse,
    PositionsResponse,
    RateResponse,
    ShareResponse,
    TossTrendResponse,
    VenueResultsResponse,
)

__all__ = [
    "BoardEntryResponse",
    "BoardRequest",
    "BoardResponse",
    "BoardSpecResponse",
    "ChartPointResponse",
    "ChartSeriesResponse",
    "CompetitionRowResponse",
    "CountdownResponse",
    "FixtureInsightsResponse",
    "FormBarResponse",
    "NewsItemResponse",
    "PlayerCardRequest",
    "PlayerInsightsResponse",
    "PlayerRecordResponse",
    "PositionsResponse",
    "RateResponse",
    "ShareResponse",
    "TossTrendResponse",
    "VenueResultsResponse",
]
