"""Player records produced from roster and leaderboard payloads."""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerMetricRecord(BaseModel):
    """One player's metrics for a single fixture."""

    uid: str = Field(..., min_length=1)
    name: str
    team: str = ""
    team_uid: Optional[str] = None
    style: Optional[str] = None
    position: Optional[str] = None
    category: Optional[str] = None
    x_factor: Optional[str] = None
    metrics: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def metric(self, name: str) -> float:
        """Return the named metric, or ``nan`` when the payload lacked it."""

        value = self.metrics.get(name)
        if value is None:
            return math.nan
        return value


RankedList = Tuple[PlayerMetricRecord, ...]
