from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


class PlayerRecordResponse(BaseModel):
    uid: str
    name: str
    team: str
    team_uid: str | None = None
    style: str | None = None
    position: str | None = None
    category: str | None = None
    x_factor: str | None = None
    metrics: Dict[str, float | None] = Field(default_factory=dict)


class BoardEntryResponse(BaseModel):
    rank: int
    player: PlayerRecordResponse
    value: float | None
    width: float
    width_label: str
    band: str


class BoardResponse(BaseModel):
    key: str
    title: str
    status: Literal["ok", "no_data"]
    entries: List[BoardEntryResponse]


class BoardSpecResponse(BaseModel):
    key: str
    group: str
    title: str
    k: int | None
    ranked: bool


class BoardRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    team: str | None = None
    position: str | None = None
    k: int | None = Field(default=None, ge=0)
