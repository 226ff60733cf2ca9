"""Roster containers and exposure output rows."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import NormalizedPlayer, RawPlayerEntry


Platform = Literal["sleeper", "espn", "yahoo", "cbs", "nfl"]


class RawRoster(BaseModel):
    """Players of one fantasy team exactly as the source reported them."""

    platform: Platform
    league_id: str
    team_id: str
    players: List[RawPlayerEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def league_key(self) -> str:
        return f"{self.platform}:{self.league_id}"


class NormalizedRoster(BaseModel):
    league_key: str
    team_key: str
    week: int = 1
    players: List[NormalizedPlayer] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ExposureRow(BaseModel):
    """Share of all aggregated roster slots held by one player."""

    pid: str
    name: str
    pos: str
    nfl: str
    count: int = Field(..., ge=1)
    exposure: float = Field(..., gt=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)
