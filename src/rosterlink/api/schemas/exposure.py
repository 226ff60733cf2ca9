from __future__ import annotations

from pydantic import BaseModel, Field

from rosterlink.models import ExposureRow, NormalizedRoster


class RostersResponse(BaseModel):
    ok: bool = True
    rosters: list[NormalizedRoster]


class ExposureRequest(BaseModel):
    rosters: list[NormalizedRoster] = Field(default_factory=list)


class ExposureResponse(BaseModel):
    total_slots: int
    rows: list[ExposureRow]
