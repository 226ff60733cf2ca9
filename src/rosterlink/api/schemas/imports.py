from __future__ import annotations

from pydantic import BaseModel, Field

from rosterlink.models import Platform


class CsvImportRequest(BaseModel):
    platform: Platform = "espn"
    csv: str
    week: int = Field(default=1, ge=1)
    league_name: str | None = None
    roster_mapping: dict[str, str] = Field(default_factory=dict)


class SleeperImportRequest(BaseModel):
    league_id: str = Field(..., min_length=1)
    week: int = Field(default=1, ge=1)


class ImportResponse(BaseModel):
    ok: bool = True
    imported: int
    players: int
    provisional: list[str] = Field(default_factory=list)
    league_name: str | None = None
