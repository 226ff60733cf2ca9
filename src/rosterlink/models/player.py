"""Player records before and after identity resolution."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


PROVISIONAL_PREFIX = "TMP_"


class RawPlayerEntry(BaseModel):
    """One roster line as delivered by a source adapter."""

    external_id: Optional[str] = None
    display_name: str
    position: str = ""
    team: str = ""

    model_config = ConfigDict(frozen=True)


class CanonicalPlayerIdentity(BaseModel):
    """A row of the identity catalog with its platform-specific ids."""

    pid: str = Field(..., min_length=1)
    name: str = ""
    pos: str = ""
    nfl: str = ""
    sleeper_id: Optional[str] = None
    espn_id: Optional[str] = None
    yahoo_id: Optional[str] = None
    cbs_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("sleeper_id", "espn_id", "yahoo_id", "cbs_id", mode="before")
    @classmethod
    def _blank_id_is_missing(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(int(value)) if float(value).is_integer() else str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def external_id(self, field: str) -> Optional[str]:
        if field not in {"sleeper_id", "espn_id", "yahoo_id", "cbs_id"}:
            raise KeyError(f"Unknown platform id field {field!r}")
        return getattr(self, field)


class NormalizedPlayer(BaseModel):
    """Resolver output: a canonical or provisional player reference."""

    pid: str
    name: str
    pos: str
    nfl: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_provisional(self) -> bool:
        return self.pid.startswith(PROVISIONAL_PREFIX)
