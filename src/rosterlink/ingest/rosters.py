"""Load roster CSV exports into :class:`RawRoster` records."""

from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, get_args

from rosterlink.models import Platform, RawPlayerEntry, RawRoster


logger = logging.getLogger(__name__)

CSV_PLATFORMS: Tuple[str, ...] = get_args(Platform)

DEFAULT_ROSTER_MAPPING: Dict[str, str] = {
    "league_id": "leagueId",
    "team_id": "teamId",
    "name": "displayName",
    "position": "position",
    "team": "team",
    "external_id": "externalId",
}

_REQUIRED_KEYS = ("league_id", "team_id", "name")


class RosterCsvError(ValueError):
    """Raised when a roster CSV cannot be mapped onto roster entries."""


def _parse_spec(mapping: Mapping[str, str], key: str) -> Optional[Sequence[str]]:
    spec = mapping.get(key)
    if not spec:
        return None
    return tuple(part.strip() for part in spec.split("|") if part.strip())


def _extract(row: Mapping[str, Optional[str]], columns: Optional[Sequence[str]]) -> str:
    if not columns:
        return ""
    parts = [(row.get(column) or "").strip() for column in columns]
    return " ".join(part for part in parts if part)


def parse_roster_csv(
    text: str,
    platform: str,
    *,
    mapping: Mapping[str, str] | None = None,
) -> List[RawRoster]:
    """Group CSV rows into one roster per ``leagueId:teamId`` pair.

    Rosters are returned in the order their first row appears. A name column
    mapping may join several columns with ``|`` (e.g. ``First|Last``).
    """

    platform_key = platform.lower()
    if platform_key not in CSV_PLATFORMS:
        raise RosterCsvError(
            f"Unsupported platform {platform!r}; expected one of {', '.join(CSV_PLATFORMS)}"
        )
    merged_mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    specs = {key: _parse_spec(merged_mapping, key) for key in DEFAULT_ROSTER_MAPPING}

    reader = csv.DictReader(StringIO(text))
    header = set(reader.fieldnames or [])
    missing = [
        column
        for key in _REQUIRED_KEYS
        for column in (specs[key] or (key,))
        if column not in header
    ]
    if missing:
        raise RosterCsvError(f"Roster CSV is missing required columns: {', '.join(missing)}")
    for key in ("position", "team", "external_id"):
        columns = specs[key]
        if columns and any(column not in header for column in columns):
            specs[key] = None

    grouped: Dict[Tuple[str, str], List[RawPlayerEntry]] = {}
    for row in reader:
        league_id = _extract(row, specs["league_id"])
        team_id = _extract(row, specs["team_id"])
        entries = grouped.setdefault((league_id, team_id), [])
        entries.append(
            RawPlayerEntry(
                external_id=_extract(row, specs["external_id"]) or None,
                display_name=_extract(row, specs["name"]),
                position=_extract(row, specs["position"]),
                team=_extract(row, specs["team"]),
            )
        )

    rosters = [
        RawRoster(platform=platform_key, league_id=league_id, team_id=team_id, players=players)
        for (league_id, team_id), players in grouped.items()
    ]
    logger.debug(
        "Parsed %s rosters (%s players) from %s CSV",
        len(rosters),
        sum(len(roster.players) for roster in rosters),
        platform_key,
    )
    return rosters


def load_roster_csv(
    path: Path,
    platform: str,
    *,
    mapping: Mapping[str, str] | None = None,
) -> List[RawRoster]:
    return parse_roster_csv(path.read_text(encoding="utf-8-sig"), platform, mapping=mapping)
