"""Persistence layer for normalized rosters."""

from __future__ import annotations

import json
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional
from uuid import uuid4

from rosterlink.models import NormalizedPlayer, NormalizedRoster


@dataclass
class RosterRecord:
    roster_id: str
    created_at: datetime
    platform: str
    league_id: str
    team_id: str
    team_name: str
    week: int
    players: List[dict]

    def to_normalized(self) -> NormalizedRoster:
        return NormalizedRoster(
            league_key=f"{self.platform}:{self.league_id}",
            team_key=self.team_id,
            week=self.week,
            players=[NormalizedPlayer.model_validate(player) for player in self.players],
        )


class RosterStore:
    """SQLite-backed store keeping each roster's players as a JSON blob."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("ROSTERLINK_DB_PATH")
        raw_path = env_db or db_path
        if isinstance(raw_path, str) and raw_path.startswith("file:"):
            self.db_path: Path | str = raw_path
            self._use_uri = True
        else:
            self.db_path = Path(raw_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rosters (
                    id TEXT PRIMARY KEY,
                    platform TEXT NOT NULL,
                    league_id TEXT NOT NULL,
                    team_id TEXT NOT NULL,
                    team_name TEXT NOT NULL,
                    week INTEGER NOT NULL,
                    players_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def save_roster(
        self,
        *,
        platform: str,
        league_id: str,
        team_id: str,
        week: int,
        players: Iterable[NormalizedPlayer],
        team_name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> RosterRecord:
        record = RosterRecord(
            roster_id=uuid4().hex,
            created_at=created_at or datetime.now(timezone.utc),
            platform=platform,
            league_id=league_id,
            team_id=team_id,
            team_name=team_name or team_id,
            week=week,
            players=[player.model_dump() for player in players],
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO rosters (
                    id, platform, league_id, team_id, team_name, week, players_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.roster_id,
                    record.platform,
                    record.league_id,
                    record.team_id,
                    record.team_name,
                    record.week,
                    json.dumps(record.players),
                    record.created_at.isoformat(),
                ),
            )
            conn.commit()
        return record

    def list_records(self, *, week: Optional[int] = None, limit: Optional[int] = 500) -> List[RosterRecord]:
        query = "SELECT * FROM rosters"
        params: list = []
        if week is not None:
            query += " WHERE week = ?"
            params.append(week)
        query += " ORDER BY datetime(created_at) DESC, rowid DESC"
        # limit=None reads every row.
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_rosters(
        self, *, week: Optional[int] = None, limit: Optional[int] = 500
    ) -> List[NormalizedRoster]:
        return [record.to_normalized() for record in self.list_records(week=week, limit=limit)]

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM rosters")
            conn.commit()

    def _row_to_record(self, row: sqlite3.Row) -> RosterRecord:
        return RosterRecord(
            roster_id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            platform=row["platform"],
            league_id=row["league_id"],
            team_id=row["team_id"],
            team_name=row["team_name"],
            week=int(row["week"]),
            players=json.loads(row["players_json"]),
        )


__all__ = ["RosterRecord", "RosterStore"]
