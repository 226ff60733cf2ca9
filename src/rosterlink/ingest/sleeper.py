"""Sleeper league pulls and their conversion into raw rosters."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from rosterlink.config.settings import DEFAULT_SLEEPER_BASE_URL
from rosterlink.models import RawPlayerEntry, RawRoster


logger = logging.getLogger(__name__)


class SleeperClient:
    """Thin httpx wrapper around the public Sleeper v1 endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_SLEEPER_BASE_URL,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "SleeperClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, path: str) -> Any:
        response = self._client.get(path)
        response.raise_for_status()
        return response.json()

    def fetch_league(self, league_id: str) -> Dict[str, Any]:
        return self._get(f"/league/{league_id}") or {}

    def fetch_users(self, league_id: str) -> List[Dict[str, Any]]:
        return self._get(f"/league/{league_id}/users") or []

    def fetch_rosters(self, league_id: str) -> List[Dict[str, Any]]:
        data = self._get(f"/league/{league_id}/rosters") or []
        if not isinstance(data, list):
            raise ValueError("Unexpected Sleeper rosters response; expected list")
        return data

    def fetch_players(self) -> Dict[str, Dict[str, Any]]:
        data = self._get("/players/nfl") or {}
        if not isinstance(data, dict):
            raise ValueError("Unexpected Sleeper players response; expected mapping")
        return data


def _display_name(player_id: str, player: Mapping[str, Any]) -> str:
    full_name = player.get("full_name")
    if full_name:
        return str(full_name)
    joined = f"{player.get('first_name') or ''} {player.get('last_name') or ''}".strip()
    return joined or player_id


def sleeper_player_entry(player_id: str, players: Mapping[str, Mapping[str, Any]]) -> RawPlayerEntry:
    player = players.get(player_id) or {}
    return RawPlayerEntry(
        external_id=str(player.get("player_id") or player_id),
        display_name=_display_name(player_id, player),
        position=player.get("position") or "NA",
        team=player.get("team") or "FA",
    )


def sleeper_team_names(
    rosters: Iterable[Mapping[str, Any]],
    users: Iterable[Mapping[str, Any]],
) -> Dict[str, str]:
    owners = {user.get("user_id"): user.get("display_name") for user in users}
    names: Dict[str, str] = {}
    for roster in rosters:
        roster_id = str(roster.get("roster_id"))
        names[roster_id] = owners.get(roster.get("owner_id")) or f"Team {roster_id}"
    return names


def sleeper_rosters_to_raw(
    league_id: str,
    rosters: Iterable[Mapping[str, Any]],
    players: Mapping[str, Mapping[str, Any]],
) -> List[RawRoster]:
    raw: List[RawRoster] = []
    for roster in rosters:
        player_ids = [str(pid) for pid in roster.get("players") or []]
        missing = [pid for pid in player_ids if pid not in players]
        if missing:
            logger.debug("Sleeper roster %s has %s ids missing from player map", roster.get("roster_id"), len(missing))
        raw.append(
            RawRoster(
                platform="sleeper",
                league_id=str(league_id),
                team_id=str(roster.get("roster_id")),
                players=[sleeper_player_entry(pid, players) for pid in player_ids],
            )
        )
    return raw


def pull_sleeper_league(
    client: SleeperClient,
    league_id: str,
    *,
    players: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> tuple[Dict[str, Any], List[RawRoster], Dict[str, str]]:
    """Fetch a league and return ``(league, raw rosters, team names)``."""

    league = client.fetch_league(league_id)
    users = client.fetch_users(league_id)
    rosters = client.fetch_rosters(league_id)
    if players is None:
        players = client.fetch_players()
    logger.info("Pulled Sleeper league %s with %s rosters", league_id, len(rosters))
    return league, sleeper_rosters_to_raw(league_id, rosters, players), sleeper_team_names(rosters, users)
