"""Convert ESPN ``mRoster`` league views into raw rosters."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from rosterlink.models import RawPlayerEntry, RawRoster


# Player-level defaultPositionId values.
ESPN_POSITION_NAMES: Dict[int, str] = {
    1: "QB",
    2: "RB",
    3: "WR",
    4: "TE",
    5: "K",
    16: "D/ST",
}

ESPN_PRO_TEAMS: Dict[int, str] = {
    0: "FA",
    1: "ATL",
    2: "BUF",
    3: "CHI",
    4: "CIN",
    5: "CLE",
    6: "DAL",
    7: "DEN",
    8: "DET",
    9: "GB",
    10: "TEN",
    11: "IND",
    12: "KC",
    13: "LV",
    14: "LAR",
    15: "MIA",
    16: "MIN",
    17: "NE",
    18: "NO",
    19: "NYG",
    20: "NYJ",
    21: "PHI",
    22: "ARI",
    23: "PIT",
    24: "LAC",
    25: "SF",
    26: "SEA",
    27: "TB",
    28: "WSH",
    29: "CAR",
    30: "JAX",
    33: "BAL",
    34: "HOU",
}


def espn_player_entry(player: Mapping[str, Any]) -> RawPlayerEntry:
    player_id = player.get("id")
    position_id = player.get("defaultPositionId")
    pro_team_id = player.get("proTeamId")
    return RawPlayerEntry(
        external_id=str(player_id) if player_id is not None else None,
        display_name=str(player.get("fullName") or ""),
        position=ESPN_POSITION_NAMES.get(position_id, str(position_id or "")),
        team=ESPN_PRO_TEAMS.get(pro_team_id, str(pro_team_id or "")),
    )


def espn_rosters_to_raw(view: Mapping[str, Any], league_id: str | None = None) -> List[RawRoster]:
    league = str(league_id if league_id is not None else view.get("id", ""))
    rosters: List[RawRoster] = []
    for team in view.get("teams", []):
        players = []
        for entry in team.get("roster", {}).get("entries", []):
            player = entry.get("playerPoolEntry", {}).get("player")
            if not player:
                continue
            players.append(espn_player_entry(player))
        rosters.append(
            RawRoster(platform="espn", league_id=league, team_id=str(team.get("id")), players=players)
        )
    return rosters
