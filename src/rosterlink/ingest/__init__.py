"""Input adapters that turn platform payloads into raw rosters."""

from .catalog import identities_from_records, load_identity_catalog
from .espn import espn_player_entry, espn_rosters_to_raw
from .rosters import (
    DEFAULT_ROSTER_MAPPING,
    RosterCsvError,
    load_roster_csv,
    parse_roster_csv,
)
from .sleeper import (
    SleeperClient,
    pull_sleeper_league,
    sleeper_player_entry,
    sleeper_rosters_to_raw,
    sleeper_team_names,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterCsvError",
    "SleeperClient",
    "espn_player_entry",
    "espn_rosters_to_raw",
    "identities_from_records",
    "load_identity_catalog",
    "load_roster_csv",
    "parse_roster_csv",
    "pull_sleeper_league",
    "sleeper_player_entry",
    "sleeper_rosters_to_raw",
    "sleeper_team_names",
]
