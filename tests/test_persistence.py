from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from rosterlink.models import NormalizedPlayer
from rosterlink.persistence import RosterStore


@pytest.fixture
def store(tmp_path: Path, monkeypatch) -> RosterStore:
    monkeypatch.delenv("ROSTERLINK_DB_PATH", raising=False)
    return RosterStore(tmp_path / "rosters.sqlite")


def _players() -> list[NormalizedPlayer]:
    return [
        NormalizedPlayer(pid="CMC", name="Christian McCaffrey", pos="RB", nfl="SF"),
        NormalizedPlayer(pid="TMP_Some_Guy_FA_NA", name="Some Guy", pos="NA", nfl="FA"),
    ]


def test_saved_roster_round_trips(store: RosterStore):
    store.save_roster(platform="espn", league_id="123", team_id="7", week=2, players=_players())

    records = store.list_records()
    assert len(records) == 1
    assert records[0].team_name == "7"

    roster = store.list_rosters()[0]
    assert roster.league_key == "espn:123"
    assert roster.team_key == "7"
    assert roster.week == 2
    assert roster.players == _players()
    assert roster.players[1].is_provisional


def test_rosters_are_listed_latest_first_and_filtered_by_week(store: RosterStore):
    earlier = datetime(2024, 9, 1, tzinfo=timezone.utc)
    store.save_roster(platform="espn", league_id="1", team_id="a", week=1, players=[], created_at=earlier)
    store.save_roster(
        platform="sleeper",
        league_id="2",
        team_id="b",
        week=1,
        players=[],
        team_name="alice",
        created_at=earlier + timedelta(days=1),
    )
    store.save_roster(platform="cbs", league_id="3", team_id="c", week=2, players=[], created_at=earlier)

    assert [record.team_id for record in store.list_records(week=1)] == ["b", "a"]
    assert [record.team_name for record in store.list_records(week=1)] == ["alice", "a"]
    assert len(store.list_rosters(week=2)) == 1
    assert len(store.list_records(limit=1)) == 1


def test_clear_removes_rosters(store: RosterStore):
    store.save_roster(platform="espn", league_id="1", team_id="a", week=1, players=_players())

    store.clear()

    assert store.list_rosters() == []


def test_env_db_path_overrides_argument(tmp_path: Path, monkeypatch):
    target = tmp_path / "env.sqlite"
    monkeypatch.setenv("ROSTERLINK_DB_PATH", str(target))

    store = RosterStore(tmp_path / "ignored.sqlite")

    assert store.db_path == target
    assert target.exists()


def test_limit_none_reads_every_roster(store: RosterStore):
    for team_id in ("a", "b", "c"):
        store.save_roster(platform="espn", league_id="1", team_id=team_id, week=1, players=[])

    assert len(store.list_rosters(limit=2)) == 2
    assert len(store.list_rosters(limit=None)) == 3
