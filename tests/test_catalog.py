import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from rosterlink.ingest import identities_from_records, load_identity_catalog


def test_load_json_catalog(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"pid": "CMC", "name": "Christian McCaffrey", "pos": "RB", "nfl": "SF", "sleeperId": "4034"},
                {"pid": "Kelce", "name": "Travis Kelce", "pos": "TE", "nfl": "KC", "espn_id": 15847},
            ]
        ),
        encoding="utf-8",
    )

    catalog = load_identity_catalog(path)

    assert [identity.pid for identity in catalog] == ["CMC", "Kelce"]
    assert catalog[0].sleeper_id == "4034"
    assert catalog[1].espn_id == "15847"


def test_load_json_catalog_with_players_key(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"players": [{"pid": "P1", "name": "One"}]}), encoding="utf-8")

    catalog = load_identity_catalog(path)

    assert catalog[0].pos == ""


def test_load_csv_catalog_blank_ids_are_missing(tmp_path: Path):
    path = tmp_path / "catalog.csv"
    path.write_text(
        "pid,name,pos,nfl,sleeper_id,espn_id,yahoo_id,cbs_id\n"
        "Aiyuk,Brandon Aiyuk,WR,SF,,4360438,,\n",
        encoding="utf-8",
    )

    catalog = load_identity_catalog(path)

    assert catalog[0].espn_id == "4360438"
    assert catalog[0].sleeper_id is None
    assert catalog[0].cbs_id is None


def test_non_list_catalog_raises(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps("nope"), encoding="utf-8")

    with pytest.raises(ValueError):
        load_identity_catalog(path)


def test_record_without_pid_is_invalid():
    with pytest.raises(ValidationError):
        identities_from_records([{"name": "No Pid"}])
