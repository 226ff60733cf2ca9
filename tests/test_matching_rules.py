import pytest

from rosterlink.config import PLATFORM_ID_FIELDS, get_rules, iter_rules, load_settings


def test_default_rules_weights_and_thresholds():
    rules = get_rules()

    assert rules.normalized_weights() == pytest.approx({"name": 0.7, "nfl": 0.2, "pos": 0.1})
    assert rules.accept_threshold == pytest.approx(0.33)
    assert rules.field_threshold == pytest.approx(0.3)


def test_get_rules_is_case_insensitive():
    assert get_rules("STRICT").name == "strict"


def test_get_rules_missing_raises():
    with pytest.raises(KeyError):
        get_rules("lenient")


def test_iter_rules_lists_all_sets():
    assert {rules.name for rules in iter_rules()} == {"default", "strict"}


def test_platform_probe_order():
    assert [platform for platform, _ in PLATFORM_ID_FIELDS] == ["sleeper", "espn", "yahoo", "cbs"]


def test_load_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ROSTERLINK_DB_PATH", str(tmp_path / "db.sqlite"))
    monkeypatch.setenv("ROSTERLINK_CATALOG_PATH", str(tmp_path / "catalog.json"))
    monkeypatch.setenv("ROSTERLINK_RESOLVE_WORKERS", "4")

    settings = load_settings()

    assert settings.db_path == tmp_path / "db.sqlite"
    assert settings.catalog_path == tmp_path / "catalog.json"
    assert settings.resolve_workers == 4


def test_load_settings_ignores_invalid_workers(monkeypatch):
    monkeypatch.delenv("ROSTERLINK_CATALOG_PATH", raising=False)
    monkeypatch.setenv("ROSTERLINK_RESOLVE_WORKERS", "many")

    settings = load_settings()

    assert settings.resolve_workers == 1
    assert settings.catalog_path is None


def test_code_fields_use_whole_string_scorer():
    assert get_rules().field_scorers() == {"name": "WRatio", "nfl": "ratio", "pos": "ratio"}
    assert set(get_rules("strict").field_scorers().values()) == {"ratio"}
