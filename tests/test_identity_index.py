import pytest

from rosterlink.config import get_rules
from rosterlink.identity import CatalogConflictError, IdentityIndex, NameMatch, WeightedFuzzyMatcher
from rosterlink.models import CanonicalPlayerIdentity


def _catalog() -> list[CanonicalPlayerIdentity]:
    return [
        CanonicalPlayerIdentity(
            pid="CMC", name="Christian McCaffrey", pos="RB", nfl="SF", sleeper_id="4034", espn_id="3117251"
        ),
        CanonicalPlayerIdentity(pid="Kelce", name="Travis Kelce", pos="TE", nfl="KC", espn_id="4034", yahoo_id="25839"),
        CanonicalPlayerIdentity(pid="Aiyuk", name="Brandon Aiyuk", pos="WR", nfl="SF", cbs_id="2871343"),
    ]


def test_lookup_by_external_id_per_platform():
    index = IdentityIndex(_catalog())

    assert index.lookup_by_external_id("sleeper_id", "4034").pid == "CMC"
    assert index.lookup_by_external_id("espn_id", "4034").pid == "Kelce"
    assert index.lookup_by_external_id("cbs_id", "4034") is None


def test_lookup_by_unknown_platform_raises():
    index = IdentityIndex(_catalog())

    with pytest.raises(KeyError):
        index.lookup_by_external_id("mfl_id", "1")


def test_lookup_any_prefers_sleeper_over_espn():
    index = IdentityIndex(_catalog())

    platform, identity = index.lookup_any("4034")
    assert platform == "sleeper"
    assert identity.pid == "CMC"


def test_lookup_any_falls_through_to_later_platforms():
    index = IdentityIndex(_catalog())

    assert index.lookup_any("25839") == ("yahoo", _catalog()[1])
    assert index.lookup_any("2871343")[0] == "cbs"
    assert index.lookup_any("999") is None
    assert index.lookup_any("") is None


def test_duplicate_platform_id_is_rejected():
    catalog = _catalog() + [CanonicalPlayerIdentity(pid="Other", name="Other Player", sleeper_id="4034")]

    with pytest.raises(CatalogConflictError):
        IdentityIndex(catalog)


def test_duplicate_pid_is_rejected():
    catalog = _catalog() + [CanonicalPlayerIdentity(pid="CMC", name="Christian McCaffrey")]

    with pytest.raises(CatalogConflictError):
        IdentityIndex(catalog)


def test_none_catalog_is_a_contract_violation():
    with pytest.raises(TypeError):
        IdentityIndex(None)  # type: ignore[arg-type]


def test_empty_index():
    index = IdentityIndex([])

    assert index.is_empty
    assert len(index) == 0
    assert index.search_by_name("Christian McCaffrey") == []


def test_search_by_name_ranks_exact_name_first():
    index = IdentityIndex(_catalog())

    matches = index.search_by_name("Travis Kelce")

    assert matches[0].identity.pid == "Kelce"
    assert matches[0].score < 0.01


def test_search_by_name_is_bounded():
    catalog = [CanonicalPlayerIdentity(pid=f"P{i}", name="Josh Allen", pos="QB", nfl="BUF") for i in range(25)]
    index = IdentityIndex(catalog, rules=get_rules("default"))

    matches = index.search_by_name("Josh Allen")

    assert len(matches) == get_rules("default").search_limit
    assert [match.identity.pid for match in matches[:3]] == ["P0", "P1", "P2"]


def test_search_by_name_uses_injected_matcher():
    class FirstCandidateMatcher:
        def search(self, query, candidates):
            return [NameMatch(identity=candidates[-1], score=0.5)]

    index = IdentityIndex(_catalog(), matcher=FirstCandidateMatcher())

    matches = index.search_by_name("anything")
    assert [(match.identity.pid, match.score) for match in matches] == [("Aiyuk", 0.5)]


def test_weighted_matcher_ignores_blank_query():
    matcher = WeightedFuzzyMatcher.from_rules()

    assert matcher.search("   ", _catalog()) == []


def test_weighted_matcher_rejects_unknown_scorer():
    with pytest.raises(ValueError):
        WeightedFuzzyMatcher({"name": 1.0}, scorer="not_a_scorer")


def test_weighted_matcher_drops_unrelated_candidates():
    matcher = WeightedFuzzyMatcher.from_rules()

    matches = matcher.search("Patrick Mahomes", _catalog())

    assert matches == []


def test_short_code_fields_do_not_match_inside_names():
    matcher = WeightedFuzzyMatcher.from_rules()

    assert matcher.field_distance("pos", "Davante Adams", "TE") > matcher.field_threshold
    assert matcher.field_distance("nfl", "Calvin Ridley", "LV") > matcher.field_threshold
    assert matcher.field_distance("name", "Davante Adams", "Davante Adams") == pytest.approx(0.0)


def test_candidate_position_does_not_change_name_score():
    matcher = WeightedFuzzyMatcher.from_rules()
    as_receiver = CanonicalPlayerIdentity(pid="DAVIS", name="Davis Adams", pos="WR", nfl="LV")
    as_tight_end = CanonicalPlayerIdentity(pid="DAVIS", name="Davis Adams", pos="TE", nfl="LV")

    assert matcher.score("Davante Adams", as_receiver) == matcher.score("Davante Adams", as_tight_end)
