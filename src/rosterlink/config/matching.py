"""Matching rules used by the identity index and resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple


# Probe order for externally supplied ids; the first map holding the id wins.
PLATFORM_ID_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("sleeper", "sleeper_id"),
    ("espn", "espn_id"),
    ("yahoo", "yahoo_id"),
    ("cbs", "cbs_id"),
)


@dataclass(frozen=True)
class WeightedKey:
    field: str
    weight: float
    # Overrides the rule set scorer for this key only.
    scorer: Optional[str] = None


@dataclass(frozen=True)
class MatchingRules:
    name: str
    keys: Tuple[WeightedKey, ...]
    field_threshold: float
    accept_threshold: float
    search_limit: int
    scorer: str = "WRatio"

    def normalized_weights(self) -> Dict[str, float]:
        total = sum(key.weight for key in self.keys)
        if total <= 0:
            raise ValueError(f"Matching rules {self.name!r} have no positive key weights")
        return {key.field: key.weight / total for key in self.keys}

    def field_scorers(self) -> Dict[str, str]:
        return {key.field: key.scorer or self.scorer for key in self.keys}


_MATCHING_RULES: Dict[str, MatchingRules] = {
    "default": MatchingRules(
        name="default",
        keys=(
            WeightedKey("name", 0.7),
            WeightedKey("nfl", 0.2, scorer="ratio"),
            WeightedKey("pos", 0.1, scorer="ratio"),
        ),
        field_threshold=0.3,
        accept_threshold=0.33,
        search_limit=10,
    ),
    "strict": MatchingRules(
        name="strict",
        keys=(
            WeightedKey("name", 0.7),
            WeightedKey("nfl", 0.2),
            WeightedKey("pos", 0.1),
        ),
        field_threshold=0.15,
        accept_threshold=0.2,
        search_limit=5,
        scorer="ratio",
    ),
}


def iter_rules() -> Iterable[MatchingRules]:
    """Return an iterator of all configured rule sets."""

    return _MATCHING_RULES.values()


def get_rules(name: str = "default") -> MatchingRules:
    """Fetch a named rule set, raising KeyError if missing."""

    key = name.lower()
    if key not in _MATCHING_RULES:
        raise KeyError(f"No matching rules configured for {name!r}")
    return _MATCHING_RULES[key]
