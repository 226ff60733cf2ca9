"""Fuzzy name matching against the identity catalog.

The resolver only depends on the :class:`NameMatcher` protocol, so any
matcher returning ``(identity, score)`` pairs on a 0 (perfect) to 1 (worst)
scale can be swapped in. :class:`WeightedFuzzyMatcher` is the default and
scores each candidate across several weighted fields with rapidfuzz.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Callable, List, Mapping, Protocol, Sequence

from rapidfuzz import fuzz, utils

from rosterlink.config import MatchingRules, get_rules
from rosterlink.models import CanonicalPlayerIdentity


_EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class NameMatch:
    identity: CanonicalPlayerIdentity
    score: float


class NameMatcher(Protocol):
    def search(
        self, query: str, candidates: Sequence[CanonicalPlayerIdentity]
    ) -> List[NameMatch]:
        ...


def _scorer_fn(name: str) -> Callable[..., float]:
    try:
        return getattr(fuzz, name)
    except AttributeError:
        raise ValueError(f"Unknown rapidfuzz scorer {name!r}") from None


class WeightedFuzzyMatcher:
    """Weighted multi-field matcher backed by rapidfuzz scorers.

    Each configured field is compared against the query on its own. A field
    only contributes when its distance is within ``field_threshold``; the
    candidate score is the product of ``distance ** weight`` over the
    contributing fields. Candidates without any contributing field are
    dropped.

    ``field_scorers`` picks a scorer per field. Short code fields such as
    ``pos`` and ``nfl`` need a whole-string scorer: a partial scorer finds
    "TE" inside "Davante" and lets a position code vouch for the name.
    """

    def __init__(
        self,
        weights: Mapping[str, float],
        *,
        field_threshold: float = 0.3,
        limit: int = 10,
        scorer: str = "WRatio",
        field_scorers: Mapping[str, str] | None = None,
    ) -> None:
        if not weights:
            raise ValueError("at least one weighted field is required")
        total = sum(weights.values())
        if total <= 0:
            raise ValueError("field weights must sum to a positive value")
        self.weights = {field: weight / total for field, weight in weights.items()}
        self.field_threshold = field_threshold
        self.limit = max(1, limit)
        # Kept as names so the matcher pickles cleanly into worker processes.
        self.scorer = scorer
        self.field_scorers = {field: (field_scorers or {}).get(field, scorer) for field in self.weights}
        for name in {scorer, *self.field_scorers.values()}:
            _scorer_fn(name)

    @classmethod
    def from_rules(cls, rules: MatchingRules | None = None) -> "WeightedFuzzyMatcher":
        rules = rules or get_rules()
        return cls(
            rules.normalized_weights(),
            field_threshold=rules.field_threshold,
            limit=rules.search_limit,
            scorer=rules.scorer,
            field_scorers=rules.field_scorers(),
        )

    def field_distance(self, field: str, query: str, value: str) -> float:
        scorer = _scorer_fn(self.field_scorers.get(field, self.scorer))
        similarity = scorer(query, value, processor=utils.default_process)
        return 1.0 - similarity / 100.0

    def score(self, query: str, candidate: CanonicalPlayerIdentity) -> float | None:
        total = 1.0
        matched = False
        for field, weight in self.weights.items():
            value = getattr(candidate, field, None)
            if not value:
                continue
            distance = self.field_distance(field, query, str(value))
            if distance > self.field_threshold:
                continue
            matched = True
            total *= math.pow(max(distance, _EPSILON), weight)
        return total if matched else None

    def search(
        self, query: str, candidates: Sequence[CanonicalPlayerIdentity]
    ) -> List[NameMatch]:
        if not query or not query.strip():
            return []
        scored: list[tuple[float, int, CanonicalPlayerIdentity]] = []
        for position, candidate in enumerate(candidates):
            score = self.score(query, candidate)
            if score is not None:
                scored.append((score, position, candidate))
        scored.sort(key=lambda item: (item[0], item[1]))
        return [NameMatch(identity=candidate, score=score) for score, _, candidate in scored[: self.limit]]


__all__ = [
    "NameMatch",
    "NameMatcher",
    "WeightedFuzzyMatcher",
]
