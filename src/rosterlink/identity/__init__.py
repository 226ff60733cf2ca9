"""Identity index, fuzzy matching and player resolution."""

from .index import CatalogConflictError, IdentityIndex
from .matching import NameMatch, NameMatcher, WeightedFuzzyMatcher
from .resolver import (
    PlayerResolver,
    Resolution,
    ResolutionSummary,
    provisional_pid,
    resolve_players,
)

__all__ = [
    "CatalogConflictError",
    "IdentityIndex",
    "NameMatch",
    "NameMatcher",
    "PlayerResolver",
    "Resolution",
    "ResolutionSummary",
    "WeightedFuzzyMatcher",
    "provisional_pid",
    "resolve_players",
]
