"""Read-only snapshot of the canonical identity catalog."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from rosterlink.config import PLATFORM_ID_FIELDS, MatchingRules, get_rules
from rosterlink.models import CanonicalPlayerIdentity

from .matching import NameMatch, NameMatcher, WeightedFuzzyMatcher


logger = logging.getLogger(__name__)


class CatalogConflictError(ValueError):
    """Raised when a catalog breaks the one-identity-per-id invariant."""


class IdentityIndex:
    """Exact platform-id maps plus fuzzy name search over one catalog snapshot."""

    def __init__(
        self,
        catalog: Iterable[CanonicalPlayerIdentity],
        *,
        matcher: NameMatcher | None = None,
        rules: MatchingRules | None = None,
    ) -> None:
        if catalog is None:
            raise TypeError("catalog must be a sequence of identities, not None")
        self.rules = rules or get_rules()
        self.matcher: NameMatcher = matcher or WeightedFuzzyMatcher.from_rules(self.rules)
        self._identities: Tuple[CanonicalPlayerIdentity, ...] = tuple(catalog)
        self._maps: Dict[str, Dict[str, CanonicalPlayerIdentity]] = {
            field: {} for _, field in PLATFORM_ID_FIELDS
        }
        seen_pids: set[str] = set()
        for identity in self._identities:
            if identity.pid in seen_pids:
                raise CatalogConflictError(f"Duplicate pid {identity.pid!r} in identity catalog")
            seen_pids.add(identity.pid)
            for platform, field in PLATFORM_ID_FIELDS:
                external_id = identity.external_id(field)
                if external_id is None:
                    continue
                existing = self._maps[field].get(external_id)
                if existing is not None:
                    raise CatalogConflictError(
                        f"{platform} id {external_id!r} claimed by both "
                        f"{existing.pid!r} and {identity.pid!r}"
                    )
                self._maps[field][external_id] = identity
        logger.debug(
            "Built identity index with %s identities (%s)",
            len(self._identities),
            ", ".join(f"{field}={len(ids)}" for field, ids in self._maps.items()),
        )

    @classmethod
    def from_catalog(
        cls,
        catalog: Iterable[CanonicalPlayerIdentity],
        *,
        rules: MatchingRules | None = None,
    ) -> "IdentityIndex":
        return cls(catalog, rules=rules)

    def __len__(self) -> int:
        return len(self._identities)

    def __iter__(self) -> Iterator[CanonicalPlayerIdentity]:
        return iter(self._identities)

    @property
    def is_empty(self) -> bool:
        return not self._identities

    @property
    def identities(self) -> Sequence[CanonicalPlayerIdentity]:
        return self._identities

    def lookup_by_external_id(
        self, platform_field: str, external_id: str
    ) -> Optional[CanonicalPlayerIdentity]:
        try:
            mapping = self._maps[platform_field]
        except KeyError:
            raise KeyError(f"Unknown platform id field {platform_field!r}") from None
        return mapping.get(external_id)

    def lookup_any(self, external_id: str) -> Optional[Tuple[str, CanonicalPlayerIdentity]]:
        """Probe every platform map in priority order; first hit wins."""

        if not external_id:
            return None
        for platform, field in PLATFORM_ID_FIELDS:
            hit = self._maps[field].get(external_id)
            if hit is not None:
                return platform, hit
        return None

    def search_by_name(self, query: str) -> List[NameMatch]:
        return list(self.matcher.search(query, self._identities))[: self.rules.search_limit]


__all__ = ["CatalogConflictError", "IdentityIndex"]
