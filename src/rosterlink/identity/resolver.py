"""Map raw roster entries onto canonical player identities."""

from __future__ import annotations

import logging
import multiprocessing as mp
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Sequence

from rosterlink.config import MatchingRules
from rosterlink.models import (
    PROVISIONAL_PREFIX,
    CanonicalPlayerIdentity,
    NormalizedPlayer,
    NormalizedRoster,
    RawPlayerEntry,
    RawRoster,
)

from .index import IdentityIndex


logger = logging.getLogger(__name__)

ResolutionMethod = Literal["external_id", "fuzzy", "provisional"]

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Resolution:
    player: NormalizedPlayer
    method: ResolutionMethod
    platform: Optional[str] = None
    score: Optional[float] = None


@dataclass
class ResolutionSummary:
    total: int = 0
    by_method: Counter = field(default_factory=Counter)
    provisional_pids: List[str] = field(default_factory=list)

    def add(self, resolution: Resolution) -> None:
        self.total += 1
        self.by_method[resolution.method] += 1
        if resolution.method == "provisional" and resolution.player.pid not in self.provisional_pids:
            self.provisional_pids.append(resolution.player.pid)

    def extend(self, other: "ResolutionSummary") -> None:
        self.total += other.total
        self.by_method.update(other.by_method)
        for pid in other.provisional_pids:
            if pid not in self.provisional_pids:
                self.provisional_pids.append(pid)

    @property
    def matched(self) -> int:
        return self.total - self.by_method["provisional"]


def provisional_pid(entry: RawPlayerEntry) -> str:
    """Build the temporary pid used when no canonical identity matches."""

    return _WHITESPACE.sub(
        "_", f"{PROVISIONAL_PREFIX}{entry.display_name}_{entry.team}_{entry.position}"
    )


def _from_identity(identity: CanonicalPlayerIdentity) -> NormalizedPlayer:
    return NormalizedPlayer(pid=identity.pid, name=identity.name, pos=identity.pos, nfl=identity.nfl)


class PlayerResolver:
    """Resolve entries against a fixed :class:`IdentityIndex` snapshot.

    Resolution order per entry: exact external id (sleeper, espn, yahoo, cbs),
    then the best fuzzy match on the display name when it scores strictly
    below the acceptance threshold, then a provisional identity built from
    the entry's own name, team and position.
    """

    def __init__(self, index: IdentityIndex, *, accept_threshold: float | None = None) -> None:
        if index is None:
            raise TypeError("index is required")
        self.index = index
        self.accept_threshold = (
            index.rules.accept_threshold if accept_threshold is None else accept_threshold
        )

    @classmethod
    def from_catalog(
        cls,
        catalog: Iterable[CanonicalPlayerIdentity],
        *,
        rules: MatchingRules | None = None,
    ) -> "PlayerResolver":
        return cls(IdentityIndex(catalog, rules=rules))

    def resolve_with_method(self, entry: RawPlayerEntry) -> Resolution:
        if entry.external_id:
            hit = self.index.lookup_any(entry.external_id)
            if hit is not None:
                platform, identity = hit
                return Resolution(_from_identity(identity), "external_id", platform=platform)

        # Team and position stay out of the query text; only the name is searched.
        matches = self.index.search_by_name(entry.display_name)
        if matches and matches[0].score < self.accept_threshold:
            best = matches[0]
            return Resolution(_from_identity(best.identity), "fuzzy", score=best.score)

        pid = provisional_pid(entry)
        logger.debug("No identity match for %r; using provisional pid %s", entry.display_name, pid)
        player = NormalizedPlayer(pid=pid, name=entry.display_name, pos=entry.position, nfl=entry.team)
        return Resolution(player, "provisional", score=matches[0].score if matches else None)

    def resolve(self, entry: RawPlayerEntry) -> NormalizedPlayer:
        return self.resolve_with_method(entry).player

    def resolve_many(self, entries: Sequence[RawPlayerEntry]) -> List[NormalizedPlayer]:
        if entries is None:
            raise TypeError("entries must be a sequence, not None")
        return [self.resolve(entry) for entry in entries]

    def resolve_summary(
        self, entries: Sequence[RawPlayerEntry]
    ) -> tuple[List[NormalizedPlayer], ResolutionSummary]:
        if entries is None:
            raise TypeError("entries must be a sequence, not None")
        summary = ResolutionSummary()
        players: List[NormalizedPlayer] = []
        for entry in entries:
            resolution = self.resolve_with_method(entry)
            summary.add(resolution)
            players.append(resolution.player)
        return players, summary

    def resolve_roster(self, roster: RawRoster, *, week: int = 1) -> NormalizedRoster:
        return NormalizedRoster(
            league_key=roster.league_key,
            team_key=roster.team_id,
            week=week,
            players=self.resolve_many(roster.players),
        )

    def resolve_parallel(
        self,
        entries: Sequence[RawPlayerEntry],
        *,
        workers: int = 1,
        chunk_size: int | None = None,
    ) -> List[NormalizedPlayer]:
        """Resolve across worker processes, preserving input order."""

        if entries is None:
            raise TypeError("entries must be a sequence, not None")
        entries = list(entries)
        if workers <= 1 or len(entries) < 2:
            return self.resolve_many(entries)

        size = chunk_size or max(1, -(-len(entries) // workers))
        chunks = [entries[start : start + size] for start in range(0, len(entries), size)]
        logger.info(
            "Resolving %s entries across %s workers (%s chunks)",
            len(entries),
            workers,
            len(chunks),
        )
        ctx = mp.get_context()
        with ctx.Pool(processes=min(workers, len(chunks))) as pool:
            results = pool.map(_resolve_chunk, [(self, chunk) for chunk in chunks])
        return [player for chunk in results for player in chunk]


def _resolve_chunk(payload: tuple[PlayerResolver, List[RawPlayerEntry]]) -> List[NormalizedPlayer]:
    resolver, chunk = payload
    return resolver.resolve_many(chunk)


def resolve_players(
    entries: Sequence[RawPlayerEntry],
    catalog: Iterable[CanonicalPlayerIdentity],
    *,
    rules: MatchingRules | None = None,
) -> List[NormalizedPlayer]:
    """Resolve one batch of entries against a fresh snapshot of ``catalog``."""

    resolver = PlayerResolver.from_catalog(catalog, rules=rules)
    if resolver.index.is_empty:
        logger.warning("Identity catalog is empty; every entry will resolve to a provisional pid")
    return resolver.resolve_many(entries)


__all__ = [
    "PlayerResolver",
    "Resolution",
    "ResolutionMethod",
    "ResolutionSummary",
    "provisional_pid",
    "resolve_players",
]
