"""Cross-league player exposure over normalized rosters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Sequence

from rosterlink.models import ExposureRow, NormalizedPlayer, NormalizedRoster


RiskBand = Literal["high", "medium", "low"]


@dataclass
class ExposureTally:
    """Per-pid slot counts; tallies from separate shards merge by summation."""

    counts: Dict[str, int] = field(default_factory=dict)
    players: Dict[str, NormalizedPlayer] = field(default_factory=dict)
    total_slots: int = 0

    def add(self, player: NormalizedPlayer) -> None:
        self.total_slots += 1
        self.players.setdefault(player.pid, player)
        self.counts[player.pid] = self.counts.get(player.pid, 0) + 1


def tally_rosters(rosters: Iterable[NormalizedRoster]) -> ExposureTally:
    if rosters is None:
        raise TypeError("rosters must be a sequence, not None")
    tally = ExposureTally()
    for roster in rosters:
        for player in roster.players:
            tally.add(player)
    return tally


def merge_tallies(tallies: Iterable[ExposureTally]) -> ExposureTally:
    merged = ExposureTally()
    for tally in tallies:
        merged.total_slots += tally.total_slots
        for pid, count in tally.counts.items():
            merged.players.setdefault(pid, tally.players[pid])
            merged.counts[pid] = merged.counts.get(pid, 0) + count
    return merged


def exposure_from_tally(tally: ExposureTally) -> List[ExposureRow]:
    total = tally.total_slots
    if total == 0:
        return []
    rows = [
        ExposureRow(
            pid=pid,
            name=tally.players[pid].name,
            pos=tally.players[pid].pos,
            nfl=tally.players[pid].nfl,
            count=count,
            exposure=count / total,
        )
        for pid, count in tally.counts.items()
    ]
    # sorted() is stable, so ties keep first-seen order.
    return sorted(rows, key=lambda row: -row.exposure)


def compute_exposure(rosters: Sequence[NormalizedRoster]) -> List[ExposureRow]:
    """Share of all roster slots held by each player, highest first.

    The denominator is the total number of player slots across every roster,
    and a player listed twice on one roster counts twice.
    """

    return exposure_from_tally(tally_rosters(rosters))


def categorize_risk(volatility_std: float) -> RiskBand:
    if volatility_std >= 8:
        return "high"
    if volatility_std >= 4:
        return "medium"
    return "low"
