"""Command-line interface for resolving roster CSVs and reporting exposure."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rosterlink.analytics import compute_exposure, export_exposure_to_csv
from rosterlink.config import get_rules, load_settings
from rosterlink.config_loader import MappingProfile
from rosterlink.identity import IdentityIndex, PlayerResolver, ResolutionSummary
from rosterlink.ingest import espn_rosters_to_raw, load_identity_catalog, load_roster_csv
from rosterlink.models import NormalizedPlayer, NormalizedRoster, RawRoster


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve roster CSVs to canonical players")
    parser.add_argument("rosters", type=Path, nargs="?", default=None, help="Path to roster CSV")
    parser.add_argument("--espn-view", type=Path, default=None, help="ESPN mRoster league view JSON instead of a CSV")
    parser.add_argument("--catalog", type=Path, default=None, help="Identity catalog (JSON or CSV)")
    parser.add_argument("--platform", default=None, help="Source platform (espn, yahoo, cbs, nfl, sleeper)")
    parser.add_argument("--week", type=int, default=1, help="Scoring week for the imported rosters")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First|Last)",
    )
    parser.add_argument("--rules", default="default", help="Matching rule set name")
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for resolution")
    parser.add_argument("--output", type=Path, default=None, help="Write normalized rosters JSON")
    parser.add_argument("--exposure", type=Path, default=None, help="Write exposure CSV")
    parser.add_argument("--top", type=int, default=10, help="Exposure rows to print")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)
    if (args.rosters is None) == (args.espn_view is None):
        parser.error("provide either a roster CSV or --espn-view")
    return args


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _summarize_players(players: list[NormalizedPlayer]) -> ResolutionSummary:
    # Worker processes return players only, so methods collapse to matched/provisional.
    summary = ResolutionSummary()
    for player in players:
        summary.total += 1
        if player.is_provisional:
            summary.by_method["provisional"] += 1
            if player.pid not in summary.provisional_pids:
                summary.provisional_pids.append(player.pid)
    return summary


def _load_rosters(args: argparse.Namespace, platform: str, mapping: dict[str, str]) -> list[RawRoster]:
    if args.espn_view is not None:
        view = json.loads(args.espn_view.read_text(encoding="utf-8"))
        return espn_rosters_to_raw(view)
    return load_roster_csv(args.rosters, platform, mapping=mapping or None)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    settings = load_settings()

    roster_mapping = _parse_mapping(args.column)
    platform = args.platform
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        roster_mapping = profile.roster_mapping | roster_mapping
        platform = platform or profile.platform
    platform = platform or "espn"
    if args.save_profile:
        MappingProfile(roster_mapping, platform).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    catalog_path = args.catalog or settings.catalog_path
    catalog = load_identity_catalog(catalog_path) if catalog_path else []
    if not catalog:
        print("Warning: identity catalog is empty; all players will be provisional")

    resolver = PlayerResolver(IdentityIndex(catalog, rules=get_rules(args.rules)))
    raw_rosters = _load_rosters(args, platform, roster_mapping)
    workers = args.workers if args.workers is not None else settings.resolve_workers

    # One batch for every roster so a single worker pool serves the whole run.
    entries = [entry for roster in raw_rosters for entry in roster.players]
    if workers > 1:
        players = resolver.resolve_parallel(entries, workers=workers)
        totals = _summarize_players(players)
    else:
        players, totals = resolver.resolve_summary(entries)

    normalized: list[NormalizedRoster] = []
    offset = 0
    for roster in raw_rosters:
        size = len(roster.players)
        normalized.append(
            NormalizedRoster(
                league_key=roster.league_key,
                team_key=roster.team_id,
                week=args.week,
                players=players[offset : offset + size],
            )
        )
        offset += size

    print(
        f"Resolved {totals.matched}/{totals.total} players across {len(normalized)} rosters"
    )
    if totals.provisional_pids:
        preview = ", ".join(totals.provisional_pids[:5])
        more = len(totals.provisional_pids) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Provisional identities: {preview}{suffix}")

    if args.output:
        payload = [roster.model_dump() for roster in normalized]
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote normalized rosters to {args.output}")

    rows = compute_exposure(normalized)
    if args.exposure:
        args.exposure.write_text(export_exposure_to_csv(rows), encoding="utf-8")
        print(f"Wrote exposure table to {args.exposure}")
    for row in rows[: max(0, args.top)]:
        print(f"{row.exposure * 100:5.1f}%  {row.count:>3}  {row.name} ({row.pos}, {row.nfl})  [{row.pid}]")


if __name__ == "__main__":
    main()
