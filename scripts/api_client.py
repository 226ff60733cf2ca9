"""Lightweight REST client for the rosterlink API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the rosterlink REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("rosters", type=Path, nargs="?", help="Roster CSV to import")
    parser.add_argument("--platform", default="espn", help="Platform that produced the CSV")
    parser.add_argument("--week", type=int, default=1, help="Scoring week")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--sleeper-league", metavar="LEAGUE_ID", help="Import a Sleeper league instead of a CSV")
    parser.add_argument("--list-rosters", action="store_true", help="List stored rosters and exit")
    parser.add_argument("--exposure-only", action="store_true", help="Print exposure for stored rosters and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_rosters:
            resp = client.get("/rosters", params={"week": args.week})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if not args.exposure_only:
            if args.sleeper_league:
                resp = client.post(
                    "/import/sleeper",
                    json={"league_id": args.sleeper_league, "week": args.week},
                )
            else:
                if args.rosters is None:
                    raise SystemExit("a roster CSV is required unless using --sleeper-league/--list-rosters")
                resp = client.post(
                    "/import/csv",
                    json={
                        "platform": args.platform,
                        "csv": args.rosters.read_text(encoding="utf-8"),
                        "week": args.week,
                        "roster_mapping": build_mapping(args.roster_mapping),
                    },
                )
            if resp.status_code >= 400:
                raise SystemExit(f"import failed ({resp.status_code}): {resp.text}")
            print("Import:", json.dumps(resp.json(), indent=2))

        resp = client.get("/exposure", params={"week": args.week})
        resp.raise_for_status()
        payload = resp.json()
        print(f"Exposure over {payload['total_slots']} roster slots")
        for row in payload["rows"][:15]:
            print(f"{row['exposure'] * 100:5.1f}%  {row['name']} ({row['pos']}, {row['nfl']})")


if __name__ == "__main__":
    main()
