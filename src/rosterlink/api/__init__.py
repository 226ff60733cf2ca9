"""REST API for roster import, identity resolution and exposure."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx
from fastapi import FastAPI, HTTPException, Query

from rosterlink.analytics import exposure_from_tally, tally_rosters
from rosterlink.api.schemas import (
    CsvImportRequest,
    ExposureRequest,
    ExposureResponse,
    ImportResponse,
    RostersResponse,
    SleeperImportRequest,
)
from rosterlink.config import load_settings
from rosterlink.identity import PlayerResolver, ResolutionSummary
from rosterlink.ingest import (
    SleeperClient,
    load_identity_catalog,
    parse_roster_csv,
    pull_sleeper_league,
)
from rosterlink.models import CanonicalPlayerIdentity, NormalizedRoster, RawRoster
from rosterlink.persistence import RosterStore


logger = logging.getLogger(__name__)


def _load_default_catalog() -> list[CanonicalPlayerIdentity]:
    settings = load_settings()
    path = settings.catalog_path
    if path is None:
        logger.warning("ROSTERLINK_CATALOG_PATH not set; resolving against an empty catalog")
        return []
    if not path.exists():
        logger.warning("Identity catalog %s missing; resolving against an empty catalog", path)
        return []
    return load_identity_catalog(path)


def _exposure_response(rosters: Sequence[NormalizedRoster]) -> ExposureResponse:
    tally = tally_rosters(rosters)
    return ExposureResponse(total_slots=tally.total_slots, rows=exposure_from_tally(tally))


def create_app(
    *,
    catalog: Sequence[CanonicalPlayerIdentity] | None = None,
    store: RosterStore | None = None,
    sleeper_client: SleeperClient | None = None,
) -> FastAPI:
    settings = load_settings()
    app = FastAPI(title="rosterlink")
    app.state.catalog = list(catalog) if catalog is not None else _load_default_catalog()
    app.state.roster_store = store or RosterStore(settings.db_path)
    app.state.sleeper_client = sleeper_client

    def build_resolver() -> PlayerResolver:
        # One snapshot per import batch; catalog refreshes apply to the next batch.
        resolver = PlayerResolver.from_catalog(app.state.catalog)
        if resolver.index.is_empty:
            logger.warning("Identity catalog is empty; imports will use provisional pids only")
        return resolver

    def persist(
        rosters: Sequence[RawRoster],
        *,
        week: int,
        team_names: dict[str, str] | None = None,
    ) -> ImportResponse:
        resolver = build_resolver()
        store: RosterStore = app.state.roster_store
        totals = ResolutionSummary()
        for roster in rosters:
            players, summary = resolver.resolve_summary(roster.players)
            totals.extend(summary)
            store.save_roster(
                platform=roster.platform,
                league_id=roster.league_id,
                team_id=roster.team_id,
                team_name=(team_names or {}).get(roster.team_id),
                week=week,
                players=players,
            )
        logger.info(
            "Imported %s rosters (%s players, %s matched, %s provisional)",
            len(rosters),
            totals.total,
            totals.matched,
            totals.by_method["provisional"],
        )
        return ImportResponse(
            imported=len(rosters),
            players=totals.total,
            provisional=totals.provisional_pids,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/import/csv", response_model=ImportResponse)
    def import_csv(request: CsvImportRequest) -> ImportResponse:
        try:
            rosters = parse_roster_csv(
                request.csv,
                request.platform,
                mapping=request.roster_mapping or None,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        response = persist(rosters, week=request.week)
        league_name = request.league_name
        if league_name is None and rosters:
            league_name = f"{request.platform.upper()} {rosters[0].league_id}"
        return response.model_copy(update={"league_name": league_name})

    @app.post("/import/sleeper", response_model=ImportResponse)
    def import_sleeper(request: SleeperImportRequest) -> ImportResponse:
        client = app.state.sleeper_client or SleeperClient(settings.sleeper_base_url)
        try:
            league, rosters, team_names = pull_sleeper_league(client, request.league_id)
        except httpx.HTTPStatusError as exc:
            raise HTTPException(
                status_code=502,
                detail=f"Sleeper error {exc.response.status_code}",
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise HTTPException(status_code=502, detail=f"Sleeper request failed: {exc}") from exc
        finally:
            if app.state.sleeper_client is None:
                client.close()
        response = persist(rosters, week=request.week, team_names=team_names)
        return response.model_copy(
            update={"league_name": league.get("name") or f"Sleeper {request.league_id}"}
        )

    @app.get("/rosters", response_model=RostersResponse)
    def list_rosters(week: int | None = Query(None, ge=1)) -> RostersResponse:
        store: RosterStore = app.state.roster_store
        return RostersResponse(rosters=store.list_rosters(week=week))

    @app.get("/exposure", response_model=ExposureResponse)
    def stored_exposure(week: int | None = Query(None, ge=1)) -> ExposureResponse:
        store: RosterStore = app.state.roster_store
        return _exposure_response(store.list_rosters(week=week, limit=None))

    @app.post("/exposure", response_model=ExposureResponse)
    def posted_exposure(request: ExposureRequest) -> ExposureResponse:
        return _exposure_response(request.rosters)

    return app


__all__ = ["create_app"]
