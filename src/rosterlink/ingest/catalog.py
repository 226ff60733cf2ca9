"""Load the canonical identity catalog from JSON or CSV files."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from rosterlink.models import CanonicalPlayerIdentity


logger = logging.getLogger(__name__)

_FIELD_ALIASES = {
    "sleeperId": "sleeper_id",
    "espnId": "espn_id",
    "yahooId": "yahoo_id",
    "cbsId": "cbs_id",
}


def identities_from_records(records: Iterable[Mapping[str, Any]]) -> List[CanonicalPlayerIdentity]:
    identities: List[CanonicalPlayerIdentity] = []
    for record in records:
        data = {_FIELD_ALIASES.get(key, key): value for key, value in record.items()}
        for key in ("name", "pos", "nfl"):
            if data.get(key) is None:
                data[key] = ""
        identities.append(CanonicalPlayerIdentity.model_validate(data))
    return identities


def load_identity_catalog(path: Path) -> List[CanonicalPlayerIdentity]:
    """Read a catalog file; ``.csv`` files use a header row, anything else JSON."""

    if path.suffix.lower() == ".csv":
        with path.open(newline="", encoding="utf-8-sig") as f:
            records = list(csv.DictReader(f))
    else:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(payload, Mapping):
            payload = payload.get("players", [])
        if not isinstance(payload, list):
            raise ValueError(f"Catalog {path} must hold a list of identities")
        records = payload
    identities = identities_from_records(records)
    logger.info("Loaded %s identities from %s", len(identities), path)
    return identities
