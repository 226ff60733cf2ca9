"""Roster analytics (exposure aggregation, export, risk bands)."""

from .exposure import (
    ExposureTally,
    categorize_risk,
    compute_exposure,
    exposure_from_tally,
    merge_tallies,
    tally_rosters,
)
from .export import export_exposure_to_csv

__all__ = [
    "ExposureTally",
    "categorize_risk",
    "compute_exposure",
    "export_exposure_to_csv",
    "exposure_from_tally",
    "merge_tallies",
    "tally_rosters",
]
