"""Canonical record types shared across ingestion, resolution and analytics."""

from .player import (
    PROVISIONAL_PREFIX,
    CanonicalPlayerIdentity,
    NormalizedPlayer,
    RawPlayerEntry,
)
from .roster import ExposureRow, NormalizedRoster, Platform, RawRoster

__all__ = [
    "PROVISIONAL_PREFIX",
    "CanonicalPlayerIdentity",
    "ExposureRow",
    "NormalizedPlayer",
    "NormalizedRoster",
    "Platform",
    "RawPlayerEntry",
    "RawRoster",
]
