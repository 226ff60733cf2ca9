"""Configuration helpers for identity matching and runtime settings."""

from .matching import (
    PLATFORM_ID_FIELDS,
    MatchingRules,
    WeightedKey,
    get_rules,
    iter_rules,
)
from .settings import Settings, load_settings

__all__ = [
    "PLATFORM_ID_FIELDS",
    "MatchingRules",
    "Settings",
    "WeightedKey",
    "get_rules",
    "iter_rules",
    "load_settings",
]
