"""Raag catalog and rule-based raag matching."""

from sur_engine.raag.catalog import RaagCatalog, RaagDefinition, TimeOfDay, get_thaat
from sur_engine.raag.matcher import RaagMatch, RaagMatcher, match_raags

__all__ = [
    "RaagCatalog",
    "RaagDefinition",
    "RaagMatch",
    "RaagMatcher",
    "TimeOfDay",
    "get_thaat",
    "match_raags",
]
