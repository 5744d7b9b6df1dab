"""Raag catalog — Hindustani raag definitions grouped by thaat."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sur_engine.errors import ConfigurationError
from sur_engine.swara.mapper import SWARA_INDEX

logger = logging.getLogger(__name__)

_CONFIGS_DIR = Path(__file__).resolve().parents[1] / "configs"

_REQUIRED_FIELDS = (
    "id", "display_name", "english_name", "thaat",
    "aroha", "avaroha", "pakad", "vadi", "samvadi", "time", "mood",
)

UNKNOWN_THAAT = "Unknown"


class TimeOfDay(Enum):
    """Prahar in which a raag is traditionally performed."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"


@dataclass(frozen=True)
class RaagDefinition:
    """A raag with its melodic patterns and descriptive metadata.

    Patterns are written in the base octave, without octave markers.
    """

    id: str
    display_name: str
    english_name: str
    aroha: tuple[str, ...]
    avaroha: tuple[str, ...]
    pakad: tuple[str, ...]
    vadi: str
    samvadi: str
    time: TimeOfDay
    mood: str
    thaat: str

    @property
    def swara_set(self) -> frozenset[str]:
        """Every swara used in the aroha, avaroha or pakad."""
        return frozenset(self.aroha) | frozenset(self.avaroha) | frozenset(self.pakad)


class RaagCatalog:
    """An ordered, read-only collection of raag definitions."""

    def __init__(self, definitions: Iterable[RaagDefinition]):
        self._raags: tuple[RaagDefinition, ...] = tuple(definitions)
        self._by_id: dict[str, RaagDefinition] = {}
        for raag in self._raags:
            if raag.id in self._by_id:
                raise ConfigurationError(f"Duplicate raag id: {raag.id!r}")
            self._by_id[raag.id] = raag

    def __len__(self) -> int:
        return len(self._raags)

    def __iter__(self) -> Iterator[RaagDefinition]:
        return iter(self._raags)

    def __contains__(self, raag_id: object) -> bool:
        return raag_id in self._by_id

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self._raags]

    def get(self, raag_id: str) -> RaagDefinition | None:
        """Look up a raag by id or English name (case-insensitive)."""
        if raag_id in self._by_id:
            return self._by_id[raag_id]
        name_lower = raag_id.lower()
        for raag in self._raags:
            if raag.id.lower() == name_lower or raag.english_name.lower() == name_lower:
                return raag
        return None

    def get_thaat(self, raag_id: str) -> str:
        """Return the parent thaat of a raag, or "Unknown" for an unknown id."""
        raag = self._by_id.get(raag_id)
        return raag.thaat if raag else UNKNOWN_THAAT

    def thaats(self) -> dict[str, list[str]]:
        """Map each thaat to its raag ids, both in declaration order."""
        groups: dict[str, list[str]] = {}
        for raag in self._raags:
            groups.setdefault(raag.thaat, []).append(raag.id)
        return groups

    def by_thaat(self, thaat: str) -> list[RaagDefinition]:
        thaat_lower = thaat.lower()
        return [r for r in self._raags if r.thaat.lower() == thaat_lower]

    def by_time(self, time: TimeOfDay) -> list[RaagDefinition]:
        return [r for r in self._raags if r.time == time]


def _check_swara(value: object, raag_id: str, field_name: str) -> str:
    if not isinstance(value, str) or value not in SWARA_INDEX:
        raise ConfigurationError(
            f"Raag {raag_id!r}: invalid swara {value!r} in {field_name}"
        )
    return value


def _check_pattern(value: object, raag_id: str, field_name: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not value:
        raise ConfigurationError(f"Raag {raag_id!r}: {field_name} must be a non-empty list")
    return tuple(_check_swara(s, raag_id, field_name) for s in value)


def parse_raag(entry: dict) -> RaagDefinition:
    """Validate one catalog entry and build its RaagDefinition.

    Raises:
        ConfigurationError: If a field is missing or holds an invalid value.
    """
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Raag entry must be an object, got {type(entry).__name__}")
    missing = [name for name in _REQUIRED_FIELDS if name not in entry]
    if missing:
        raag_id = entry.get("id", "<unnamed>")
        raise ConfigurationError(f"Raag {raag_id!r} is missing fields: {', '.join(missing)}")

    raag_id = entry["id"]
    try:
        time = TimeOfDay(entry["time"])
    except ValueError as exc:
        raise ConfigurationError(
            f"Raag {raag_id!r}: unknown time of day {entry['time']!r}"
        ) from exc

    return RaagDefinition(
        id=raag_id,
        display_name=entry["display_name"],
        english_name=entry["english_name"],
        aroha=_check_pattern(entry["aroha"], raag_id, "aroha"),
        avaroha=_check_pattern(entry["avaroha"], raag_id, "avaroha"),
        pakad=_check_pattern(entry["pakad"], raag_id, "pakad"),
        vadi=_check_swara(entry["vadi"], raag_id, "vadi"),
        samvadi=_check_swara(entry["samvadi"], raag_id, "samvadi"),
        time=time,
        mood=entry["mood"],
        thaat=entry["thaat"],
    )


def load_catalog(path: str | Path | None = None) -> RaagCatalog:
    """Load a raag catalog from JSON (the packaged ``raags.json`` by default)."""
    path = Path(path) if path else _CONFIGS_DIR / "raags.json"
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Raag catalog not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in raag catalog {path}: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("raags"), list):
        raise ConfigurationError(f"Raag catalog {path} must contain a 'raags' list")

    catalog = RaagCatalog(parse_raag(entry) for entry in data["raags"])
    logger.info("Loaded %d raags from %s", len(catalog), path.name)
    return catalog


# Cache for the packaged catalog
_DEFAULT_CATALOG: RaagCatalog | None = None


def default_catalog() -> RaagCatalog:
    """Return the packaged catalog, loading it on first use."""
    global _DEFAULT_CATALOG  # noqa: PLW0603
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = load_catalog()
    return _DEFAULT_CATALOG


def get_thaat(raag_id: str) -> str:
    """Return the thaat of a raag in the packaged catalog."""
    return default_catalog().get_thaat(raag_id)
