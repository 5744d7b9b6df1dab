"""Rule-based raag identification — score a swara sequence against the raag catalog."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sur_engine.raag.catalog import RaagCatalog, RaagDefinition, default_catalog

logger = logging.getLogger(__name__)

MIN_SEQUENCE_LENGTH = 3
DEFAULT_MIN_CONFIDENCE = 0.4

# Presence weights (aroha, avaroha, pakad)
_PRESENCE_WEIGHTS = (0.3, 0.3, 0.2)
# Sequence weights (aroha, avaroha, pakad presence as its ordering proxy)
_SEQUENCE_WEIGHTS = (0.4, 0.4, 0.2)
_PRESENCE_SHARE = 0.4
_SEQUENCE_SHARE = 0.6
_VADI_WEIGHT = 0.2
_SAMVADI_WEIGHT = 0.1


@dataclass(frozen=True)
class PatternScore:
    """Presence and ordering scores of one pattern, each normalized to 0..1."""

    presence: float
    sequence: float


@dataclass(frozen=True)
class RaagMatch:
    """A candidate raag with its confidence and full score breakdown."""

    raag: RaagDefinition
    confidence: float
    aroha_presence: float
    aroha_sequence: float
    avaroha_presence: float
    avaroha_sequence: float
    pakad_presence: float
    presence_confidence: float
    sequence_confidence: float
    noise_penalty: float
    vadi_bonus: float
    samvadi_bonus: float
    matched_swaras: tuple[str, ...]
    extra_swaras: tuple[str, ...]
    total_recorded_swaras: int
    raag_swara_count: int

    @property
    def raag_id(self) -> str:
        return self.raag.id

    @property
    def vadi_samvadi_bonus(self) -> float:
        return self.vadi_bonus + self.samvadi_bonus

    @property
    def thaat(self) -> str:
        return self.raag.thaat


def _occurrences(sequence: Sequence[str]) -> dict[str, list[int]]:
    """Map each recorded swara to the indices where it occurs, in order."""
    positions: dict[str, list[int]] = {}
    for i, swara in enumerate(sequence):
        positions.setdefault(swara, []).append(i)
    return positions


def score_pattern(
    pattern: Sequence[str], occurrences: dict[str, list[int]],
) -> PatternScore:
    """Score how much of ``pattern`` was recorded, and in what order.

    A pattern position is *present* when its swara occurs anywhere in the
    recording. It is *in sequence* when present and either it is the first
    position or its recorded index is greater than that of the previous
    pattern position (-1 if the previous swara was never recorded).

    The recorded index of a swara is its first occurrence. A swara repeated
    within the pattern (the closing Sa of an aroha) uses its k-th occurrence
    on its k-th appearance, falling back to the first occurrence.
    """
    if not pattern:
        return PatternScore(presence=0.0, sequence=0.0)

    seen_in_pattern: dict[str, int] = {}
    present = 0
    in_sequence = 0
    previous_index = -1

    for i, swara in enumerate(pattern):
        nth = seen_in_pattern.get(swara, 0)
        seen_in_pattern[swara] = nth + 1

        recorded = occurrences.get(swara)
        if not recorded:
            previous_index = -1
            continue

        index = recorded[nth] if nth < len(recorded) else recorded[0]
        present += 1
        if i == 0 or index > previous_index:
            in_sequence += 1
        previous_index = index

    return PatternScore(
        presence=present / len(pattern),
        sequence=in_sequence / len(pattern),
    )


def score_raag(sequence: Sequence[str], raag: RaagDefinition) -> RaagMatch:
    """Score one raag against a recorded swara sequence, without thresholding.

    ``sequence`` must be non-empty.
    """
    total = len(sequence)
    occurrences = _occurrences(sequence)

    aroha = score_pattern(raag.aroha, occurrences)
    avaroha = score_pattern(raag.avaroha, occurrences)
    pakad = score_pattern(raag.pakad, occurrences).presence

    raag_swaras = raag.swara_set
    matched = tuple(s for s in sequence if s in raag_swaras)
    extra = tuple(s for s in sequence if s not in raag_swaras)
    noise_penalty = max(0.0, 1 - len(extra) / total)

    vadi_bonus = len(occurrences.get(raag.vadi, ())) / total * _VADI_WEIGHT
    samvadi_bonus = len(occurrences.get(raag.samvadi, ())) / total * _SAMVADI_WEIGHT

    presence_confidence = (
        _PRESENCE_WEIGHTS[0] * aroha.presence
        + _PRESENCE_WEIGHTS[1] * avaroha.presence
        + _PRESENCE_WEIGHTS[2] * pakad
    )
    sequence_confidence = (
        _SEQUENCE_WEIGHTS[0] * aroha.sequence
        + _SEQUENCE_WEIGHTS[1] * avaroha.sequence
        + _SEQUENCE_WEIGHTS[2] * pakad
    )
    confidence = (
        (_PRESENCE_SHARE * presence_confidence + _SEQUENCE_SHARE * sequence_confidence)
        * noise_penalty
        + vadi_bonus
        + samvadi_bonus
    )

    return RaagMatch(
        raag=raag,
        confidence=confidence,
        aroha_presence=aroha.presence,
        aroha_sequence=aroha.sequence,
        avaroha_presence=avaroha.presence,
        avaroha_sequence=avaroha.sequence,
        pakad_presence=pakad,
        presence_confidence=presence_confidence,
        sequence_confidence=sequence_confidence,
        noise_penalty=noise_penalty,
        vadi_bonus=vadi_bonus,
        samvadi_bonus=samvadi_bonus,
        matched_swaras=matched,
        extra_swaras=extra,
        total_recorded_swaras=total,
        raag_swara_count=len(raag.aroha),
    )


def match_raags(
    sequence: Sequence[str],
    catalog: RaagCatalog | None = None,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> list[RaagMatch]:
    """Rank the raags a recorded swara sequence most resembles.

    Args:
        sequence: Swaras in the order they were recognized. Octave markers
            are compared literally, so normalize before calling if needed.
        catalog: Raags to score against (the packaged catalog if None).
        min_confidence: Matches below this confidence are dropped.

    Returns:
        Matches sorted by confidence (highest first); ties keep catalog
        order. Empty when the sequence has fewer than three swaras or no
        raag reaches ``min_confidence``.
    """
    if len(sequence) < MIN_SEQUENCE_LENGTH:
        return []
    if catalog is None:
        catalog = default_catalog()

    sequence = tuple(sequence)
    matches = [score_raag(sequence, raag) for raag in catalog]
    kept = [m for m in matches if m.confidence >= min_confidence]
    kept.sort(key=lambda m: m.confidence, reverse=True)

    logger.debug(
        "Scored %d swaras against %d raags: %d above %.2f",
        len(sequence), len(catalog), len(kept), min_confidence,
    )
    return kept


class RaagMatcher:
    """Raag identification bound to one catalog and confidence threshold."""

    def __init__(
        self,
        catalog: RaagCatalog | None = None,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.min_confidence = min_confidence

    def match(self, sequence: Sequence[str]) -> list[RaagMatch]:
        """Return ranked raag matches for ``sequence``."""
        return match_raags(sequence, self.catalog, self.min_confidence)

    def best_match(self, sequence: Sequence[str]) -> RaagMatch | None:
        """Return the highest-confidence match, or None if no raag qualifies."""
        matches = self.match(sequence)
        return matches[0] if matches else None
