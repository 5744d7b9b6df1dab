"""Swara endpoints — map a frequency to a swara, list the swaras of a tonic."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from sur_engine.api.schemas import MapRequest, SwaraMappingOut, SwaraOut
from sur_engine.errors import InvalidInputError
from sur_engine.swara.mapper import (
    KOMAL_INDICES,
    SWARA_LABELS,
    TEEVRA_INDEX,
    WESTERN_NOTES,
    Tonic,
    map_frequency,
    swara_frequency,
    to_devanagari,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _tonic(pitch_class: str, octave: int) -> Tonic:
    try:
        return Tonic(pitch_class, octave)
    except InvalidInputError as exc:
        raise HTTPException(400, str(exc)) from exc


@router.post("/map", response_model=SwaraMappingOut)
async def map_swara(body: MapRequest) -> SwaraMappingOut:
    """Map a detected frequency to a swara relative to the given tonic."""
    tonic = _tonic(body.tonic.pitch_class, body.tonic.octave)
    try:
        mapping = map_frequency(body.frequency_hz, tonic)
    except InvalidInputError as exc:
        logger.warning("Rejected frequency %r: %s", body.frequency_hz, exc)
        raise HTTPException(400, str(exc)) from exc

    return SwaraMappingOut(
        western_note=mapping.western_note,
        octave=mapping.octave,
        midi_number=mapping.midi_number,
        swara_label=mapping.swara_label,
        swara_devanagari=to_devanagari(mapping.swara_label),
        cent_deviation=mapping.cent_deviation,
        saptak=mapping.saptak,
    )


@router.get("/swaras", response_model=list[SwaraOut])
async def get_swaras(
    pitch_class: str = Query("C", description="Tonic pitch class (Sa)"),
    octave: int = Query(4, description="Tonic octave"),
) -> list[SwaraOut]:
    """Return the 12 swaras with their Western equivalents for a tonic."""
    tonic = _tonic(pitch_class, octave)
    return [
        SwaraOut(
            index=i,
            label=label,
            devanagari=to_devanagari(label),
            western_equivalent=WESTERN_NOTES[(tonic.index + i) % 12],
            frequency_hz=round(swara_frequency(i, tonic), 2),
            is_komal=i in KOMAL_INDICES,
            is_teevra=i == TEEVRA_INDEX,
        )
        for i, label in enumerate(SWARA_LABELS)
    ]
