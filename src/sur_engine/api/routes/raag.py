"""Raag endpoints — catalog reference data and sequence matching."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from sur_engine.api.schemas import MatchRequest, MatchResponse, RaagMatchOut, RaagOut
from sur_engine.errors import InvalidInputError
from sur_engine.raag.catalog import RaagDefinition
from sur_engine.raag.matcher import MIN_SEQUENCE_LENGTH
from sur_engine.swara.recorder import normalize_label

router = APIRouter()


def _raag_out(raag: RaagDefinition) -> RaagOut:
    return RaagOut(
        id=raag.id,
        display_name=raag.display_name,
        english_name=raag.english_name,
        thaat=raag.thaat,
        aroha=list(raag.aroha),
        avaroha=list(raag.avaroha),
        pakad=list(raag.pakad),
        vadi=raag.vadi,
        samvadi=raag.samvadi,
        time=raag.time.value,
        mood=raag.mood,
    )


@router.get("/raags", response_model=list[RaagOut])
async def get_raags(request: Request) -> list[RaagOut]:
    """Return every raag in the catalog, in declaration order."""
    return [_raag_out(r) for r in request.app.state.catalog]


@router.get("/raags/{raag_id}", response_model=RaagOut)
async def get_raag(raag_id: str, request: Request) -> RaagOut:
    raag = request.app.state.catalog.get(raag_id)
    if raag is None:
        raise HTTPException(404, f"Unknown raag: {raag_id}")
    return _raag_out(raag)


@router.get("/thaats")
async def get_thaats(request: Request) -> dict[str, list[str]]:
    """Return the thaats with the raags that belong to each."""
    return request.app.state.catalog.thaats()


@router.post("/match", response_model=MatchResponse)
async def match_sequence(body: MatchRequest, request: Request) -> MatchResponse:
    """Identify the raags a recorded swara sequence most resembles."""
    swaras = body.swaras
    if body.strip_octave_markers:
        try:
            swaras = [normalize_label(s, strip_octave=True) for s in swaras]
        except InvalidInputError as exc:
            raise HTTPException(400, str(exc)) from exc

    matches = request.app.state.raag_matcher.match(swaras)
    return MatchResponse(
        swaras=swaras,
        sufficient_data=len(swaras) >= MIN_SEQUENCE_LENGTH,
        matches=[
            RaagMatchOut(
                raag_id=m.raag_id,
                display_name=m.raag.display_name,
                english_name=m.raag.english_name,
                thaat=m.thaat,
                time=m.raag.time.value,
                mood=m.raag.mood,
                vadi=m.raag.vadi,
                samvadi=m.raag.samvadi,
                confidence=m.confidence,
                aroha_presence=m.aroha_presence,
                aroha_sequence=m.aroha_sequence,
                avaroha_presence=m.avaroha_presence,
                avaroha_sequence=m.avaroha_sequence,
                pakad_presence=m.pakad_presence,
                presence_confidence=m.presence_confidence,
                sequence_confidence=m.sequence_confidence,
                noise_penalty=m.noise_penalty,
                vadi_bonus=m.vadi_bonus,
                samvadi_bonus=m.samvadi_bonus,
                vadi_samvadi_bonus=m.vadi_samvadi_bonus,
                matched_swaras=list(m.matched_swaras),
                extra_swaras=list(m.extra_swaras),
                total_recorded_swaras=m.total_recorded_swaras,
                raag_swara_count=m.raag_swara_count,
            )
            for m in matches
        ],
    )
