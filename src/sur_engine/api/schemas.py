"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TonicIn(BaseModel):
    pitch_class: str = "C"
    octave: int = 4


class MapRequest(BaseModel):
    frequency_hz: float
    tonic: TonicIn = TonicIn()


class MatchRequest(BaseModel):
    swaras: list[str]
    strip_octave_markers: bool = False


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class SwaraMappingOut(BaseModel):
    western_note: str
    octave: int
    midi_number: int
    swara_label: str
    swara_devanagari: str
    cent_deviation: float
    saptak: int


class SwaraOut(BaseModel):
    index: int
    label: str
    devanagari: str
    western_equivalent: str
    frequency_hz: float
    is_komal: bool
    is_teevra: bool


class RaagOut(BaseModel):
    id: str
    display_name: str
    english_name: str
    thaat: str
    aroha: list[str]
    avaroha: list[str]
    pakad: list[str]
    vadi: str
    samvadi: str
    time: str
    mood: str


class RaagMatchOut(BaseModel):
    raag_id: str
    display_name: str
    english_name: str
    thaat: str
    time: str
    mood: str
    vadi: str
    samvadi: str
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
    vadi_samvadi_bonus: float
    matched_swaras: list[str]
    extra_swaras: list[str]
    total_recorded_swaras: int
    raag_swara_count: int


class MatchResponse(BaseModel):
    """Ranked raag matches for a recorded swara sequence."""

    status: str = "success"
    swaras: list[str]
    sufficient_data: bool
    matches: list[RaagMatchOut]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    raag_count: int
