"""Frequency-to-swara mapping and swara sequence recording."""

from sur_engine.swara.mapper import SwaraMapping, Tonic, WesternNote, map_frequency
from sur_engine.swara.recorder import DetectedPitch, PitchGate, SwaraSequenceRecorder

__all__ = [
    "DetectedPitch",
    "PitchGate",
    "SwaraMapping",
    "SwaraSequenceRecorder",
    "Tonic",
    "WesternNote",
    "map_frequency",
]
