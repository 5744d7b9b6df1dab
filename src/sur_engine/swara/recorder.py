"""Swara sequence recording — gate pitch frames and debounce them into a swara sequence."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from sur_engine.config import DetectionSettings
from sur_engine.swara.mapper import (
    Tonic,
    map_frequency,
    parse_swara_label,
    strip_accidental,
    strip_octave_markers,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectedPitch:
    """A single analysis frame from an external pitch estimator."""

    frequency_hz: float
    clarity: float
    rms_amplitude: float
    timestamp_ms: float = 0.0


def frame_rms(samples: np.ndarray) -> float:
    """Root-mean-square amplitude of an audio frame."""
    samples = np.asarray(samples, dtype=np.float64)
    if samples.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(samples * samples)))


@dataclass(frozen=True)
class PitchGate:
    """Reject frames that are too quiet, out of range, or not clearly periodic."""

    min_clarity: float = 0.7
    min_frequency_hz: float = 60.0
    max_frequency_hz: float = 1200.0
    min_rms: float = 0.001

    @classmethod
    def from_settings(cls, settings: DetectionSettings) -> PitchGate:
        return cls(
            min_clarity=settings.min_clarity,
            min_frequency_hz=settings.min_frequency_hz,
            max_frequency_hz=settings.max_frequency_hz,
            min_rms=settings.min_rms,
        )

    def accepts(self, pitch: DetectedPitch) -> bool:
        if not self.min_frequency_hz <= pitch.frequency_hz <= self.max_frequency_hz:
            return False
        if pitch.rms_amplitude < self.min_rms:
            return False
        return pitch.clarity > self.min_clarity


def normalize_label(
    label: str,
    strip_octave: bool = True,
    strip_accidentals: bool = False,
) -> str:
    """Apply the optional recorder-boundary normalizations to a swara label."""
    parse_swara_label(label)
    if strip_octave:
        label = strip_octave_markers(label)
    if strip_accidentals:
        label = strip_accidental(label)
    return label


class SwaraSequenceRecorder:
    """Collect a debounced, order-preserving swara sequence from pitch frames.

    A swara is captured when more than ``debounce_ms`` has passed since the
    previous capture and it differs from the previously captured swara, so a
    sustained note produces a single entry.

    Usage::

        recorder = SwaraSequenceRecorder(Tonic("D", 3))
        recorder.start()
        for frame in frames:
            recorder.feed(frame)
        sequence = recorder.finalize()
    """

    def __init__(
        self,
        tonic: Tonic,
        debounce_ms: float = 400.0,
        strip_octave_markers: bool = True,
        strip_accidentals: bool = False,
        gate: PitchGate | None = None,
    ):
        self.tonic = tonic
        self.debounce_ms = debounce_ms
        self.strip_octave_markers = strip_octave_markers
        self.strip_accidentals = strip_accidentals
        self.gate = gate or PitchGate()
        self._sequence: list[str] = []
        self._last_capture_ms: float | None = None
        self._recording = False

    @classmethod
    def from_settings(
        cls, settings: DetectionSettings, tonic: Tonic | None = None,
    ) -> SwaraSequenceRecorder:
        """Build a recorder from resolved detection settings."""
        if tonic is None:
            tonic = Tonic(settings.tonic_pitch_class, settings.tonic_octave)
        return cls(
            tonic,
            debounce_ms=settings.debounce_ms,
            strip_octave_markers=settings.strip_octave_markers,
            strip_accidentals=settings.strip_accidentals,
            gate=PitchGate.from_settings(settings),
        )

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def sequence(self) -> tuple[str, ...]:
        """Swaras captured so far, in order of recognition."""
        return tuple(self._sequence)

    def start(self) -> None:
        """Begin a new recording session, discarding any previous sequence."""
        self._sequence = []
        self._last_capture_ms = None
        self._recording = True

    def feed(self, pitch: DetectedPitch) -> str | None:
        """Process one pitch frame. Returns the captured swara, or None."""
        if not self._recording or not self.gate.accepts(pitch):
            return None
        mapping = map_frequency(pitch.frequency_hz, self.tonic)
        return self.add_label(mapping.swara_label, pitch.timestamp_ms)

    def add_label(self, label: str, timestamp_ms: float) -> str | None:
        """Offer an already-mapped swara label at ``timestamp_ms``."""
        if not self._recording:
            return None
        label = normalize_label(
            label,
            strip_octave=self.strip_octave_markers,
            strip_accidentals=self.strip_accidentals,
        )
        if self._sequence and label == self._sequence[-1]:
            return None
        if (
            self._last_capture_ms is not None
            and timestamp_ms - self._last_capture_ms <= self.debounce_ms
        ):
            return None

        self._sequence.append(label)
        self._last_capture_ms = timestamp_ms
        logger.debug("Captured swara %s (total %d)", label, len(self._sequence))
        return label

    def finalize(self) -> tuple[str, ...]:
        """Stop recording and return the completed sequence."""
        self._recording = False
        logger.debug("Recording finalized with %d swaras", len(self._sequence))
        return tuple(self._sequence)
