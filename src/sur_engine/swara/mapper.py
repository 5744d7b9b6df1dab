"""Swara mapping — convert frequencies to Western notes and tonic-relative sargam swaras."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sur_engine.errors import InvalidInputError

A4_HZ = 440.0
A4_MIDI = 69

# Western note names in chromatic order
WESTERN_NOTES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_FLAT_SPELLINGS = {"Db": "C#", "Eb": "D#", "Gb": "F#", "Ab": "G#", "Bb": "A#"}

# Natural swara names, indexed by semitones above Sa
_SWARA_NAMES = ["Sa", "Re", "Re", "Ga", "Ga", "Ma", "Ma", "Pa", "Dha", "Dha", "Ni", "Ni"]

KOMAL_MARK = "♭"  # flat sign
TEEVRA_MA = "Ma#"
OCTAVE_MARK = "*"

KOMAL_INDICES = frozenset({1, 3, 8, 10})  # Re, Ga, Dha, Ni
TEEVRA_INDEX = 6


def swara_for_index(index: int) -> str:
    """Return the swara label for a chromatic position (0-11) above Sa."""
    if not 0 <= index < 12:
        raise InvalidInputError(f"Swara index must be in 0..11, got {index}")
    if index == TEEVRA_INDEX:
        return TEEVRA_MA
    name = _SWARA_NAMES[index]
    if index in KOMAL_INDICES:
        return KOMAL_MARK + name
    return name


# The 12-symbol alphabet: Sa, ♭Re, Re, ♭Ga, Ga, Ma, Ma#, Pa, ♭Dha, Dha, ♭Ni, Ni
SWARA_LABELS = [swara_for_index(i) for i in range(12)]
SWARA_INDEX = {label: i for i, label in enumerate(SWARA_LABELS)}

_DEVANAGARI = {
    "Sa": "सा", "Re": "रे", "Ga": "ग", "Ma": "म", "Pa": "प", "Dha": "ध", "Ni": "नि",
}


@dataclass(frozen=True)
class Tonic:
    """The pitch class and octave that define Sa."""

    pitch_class: str = "C"
    octave: int = 4

    def __post_init__(self):
        pitch_class = _FLAT_SPELLINGS.get(self.pitch_class, self.pitch_class)
        if pitch_class not in WESTERN_NOTES:
            raise InvalidInputError(f"Unknown tonic pitch class: {self.pitch_class!r}")
        if isinstance(self.octave, bool) or not isinstance(self.octave, int):
            raise InvalidInputError(f"Tonic octave must be an integer, got {self.octave!r}")
        object.__setattr__(self, "pitch_class", pitch_class)

    @property
    def index(self) -> int:
        return WESTERN_NOTES.index(self.pitch_class)

    @property
    def midi_number(self) -> int:
        """MIDI number of Sa in the tonic's own octave (C4 = 60)."""
        return self.octave * 12 + self.index + 12


@dataclass(frozen=True)
class WesternNote:
    """A Western musical note."""

    name: str
    octave: int
    midi_number: int
    frequency_hz: float
    cents_deviation: float  # deviation from exact tempered pitch


@dataclass(frozen=True)
class SwaraMapping:
    """Result of mapping a frequency onto the sargam relative to a tonic.

    Attributes:
        western_note: Nearest equal-tempered note name (e.g. "F#").
        octave: Western octave number of that note.
        midi_number: Nearest MIDI note number.
        swara_label: Swara with octave-wrap markers (e.g. "Ma#", "*Ni", "Sa*").
        cent_deviation: Cents away from the tempered pitch, unrounded.
        saptak: Octaves above (+) or below (-) the tonic's octave.
    """

    western_note: str
    octave: int
    midi_number: int
    swara_label: str
    cent_deviation: float
    saptak: int

    @property
    def base_swara(self) -> str:
        """The swara label without octave-wrap markers."""
        return strip_octave_markers(self.swara_label)


def _check_frequency(freq_hz: float) -> None:
    try:
        value = float(freq_hz)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Frequency must be a number, got {freq_hz!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"Frequency must be a positive finite number, got {freq_hz}")


def freq_to_midi(freq_hz: float) -> int:
    """Return the nearest MIDI note number for a frequency."""
    _check_frequency(freq_hz)
    # Halves round up
    return math.floor(12 * math.log2(freq_hz / A4_HZ) + A4_MIDI + 0.5)


def ideal_frequency(midi_number: int) -> float:
    """Equal-tempered frequency of a MIDI note (A4 = 440 Hz)."""
    return A4_HZ * 2 ** ((midi_number - A4_MIDI) / 12)


def calculate_cent_deviation(freq_hz: float, midi_number: int) -> float:
    """Cents between a frequency and the tempered pitch of ``midi_number``.

    Positive means sharp, negative means flat.
    """
    _check_frequency(freq_hz)
    return 1200 * math.log2(freq_hz / ideal_frequency(midi_number))


def freq_to_western(freq_hz: float) -> WesternNote:
    """Convert a frequency to the nearest Western note.

    Args:
        freq_hz: Frequency in Hz.

    Returns:
        WesternNote with name, octave, MIDI number and cents deviation.

    Raises:
        InvalidInputError: If the frequency is not a positive finite number.
    """
    midi_number = freq_to_midi(freq_hz)
    return WesternNote(
        name=WESTERN_NOTES[midi_number % 12],
        octave=(midi_number // 12) - 1,
        midi_number=midi_number,
        frequency_hz=freq_hz,
        cents_deviation=calculate_cent_deviation(freq_hz, midi_number),
    )


def octave_marked(label: str, saptak: int) -> str:
    """Attach one octave marker per octave: prefixed below the tonic, suffixed above."""
    if saptak < 0:
        return OCTAVE_MARK * -saptak + label
    if saptak > 0:
        return label + OCTAVE_MARK * saptak
    return label


def map_frequency(freq_hz: float, tonic: Tonic) -> SwaraMapping:
    """Map a detected frequency to a swara relative to ``tonic``.

    Args:
        freq_hz: Detected frequency in Hz. Callers filter by clarity and
            amplitude before calling.
        tonic: The Sa reference (pitch class and base octave).

    Returns:
        SwaraMapping with Western and sargam views of the pitch.

    Raises:
        InvalidInputError: If the frequency is not a positive finite number.
    """
    note = freq_to_western(freq_hz)
    note_index = note.midi_number % 12

    swara_index = (note_index - tonic.index + 12) % 12
    saptak = (note.midi_number - tonic.midi_number) // 12

    return SwaraMapping(
        western_note=note.name,
        octave=note.octave,
        midi_number=note.midi_number,
        swara_label=octave_marked(swara_for_index(swara_index), saptak),
        cent_deviation=note.cents_deviation,
        saptak=saptak,
    )


def parse_swara_label(label: str) -> tuple[str, int]:
    """Split a marked label into (base swara, saptak).

    ``"*Ni"`` -> ``("Ni", -1)``, ``"Ga**"`` -> ``("Ga", 2)``.
    """
    stripped = label.lstrip(OCTAVE_MARK)
    below = len(label) - len(stripped)
    base = stripped.rstrip(OCTAVE_MARK)
    above = len(stripped) - len(base)
    if below and above:
        raise InvalidInputError(f"Swara label has markers on both sides: {label!r}")
    if base not in SWARA_INDEX:
        raise InvalidInputError(f"Unknown swara: {label!r}")
    return base, above - below


def strip_octave_markers(label: str) -> str:
    """Remove octave-wrap markers from a label, leaving the base swara."""
    return label.strip(OCTAVE_MARK)


def strip_accidental(label: str) -> str:
    """Remove komal/teevra marking, keeping any octave markers (``"♭Re*"`` -> ``"Re*"``)."""
    return label.replace(KOMAL_MARK, "").replace(TEEVRA_MA, "Ma")


def to_devanagari(label: str) -> str:
    """Render a swara label in Devanagari, keeping komal and octave markers."""
    base, saptak = parse_swara_label(label)
    if base == TEEVRA_MA:
        text = _DEVANAGARI["Ma"] + "#"
    elif base.startswith(KOMAL_MARK):
        text = KOMAL_MARK + _DEVANAGARI[base[1:]]
    else:
        text = _DEVANAGARI[base]
    return octave_marked(text, saptak)


def tonic_frequency(tonic: Tonic) -> float:
    """Frequency of Sa for the given tonic."""
    return ideal_frequency(tonic.midi_number)


def swara_frequency(index: int, tonic: Tonic, saptak: int = 0) -> float:
    """Equal-tempered frequency of the swara at ``index`` above the tonic."""
    swara_for_index(index)
    return ideal_frequency(tonic.midi_number + index + 12 * saptak)


def perfect_fifth(pitch_class: str) -> str:
    """Western pitch class a perfect fifth above ``pitch_class`` (Pa for a given Sa)."""
    return WESTERN_NOTES[(Tonic(pitch_class).index + 7) % 12]
