"""Configuration — load packaged JSON configs and resolve detection settings."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from sur_engine.errors import ConfigurationError

_CONFIGS_DIR = Path(__file__).resolve().parent / "configs"


@dataclass(frozen=True)
class DetectionSettings:
    """Thresholds for the pitch gate, the recorder and the matcher."""

    tonic_pitch_class: str = "C"
    tonic_octave: int = 4
    min_clarity: float = 0.7
    min_frequency_hz: float = 60.0
    max_frequency_hz: float = 1200.0
    min_rms: float = 0.001
    debounce_ms: float = 400.0
    strip_octave_markers: bool = True
    strip_accidentals: bool = False
    min_confidence: float = 0.4


def load_config(config_name: str = "detection.json") -> dict:
    """Load a JSON config file from the packaged configs/ directory."""
    config_path = _CONFIGS_DIR / config_name
    try:
        with open(config_path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {exc}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return float(default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def load_settings(config: dict | None = None) -> DetectionSettings:
    """Resolve detection settings from environment variables (preferred) or config file.

    Args:
        config: Parsed config dict. Loaded from ``detection.json`` if None.

    Returns:
        A frozen DetectionSettings instance.
    """
    if config is None:
        config = load_config("detection.json")

    try:
        tonic = config["tonic"]
        gate = config["pitch_gate"]
        recorder = config["recorder"]
        matcher = config["matcher"]
        octave_raw = os.environ.get("SUR_TONIC_OCTAVE", tonic["octave"])
        try:
            tonic_octave = int(octave_raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"SUR_TONIC_OCTAVE must be an integer, got {octave_raw!r}"
            ) from exc

        return DetectionSettings(
            tonic_pitch_class=os.environ.get("SUR_TONIC", tonic["pitch_class"]),
            tonic_octave=tonic_octave,
            min_clarity=_env_float("SUR_MIN_CLARITY", gate["min_clarity"]),
            min_frequency_hz=float(gate["min_frequency_hz"]),
            max_frequency_hz=float(gate["max_frequency_hz"]),
            min_rms=_env_float("SUR_MIN_RMS", gate["min_rms"]),
            debounce_ms=_env_float("SUR_DEBOUNCE_MS", recorder["debounce_ms"]),
            strip_octave_markers=bool(recorder["strip_octave_markers"]),
            strip_accidentals=bool(recorder["strip_accidentals"]),
            min_confidence=_env_float("SUR_MIN_CONFIDENCE", matcher["min_confidence"]),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing config key: {exc.args[0]}") from exc
