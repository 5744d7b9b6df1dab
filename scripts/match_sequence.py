#!/usr/bin/env python3
"""Identify raags from a swara sequence, or from a list of frequencies.

Examples:
    python scripts/match_sequence.py Sa Re Ga Ma# Pa Dha Ni Sa
    python scripts/match_sequence.py --tonic D --octave 3 --freqs 146.83 164.81 185.0 207.65
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from sur_engine.errors import SurEngineError
from sur_engine.raag.matcher import match_raags
from sur_engine.swara.mapper import Tonic, map_frequency, strip_octave_markers


def main() -> int:
    parser = argparse.ArgumentParser(description="Identify raags from a swara sequence")
    parser.add_argument("swaras", nargs="*", help="Swara labels, e.g. Sa Re Ga Ma#")
    parser.add_argument("--freqs", nargs="+", type=float, help="Frequencies in Hz instead of labels")
    parser.add_argument("--tonic", default="C", help="Tonic pitch class (default: C)")
    parser.add_argument("--octave", type=int, default=4, help="Tonic octave (default: 4)")
    parser.add_argument("--min-confidence", type=float, default=0.4)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.freqs:
            tonic = Tonic(args.tonic, args.octave)
            sequence = []
            for freq in args.freqs:
                mapping = map_frequency(freq, tonic)
                print(f"{freq:8.2f} Hz  {mapping.western_note}{mapping.octave:<3} "
                      f"{mapping.swara_label:<6} {mapping.cent_deviation:+.1f} cents")
                sequence.append(strip_octave_markers(mapping.swara_label))
        else:
            sequence = args.swaras

        matches = match_raags(sequence, min_confidence=args.min_confidence)
    except SurEngineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if not matches:
        print("No clear raag detected. Try more swaras in sequence.")
        return 1

    for m in matches:
        print(f"{m.confidence:6.1%}  {m.raag.english_name:<18} ({m.thaat} thaat, {m.raag.time.value})  "
              f"aroha {m.aroha_sequence:.0%}  avaroha {m.avaroha_sequence:.0%}  "
              f"pakad {m.pakad_presence:.0%}  noise {m.noise_penalty:.0%}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
