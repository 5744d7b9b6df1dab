"""Exception types raised by the Sur Engine."""

from __future__ import annotations


class SurEngineError(Exception):
    """Base class for all Sur Engine errors."""


class InvalidInputError(SurEngineError, ValueError):
    """A caller supplied a value the engine cannot interpret.

    Raised for non-positive or non-finite frequencies, malformed tonics
    and unknown swara labels.
    """


class ConfigurationError(SurEngineError):
    """A configuration or catalog file is missing or malformed."""
