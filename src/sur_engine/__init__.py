"""Sur Engine — sargam note detection and raag identification."""

__version__ = "0.1.0"
