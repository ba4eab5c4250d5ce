"""Propstradamus daily prop pick package."""

__all__ = [
    "cli",
    "config",
    "constants",
    "exceptions",
    "ingestion",
    "normalization",
    "models",
    "pipeline",
    "presentation",
    "reporting",
    "ops",
]

__version__ = "0.1.0"
