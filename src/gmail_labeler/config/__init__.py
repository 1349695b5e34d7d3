"""Label definitions and run parameters."""

from gmail_labeler.config.defaults import (
    CATCH_ALL_LABEL,
    COMPRESSION_LEVELS,
    DEFAULTS,
    PROCESSED_LABEL,
    Defaults,
)
from gmail_labeler.config.parameters import RunParameters, parse_parameters
from gmail_labeler.config.resolver import ConfigResolver
from gmail_labeler.config.store import ConfigStore, InMemoryConfigStore


def __getattr__(name):
    """Lazy import for the Google-backed store."""
    if name == "SheetsConfigStore":
        from gmail_labeler.config.sheets import SheetsConfigStore
        return SheetsConfigStore
    raise AttributeError(f"module 'gmail_labeler.config' has no attribute {name!r}")


__all__ = [
    "CATCH_ALL_LABEL",
    "COMPRESSION_LEVELS",
    "DEFAULTS",
    "PROCESSED_LABEL",
    "Defaults",
    "RunParameters",
    "parse_parameters",
    "ConfigResolver",
    "ConfigStore",
    "InMemoryConfigStore",
    "SheetsConfigStore",
]
