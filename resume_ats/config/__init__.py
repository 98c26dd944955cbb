"""Configuration modules."""

from .settings import (
    Settings,
    IngestionSettings,
    ParserSettings,
    ScoringSettings,
    GradeThresholds,
    get_settings,
)

__all__ = [
    "Settings",
    "IngestionSettings",
    "ParserSettings",
    "ScoringSettings",
    "GradeThresholds",
    "get_settings",
]
