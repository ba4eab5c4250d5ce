"""Pick selection over validated prop records."""

from propstradamus.models.selection import (
    ConfidenceThresholds,
    DEFAULT_THRESHOLDS,
    Headline,
    RunnerUp,
    SelectionResult,
    confidence_percent,
    filter_high_confidence,
    is_high_confidence,
    rank_by_score,
    select_picks,
)

__all__ = [
    "ConfidenceThresholds",
    "DEFAULT_THRESHOLDS",
    "Headline",
    "RunnerUp",
    "SelectionResult",
    "confidence_percent",
    "filter_high_confidence",
    "is_high_confidence",
    "rank_by_score",
    "select_picks",
]
