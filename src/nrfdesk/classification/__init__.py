"""Exhibitor classification for nrf-desk.

Keyword-based country detection, category tagging and lead-candidate
scoring.
"""

from nrfdesk.classification.rules import (
    ClassificationEngine,
    TaggingRules,
    categorize,
    classify,
    detect_country_marker,
    score_candidate,
)

__all__ = [
    "ClassificationEngine",
    "TaggingRules",
    "categorize",
    "classify",
    "detect_country_marker",
    "score_candidate",
]
