"""Scoring modules."""

from deckmeta.scoring.confidence import ConfidenceStabilityScorer
from deckmeta.scoring.tiers import TierClassifier, group_by_tier
from deckmeta.scoring.win_rate import WinRateEngine

__all__ = [
    "WinRateEngine",
    "TierClassifier",
    "ConfidenceStabilityScorer",
    "group_by_tier",
]
