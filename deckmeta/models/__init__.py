"""Data models for Deck Meta Analyzer."""

from deckmeta.models.analysis import DeckAnalysis, Lineup, MatchupEdge
from deckmeta.models.deck import Deck, MatchupTable, calculate_coverage, canonical_order
from deckmeta.models.meta import (
    CoverageStats,
    DeckComparison,
    DiversityReading,
    EnvironmentMetrics,
    MetaCycle,
    MetaPrediction,
    MetaSnapshot,
    SkillRecommendation,
    TimeSeriesPoint,
    TrendSample,
)

__all__ = [
    "Deck",
    "MatchupTable",
    "calculate_coverage",
    "canonical_order",
    "DeckAnalysis",
    "Lineup",
    "MatchupEdge",
    "CoverageStats",
    "DeckComparison",
    "DiversityReading",
    "EnvironmentMetrics",
    "MetaCycle",
    "MetaPrediction",
    "MetaSnapshot",
    "SkillRecommendation",
    "TimeSeriesPoint",
    "TrendSample",
]
