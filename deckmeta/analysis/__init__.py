"""Analysis modules."""

from deckmeta.analysis.coverage import CoverageSelector
from deckmeta.analysis.cycles import MetaCycleDetector
from deckmeta.analysis.diversity import DiversityMetrics, environment_metrics
from deckmeta.analysis.lineup import LineupRecommender
from deckmeta.analysis.matchups import MatchupProfiler
from deckmeta.analysis.meta_engine import MetaEngine
from deckmeta.analysis.trends import TrendPredictor, compare_snapshots, linear_slope
from deckmeta.models.deck import calculate_coverage

__all__ = [
    "MetaEngine",
    "CoverageSelector",
    "MatchupProfiler",
    "LineupRecommender",
    "MetaCycleDetector",
    "DiversityMetrics",
    "TrendPredictor",
    "calculate_coverage",
    "compare_snapshots",
    "environment_metrics",
    "linear_slope",
]
