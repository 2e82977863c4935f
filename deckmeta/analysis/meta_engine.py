"""Meta analysis orchestration."""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from deckmeta.analysis.coverage import CoverageSelector
from deckmeta.analysis.cycles import MetaCycleDetector
from deckmeta.analysis.diversity import DiversityMetrics, environment_metrics
from deckmeta.analysis.lineup import LineupRecommender, rank_analyses
from deckmeta.analysis.matchups import MatchupProfiler
from deckmeta.analysis.trends import TrendPredictor, compare_snapshots
from deckmeta.config import EngineConfig
from deckmeta.models.analysis import DeckAnalysis, Lineup
from deckmeta.models.deck import Deck, MatchupTable, calculate_coverage, canonical_order
from deckmeta.models.meta import CoverageStats, DeckComparison, MetaSnapshot, TimeSeriesPoint
from deckmeta.scoring.confidence import ConfidenceStabilityScorer
from deckmeta.scoring.tiers import TierClassifier
from deckmeta.scoring.win_rate import WinRateEngine

logger = logging.getLogger(__name__)


class MetaEngine:
    """Main orchestrator for environment-adaptive meta analysis.

    The field is put in canonical order (share descending) once, at
    construction; the caller's list is not modified.
    """

    def __init__(
        self,
        decks: Sequence[Deck],
        matchups: MatchupTable,
        config: Optional[EngineConfig] = None,
        win_rate_engine: Optional[WinRateEngine] = None,
        tier_classifier: Optional[TierClassifier] = None,
        scorer: Optional[ConfidenceStabilityScorer] = None,
        profiler: Optional[MatchupProfiler] = None,
    ):
        """
        Initialize meta engine.

        Args:
            decks: Analyzed field (any order)
            matchups: Matchup table
            config: Thresholds
            win_rate_engine: Expected win rate calculator
            tier_classifier: Tier lookup
            scorer: Confidence and stability scorer
            profiler: Matchup profiler
        """
        self.config = config or EngineConfig()
        self.field: tuple[Deck, ...] = tuple(canonical_order(decks))
        self.matchups = matchups
        # Set by from_coverage
        self.coverage_stats: Optional[CoverageStats] = None

        cfg = self.config
        self.win_rate_engine = win_rate_engine or WinRateEngine(cfg.recency_weight)
        self.tier_classifier = tier_classifier or TierClassifier()
        self.scorer = scorer or ConfidenceStabilityScorer()
        self.profiler = profiler or MatchupProfiler(
            major_share=cfg.major_share,
            strength_wr=cfg.strength_wr,
            weakness_wr=cfg.weakness_wr,
            favorable_wr=cfg.favorable_wr,
            unfavorable_wr=cfg.unfavorable_wr,
        )
        self.recommender = LineupRecommender(cfg, self.profiler)
        self.cycle_detector = MetaCycleDetector(cfg.major_share, cfg.cycle_max_decks)
        self.diversity = DiversityMetrics()
        self.trend_predictor = TrendPredictor(
            slope_threshold=cfg.trend_slope,
            rising_min_share=cfg.rising_min_share,
            declining_min_share=cfg.declining_min_share,
            limit=cfg.trend_limit,
        )

        if not self.field:
            logger.warning("Empty field, analyses will be empty")

    @classmethod
    def from_coverage(
        cls,
        decks: Sequence[Deck],
        matchups: MatchupTable,
        target_coverage_pct: Optional[float] = None,
        config: Optional[EngineConfig] = None,
    ) -> "MetaEngine":
        """Create an engine over the decks that reach the coverage target."""
        config = config or EngineConfig()
        selector = CoverageSelector(config.default_coverage)
        selected = selector.select(decks, target_coverage_pct)

        stats = selector.stats(decks, selected)
        logger.info(
            f"Coverage stats: selected_ratio={stats.selected_ratio:.1f}% "
            f"({stats.selected_decks}/{stats.total_decks} decks), "
            f"coverage={stats.coverage:.1f}%, efficiency={stats.efficiency:.1f}"
        )

        engine = cls(selected, matchups, config=config)
        engine.coverage_stats = stats
        return engine

    @property
    def coverage(self) -> float:
        """Cumulative share of the analyzed field (0-100)."""
        return calculate_coverage(self.field)

    def analyze_deck(self, deck: Deck, major_decks: Sequence[Deck]) -> DeckAnalysis:
        """
        Build the full analysis for one deck.

        Args:
            deck: Deck in the field
            major_decks: Field decks used for strengths/weaknesses

        Returns:
            DeckAnalysis
        """
        expected = self.win_rate_engine.expected_win_rate(deck.name, self.field, self.matchups)
        strengths, weaknesses = self.profiler.profile(deck.name, self.matchups, major_decks)

        return DeckAnalysis(
            deck=deck,
            expected_win_rate=expected,
            tier=self.tier_classifier.classify(expected),
            confidence_level=self.scorer.confidence(deck),
            stability=self.scorer.stability(deck.name, self.matchups),
            meta_score=self.win_rate_engine.weighted_meta_score(
                deck.name, self.field, self.matchups
            ),
            strengths=strengths,
            weaknesses=weaknesses,
        )

    def analyze_all_decks(self) -> list[DeckAnalysis]:
        """
        Analyze every deck in the field.

        Returns:
            Analyses ranked by expected win rate, ties in canonical order
        """
        major_decks = self.profiler.major_decks(self.field)

        missing = [d.name for d in self.field if not self.matchups.has_data(d.name)]
        if missing:
            logger.warning(
                f"No matchup data for {len(missing)} decks, "
                f"using aggregate win rate: {', '.join(missing[:5])}"
            )

        analyses = [self.analyze_deck(deck, major_decks) for deck in self.field]
        ranked = rank_analyses(analyses)

        logger.info(f"Analyzed {len(ranked)} decks ({self.coverage:.1f}% coverage)")

        return ranked

    def recommend_lineup(self) -> Optional[Lineup]:
        """Recommend a tournament lineup for the field."""
        return self.recommender.recommend_lineup(self.analyze_all_decks(), self.matchups)

    def compare(self, previous: Sequence[Deck]) -> list[DeckComparison]:
        """Change of each analyzed deck since a previous field."""
        return compare_snapshots(self.field, previous, self.config.comparison_share_delta)

    def analyze(
        self,
        history: Optional[Sequence[TimeSeriesPoint]] = None,
        timestamp: Optional[datetime] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> MetaSnapshot:
        """
        Run the complete meta analysis.

        Args:
            history: Optional snapshots (oldest first) for trend prediction
            timestamp: Snapshot time (defaults to now)
            progress_callback: Optional callback(step, total, message)

        Returns:
            Complete MetaSnapshot
        """
        total_steps = 5
        if history is not None:
            total_steps += 1

        def report_progress(step: int, message: str):
            if progress_callback:
                progress_callback(step, total_steps, message)
            logger.info(f"[{step}/{total_steps}] {message}")

        # Step 1: Per-deck scoring
        report_progress(1, f"Scoring {len(self.field)} decks")
        analyses = self.analyze_all_decks()

        # Step 2: Lineup
        report_progress(2, "Recommending tournament lineup")
        lineup = self.recommender.recommend_lineup(analyses, self.matchups)
        hidden_gems = self.recommender.find_hidden_gems(analyses)
        skill_recommendation = self.recommender.recommend_by_skill(analyses)

        # Step 3: Meta cycles
        report_progress(3, "Detecting meta cycles")
        cycles = self.cycle_detector.detect(analyses)

        # Step 4: Diversity
        report_progress(4, "Calculating diversity")
        diversity = self.diversity.reading([a.deck for a in analyses])

        # Step 5: Environment metrics
        report_progress(5, "Calculating environment metrics")
        environment = environment_metrics(analyses, self.matchups, self.diversity)

        snapshot = MetaSnapshot(
            timestamp=timestamp or datetime.now(),
            analyses=analyses,
            lineup=lineup,
            cycles=cycles,
            diversity=diversity,
            environment=environment,
            hidden_gems=hidden_gems,
            skill_recommendation=skill_recommendation,
            coverage=self.coverage,
            coverage_stats=self.coverage_stats,
            deck_count=len(self.field),
            matchup_count=sum(len(self.matchups.rates_for(d.name)) for d in self.field),
        )

        # Step 6: Trends (optional)
        if history is not None:
            report_progress(6, f"Predicting trends over {len(history)} snapshots")
            snapshot.prediction = self.trend_predictor.predict(history)

        logger.info(
            f"Analysis complete: {snapshot.deck_count} decks, "
            f"{len(cycles)} cycles, {len(hidden_gems)} hidden gems"
        )

        return snapshot
