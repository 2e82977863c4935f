"""Field diversity indices and environment-wide metrics."""

import logging
import math
from typing import Sequence

from deckmeta.models.analysis import DeckAnalysis
from deckmeta.models.deck import Deck, MatchupTable
from deckmeta.models.meta import DiversityReading, EnvironmentMetrics

logger = logging.getLogger(__name__)

# (minimum Simpson reading, label), scanned highest first
DIVERSITY_LABELS = (
    (80.0, "very diverse"),
    (60.0, "diverse"),
    (40.0, "moderate"),
    (20.0, "limited"),
)


def _proportions(decks: Sequence[Deck]) -> list[float]:
    """Share proportions, or [] when the field is degenerate."""
    total = sum(d.share for d in decks)
    if total <= 0 or len(decks) < 2:
        return []
    return [d.share / total for d in decks]


class DiversityMetrics:
    """Shannon and Simpson diversity over the share distribution (0-100)."""

    def shannon(self, decks: Sequence[Deck]) -> float:
        """
        Normalized Shannon entropy.

        H = -sum(p log2 p), divided by log2(n) and scaled to 0-100.
        0 for an empty, single-deck or zero-share field.
        """
        proportions = _proportions(decks)
        if not proportions:
            return 0.0

        entropy = -sum(p * math.log2(p) for p in proportions if p > 0)
        max_entropy = math.log2(len(proportions))

        return entropy / max_entropy * 100

    def simpson(self, decks: Sequence[Deck]) -> float:
        """Simpson complement (1 - sum p^2), scaled to 0-100."""
        proportions = _proportions(decks)
        if not proportions:
            return 0.0

        return (1 - sum(p * p for p in proportions)) * 100

    @staticmethod
    def label(simpson: float) -> str:
        for threshold, text in DIVERSITY_LABELS:
            if simpson >= threshold:
                return text
        return "monotonous"

    def reading(self, decks: Sequence[Deck]) -> DiversityReading:
        """Both indices plus a label."""
        simpson = self.simpson(decks)
        return DiversityReading(
            shannon=self.shannon(decks),
            simpson=simpson,
            label=self.label(simpson),
        )


def stability_index(analyses: Sequence[DeckAnalysis], matchups: MatchupTable) -> float:
    """
    How balanced matchups between top-tier decks are (0-100).

    Mean squared distance from 50% over every ordered pair of S / A+ decks,
    with unknown matchups counted as 50%. Returns 50 without such decks.
    """
    top_tier = [a for a in analyses if a.tier in ("S", "A+")]
    if not top_tier:
        return 50.0

    total_variance = 0.0
    pair_count = 0

    for first in top_tier:
        for second in top_tier:
            if first.name == second.name:
                continue
            rate = matchups.get(first.name, second.name)
            if rate is None:
                rate = 50.0
            total_variance += (rate - 50) ** 2
            pair_count += 1

    avg_variance = total_variance / pair_count if pair_count else 0.0
    return round(max(0.0, min(100.0, 100 - avg_variance / 25)), 2)


def counter_play_index(matchups: MatchupTable, decks: Sequence[str]) -> float:
    """Percentage of known matchups that are hard counters (>= 65% or <= 35%)."""
    hard_counters = 0
    total = 0

    for name in decks:
        for rate in matchups.rates_for(name).values():
            total += 1
            if rate >= 65 or rate <= 35:
                hard_counters += 1

    if total == 0:
        return 0.0
    return round(hard_counters / total * 100, 2)


def innovation_potential(analyses: Sequence[DeckAnalysis], diversity_index: float) -> float:
    """Room for new decks: low top-3 share and high diversity (0-100)."""
    top_share = sum(a.share for a in analyses[:3])
    potential = max(0.0, 100 - top_share)
    return round(min(100.0, potential + diversity_index * 0.3), 2)


def strategic_notes(metrics: EnvironmentMetrics) -> list[str]:
    """Short recommendations keyed on the environment indices."""
    notes = []

    if metrics.stability_index > 75:
        notes.append("Stable environment: favour consistent, proven decks")
    elif metrics.stability_index < 40:
        notes.append("Volatile environment: favour decks that adapt to the meta")

    if metrics.diversity_index > 70:
        notes.append("Diverse field: many decks are viable, off-meta builds are worth testing")
    elif metrics.diversity_index < 30:
        notes.append("Concentrated field: a few decks dominate, enter with an established deck")

    if metrics.counter_play_index > 60:
        notes.append("Counter-heavy: matchups are polarized, reading the meta decides games")
    elif metrics.counter_play_index < 30:
        notes.append("Skill-heavy: matchups are close, play skill matters most")

    if metrics.innovation_potential > 70:
        notes.append("Open for innovation: a good time to try new builds")
    elif metrics.innovation_potential < 30:
        notes.append("Settled meta: refine proven lists rather than inventing new ones")

    return notes


def environment_metrics(
    analyses: Sequence[DeckAnalysis],
    matchups: MatchupTable,
    diversity: DiversityMetrics | None = None,
) -> EnvironmentMetrics:
    """
    Calculate environment-wide metrics for ranked analyses.

    Args:
        analyses: Ranked deck analyses
        matchups: Matchup table
        diversity: Diversity calculator

    Returns:
        EnvironmentMetrics with notes filled in
    """
    diversity = diversity or DiversityMetrics()
    diversity_index = round(diversity.shannon([a.deck for a in analyses]), 2)

    metrics = EnvironmentMetrics(
        stability_index=stability_index(analyses, matchups),
        diversity_index=diversity_index,
        counter_play_index=counter_play_index(matchups, [a.name for a in analyses]),
        innovation_potential=innovation_potential(analyses, diversity_index),
    )
    metrics.notes = strategic_notes(metrics)

    logger.info(
        f"Environment: stability={metrics.stability_index}, "
        f"diversity={metrics.diversity_index}, "
        f"counter_play={metrics.counter_play_index}, "
        f"innovation={metrics.innovation_potential}"
    )

    return metrics
