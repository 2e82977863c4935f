"""Rock-paper-scissors meta cycle detection."""

import logging
from itertools import combinations
from typing import Sequence

from deckmeta.analysis.lineup import rank_analyses
from deckmeta.models.analysis import DeckAnalysis
from deckmeta.models.meta import MetaCycle

logger = logging.getLogger(__name__)


class MetaCycleDetector:
    """Finds triangular dominance cycles among the top major decks.

    Checks every unordered triple, so the candidate set is capped
    (20 decks -> 1140 triples).
    """

    def __init__(self, major_share: float = 3.0, max_decks: int = 20):
        self.major_share = major_share
        self.max_decks = max_decks

    @staticmethod
    def forms_cycle(a: DeckAnalysis, b: DeckAnalysis, c: DeckAnalysis) -> bool:
        """A beats B, B beats C and C beats A."""
        return a.beats(b.name) and b.beats(c.name) and c.beats(a.name)

    @staticmethod
    def cycle_strength(a: DeckAnalysis, b: DeckAnalysis, c: DeckAnalysis) -> float:
        """Combined share scaled by mean expected win rate."""
        total_share = a.share + b.share + c.share
        avg_expected = (a.expected_win_rate + b.expected_win_rate + c.expected_win_rate) / 3
        return total_share * (avg_expected / 100)

    def detect(self, analyses: Sequence[DeckAnalysis]) -> list[MetaCycle]:
        """
        Detect meta cycles.

        Args:
            analyses: Deck analyses, ranked here by expected win rate

        Returns:
            Cycles sorted by strength (strongest first)
        """
        ranked = rank_analyses(analyses)
        candidates = [a for a in ranked if a.share >= self.major_share][:self.max_decks]

        cycles = []
        for a, b, c in combinations(candidates, 3):
            if self.forms_cycle(a, b, c):
                cycles.append(MetaCycle(
                    decks=(a.name, b.name, c.name),
                    strength=self.cycle_strength(a, b, c),
                ))

        cycles.sort(key=lambda cy: cy.strength, reverse=True)

        logger.info(f"Meta cycles: {len(cycles)} found among {len(candidates)} decks")

        return cycles
