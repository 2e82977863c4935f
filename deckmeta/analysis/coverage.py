"""Coverage-based deck selection."""

import logging
from typing import Sequence

from deckmeta.models.deck import Deck, calculate_coverage, canonical_order
from deckmeta.models.meta import CoverageStats

logger = logging.getLogger(__name__)


class CoverageSelector:
    """Selects the smallest top-share prefix reaching a coverage target."""

    def __init__(self, default_target: float = 80.0):
        self.default_target = default_target

    def select(
        self,
        decks: Sequence[Deck],
        target_coverage_pct: float | None = None,
    ) -> list[Deck]:
        """
        Select decks by share until the cumulative share reaches the target.

        Args:
            decks: Candidate decks in any order
            target_coverage_pct: Coverage target (0-100)

        Returns:
            Prefix of the share-sorted list, including the deck that crosses
            the target. At least one deck for non-empty input.
        """
        if not decks:
            return []

        target = self.default_target if target_coverage_pct is None else target_coverage_pct

        selected = []
        cumulative = 0.0

        for deck in canonical_order(decks):
            selected.append(deck)
            cumulative += deck.share
            if cumulative >= target:
                break

        logger.info(
            f"Coverage selection: {len(selected)} decks cover "
            f"{cumulative:.1f}% (target {target}%)"
        )

        return selected

    @staticmethod
    def stats(all_decks: Sequence[Deck], selected: Sequence[Deck]) -> CoverageStats:
        """
        Summarize a selection.

        Args:
            all_decks: Full candidate list
            selected: Selected subset

        Returns:
            CoverageStats (all percentages 0-100)
        """
        total = len(all_decks)
        count = len(selected)
        coverage = calculate_coverage(selected)

        return CoverageStats(
            total_decks=total,
            selected_decks=count,
            selected_ratio=count / total * 100 if total else 0.0,
            coverage=coverage,
            efficiency=coverage / count if count else 0.0,
        )
