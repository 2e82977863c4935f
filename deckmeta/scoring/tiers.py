"""Tier classification by expected win rate."""

from collections import OrderedDict
from typing import Iterable

from deckmeta.models.analysis import DeckAnalysis

TIER_ORDER = ("SS", "S", "A+", "A", "B", "C")

TIER_DESCRIPTIONS = {
    "SS": "Meta-defining",
    "S": "Top contender",
    "A+": "Best practical",
    "A": "Playable",
    "B": "Situational",
    "C": "Not recommended",
}


class TierClassifier:
    """Maps expected win rate (0-100) to a tier label."""

    # Scanned highest first; lower bounds are inclusive
    TIER_THRESHOLDS = {
        "SS": 57.0,
        "S": 55.0,
        "A+": 53.0,
        "A": 51.0,
        "B": 49.0,
    }

    def __init__(self, thresholds: dict[str, float] | None = None):
        self.thresholds = thresholds or self.TIER_THRESHOLDS

    def classify(self, expected_win_rate: float) -> str:
        """
        Assign tier based on expected win rate.

        Args:
            expected_win_rate: Expected win rate (0-100)

        Returns:
            Tier label (SS, S, A+, A, B, C)
        """
        for tier, threshold in self.thresholds.items():
            if expected_win_rate >= threshold:
                return tier
        return "C"

    @staticmethod
    def describe(tier: str) -> str:
        """Human-readable tier description."""
        return TIER_DESCRIPTIONS.get(tier, "")


def group_by_tier(analyses: Iterable[DeckAnalysis]) -> "OrderedDict[str, list[DeckAnalysis]]":
    """Group ranked analyses by tier, best tier first. Empty tiers are omitted."""
    groups: OrderedDict[str, list[DeckAnalysis]] = OrderedDict((t, []) for t in TIER_ORDER)
    for analysis in analyses:
        groups.setdefault(analysis.tier, []).append(analysis)
    return OrderedDict((t, decks) for t, decks in groups.items() if decks)
