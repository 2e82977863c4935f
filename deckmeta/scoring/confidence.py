"""Sample-size confidence and matchup stability scores."""

import statistics

from deckmeta.models.deck import Deck, MatchupTable


class ConfidenceStabilityScorer:
    """Scores how much to trust a deck's numbers (both 0-1)."""

    # (minimum games, confidence), scanned highest first
    CONFIDENCE_BANDS = (
        (1000, 1.0),
        (500, 0.9),
        (200, 0.8),
        (100, 0.7),
        (50, 0.6),
    )
    MIN_CONFIDENCE = 0.5

    # Std-dev (percentage points) at which stability reaches zero
    STABILITY_SPREAD = 20.0
    NEUTRAL_STABILITY = 0.5

    def confidence(self, deck: Deck) -> float:
        """
        Confidence from sample size, in discrete bands.

        Args:
            deck: Deck with win/loss/tie counts

        Returns:
            Confidence level (0.5-1.0)
        """
        games = deck.sample_size
        for min_games, level in self.CONFIDENCE_BANDS:
            if games >= min_games:
                return level
        return self.MIN_CONFIDENCE

    def stability(self, deck_name: str, matchups: MatchupTable) -> float:
        """
        Stability from the spread of a deck's known matchup rates.

        Uses the population standard deviation of every known rate for the
        deck: 1 - stddev/20, clamped to [0, 1]. No data gives 0.5.
        """
        rates = list(matchups.rates_for(deck_name).values())
        if not rates:
            return self.NEUTRAL_STABILITY

        std_dev = statistics.pstdev(rates)
        return max(0.0, min(1.0, 1 - std_dev / self.STABILITY_SPREAD))
