"""Share-weighted expected win rate against the analyzed field."""

import logging
from typing import Optional, Sequence

from deckmeta.models.deck import Deck, MatchupTable, calculate_coverage

logger = logging.getLogger(__name__)


def find_deck(name: str, field: Sequence[Deck]) -> Optional[Deck]:
    """First deck in the field with the given name."""
    return next((d for d in field if d.name == name), None)


class WinRateEngine:
    """Computes environment-adaptive expected win rates.

    The expected win rate of deck D is the mean of D's win rate against
    every other deck in the field, weighted by the opponent's share. The part
    of the real-world field that is not analyzed (100 - coverage) is treated
    as a generic opponent against which D performs at its aggregate rate.
    """

    def __init__(self, recency_weight: float = 1.0):
        """
        Initialize engine.

        Args:
            recency_weight: Fixed recency factor for ``weighted_meta_score``
        """
        self.recency_weight = recency_weight

    def expected_win_rate(
        self,
        deck_name: str,
        field: Sequence[Deck],
        matchups: MatchupTable,
    ) -> float:
        """
        Calculate expected win rate (0-100) for a deck.

        Args:
            deck_name: Deck to evaluate
            field: Analyzed decks in canonical order
            matchups: Matchup table

        Returns:
            Share-weighted expected win rate.
            Returns 0.0 for a deck not in the field.
        """
        deck = find_deck(deck_name, field)
        if deck is None:
            logger.debug(f"{deck_name} not in field, expected win rate is 0")
            return 0.0

        weighted_sum = 0.0
        total_weight = 0.0

        for opponent in field:
            if opponent.name == deck_name:
                continue

            # Unknown matchup performs like the deck's average
            rate = matchups.get(deck_name, opponent.name)
            if rate is None:
                rate = deck.win_rate

            weighted_sum += rate * opponent.share
            total_weight += opponent.share

        # Unanalyzed part of the metagame
        remaining = 100 - calculate_coverage(field)
        if remaining > 0:
            weighted_sum += deck.win_rate * remaining
            total_weight += remaining

        if total_weight == 0:
            return deck.win_rate

        return weighted_sum / total_weight

    def weighted_meta_score(
        self,
        deck_name: str,
        field: Sequence[Deck],
        matchups: MatchupTable,
    ) -> Optional[float]:
        """
        Calculate the confidence-weighted meta score (0-100) for a deck.

        Only known matchups against decks in the field contribute. Each term
        is weighted by share/100 x recency_weight x min(1, share x 0.02), so
        matchups against small decks count for less.

        Returns:
            Weighted score, or None when no matchup carries weight
        """
        shares = {d.name: d.share for d in field}
        weighted_sum = 0.0
        total_weight = 0.0

        for opponent, rate in matchups.rates_for(deck_name).items():
            share = shares.get(opponent)
            if share is None:
                continue

            confidence_weight = min(1.0, share * 0.02)
            weight = (share / 100) * self.recency_weight * confidence_weight

            weighted_sum += rate * weight
            total_weight += weight

        if total_weight <= 0:
            return None

        return weighted_sum / total_weight
