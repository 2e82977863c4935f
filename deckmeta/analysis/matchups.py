"""Favorable/unfavorable matchup profiling."""

from typing import Sequence

from deckmeta.models.analysis import MatchupEdge
from deckmeta.models.deck import Deck, MatchupTable


class MatchupProfiler:
    """Classifies a deck's matchups against the top of the field."""

    def __init__(
        self,
        major_share: float = 3.0,
        strength_wr: float = 60.0,
        weakness_wr: float = 40.0,
        favorable_wr: float = 55.0,
        unfavorable_wr: float = 45.0,
    ):
        """
        Initialize profiler.

        Args:
            major_share: Minimum share (%) for an opponent to be profiled
            strength_wr: Win rate (%) at or above which a matchup is a strength
            weakness_wr: Win rate (%) at or below which a matchup is a weakness
            favorable_wr: Threshold for highlighted favorable matchups
            unfavorable_wr: Threshold for highlighted unfavorable matchups
        """
        self.major_share = major_share
        self.strength_wr = strength_wr
        self.weakness_wr = weakness_wr
        self.favorable_wr = favorable_wr
        self.unfavorable_wr = unfavorable_wr

    def major_decks(self, field: Sequence[Deck]) -> list[Deck]:
        """Decks with share >= major_share, in field order."""
        return [d for d in field if d.share >= self.major_share]

    def profile(
        self,
        deck_name: str,
        matchups: MatchupTable,
        major_decks: Sequence[Deck],
    ) -> tuple[list[MatchupEdge], list[MatchupEdge]]:
        """
        Split a deck's matchups vs major decks into strengths and weaknesses.

        Order follows ``major_decks`` rather than win rate, so output is
        reproducible for a given field.

        Returns:
            tuple of (strengths, weaknesses)
        """
        strengths = []
        weaknesses = []

        if not matchups.has_data(deck_name):
            return strengths, weaknesses

        for opponent in major_decks:
            rate = matchups.get(deck_name, opponent.name)
            if rate is None:
                continue

            if rate >= self.strength_wr:
                strengths.append(MatchupEdge(opponent.name, rate))
            elif rate <= self.weakness_wr:
                weaknesses.append(MatchupEdge(opponent.name, rate))

        return strengths, weaknesses

    def favorable_matchups(
        self,
        deck_name: str,
        matchups: MatchupTable,
        limit: int = 3,
    ) -> list[MatchupEdge]:
        """Best known matchups (rate >= favorable_wr), highest first."""
        edges = [
            MatchupEdge(opp, rate)
            for opp, rate in matchups.rates_for(deck_name).items()
            if rate >= self.favorable_wr
        ]
        edges.sort(key=lambda e: e.win_rate, reverse=True)
        return edges[:limit]

    def unfavorable_matchups(
        self,
        deck_name: str,
        matchups: MatchupTable,
        limit: int = 3,
    ) -> list[MatchupEdge]:
        """Worst known matchups (rate <= unfavorable_wr), lowest first."""
        edges = [
            MatchupEdge(opp, rate)
            for opp, rate in matchups.rates_for(deck_name).items()
            if rate <= self.unfavorable_wr
        ]
        edges.sort(key=lambda e: e.win_rate)
        return edges[:limit]
