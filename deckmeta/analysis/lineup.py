"""Tournament lineup and deck recommendations."""

import logging
from typing import Optional, Sequence

from deckmeta.analysis.matchups import MatchupProfiler
from deckmeta.config import EngineConfig
from deckmeta.models.analysis import DeckAnalysis, Lineup
from deckmeta.models.deck import MatchupTable
from deckmeta.models.meta import SkillRecommendation

logger = logging.getLogger(__name__)


def rank_analyses(analyses: Sequence[DeckAnalysis]) -> list[DeckAnalysis]:
    """Sort by expected win rate descending; ties keep their input order."""
    return sorted(analyses, key=lambda a: a.expected_win_rate, reverse=True)


class LineupRecommender:
    """Builds a main / sub / meta tournament lineup from ranked analyses."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        profiler: Optional[MatchupProfiler] = None,
    ):
        self.config = config or EngineConfig()
        self.profiler = profiler or MatchupProfiler(
            major_share=self.config.major_share,
            strength_wr=self.config.strength_wr,
            weakness_wr=self.config.weakness_wr,
            favorable_wr=self.config.favorable_wr,
            unfavorable_wr=self.config.unfavorable_wr,
        )

    def _covers_weakness(self, candidate: DeckAnalysis, main: DeckAnalysis) -> bool:
        """Whether the candidate beats any deck that main is weak against."""
        return any(candidate.beats(edge.opponent) for edge in main.weaknesses)

    def recommend_lineup(
        self,
        analyses: Sequence[DeckAnalysis],
        matchups: Optional[MatchupTable] = None,
    ) -> Optional[Lineup]:
        """
        Recommend a three-deck tournament lineup.

        - main: highest expected win rate
        - sub: first of ranks 2-10 that beats one of main's weaknesses and
          has expected win rate >= 51%
        - meta: first low-share (< 5%) deck with expected win rate >= 53%,
          excluding main and sub

        Args:
            analyses: Deck analyses (re-ranked here, input untouched)
            matchups: Matchup table for main's highlighted matchups

        Returns:
            Lineup, or None when there is nothing to recommend
        """
        if not analyses:
            logger.warning("No analyses provided, cannot recommend a lineup")
            return None

        ranked = rank_analyses(analyses)
        cfg = self.config
        main = ranked[0]

        sub = None
        for candidate in ranked[1:cfg.sub_scan_depth]:
            if (
                self._covers_weakness(candidate, main)
                and candidate.expected_win_rate >= cfg.sub_min_expected
            ):
                sub = candidate
                break

        meta = next(
            (
                a for a in ranked
                if a is not main
                and a is not sub
                and a.share < cfg.meta_max_share
                and a.expected_win_rate >= cfg.meta_min_expected
            ),
            None,
        )

        favorable = []
        unfavorable = []
        if matchups is not None:
            limit = cfg.matchup_highlight_limit
            favorable = self.profiler.favorable_matchups(main.name, matchups, limit)
            unfavorable = self.profiler.unfavorable_matchups(main.name, matchups, limit)

        lineup = Lineup(
            main=main,
            sub=sub,
            meta=meta,
            favorable_matchups=favorable,
            unfavorable_matchups=unfavorable,
        )

        logger.info(
            f"Lineup: main={main.name}, "
            f"sub={sub.name if sub else '-'}, meta={meta.name if meta else '-'}"
        )

        return lineup

    def find_hidden_gems(self, analyses: Sequence[DeckAnalysis]) -> list[DeckAnalysis]:
        """
        Low-share decks with a high expected win rate.

        Returns:
            Up to ``gem_limit`` analyses, best expected win rate first
        """
        cfg = self.config
        gems = [
            a for a in rank_analyses(analyses)
            if a.share < cfg.gem_max_share and a.expected_win_rate >= cfg.gem_min_expected
        ]
        return gems[:cfg.gem_limit]

    def recommend_by_skill(self, analyses: Sequence[DeckAnalysis]) -> SkillRecommendation:
        """
        Recommend decks per player skill level.

        Beginner picks favour stable, well-known decks; expert picks are
        low-share decks that reward skill.
        """
        ranked = rank_analyses(analyses)

        beginner = [
            a for a in ranked
            if a.stability > 0.7 and a.expected_win_rate >= 51 and a.share >= 5
        ][:3]

        intermediate = [
            a for a in ranked
            if a.expected_win_rate >= 53 and a.confidence_level >= 0.6
        ][:5]

        expert = [
            a for a in ranked
            if a.share < 5 and a.expected_win_rate >= 55 and a.stability > 0.5
        ][:3]

        return SkillRecommendation(
            beginner=beginner,
            intermediate=intermediate,
            expert=expert,
        )
