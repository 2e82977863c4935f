"""Meta cycle detection tests."""

import pytest

from deckmeta.analysis.cycles import MetaCycleDetector
from deckmeta.models.analysis import DeckAnalysis, MatchupEdge
from deckmeta.models.deck import Deck


def make_analysis(name, share, expected, beats=()):
    return DeckAnalysis(
        deck=Deck(name, share=share, win_rate=50.0),
        expected_win_rate=expected,
        strengths=[MatchupEdge(opp, 62.0) for opp in beats],
    )


class TestMetaCycleDetector:
    """Test rock-paper-scissors detection."""

    def test_detects_triangle(self):
        analyses = [
            make_analysis("Aggro", 20.0, 54.0, beats=["Midrange"]),
            make_analysis("Midrange", 15.0, 53.0, beats=["Control"]),
            make_analysis("Control", 10.0, 52.0, beats=["Aggro"]),
        ]

        cycles = MetaCycleDetector().detect(analyses)

        assert len(cycles) == 1
        assert cycles[0].decks == ("Aggro", "Midrange", "Control")
        assert cycles[0].strength == pytest.approx(45.0 * 0.53)

    def test_only_rank_order_orientation(self):
        # Higher-ranked deck must beat the next one
        analyses = [
            make_analysis("Aggro", 20.0, 54.0, beats=["Control"]),
            make_analysis("Midrange", 15.0, 53.0, beats=["Aggro"]),
            make_analysis("Control", 10.0, 52.0, beats=["Midrange"]),
        ]

        assert MetaCycleDetector().detect(analyses) == []

    def test_no_cycle_without_closing_edge(self):
        analyses = [
            make_analysis("A", 20.0, 54.0, beats=["B"]),
            make_analysis("B", 15.0, 53.0, beats=["C"]),
            make_analysis("C", 10.0, 52.0),
        ]

        assert MetaCycleDetector().detect(analyses) == []

    def test_minor_decks_excluded(self):
        analyses = [
            make_analysis("A", 20.0, 54.0, beats=["B"]),
            make_analysis("B", 15.0, 53.0, beats=["C"]),
            make_analysis("C", 2.0, 52.0, beats=["A"]),
        ]

        assert MetaCycleDetector().detect(analyses) == []

    def test_candidates_capped(self):
        analyses = [
            make_analysis("A", 20.0, 54.0, beats=["B"]),
            make_analysis("B", 15.0, 53.0, beats=["C"]),
            make_analysis("C", 10.0, 52.0, beats=["A"]),
        ]

        assert MetaCycleDetector(max_decks=2).detect(analyses) == []

    def test_sorted_by_strength(self):
        analyses = [
            make_analysis("A", 20.0, 55.0, beats=["B", "D"]),
            make_analysis("B", 20.0, 54.0, beats=["C"]),
            make_analysis("C", 20.0, 53.0, beats=["A"]),
            make_analysis("D", 5.0, 52.0, beats=["E"]),
            make_analysis("E", 5.0, 51.0, beats=["A"]),
        ]

        cycles = MetaCycleDetector().detect(analyses)

        assert len(cycles) == 2
        assert cycles[0].strength > cycles[1].strength
        assert set(cycles[0].decks) == {"A", "B", "C"}

    def test_cycle_rendering(self):
        analyses = [
            make_analysis("A", 20.0, 54.0, beats=["B"]),
            make_analysis("B", 15.0, 53.0, beats=["C"]),
            make_analysis("C", 10.0, 52.0, beats=["A"]),
        ]

        cycle = MetaCycleDetector().detect(analyses)[0]

        assert str(cycle) == "A -> B -> C -> A"
        assert cycle.to_dict()["decks"] == ["A", "B", "C"]

    def test_ranks_unordered_input(self):
        # A low-ranked major deck listed first must not take a capped slot
        analyses = [
            make_analysis("Pile", 30.0, 45.0),
            make_analysis("C", 10.0, 52.0, beats=["A"]),
            make_analysis("A", 20.0, 54.0, beats=["B"]),
            make_analysis("B", 15.0, 53.0, beats=["C"]),
        ]

        cycles = MetaCycleDetector(max_decks=3).detect(analyses)

        assert [c.decks for c in cycles] == [("A", "B", "C")]
