"""Shared fixtures."""

import pytest

from deckmeta.models.deck import Deck, MatchupTable


@pytest.fixture
def field():
    """Six-deck field covering 61% of the metagame, in no particular order."""
    return [
        Deck("Control", share=12.0, win_rate=50.0, wins=300, losses=300),
        Deck("Aggro", share=20.0, win_rate=52.0, wins=600, losses=550),
        Deck("Rogue", share=4.0, win_rate=53.5, wins=60, losses=52),
        Deck("Midrange", share=15.0, win_rate=51.0, wins=400, losses=384),
        Deck("Combo", share=8.0, win_rate=50.0, wins=150, losses=156),
        Deck("Fringe", share=2.0, win_rate=48.0, wins=20, losses=22),
    ]


@pytest.fixture
def matchups():
    """Sparse table: Rogue and Fringe have no recorded matchups."""
    return MatchupTable({
        "Aggro": {
            "Midrange": 70.0,
            "Control": 38.0,
            "Combo": 60.0,
            "Rogue": 50.0,
            "Fringe": 70.0,
        },
        "Midrange": {
            "Aggro": 30.0,
            "Control": 55.0,
            "Combo": 50.0,
        },
        "Control": {
            "Aggro": 62.0,
            "Midrange": 45.0,
            "Combo": 55.0,
            "Rogue": 50.0,
            "Fringe": 50.0,
        },
        "Combo": {
            "Control": 64.0,
        },
    })
