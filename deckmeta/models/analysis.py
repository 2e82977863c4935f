"""Per-deck analysis and lineup models."""

from dataclasses import dataclass, field
from typing import Optional

from deckmeta.models.deck import Deck


@dataclass(frozen=True)
class MatchupEdge:
    """A directed matchup: the owning deck's win rate against ``opponent``."""

    opponent: str
    win_rate: float  # 0-100

    def __str__(self) -> str:
        return f"{self.opponent} ({self.win_rate:.1f}%)"

    def to_dict(self) -> dict:
        return {"opponent": self.opponent, "win_rate": round(self.win_rate, 2)}


@dataclass
class DeckAnalysis:
    """Complete environment analysis for a single deck."""

    deck: Deck

    # 0-100, share-weighted against the analyzed field
    expected_win_rate: float = 0.0
    tier: str = "C"

    # 0-1 scores
    confidence_level: float = 0.5
    stability: float = 0.5

    # Confidence-weighted score over known matchups, None without data
    meta_score: Optional[float] = None

    # Against major decks, in canonical field order
    strengths: list[MatchupEdge] = field(default_factory=list)
    weaknesses: list[MatchupEdge] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Deck name shortcut."""
        return self.deck.name

    @property
    def share(self) -> float:
        """Deck share shortcut."""
        return self.deck.share

    @property
    def strength_names(self) -> set[str]:
        return {edge.opponent for edge in self.strengths}

    @property
    def weakness_names(self) -> set[str]:
        return {edge.opponent for edge in self.weaknesses}

    @property
    def win_rate_delta(self) -> float:
        """Expected win rate minus aggregate win rate (percentage points)."""
        return self.expected_win_rate - self.deck.win_rate

    def beats(self, opponent: str) -> bool:
        """Whether ``opponent`` is one of this deck's strengths."""
        return opponent in self.strength_names

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "deck": self.deck.to_dict(),
            "expected_win_rate": round(self.expected_win_rate, 2),
            "tier": self.tier,
            "confidence_level": round(self.confidence_level, 2),
            "stability": round(self.stability, 4),
            "meta_score": round(self.meta_score, 2) if self.meta_score is not None else None,
            "strengths": [str(e) for e in self.strengths],
            "weaknesses": [str(e) for e in self.weaknesses],
        }

    def __repr__(self) -> str:
        return (
            f"DeckAnalysis({self.name}, {self.tier}, "
            f"expected={self.expected_win_rate:.2f}%)"
        )


@dataclass
class Lineup:
    """Three-slot tournament recommendation."""

    main: DeckAnalysis
    sub: Optional[DeckAnalysis] = None
    meta: Optional[DeckAnalysis] = None

    # Main deck's best and worst matchups (top 3 each, sorted by rate)
    favorable_matchups: list[MatchupEdge] = field(default_factory=list)
    unfavorable_matchups: list[MatchupEdge] = field(default_factory=list)

    @property
    def confidence(self) -> int:
        """Main deck confidence as an integer percent."""
        return round(self.main.confidence_level * 100)

    @property
    def decks(self) -> list[DeckAnalysis]:
        """Filled slots in main, sub, meta order."""
        return [a for a in (self.main, self.sub, self.meta) if a is not None]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "main": self.main.to_dict(),
            "sub": self.sub.to_dict() if self.sub else None,
            "meta": self.meta.to_dict() if self.meta else None,
            "confidence": self.confidence,
            "favorable_matchups": [e.to_dict() for e in self.favorable_matchups],
            "unfavorable_matchups": [e.to_dict() for e in self.unfavorable_matchups],
        }
