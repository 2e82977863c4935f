"""Field-level meta models and the complete analysis snapshot."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from deckmeta.models.analysis import DeckAnalysis, Lineup
from deckmeta.models.deck import Deck


@dataclass
class CoverageStats:
    """How much of the observed field a deck selection covers."""

    total_decks: int = 0
    selected_decks: int = 0
    selected_ratio: float = 0.0  # % of decks selected
    coverage: float = 0.0  # cumulative share, 0-100
    efficiency: float = 0.0  # coverage per selected deck

    def to_dict(self) -> dict:
        return {
            "total_decks": self.total_decks,
            "selected_decks": self.selected_decks,
            "selected_ratio": round(self.selected_ratio, 1),
            "coverage": round(self.coverage, 1),
            "efficiency": round(self.efficiency, 1),
        }


@dataclass(frozen=True)
class MetaCycle:
    """Rock-paper-scissors triple: decks[0] beats decks[1] beats decks[2] beats decks[0]."""

    decks: tuple[str, str, str]
    strength: float

    def to_dict(self) -> dict:
        return {"decks": list(self.decks), "strength": round(self.strength, 2)}

    def __str__(self) -> str:
        return " -> ".join(self.decks + (self.decks[0],))


@dataclass(frozen=True)
class DiversityReading:
    """Share-distribution diversity. Both indices are on the 0-100 scale."""

    shannon: float = 0.0
    simpson: float = 0.0
    label: str = "monotonous"

    def to_dict(self) -> dict:
        return {
            "shannon": round(self.shannon, 2),
            "simpson": round(self.simpson, 2),
            "label": self.label,
        }


@dataclass
class EnvironmentMetrics:
    """Environment-wide indicators, each on the 0-100 scale."""

    stability_index: float = 50.0
    diversity_index: float = 0.0
    counter_play_index: float = 0.0
    innovation_potential: float = 0.0

    # Short strategic notes derived from the indices
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "stability_index": self.stability_index,
            "diversity_index": self.diversity_index,
            "counter_play_index": self.counter_play_index,
            "innovation_potential": self.innovation_potential,
            "notes": self.notes,
        }


@dataclass
class SkillRecommendation:
    """Deck picks per player skill level."""

    beginner: list[DeckAnalysis] = field(default_factory=list)
    intermediate: list[DeckAnalysis] = field(default_factory=list)
    expert: list[DeckAnalysis] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "beginner": [a.name for a in self.beginner],
            "intermediate": [a.name for a in self.intermediate],
            "expert": [a.name for a in self.expert],
        }


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One historical field snapshot."""

    timestamp: str
    decks: tuple[Deck, ...]

    @classmethod
    def from_dict(cls, data: dict) -> "TimeSeriesPoint":
        """Create from ``{timestamp|date, decks: [...]}``."""
        timestamp = data.get("timestamp") or data.get("date") or ""
        return cls(
            timestamp=str(timestamp),
            decks=tuple(Deck.from_dict(d) for d in data.get("decks", [])),
        )


@dataclass(frozen=True)
class TrendSample:
    """Share history and fitted slope for one deck."""

    name: str
    shares: tuple[float, ...]
    slope: float
    direction: str = "stable"  # "rising", "declining", "stable"

    @property
    def first_share(self) -> float:
        return self.shares[0] if self.shares else 0.0

    @property
    def latest_share(self) -> float:
        return self.shares[-1] if self.shares else 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "shares": list(self.shares),
            "slope": round(self.slope, 4),
            "direction": self.direction,
        }


@dataclass
class MetaPrediction:
    """Rising/declining decks across a snapshot history."""

    rising_decks: list[str] = field(default_factory=list)
    declining_decks: list[str] = field(default_factory=list)
    confidence_level: float = 0.3  # 0-1
    samples: list[TrendSample] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rising_decks": self.rising_decks,
            "declining_decks": self.declining_decks,
            "confidence_level": self.confidence_level,
        }


@dataclass(frozen=True)
class DeckComparison:
    """Change of one deck between two consecutive snapshots."""

    current: Deck
    previous: Optional[Deck]
    share_change: float
    win_rate_change: float
    rank_change: int  # positive = moved up
    trend: str  # "rising", "falling", "stable"

    def to_dict(self) -> dict:
        return {
            "name": self.current.name,
            "share_change": round(self.share_change, 2),
            "win_rate_change": round(self.win_rate_change, 2),
            "rank_change": self.rank_change,
            "trend": self.trend,
        }


@dataclass
class MetaSnapshot:
    """Complete meta analysis for one field snapshot."""

    timestamp: datetime = field(default_factory=datetime.now)

    analyses: list[DeckAnalysis] = field(default_factory=list)
    lineup: Optional[Lineup] = None
    cycles: list[MetaCycle] = field(default_factory=list)
    diversity: DiversityReading = field(default_factory=DiversityReading)
    environment: EnvironmentMetrics = field(default_factory=EnvironmentMetrics)
    hidden_gems: list[DeckAnalysis] = field(default_factory=list)
    skill_recommendation: SkillRecommendation = field(default_factory=SkillRecommendation)

    # Summary statistics
    coverage: float = 0.0
    deck_count: int = 0
    matchup_count: int = 0
    coverage_stats: Optional[CoverageStats] = None  # only for coverage-selected fields

    # Optional, only when a history is supplied
    prediction: Optional[MetaPrediction] = None

    @property
    def top_analyses(self) -> list[DeckAnalysis]:
        """Analyses in rank order (already ranked)."""
        return self.analyses

    @property
    def viable_decks(self) -> list[DeckAnalysis]:
        """Decks at practical level (expected win rate >= 53%)."""
        return [a for a in self.analyses if a.expected_win_rate >= 53]

    def get_analysis(self, name: str) -> Optional[DeckAnalysis]:
        """Look up a deck analysis by name."""
        return next((a for a in self.analyses if a.name == name), None)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "meta": {
                "timestamp": self.timestamp.isoformat(),
                "coverage": round(self.coverage, 2),
                "deck_count": self.deck_count,
                "matchup_count": self.matchup_count,
                "coverage_stats": self.coverage_stats.to_dict() if self.coverage_stats else None,
            },
            "analyses": [a.to_dict() for a in self.analyses],
            "lineup": self.lineup.to_dict() if self.lineup else None,
            "cycles": [c.to_dict() for c in self.cycles],
            "diversity": self.diversity.to_dict(),
            "environment": self.environment.to_dict(),
            "hidden_gems": [a.name for a in self.hidden_gems],
            "skill_recommendation": self.skill_recommendation.to_dict(),
            "prediction": self.prediction.to_dict() if self.prediction else None,
        }

    def summary(self) -> str:
        """Generate a brief text summary."""
        lines = [
            "=== Meta Snapshot ===",
            f"Analyzed: {self.timestamp.strftime('%Y-%m-%d %H:%M')}",
            f"Decks: {self.deck_count} (coverage {self.coverage:.1f}%)",
            f"Matchups: {self.matchup_count:,}",
            "",
        ]

        if self.lineup:
            lines.append(
                f"Main: {self.lineup.main.name} "
                f"({self.lineup.main.expected_win_rate:.2f}%, {self.lineup.main.tier})"
            )
            if self.lineup.sub:
                lines.append(f"Sub: {self.lineup.sub.name}")
            if self.lineup.meta:
                lines.append(f"Meta: {self.lineup.meta.name}")

        if self.hidden_gems:
            lines.append(f"Top Hidden Gem: {self.hidden_gems[0].name}")

        if self.cycles:
            lines.append(f"Strongest Cycle: {self.cycles[0]}")

        lines.append(
            f"Diversity: Shannon {self.diversity.shannon:.1f} / "
            f"Simpson {self.diversity.simpson:.1f} ({self.diversity.label})"
        )

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"MetaSnapshot({self.deck_count} decks, coverage={self.coverage:.1f}%)"
