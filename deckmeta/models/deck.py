"""Deck and matchup data models."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class Deck:
    """A deck as observed in one field snapshot.

    All percentages are on the 0-100 scale.
    """

    name: str
    share: float  # % of the observed field (0-100)
    win_rate: float  # aggregate win % (0-100)
    wins: int = 0
    losses: int = 0
    ties: int = 0

    # Carried through from the source record, unused by scoring
    rank: Optional[int] = None
    count: Optional[int] = None

    @property
    def sample_size(self) -> int:
        """Recorded games (wins + losses + ties)."""
        return self.wins + self.losses + self.ties

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        """Create a Deck from a collaborator record.

        Accepts both snake_case and camelCase win rate keys since the
        acquisition layer emits the latter.
        """
        win_rate = data.get("win_rate")
        if win_rate is None:
            win_rate = data.get("winRate", 0.0)

        return cls(
            name=data.get("name", "Unknown"),
            share=float(data.get("share", 0.0) or 0.0),
            win_rate=float(win_rate or 0.0),
            wins=int(data.get("wins", 0) or 0),
            losses=int(data.get("losses", 0) or 0),
            ties=int(data.get("ties", 0) or 0),
            rank=data.get("rank"),
            count=data.get("count"),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "name": self.name,
            "share": round(self.share, 2),
            "win_rate": round(self.win_rate, 2),
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "rank": self.rank,
            "count": self.count,
        }

    def __repr__(self) -> str:
        return f"Deck({self.name}, share={self.share:.1f}%, WR={self.win_rate:.1f}%)"


def calculate_coverage(decks: Iterable[Deck]) -> float:
    """Cumulative share (0-100) of a deck list, may be under 100."""
    return sum(d.share for d in decks)


def canonical_order(decks: Iterable[Deck]) -> list[Deck]:
    """Return a new list sorted by share descending.

    The sort is stable, so decks with equal share keep their input order.
    The input is never modified.
    """
    return sorted(decks, key=lambda d: d.share, reverse=True)


class MatchupTable:
    """Read-only, sparse matchup lookup: deck -> opponent -> win rate (0-100).

    Rates are independently estimated per perspective, so the table is not
    symmetric. A missing entry means "no data", not 50%.
    """

    def __init__(self, rates: Optional[Mapping[str, Mapping[str, float]]] = None):
        rates = rates or {}
        self._rates: Mapping[str, Mapping[str, float]] = MappingProxyType({
            deck: MappingProxyType({opp: float(rate) for opp, rate in row.items()})
            for deck, row in rates.items()
        })

    @classmethod
    def from_nested(cls, data: Mapping[str, Mapping[str, float]]) -> "MatchupTable":
        """Create from a nested ``{deck: {opponent: rate}}`` mapping."""
        return cls(data)

    @classmethod
    def from_pairs(
        cls, entries: Iterable[tuple[str, Iterable[tuple[str, float]]]]
    ) -> "MatchupTable":
        """Create from ``[(deck, [(opponent, rate), ...]), ...]``.

        This is the shape stored snapshots use for matchups.
        """
        return cls({deck: dict(pairs) for deck, pairs in entries})

    def get(self, deck: str, opponent: str) -> Optional[float]:
        """Win rate of ``deck`` against ``opponent``, or None when unknown."""
        row = self._rates.get(deck)
        if row is None:
            return None
        return row.get(opponent)

    def rates_for(self, deck: str) -> Mapping[str, float]:
        """All known rates for a deck (read-only, source order)."""
        return self._rates.get(deck, MappingProxyType({}))

    def has_data(self, deck: str) -> bool:
        """Whether any matchup is recorded for the deck."""
        return len(self.rates_for(deck)) > 0

    @property
    def total_entries(self) -> int:
        """Number of individual deck-vs-opponent rates."""
        return sum(len(row) for row in self._rates.values())

    def __len__(self) -> int:
        return len(self._rates)

    def __contains__(self, deck: object) -> bool:
        return deck in self._rates

    def to_dict(self) -> dict:
        """Convert to a plain nested dict for JSON export."""
        return {deck: dict(row) for deck, row in self._rates.items()}

    def __repr__(self) -> str:
        return f"MatchupTable({len(self)} decks, {self.total_entries} entries)"
