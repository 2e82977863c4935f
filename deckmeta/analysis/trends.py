"""Share trend prediction across historical snapshots."""

import logging
from typing import Sequence

from deckmeta.models.deck import Deck
from deckmeta.models.meta import DeckComparison, MetaPrediction, TimeSeriesPoint, TrendSample

logger = logging.getLogger(__name__)


def linear_slope(values: Sequence[float]) -> float:
    """
    Ordinary least-squares slope against x = 0..n-1.

    Args:
        values: Ordered observations

    Returns:
        Slope, or 0.0 with fewer than two points
    """
    n = len(values)
    if n < 2:
        return 0.0

    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_x2 = (n - 1) * n * (2 * n - 1) / 6

    return (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)


class TrendPredictor:
    """Classifies decks as rising or declining from their share history."""

    # (minimum snapshots, confidence), scanned highest first
    CONFIDENCE_BANDS = (
        (10, 0.9),
        (5, 0.7),
        (3, 0.5),
    )
    MIN_CONFIDENCE = 0.3

    def __init__(
        self,
        slope_threshold: float = 0.1,
        rising_min_share: float = 3.0,
        declining_min_share: float = 5.0,
        limit: int = 5,
    ):
        """
        Initialize predictor.

        Args:
            slope_threshold: Share points per snapshot to count as a trend
            rising_min_share: Latest share (%) required to be rising
            declining_min_share: First share (%) required to be declining
            limit: Maximum decks per direction
        """
        self.slope_threshold = slope_threshold
        self.rising_min_share = rising_min_share
        self.declining_min_share = declining_min_share
        self.limit = limit

    def prediction_confidence(self, snapshot_count: int) -> float:
        """Confidence (0-1) from the number of snapshots."""
        for min_count, level in self.CONFIDENCE_BANDS:
            if snapshot_count >= min_count:
                return level
        return self.MIN_CONFIDENCE

    @staticmethod
    def share_histories(history: Sequence[TimeSeriesPoint]) -> dict[str, list[float]]:
        """Per-deck shares in snapshot order. Missing snapshots are skipped."""
        histories: dict[str, list[float]] = {}
        for point in history:
            for deck in point.decks:
                histories.setdefault(deck.name, []).append(deck.share)
        return histories

    def _direction(self, shares: Sequence[float], slope: float) -> str:
        if len(shares) < 2:
            return "stable"
        if slope > self.slope_threshold and shares[-1] >= self.rising_min_share:
            return "rising"
        if slope < -self.slope_threshold and shares[0] >= self.declining_min_share:
            return "declining"
        return "stable"

    def trend_samples(self, history: Sequence[TimeSeriesPoint]) -> list[TrendSample]:
        """Fitted trend for every deck seen in the history."""
        samples = []
        for name, shares in self.share_histories(history).items():
            slope = linear_slope(shares)
            samples.append(TrendSample(
                name=name,
                shares=tuple(shares),
                slope=slope,
                direction=self._direction(shares, slope),
            ))
        return samples

    def predict(self, history: Sequence[TimeSeriesPoint]) -> MetaPrediction:
        """
        Predict rising and declining decks.

        Args:
            history: Snapshots ordered oldest to newest

        Returns:
            MetaPrediction. With fewer than two snapshots the lists are empty
            and confidence is the lowest band.
        """
        if len(history) < 2:
            logger.warning(
                f"Trend prediction needs at least 2 snapshots, got {len(history)}"
            )
            return MetaPrediction(confidence_level=self.MIN_CONFIDENCE)

        samples = self.trend_samples(history)

        rising = sorted(
            (s for s in samples if s.direction == "rising"),
            key=lambda s: s.slope,
            reverse=True,
        )
        declining = sorted(
            (s for s in samples if s.direction == "declining"),
            key=lambda s: abs(s.slope),
            reverse=True,
        )

        prediction = MetaPrediction(
            rising_decks=[s.name for s in rising[:self.limit]],
            declining_decks=[s.name for s in declining[:self.limit]],
            confidence_level=self.prediction_confidence(len(history)),
            samples=samples,
        )

        logger.info(
            f"Trend prediction over {len(history)} snapshots: "
            f"{len(prediction.rising_decks)} rising, "
            f"{len(prediction.declining_decks)} declining"
        )

        return prediction


def compare_snapshots(
    current: Sequence[Deck],
    previous: Sequence[Deck],
    share_delta: float = 0.5,
) -> list[DeckComparison]:
    """
    Period-over-period change for each deck in the current snapshot.

    Ranks are positions in share order (1 = most played). A deck absent from
    the previous snapshot is reported as rising with zero change.

    Args:
        current: Current field
        previous: Previous field
        share_delta: Share change (points) needed to count as rising/falling

    Returns:
        One DeckComparison per current deck, in current share order
    """
    def ranked(decks: Sequence[Deck]) -> dict[str, tuple[int, Deck]]:
        ordered = sorted(decks, key=lambda d: d.share, reverse=True)
        return {d.name: (i + 1, d) for i, d in enumerate(ordered)}

    current_ranks = ranked(current)
    previous_ranks = ranked(previous)

    comparisons = []
    for name, (rank, deck) in current_ranks.items():
        if name not in previous_ranks:
            comparisons.append(DeckComparison(
                current=deck,
                previous=None,
                share_change=0.0,
                win_rate_change=0.0,
                rank_change=0,
                trend="rising",
            ))
            continue

        prev_rank, prev_deck = previous_ranks[name]
        share_change = deck.share - prev_deck.share

        if share_change > share_delta:
            trend = "rising"
        elif share_change < -share_delta:
            trend = "falling"
        else:
            trend = "stable"

        comparisons.append(DeckComparison(
            current=deck,
            previous=prev_deck,
            share_change=share_change,
            win_rate_change=deck.win_rate - prev_deck.win_rate,
            rank_change=prev_rank - rank,
            trend=trend,
        ))

    return comparisons
