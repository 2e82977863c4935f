"""Trend prediction and snapshot comparison tests."""

import pytest

from deckmeta.analysis.trends import TrendPredictor, compare_snapshots, linear_slope
from deckmeta.models.deck import Deck
from deckmeta.models.meta import TimeSeriesPoint


def make_history(series):
    """Build snapshots from ``{deck: [share per snapshot or None]}``."""
    length = max(len(shares) for shares in series.values())
    history = []
    for i in range(length):
        decks = tuple(
            Deck(name, share=shares[i], win_rate=50.0)
            for name, shares in series.items()
            if i < len(shares) and shares[i] is not None
        )
        history.append(TimeSeriesPoint(timestamp=f"2024-01-{i + 1:02d}", decks=decks))
    return history


class TestLinearSlope:
    """Test closed-form OLS slope."""

    def test_linear(self):
        assert linear_slope([2, 3, 4, 5]) == pytest.approx(1.0)

    def test_flat(self):
        assert linear_slope([4, 4, 4]) == pytest.approx(0.0)

    def test_noisy(self):
        # x = 0..3, y = [1, 3, 2, 4]: slope = 0.8
        assert linear_slope([1, 3, 2, 4]) == pytest.approx(0.8)

    @pytest.mark.parametrize("values", [[], [5.0]])
    def test_too_few_points(self, values):
        assert linear_slope(values) == 0.0


class TestTrendPredictor:
    """Test rising/declining classification."""

    def test_rising(self):
        history = make_history({"Climber": [2, 3, 4, 5]})

        prediction = TrendPredictor().predict(history)

        assert prediction.rising_decks == ["Climber"]
        assert prediction.declining_decks == []

    def test_declining(self):
        history = make_history({"Faller": [9, 7, 5, 3]})

        prediction = TrendPredictor().predict(history)

        assert prediction.declining_decks == ["Faller"]

    def test_rising_needs_latest_share(self):
        history = make_history({"Small": [1.0, 1.5, 2.0, 2.5]})

        assert TrendPredictor().predict(history).rising_decks == []

    def test_declining_needs_first_share(self):
        history = make_history({"Small": [4.5, 3.0, 2.0, 1.0]})

        assert TrendPredictor().predict(history).declining_decks == []

    def test_small_slope_is_stable(self):
        history = make_history({"Drift": [5.0, 5.05, 5.1, 5.15]})

        assert TrendPredictor().predict(history).rising_decks == []

    def test_gaps_skipped(self):
        history = make_history({
            "Anchor": [10, 10, 10, 10],
            "Returning": [3, None, 5, 7],
        })

        prediction = TrendPredictor().predict(history)
        sample = next(s for s in prediction.samples if s.name == "Returning")

        assert sample.shares == (3, 5, 7)
        assert sample.slope == pytest.approx(2.0)
        assert prediction.rising_decks == ["Returning"]

    def test_sorted_and_capped(self):
        series = {f"Deck {i}": [3.0, 3.0 + i + 1] for i in range(7)}
        history = make_history(series)

        prediction = TrendPredictor().predict(history)

        assert prediction.rising_decks == [f"Deck {i}" for i in (6, 5, 4, 3, 2)]

    def test_declining_sorted_by_magnitude(self):
        history = make_history({"Slow": [10, 9], "Fast": [10, 5]})

        assert TrendPredictor().predict(history).declining_decks == ["Fast", "Slow"]

    @pytest.mark.parametrize("count", [0, 1])
    def test_too_few_snapshots(self, count):
        history = make_history({"A": [5.0] * count}) if count else []

        prediction = TrendPredictor().predict(history)

        assert prediction.rising_decks == []
        assert prediction.declining_decks == []
        assert prediction.confidence_level == 0.3

    @pytest.mark.parametrize(
        "count,level",
        [(2, 0.3), (3, 0.5), (4, 0.5), (5, 0.7), (9, 0.7), (10, 0.9), (20, 0.9)],
    )
    def test_confidence_bands(self, count, level):
        assert TrendPredictor().prediction_confidence(count) == level

    def test_time_series_point_from_dict(self):
        point = TimeSeriesPoint.from_dict({
            "date": "2024-06-01",
            "decks": [{"name": "A", "share": 12.0, "winRate": 51.0}],
        })

        assert point.timestamp == "2024-06-01"
        assert point.decks[0].win_rate == 51.0


class TestCompareSnapshots:
    """Test period-over-period comparison."""

    def test_changes(self):
        previous = [
            Deck("A", share=20.0, win_rate=52.0),
            Deck("B", share=15.0, win_rate=50.0),
            Deck("C", share=10.0, win_rate=49.0),
        ]
        current = [
            Deck("A", share=14.0, win_rate=51.0),
            Deck("B", share=18.0, win_rate=53.0),
            Deck("C", share=10.2, win_rate=49.0),
            Deck("New", share=5.0, win_rate=55.0),
        ]

        comparisons = {c.current.name: c for c in compare_snapshots(current, previous)}

        assert comparisons["B"].trend == "rising"
        assert comparisons["B"].rank_change == 1
        assert comparisons["B"].share_change == pytest.approx(3.0)
        assert comparisons["B"].win_rate_change == pytest.approx(3.0)

        assert comparisons["A"].trend == "falling"
        assert comparisons["A"].rank_change == -1

        assert comparisons["C"].trend == "stable"
        assert comparisons["C"].rank_change == 0

        assert comparisons["New"].trend == "rising"
        assert comparisons["New"].previous is None
        assert comparisons["New"].share_change == 0.0

    def test_current_share_order(self):
        current = [Deck("Small", share=5.0, win_rate=50.0), Deck("Big", share=25.0, win_rate=50.0)]

        names = [c.current.name for c in compare_snapshots(current, [])]

        assert names == ["Big", "Small"]
