"""Contract validation tests."""

import pytest

from deckmeta.analysis.coverage import CoverageSelector
from deckmeta.analysis.cycles import MetaCycleDetector
from deckmeta.contracts import (
    CONTRACTS,
    CoverageContract,
    CoverageSelectorProtocol,
    CycleContract,
    CycleDetectorProtocol,
    ScorerContract,
    ScorerProtocol,
    TierClassifierProtocol,
    TierContract,
    WinRateContract,
    WinRateEngineProtocol,
    validate_all_contracts,
)
from deckmeta.models.deck import Deck, MatchupTable
from deckmeta.scoring.confidence import ConfidenceStabilityScorer
from deckmeta.scoring.tiers import TierClassifier
from deckmeta.scoring.win_rate import WinRateEngine


class TestWinRateContract:
    """Test WinRateEngine contract compliance."""

    def test_engine_has_required_methods(self):
        contract = WinRateContract()
        engine = WinRateEngine()

        is_valid, errors = contract.validate(engine)
        assert is_valid, f"Contract validation failed: {errors}"

    def test_engine_satisfies_protocol(self):
        assert isinstance(WinRateEngine(), WinRateEngineProtocol)

    def test_engine_output_range(self):
        contract = WinRateContract()
        engine = WinRateEngine()

        field = [
            Deck("Deck A", share=30.0, win_rate=52.0),
            Deck("Deck B", share=25.0, win_rate=49.0),
            Deck("Deck C", share=15.0, win_rate=50.0),
        ]
        matchups = MatchupTable({
            "Deck A": {"Deck B": 100.0, "Deck C": 0.0},
        })

        for deck in field:
            rate = engine.expected_win_rate(deck.name, field, matchups)
            is_valid, error = contract.validate_output(rate)
            assert is_valid, f"Output validation failed: {error}"

    def test_out_of_range_rejected(self):
        contract = WinRateContract()

        is_valid, error = contract.validate_output(100.5)
        assert not is_valid
        assert "outside range" in error


class TestTierContract:
    """Test TierClassifier contract compliance."""

    def test_classifier_has_required_methods(self):
        contract = TierContract()
        classifier = TierClassifier()

        is_valid, errors = contract.validate(classifier)
        assert is_valid, f"Contract validation failed: {errors}"
        assert isinstance(classifier, TierClassifierProtocol)

    def test_classifier_output_categories(self):
        contract = TierContract()
        classifier = TierClassifier()

        for rate in [0.0, 49.0, 51.0, 53.0, 55.0, 57.0, 100.0]:
            is_valid, error = contract.validate_output(classifier.classify(rate))
            assert is_valid, error

        is_valid, error = contract.validate_output("S+")
        assert not is_valid


class TestScorerContract:
    """Test ConfidenceStabilityScorer contract compliance."""

    def test_scorer_has_required_methods(self):
        contract = ScorerContract()
        scorer = ConfidenceStabilityScorer()

        is_valid, errors = contract.validate(scorer)
        assert is_valid, f"Contract validation failed: {errors}"
        assert isinstance(scorer, ScorerProtocol)

    def test_scorer_output_range(self):
        contract = ScorerContract()
        scorer = ConfidenceStabilityScorer()

        deck = Deck("Polarized", share=10.0, win_rate=50.0, wins=10, losses=10)
        matchups = MatchupTable({"Polarized": {"X": 0.0, "Y": 100.0}})

        for score in (scorer.confidence(deck), scorer.stability(deck.name, matchups)):
            is_valid, error = contract.validate_output(score)
            assert is_valid, f"Output validation failed: {error}"


class TestCoverageAndCycleContracts:
    """Test selector and cycle detector contract compliance."""

    def test_selector_has_required_methods(self):
        selector = CoverageSelector()

        is_valid, errors = CoverageContract().validate(selector)
        assert is_valid, f"Contract validation failed: {errors}"
        assert isinstance(selector, CoverageSelectorProtocol)

    def test_detector_has_required_methods(self):
        detector = MetaCycleDetector()

        is_valid, errors = CycleContract().validate(detector)
        assert is_valid, f"Contract validation failed: {errors}"
        assert isinstance(detector, CycleDetectorProtocol)

    def test_missing_method_reported(self):
        is_valid, errors = CycleContract().validate(object())

        assert not is_valid
        assert errors == ["Missing required method: detect"]


class TestContractRegistry:
    """Test validate_all_contracts."""

    def test_all_default_modules_valid(self):
        modules = {
            "coverage": CoverageSelector(),
            "win_rate": WinRateEngine(),
            "tier": TierClassifier(),
            "scorer": ConfidenceStabilityScorer(),
            "cycles": MetaCycleDetector(),
        }

        results = validate_all_contracts(modules)

        assert set(results) == set(CONTRACTS)
        for name, (is_valid, errors) in results.items():
            assert is_valid, f"{name}: {errors}"

    @pytest.mark.parametrize("name", ["loader", "report"])
    def test_unknown_contract(self, name):
        results = validate_all_contracts({name: object()})

        is_valid, errors = results[name]
        assert not is_valid
        assert errors == [f"Unknown contract: {name}"]
