"""Interface contracts for module integration and validation.

Contracts define the expected input/output types and required methods
for each scoring component, so alternative implementations can be
checked before they are wired into the engine.
"""

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from deckmeta.models.analysis import DeckAnalysis
from deckmeta.models.deck import Deck, MatchupTable


# ============================================================================
# Protocol Definitions (Duck Typing Interfaces)
# ============================================================================


@runtime_checkable
class CoverageSelectorProtocol(Protocol):
    """Protocol for coverage-based deck selection."""

    def select(self, decks: Sequence[Deck], target_coverage_pct: float) -> list[Deck]:
        """Select the top-share prefix reaching the target coverage."""
        ...


@runtime_checkable
class WinRateEngineProtocol(Protocol):
    """Protocol for expected win rate implementations."""

    def expected_win_rate(
        self, deck_name: str, field: Sequence[Deck], matchups: MatchupTable
    ) -> float:
        """Calculate expected win rate (0-100) for a deck."""
        ...


@runtime_checkable
class TierClassifierProtocol(Protocol):
    """Protocol for tier classification."""

    def classify(self, expected_win_rate: float) -> str:
        """Map expected win rate to a tier label."""
        ...


@runtime_checkable
class ScorerProtocol(Protocol):
    """Protocol for confidence/stability scoring."""

    def confidence(self, deck: Deck) -> float:
        """Confidence (0-1) from sample size."""
        ...

    def stability(self, deck_name: str, matchups: MatchupTable) -> float:
        """Stability (0-1) from matchup spread."""
        ...


@runtime_checkable
class CycleDetectorProtocol(Protocol):
    """Protocol for meta cycle detection."""

    def detect(self, analyses: Sequence[DeckAnalysis]) -> list:
        """Detect rock-paper-scissors cycles."""
        ...


# ============================================================================
# Contract Dataclasses (For Testing & Validation)
# ============================================================================


def _missing_methods(instance: object, required: list[str]) -> list[str]:
    errors = []
    for method in required:
        if not hasattr(instance, method):
            errors.append(f"Missing required method: {method}")
        elif not callable(getattr(instance, method)):
            errors.append(f"Method {method} is not callable")
    return errors


@dataclass
class WinRateContract:
    """Contract specification for WinRateEngine implementations."""

    output_type: type = float
    output_range: tuple[float, float] = (0.0, 100.0)
    required_methods: list[str] = field(
        default_factory=lambda: ["expected_win_rate"]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors

    def validate_output(self, rate: float) -> tuple[bool, str]:
        """Validate that output is within expected range."""
        min_val, max_val = self.output_range
        if not (min_val <= rate <= max_val):
            return False, f"Win rate {rate} outside range [{min_val}, {max_val}]"
        return True, ""


@dataclass
class TierContract:
    """Contract specification for tier classification."""

    output_categories: list[str] = field(
        default_factory=lambda: ["SS", "S", "A+", "A", "B", "C"]
    )
    required_methods: list[str] = field(default_factory=lambda: ["classify"])

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors

    def validate_output(self, tier: str) -> tuple[bool, str]:
        """Validate a tier label."""
        if tier not in self.output_categories:
            return False, f"Invalid tier: {tier}"
        return True, ""


@dataclass
class ScorerContract:
    """Contract specification for confidence/stability scorers."""

    output_range: tuple[float, float] = (0.0, 1.0)
    required_methods: list[str] = field(
        default_factory=lambda: ["confidence", "stability"]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors

    def validate_output(self, score: float) -> tuple[bool, str]:
        """Validate that a score is within [0, 1]."""
        min_val, max_val = self.output_range
        if not (min_val <= score <= max_val):
            return False, f"Score {score} outside range [{min_val}, {max_val}]"
        return True, ""


@dataclass
class CoverageContract:
    """Contract specification for coverage selection."""

    required_methods: list[str] = field(default_factory=lambda: ["select"])

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors


@dataclass
class CycleContract:
    """Contract specification for meta cycle detection."""

    required_methods: list[str] = field(default_factory=lambda: ["detect"])

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = _missing_methods(instance, self.required_methods)
        return len(errors) == 0, errors


# ============================================================================
# Contract Registry
# ============================================================================


CONTRACTS = {
    "coverage": CoverageContract(),
    "win_rate": WinRateContract(),
    "tier": TierContract(),
    "scorer": ScorerContract(),
    "cycles": CycleContract(),
}


def validate_all_contracts(modules: dict[str, object]) -> dict[str, tuple[bool, list[str]]]:
    """
    Validate all modules against their contracts.

    Args:
        modules: Dict mapping contract name to module instance

    Returns:
        Dict mapping contract name to (is_valid, errors) tuple
    """
    results = {}

    for name, instance in modules.items():
        if name in CONTRACTS:
            contract = CONTRACTS[name]
            is_valid, errors = contract.validate(instance)
            results[name] = (is_valid, errors)
        else:
            results[name] = (False, [f"Unknown contract: {name}"])

    return results
