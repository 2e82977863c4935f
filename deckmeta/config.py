"""Scoring thresholds and YAML configuration loading."""

import logging
from dataclasses import asdict, dataclass, fields

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/scoring.yaml"


@dataclass
class EngineConfig:
    """Thresholds used across the scoring engine.

    Percentages are on the 0-100 scale.
    """

    # Decks at or above this share count as "major"
    major_share: float = 3.0

    # Matchup profile thresholds (major decks only)
    strength_wr: float = 60.0
    weakness_wr: float = 40.0

    # Main deck favorable/unfavorable thresholds (all known matchups)
    favorable_wr: float = 55.0
    unfavorable_wr: float = 45.0
    matchup_highlight_limit: int = 3

    # Lineup
    sub_min_expected: float = 51.0
    sub_scan_depth: int = 10  # ranks 2..N inclusive
    meta_max_share: float = 5.0
    meta_min_expected: float = 53.0

    # Hidden gems
    gem_max_share: float = 5.0
    gem_min_expected: float = 53.0
    gem_limit: int = 5

    # Meta cycles
    cycle_max_decks: int = 20

    # Trends
    trend_slope: float = 0.1
    rising_min_share: float = 3.0
    declining_min_share: float = 5.0
    trend_limit: int = 5
    comparison_share_delta: float = 0.5

    # Coverage
    default_coverage: float = 80.0

    # Fixed recency weight for the weighted meta score
    recency_weight: float = 1.0

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "EngineConfig":
        """Create config from a YAML file.

        Keys missing from the file keep their defaults; unknown keys are
        ignored with a warning.
        """
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        engine_config = config.get("engine", {}) or {}
        known = {f.name for f in fields(cls)}

        overrides = {}
        for key, value in engine_config.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            overrides[key] = value

        logger.debug(f"Loaded {len(overrides)} config overrides from {config_path}")
        return cls(**overrides)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return asdict(self)
