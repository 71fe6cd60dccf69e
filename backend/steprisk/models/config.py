"""
Engine configuration: signal weights and age-based step standards

Values are immutable and validated when constructed. The defaults are
tuned for adults aged 65 and over.

Environment variables (all optional):
    STEPRISK_WEIGHT_AVERAGE_STEPS, STEPRISK_WEIGHT_STEP_VARIABILITY,
    STEPRISK_WEIGHT_TREND_DIRECTION, STEPRISK_WEIGHT_CONSISTENCY,
    STEPRISK_TARGET_STEPS, STEPRISK_MINIMUM_STEPS,
    STEPRISK_THRESHOLD_LOW, STEPRISK_THRESHOLD_MEDIUM, STEPRISK_THRESHOLD_HIGH
"""

import logging
import math
import os
from dataclasses import dataclass, field, fields, replace

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class RiskConfigurationError(ValueError):
    """Rejected weights or standards."""


def _check_non_negative(owner: str, name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RiskConfigurationError(f"{owner}.{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise RiskConfigurationError(f"{owner}.{name} must be finite and non-negative, got {value!r}")


@dataclass(frozen=True)
class RiskWeights:
    """Linear-combination coefficients (raw multipliers, need not sum to 1)"""
    average_steps: float = 0.4
    step_variability: float = 0.3
    trend_direction: float = 0.2
    consistency: float = 0.1

    def __post_init__(self):
        for f in fields(self):
            _check_non_negative("RiskWeights", f.name, getattr(self, f.name))

    def with_overrides(self, **overrides) -> "RiskWeights":
        """Return a copy with the given weights replaced; None values are ignored."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise RiskConfigurationError(f"Unknown weight(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


@dataclass(frozen=True)
class RiskThresholds:
    """Overall combined-score cut points; must be strictly increasing"""
    low: float = 25
    medium: float = 60
    high: float = 100

    def __post_init__(self):
        for f in fields(self):
            _check_non_negative("RiskThresholds", f.name, getattr(self, f.name))
        if not (self.low < self.medium < self.high):
            raise RiskConfigurationError(
                f"Risk thresholds must satisfy low < medium < high, "
                f"got low={self.low}, medium={self.medium}, high={self.high}"
            )


@dataclass(frozen=True)
class AgeBasedStandards:
    target_steps: int = 4000      # recommended daily steps, older adults
    minimum_steps: int = 1500     # below this a day counts as low activity
    risk_thresholds: RiskThresholds = field(default_factory=RiskThresholds)

    def __post_init__(self):
        _check_non_negative("AgeBasedStandards", "target_steps", self.target_steps)
        _check_non_negative("AgeBasedStandards", "minimum_steps", self.minimum_steps)
        if not isinstance(self.risk_thresholds, RiskThresholds):
            raise RiskConfigurationError("AgeBasedStandards.risk_thresholds must be RiskThresholds")


DEFAULT_WEIGHTS = RiskWeights()
DEFAULT_STANDARDS = AgeBasedStandards()


@dataclass(frozen=True)
class EngineConfig:
    """Read-only configuration built once at startup and passed by reference"""
    weights: RiskWeights = DEFAULT_WEIGHTS
    standards: AgeBasedStandards = DEFAULT_STANDARDS


def _env_number(name: str, default, cast=float):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RiskConfigurationError(f"{name} is not a valid number: {raw!r}")
    if cast is int:
        if not value.is_integer():
            raise RiskConfigurationError(f"{name} must be a whole number of steps: {raw!r}")
        return int(value)
    return value


def load_engine_config() -> EngineConfig:
    """Build an EngineConfig from the environment (unset variables keep the defaults)."""
    try:
        weights = RiskWeights(
            average_steps=_env_number("STEPRISK_WEIGHT_AVERAGE_STEPS", DEFAULT_WEIGHTS.average_steps),
            step_variability=_env_number("STEPRISK_WEIGHT_STEP_VARIABILITY", DEFAULT_WEIGHTS.step_variability),
            trend_direction=_env_number("STEPRISK_WEIGHT_TREND_DIRECTION", DEFAULT_WEIGHTS.trend_direction),
            consistency=_env_number("STEPRISK_WEIGHT_CONSISTENCY", DEFAULT_WEIGHTS.consistency),
        )
        thresholds = RiskThresholds(
            low=_env_number("STEPRISK_THRESHOLD_LOW", DEFAULT_STANDARDS.risk_thresholds.low),
            medium=_env_number("STEPRISK_THRESHOLD_MEDIUM", DEFAULT_STANDARDS.risk_thresholds.medium),
            high=_env_number("STEPRISK_THRESHOLD_HIGH", DEFAULT_STANDARDS.risk_thresholds.high),
        )
        standards = AgeBasedStandards(
            target_steps=_env_number("STEPRISK_TARGET_STEPS", DEFAULT_STANDARDS.target_steps, int),
            minimum_steps=_env_number("STEPRISK_MINIMUM_STEPS", DEFAULT_STANDARDS.minimum_steps, int),
            risk_thresholds=thresholds,
        )
    except RiskConfigurationError as e:
        logger.warning("Rejected engine configuration: %s", e)
        raise
    return EngineConfig(weights=weights, standards=standards)
