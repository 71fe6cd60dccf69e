"""
Activity-based health risk scoring

Pipeline (each stage only consumes the output of earlier ones):
    series -> sub-signals -> composite step risk (0-100)
           -> fall / frailty / mental-health levels -> overall level

All functions are pure. Weights and standards are passed in per call and
never stored, so the engine can be shared between callers freely.

The mental-health level is a heuristic proxy derived only from movement
patterns (trend and average level). It is not a clinical or validated
measure of psychological state.
"""

import logging
from typing import Optional

from steprisk.models.activity import (
    RiskAssessment,
    RiskLevel,
    RiskScore,
    StepSignals,
    WeeklyActivitySeries,
)
from steprisk.models.config import (
    DEFAULT_STANDARDS,
    DEFAULT_WEIGHTS,
    AgeBasedStandards,
    RiskWeights,
)
from steprisk.services.signals import count_low_activity_days, extract_signals

logger = logging.getLogger(__name__)

# No data is treated as maximal risk, never as "no risk".
EMPTY_SERIES_RISK = 100.0

# ============================================================
# 도메인별 분류 기준
# ============================================================

FRAILTY_THRESHOLDS = {
    "high_average_steps": 1500,   # average below this -> high
    "high_composite": 70,         # composite above this -> high
    "medium_average_steps": 2500,
    "medium_composite": 40,
}

FALL_THRESHOLDS = {
    "high": 60,    # (variability + consistency) / 2
    "medium": 30,
}

MENTAL_HEALTH_THRESHOLDS = {
    "high": 50,    # (trend + average level) / 2
    "medium": 25,
}

OVERALL_WEIGHTS = {
    "frailty_points": 30,
    "fall_points": 25,
    "divisor": 3,
}


def combine_signals(signals: StepSignals, weights: RiskWeights = DEFAULT_WEIGHTS) -> float:
    """Weighted sum of the sub-signals, clamped to [0, 100]."""
    composite = (
        signals.average * weights.average_steps
        + signals.variability * weights.step_variability
        + signals.trend * weights.trend_direction
        + signals.consistency * weights.consistency
    )
    return min(max(composite, 0.0), 100.0)


def composite_step_risk(
    series: WeeklyActivitySeries,
    weights: RiskWeights = DEFAULT_WEIGHTS,
    standards: AgeBasedStandards = DEFAULT_STANDARDS,
) -> float:
    """Composite step-based risk; exactly 100 for an empty series."""
    if len(series) == 0:
        return EMPTY_SERIES_RISK
    return combine_signals(extract_signals(series, standards), weights)


def classify_frailty(average_steps: float, composite: float) -> RiskLevel:
    t = FRAILTY_THRESHOLDS
    if average_steps < t["high_average_steps"] or composite > t["high_composite"]:
        return RiskLevel.HIGH
    elif average_steps < t["medium_average_steps"] or composite > t["medium_composite"]:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def classify_fall(signals: StepSignals) -> RiskLevel:
    """낙상 위험: 걸음 패턴의 불안정성"""
    combined = (signals.variability + signals.consistency) / 2
    if combined > FALL_THRESHOLDS["high"]:
        return RiskLevel.HIGH
    elif combined > FALL_THRESHOLDS["medium"]:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def classify_mental_health(signals: StepSignals) -> RiskLevel:
    """Movement-pattern proxy only; see module docstring."""
    combined = (signals.trend + signals.average) / 2
    if combined > MENTAL_HEALTH_THRESHOLDS["high"]:
        return RiskLevel.HIGH
    elif combined > MENTAL_HEALTH_THRESHOLDS["medium"]:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def overall_combined_score(composite: float, frailty: RiskLevel, fall: RiskLevel) -> float:
    w = OVERALL_WEIGHTS
    return (
        composite
        + frailty.points * w["frailty_points"]
        + fall.points * w["fall_points"]
    ) / w["divisor"]


def classify_overall(
    composite: float,
    frailty: RiskLevel,
    fall: RiskLevel,
    standards: AgeBasedStandards = DEFAULT_STANDARDS,
) -> RiskLevel:
    # With the default high threshold (100) this never returns HIGH:
    # the combined score peaks at (100 + 90 + 75) / 3 ~= 88.3.
    score = overall_combined_score(composite, frailty, fall)
    thresholds = standards.risk_thresholds
    if score >= thresholds.high:
        return RiskLevel.HIGH
    elif score >= thresholds.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def assess_activity(
    series: WeeklyActivitySeries,
    weights: Optional[RiskWeights] = None,
    standards: Optional[AgeBasedStandards] = None,
) -> RiskAssessment:
    """Run the full pipeline and return every intermediate value.

    Errors propagate; use compute_risk_score for the fail-safe variant.
    """
    weights = weights or DEFAULT_WEIGHTS
    standards = standards or DEFAULT_STANDARDS

    signals = extract_signals(series, standards)
    composite = composite_step_risk(series, weights, standards)
    # Frailty is judged on the default-weight composite, independent of
    # any per-call weight override.
    frailty_composite = composite_step_risk(series, DEFAULT_WEIGHTS, standards)

    frailty = classify_frailty(series.average_steps, frailty_composite)
    fall = classify_fall(signals)
    mental = classify_mental_health(signals)
    overall = classify_overall(composite, frailty, fall, standards)

    score = RiskScore(
        overall=overall,
        fall_risk=fall,
        frailty_risk=frailty,
        mental_health_risk=mental,
    )
    combined = overall_combined_score(composite, frailty, fall)
    logger.debug(
        "composite=%.2f combined=%.2f overall=%s fall=%s frailty=%s mental=%s",
        composite, combined, overall.value, fall.value, frailty.value, mental.value,
    )
    return RiskAssessment(
        signals=signals,
        composite=composite,
        combined_score=combined,
        average_steps=series.average_steps,
        active_days=len(series) - count_low_activity_days(series.values, standards),
        score=score,
    )


def default_risk_score() -> RiskScore:
    """Fail-safe result: every domain at medium."""
    return RiskScore(
        overall=RiskLevel.MEDIUM,
        fall_risk=RiskLevel.MEDIUM,
        frailty_risk=RiskLevel.MEDIUM,
        mental_health_risk=RiskLevel.MEDIUM,
    )


def compute_risk_score(
    series: WeeklyActivitySeries,
    weights: Optional[RiskWeights] = None,
    standards: Optional[AgeBasedStandards] = None,
) -> RiskScore:
    """Compute the RiskScore for a series.

    Never raises: if the computation fails for any reason the fail-safe
    default score (all domains medium) is returned instead.
    """
    try:
        return assess_activity(series, weights, standards).score
    except Exception:
        logger.exception("Risk score computation failed; returning fail-safe default")
        return default_risk_score()
