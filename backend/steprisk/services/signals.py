"""
Step-count sub-signals

Each function maps part of an activity series onto a 0-100 risk value:
- average level:  mean daily steps against the age-based target
- variability:    coefficient of variation (population SD / mean)
- trend:          least-squares slope over the last three days
- consistency:    share of days below the minimum step count

Short series never raise; each signal falls back to 0 when it lacks data.
"""

import logging
from typing import List, Sequence

import numpy as np

from steprisk.models.activity import StepSignals, WeeklyActivitySeries
from steprisk.models.config import DEFAULT_STANDARDS, AgeBasedStandards

logger = logging.getLogger(__name__)

TREND_WINDOW = 3


def average_level_risk(average_steps: float, standards: AgeBasedStandards = DEFAULT_STANDARDS) -> int:
    """평균 걸음수 기반 위험도 (0-80)"""
    if average_steps >= standards.target_steps:
        return 0   # 목표 달성
    elif average_steps >= standards.target_steps * 0.8:
        return 20
    elif average_steps >= standards.minimum_steps:
        return 50
    else:
        return 80  # 최소 기준 미달


def coefficient_of_variation(values: Sequence[float]) -> float:
    """CV in percent; a non-positive mean counts as maximal variation (100)."""
    vals = np.asarray(values, dtype=float)
    mean = float(vals.mean())
    if mean <= 0:
        return 100.0
    return float(vals.std(ddof=0)) / mean * 100


def variability_risk(values: Sequence[int]) -> int:
    """걸음수 변동성 위험도 (0-70)"""
    if len(values) < 2:
        return 0

    cv = coefficient_of_variation(values)
    if cv > 80:
        return 70  # 매우 불안정
    elif cv > 60:
        return 50
    elif cv > 40:
        return 30
    elif cv > 25:
        return 15
    else:
        return 0   # 안정


def linear_regression_slope(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of ``values`` against indices 0..n-1.

    Uses the closed-form sums so integer step counts give an exact slope.
    """
    y = np.asarray(values, dtype=float)
    n = len(y)
    if n < 2:
        return 0.0
    x = np.arange(n, dtype=float)
    numerator = n * np.dot(x, y) - x.sum() * y.sum()
    denominator = n * np.dot(x, x) - x.sum() ** 2
    return float(numerator / denominator)


def trend_risk(values: Sequence[int]) -> int:
    """최근 3일 추세 위험도 (0-60)"""
    if len(values) < TREND_WINDOW:
        return 0

    slope = linear_regression_slope(list(values)[-TREND_WINDOW:])
    if slope < -200:
        return 60  # 급격한 감소
    elif slope < -100:
        return 40
    elif slope < -50:
        return 20
    elif slope > 100:
        return 0   # 증가 추세
    else:
        return 10  # 횡보


def count_low_activity_days(values: Sequence[int], standards: AgeBasedStandards = DEFAULT_STANDARDS) -> int:
    return sum(1 for v in values if v < standards.minimum_steps)


def consistency_risk(values: Sequence[int], standards: AgeBasedStandards = DEFAULT_STANDARDS) -> int:
    """저활동일 비율 기반 위험도 (0-80)"""
    if not values:
        return 0

    ratio = count_low_activity_days(values, standards) / len(values)
    if ratio > 0.6:
        return 80
    elif ratio > 0.4:
        return 50
    elif ratio > 0.2:
        return 25
    else:
        return 0


def extract_signals(
    series: WeeklyActivitySeries,
    standards: AgeBasedStandards = DEFAULT_STANDARDS,
) -> StepSignals:
    values: List[int] = series.values
    signals = StepSignals(
        average=average_level_risk(series.average_steps, standards),
        variability=variability_risk(values),
        trend=trend_risk(values),
        consistency=consistency_risk(values, standards),
    )
    logger.debug("Sub-signals for %d day(s): %s", len(values), signals)
    return signals
