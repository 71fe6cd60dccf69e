"""
Activity series and risk result value types

The engine consumes a WeeklyActivitySeries supplied by the data provider
and produces a RiskScore. Both are plain value objects with no identity;
a RiskScore is recomputed from scratch on every call.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional


class ActivitySource(str, Enum):
    MANUAL = "manual"
    DEVICE = "device"
    APP = "app"


class RiskLevel(str, Enum):
    """Categorical risk level, ordered low < medium < high.

    Comparisons go through ``points`` so that the order never falls back
    to the alphabetical order of the string values.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def points(self) -> int:
        return RISK_POINTS[self]

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.points < other.points

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.points <= other.points

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.points > other.points

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.points >= other.points


RISK_POINTS = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}


class RiskDomain(str, Enum):
    OVERALL = "overall"
    FALL = "fall"
    FRAILTY = "frailty"
    MENTAL_HEALTH = "mental_health"


@dataclass
class DailyActivityPoint:
    """One day of step data"""
    value: int
    date: date
    source: ActivitySource = ActivitySource.DEVICE


def _average_steps(points: List[DailyActivityPoint]) -> float:
    # Same rounding as the upstream provider (nearest whole step, halves up)
    if not points:
        return 0.0
    return float(math.floor(sum(p.value for p in points) / len(points) + 0.5))


@dataclass
class WeeklyActivitySeries:
    """Chronologically ordered step series (oldest first).

    Length is not fixed at seven days; an empty series is valid input.
    """
    steps: List[DailyActivityPoint] = field(default_factory=list)
    average_steps: float = 0.0
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def values(self) -> List[int]:
        return [p.value for p in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    @classmethod
    def from_points(cls, points: Iterable[DailyActivityPoint]) -> "WeeklyActivitySeries":
        points = list(points)
        return cls(steps=points, average_steps=_average_steps(points))

    @classmethod
    def from_values(
        cls,
        values: Iterable[int],
        start: Optional[date] = None,
        source: ActivitySource = ActivitySource.DEVICE,
    ) -> "WeeklyActivitySeries":
        """Build a series of consecutive days ending today (or starting at ``start``)."""
        values = list(values)
        if start is None:
            start = date.today() - timedelta(days=max(len(values) - 1, 0))
        points = [
            DailyActivityPoint(value=v, date=start + timedelta(days=i), source=source)
            for i, v in enumerate(values)
        ]
        return cls.from_points(points)


@dataclass(frozen=True)
class RiskScore:
    overall: RiskLevel
    fall_risk: RiskLevel
    frailty_risk: RiskLevel
    mental_health_risk: RiskLevel
    last_updated: datetime = field(default_factory=datetime.now, compare=False)

    def level_for(self, domain: RiskDomain) -> RiskLevel:
        return {
            RiskDomain.OVERALL: self.overall,
            RiskDomain.FALL: self.fall_risk,
            RiskDomain.FRAILTY: self.frailty_risk,
            RiskDomain.MENTAL_HEALTH: self.mental_health_risk,
        }[RiskDomain(domain)]

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.value,
            "fall_risk": self.fall_risk.value,
            "frailty_risk": self.frailty_risk.value,
            "mental_health_risk": self.mental_health_risk.value,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass(frozen=True)
class StepSignals:
    """The four 0-100 sub-signals derived from a series"""
    average: float
    variability: float
    trend: float
    consistency: float

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "variability": self.variability,
            "trend": self.trend,
            "consistency": self.consistency,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Full breakdown behind a RiskScore"""
    signals: StepSignals
    composite: float
    combined_score: float
    average_steps: float
    active_days: int
    score: RiskScore
