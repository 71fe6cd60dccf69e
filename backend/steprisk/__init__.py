"""
Activity-based health risk scoring

Turns a rolling window of daily step counts into fall, frailty and
mental-health risk levels plus an overall level, with descriptive text
and improvement suggestions.
"""

from .models.activity import (
    ActivitySource,
    DailyActivityPoint,
    RiskAssessment,
    RiskDomain,
    RiskLevel,
    RiskScore,
    StepSignals,
    WeeklyActivitySeries,
)
from .models.config import (
    AgeBasedStandards,
    EngineConfig,
    RiskConfigurationError,
    RiskThresholds,
    RiskWeights,
    load_engine_config,
)
from .services.risk_engine import assess_activity, compute_risk_score
from .services.recommendations import generate_improvement_suggestions, get_risk_description

__all__ = [
    'ActivitySource',
    'DailyActivityPoint',
    'RiskAssessment',
    'RiskDomain',
    'RiskLevel',
    'RiskScore',
    'StepSignals',
    'WeeklyActivitySeries',
    'AgeBasedStandards',
    'EngineConfig',
    'RiskConfigurationError',
    'RiskThresholds',
    'RiskWeights',
    'load_engine_config',
    'assess_activity',
    'compute_risk_score',
    'generate_improvement_suggestions',
    'get_risk_description',
]
