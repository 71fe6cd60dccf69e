import datetime
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from steprisk.models.activity import (
    ActivitySource,
    DailyActivityPoint,
    RiskDomain,
    RiskLevel,
    RiskScore,
    WeeklyActivitySeries,
)
from steprisk.models.config import (
    AgeBasedStandards,
    EngineConfig,
    RiskConfigurationError,
    RiskThresholds,
)
from steprisk.services.recommendations import (
    generate_improvement_suggestions,
    get_all_descriptions,
    get_risk_description,
)
from steprisk.services.risk_alerts import (
    detect_risk_level_change,
    get_risk_alert,
    get_specific_risk_alerts,
)
from steprisk.services.risk_engine import assess_activity, default_risk_score

logger = logging.getLogger(__name__)

router = APIRouter()


class ActivityPointIn(BaseModel):
    value: int = Field(ge=0)
    date: datetime.date
    source: ActivitySource = ActivitySource.DEVICE


class WeightsIn(BaseModel):
    average_steps: Optional[float] = None
    step_variability: Optional[float] = None
    trend_direction: Optional[float] = None
    consistency: Optional[float] = None


class ThresholdsIn(BaseModel):
    low: float = 25
    medium: float = 60
    high: float = 100


class StandardsIn(BaseModel):
    target_steps: int = 4000
    minimum_steps: int = 1500
    risk_thresholds: ThresholdsIn = ThresholdsIn()


class RiskScoreRequest(BaseModel):
    steps: List[ActivityPointIn] = []
    weights: Optional[WeightsIn] = None
    standards: Optional[StandardsIn] = None


class RiskScoreIn(BaseModel):
    overall: RiskLevel
    fall_risk: RiskLevel
    frailty_risk: RiskLevel
    mental_health_risk: RiskLevel


class LevelChangeIn(BaseModel):
    previous: RiskLevel
    current: RiskLevel


def _engine_config(request: Request) -> EngineConfig:
    return request.app.state.engine_config


@router.post("/score")
async def score_activity(body: RiskScoreRequest, request: Request):
    """걸음수 시계열로 위험도 산출"""
    config = _engine_config(request)
    try:
        weights = config.weights
        if body.weights:
            weights = weights.with_overrides(**body.weights.model_dump())
        standards = config.standards
        if body.standards:
            s = body.standards
            standards = AgeBasedStandards(
                target_steps=s.target_steps,
                minimum_steps=s.minimum_steps,
                risk_thresholds=RiskThresholds(**s.risk_thresholds.model_dump()),
            )
    except RiskConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    series = WeeklyActivitySeries.from_points(
        DailyActivityPoint(value=p.value, date=p.date, source=p.source)
        for p in sorted(body.steps, key=lambda p: p.date)
    )
    try:
        assessment = assess_activity(series, weights, standards)
    except Exception:
        # Same fail-safe as compute_risk_score, but keep the response shape
        logger.exception("Risk assessment failed; returning fail-safe default")
        score = default_risk_score()
        return {
            "score": score.to_dict(),
            "fail_safe": True,
            "descriptions": get_all_descriptions(score),
            "suggestions": generate_improvement_suggestions(score),
        }

    score = assessment.score
    return {
        "score": score.to_dict(),
        "fail_safe": False,
        "signals": assessment.signals.to_dict(),
        "composite": round(assessment.composite, 2),
        "combined_score": round(assessment.combined_score, 2),
        "average_steps": assessment.average_steps,
        "descriptions": get_all_descriptions(score),
        "suggestions": generate_improvement_suggestions(score),
        "alert": get_risk_alert(score.overall),
        "specific_alerts": get_specific_risk_alerts(assessment),
    }


@router.get("/descriptions/{domain}/{level}")
async def get_description(domain: RiskDomain, level: RiskLevel):
    """위험 수준별 설명 조회"""
    return {
        "domain": domain.value,
        "level": level.value,
        "description": get_risk_description(level, domain),
    }


@router.post("/suggestions")
async def get_suggestions(body: RiskScoreIn):
    score = RiskScore(**body.model_dump())
    return {"suggestions": generate_improvement_suggestions(score)}


@router.post("/alerts/level-change")
async def level_change(body: LevelChangeIn):
    """위험 수준 상승 시 알림 내용 생성"""
    return {"notification": detect_risk_level_change(body.previous, body.current)}
