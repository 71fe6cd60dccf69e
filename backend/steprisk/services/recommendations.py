"""
Risk descriptions and improvement suggestions

Plain lookups over fixed text; the same RiskScore always yields the same
descriptions and the same suggestions in the same order.
"""

import logging
from typing import List, Union

from steprisk.models.activity import RiskDomain, RiskLevel, RiskScore

logger = logging.getLogger(__name__)


RISK_DESCRIPTIONS = {
    RiskLevel.LOW: {
        RiskDomain.OVERALL: "Your current health status is good. Keep up your daily habits.",
        RiskDomain.FALL: "Fall risk is low. Continue your current exercise routine.",
        RiskDomain.FRAILTY: "Frailty risk is low and physical function is being maintained.",
        RiskDomain.MENTAL_HEALTH: "Mental health appears to be in good condition.",
    },
    RiskLevel.MEDIUM: {
        RiskDomain.OVERALL: "Your health status needs attention. Consider reviewing your daily habits.",
        RiskDomain.FALL: "Fall risk is somewhat elevated. Add balance exercises to your routine.",
        RiskDomain.FRAILTY: "There are signs of frailty. Aim for moderate exercise and good nutrition.",
        RiskDomain.MENTAL_HEALTH: "Mental health needs attention. Make sure to get enough rest.",
    },
    RiskLevel.HIGH: {
        RiskDomain.OVERALL: "Your health status is concerning. We recommend consulting a healthcare professional.",
        RiskDomain.FALL: "Fall risk is high. Make your surroundings safe and consider consulting a professional.",
        RiskDomain.FRAILTY: "Frailty risk is high. Talk with your doctor about countermeasures.",
        RiskDomain.MENTAL_HEALTH: "Mental health care is needed. We recommend seeking professional support.",
    },
}

# Suggestion groups in output order
SAFETY_SUGGESTIONS = [
    "Consider consulting a healthcare professional.",
    "Check your home for hazards to help prevent falls.",
]
FRAILTY_SUGGESTIONS = [
    "Include light strength training in your daily routine.",
    "Make a conscious effort to eat enough protein.",
]
MENTAL_HEALTH_SUGGESTIONS = [
    "Consider taking part in social activities.",
    "Get enough sleep and keep a regular daily rhythm.",
]
BASELINE_SUGGESTIONS = [
    "Record your daily steps to stay aware of your activity level.",
    "Try to eat a well-balanced diet.",
]

_ELEVATED = (RiskLevel.MEDIUM, RiskLevel.HIGH)


def get_risk_description(level: Union[RiskLevel, str], domain: Union[RiskDomain, str]) -> str:
    """위험 수준/영역별 설명 문구 반환 (알 수 없는 조합은 빈 문자열)"""
    try:
        return RISK_DESCRIPTIONS[RiskLevel(level)][RiskDomain(domain)]
    except ValueError:
        logger.debug("No description for level=%r domain=%r", level, domain)
        return ""


def get_all_descriptions(score: RiskScore) -> dict:
    return {
        domain.value: get_risk_description(score.level_for(domain), domain)
        for domain in RiskDomain
    }


def generate_improvement_suggestions(score: RiskScore) -> List[str]:
    """Ordered suggestions: safety, frailty, mental health, then the two baseline items."""
    suggestions: List[str] = []

    if score.overall == RiskLevel.HIGH or score.fall_risk == RiskLevel.HIGH:
        suggestions.extend(SAFETY_SUGGESTIONS)

    if score.frailty_risk in _ELEVATED:
        suggestions.extend(FRAILTY_SUGGESTIONS)

    if score.mental_health_risk in _ELEVATED:
        suggestions.extend(MENTAL_HEALTH_SUGGESTIONS)

    suggestions.extend(BASELINE_SUGGESTIONS)
    return suggestions
