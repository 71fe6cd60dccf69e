"""Risk alert content for the notification layer.

Only builds alert payloads; scheduling and delivery belong to the caller.
"""

from typing import List, Optional

from steprisk.models.activity import RiskAssessment, RiskLevel

RISK_ALERT_CONFIGS = {
    RiskLevel.HIGH: {
        "title": "Health risk alert",
        "body": "Your health status needs attention. Please check the details.",
        "priority": "high",
    },
    RiskLevel.MEDIUM: {
        "title": "Health status check",
        "body": "Changes were seen in your health indicators. Please check the app for details.",
        "priority": "default",
    },
    RiskLevel.LOW: None,  # no alert for low risk
}

LEVEL_LABELS = {
    RiskLevel.LOW: "Low",
    RiskLevel.MEDIUM: "Medium",
    RiskLevel.HIGH: "High",
}

# Signal cut-offs for the detailed alert messages
DECLINE_TREND_RISK = 40
IRREGULAR_VARIABILITY_RISK = 50
LOW_WEEKLY_AVERAGE_STEPS = 3000
MIN_ACTIVE_DAYS = 4


def get_risk_alert(level: RiskLevel) -> Optional[dict]:
    config = RISK_ALERT_CONFIGS[RiskLevel(level)]
    if config is None:
        return None
    return {**config, "risk_level": RiskLevel(level).value}


def get_specific_risk_alerts(assessment: RiskAssessment) -> List[str]:
    """Detailed alert messages for the high-risk domains"""
    alerts: List[str] = []
    score = assessment.score
    signals = assessment.signals

    if score.fall_risk == RiskLevel.HIGH:
        if signals.trend >= DECLINE_TREND_RISK:
            alerts.append("A sharp drop in daily steps was detected. Please be careful to avoid falls.")
        if signals.variability >= IRREGULAR_VARIABILITY_RISK:
            alerts.append("Your activity pattern is irregular. Try to keep a regular daily routine.")

    if score.frailty_risk == RiskLevel.HIGH:
        if assessment.average_steps < LOW_WEEKLY_AVERAGE_STEPS:
            alerts.append("Your activity level is decreasing. Try to get moderate exercise.")
        if assessment.active_days < MIN_ACTIVE_DAYS:
            alerts.append("You have had few active days. Try to move a little every day.")

    return alerts


def detect_risk_level_change(previous: RiskLevel, current: RiskLevel) -> Optional[dict]:
    """Notification payload when the level rose; None when it fell or stayed the same."""
    previous = RiskLevel(previous)
    current = RiskLevel(current)
    if current <= previous:
        return None

    if current == RiskLevel.HIGH:
        title = "Your risk level has increased"
    else:
        title = "There is a change in your health indicators"

    return {
        "title": title,
        "body": (
            f"Your risk level changed from \"{LEVEL_LABELS[previous]}\" "
            f"to \"{LEVEL_LABELS[current]}\"."
        ),
        "priority": "high" if current == RiskLevel.HIGH else "default",
        "previous_level": previous.value,
        "current_level": current.value,
    }
