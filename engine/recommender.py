"""Greedy skip recommender. Ranks upcoming classes by the impact of missing them."""

from datetime import date
from typing import Dict, List, Optional, Tuple

from models.timetable import ScheduledClass
from models.forecast import SkipRecommendation
from engine.calendar_utils import unit_weight
from config.defaults import (
    HIGH_IMPACT_THRESHOLD, MEDIUM_IMPACT_THRESHOLD,
    PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW,
)


def skip_impact(
    scheduled_class: ScheduledClass,
    subject_pct: float,
    target_pct: float,
    rule_config: Optional[dict] = None,
) -> float:
    """Shortfall below target scaled by unit weight; 0 for subjects at or above target."""
    shortfall = max(0.0, target_pct - subject_pct)
    return shortfall * unit_weight(scheduled_class, rule_config)


def classify_priority(impact: float, rule_config: Optional[dict] = None) -> str:
    cfg = rule_config or {}
    high = cfg.get("high_impact_threshold", HIGH_IMPACT_THRESHOLD)
    medium = cfg.get("medium_impact_threshold", MEDIUM_IMPACT_THRESHOLD)

    if impact > high:
        return PRIORITY_HIGH
    if impact > medium:
        return PRIORITY_MEDIUM
    return PRIORITY_LOW


def rank_upcoming_classes(
    remaining_class_days: List[Tuple[date, List[ScheduledClass]]],
    by_subject_pct: Dict[str, float],
    target_pct: float,
    rule_config: Optional[dict] = None,
) -> List[SkipRecommendation]:
    """Every upcoming class with its impact and priority, safest first."""
    upcoming = []
    for day, classes in remaining_class_days:
        for cls in classes:
            impact = skip_impact(cls, by_subject_pct.get(cls.class_id, 0.0), target_pct, rule_config)
            upcoming.append(SkipRecommendation(
                date=day,
                scheduled_class=cls,
                impact=impact,
                priority=classify_priority(impact, rule_config),
            ))

    # sorted() is stable: equal impacts keep date/timetable order
    return sorted(upcoming, key=lambda r: r.impact)


def recommend(
    remaining_class_days: List[Tuple[date, List[ScheduledClass]]],
    by_subject_pct: Dict[str, float],
    target_pct: float,
    max_absences: int,
    rule_config: Optional[dict] = None,
) -> List[SkipRecommendation]:
    """Return at most max_absences upcoming classes that are safest to skip."""
    if max_absences <= 0:
        return []

    ranked = rank_upcoming_classes(remaining_class_days, by_subject_pct, target_pct, rule_config)
    return ranked[:max_absences]
