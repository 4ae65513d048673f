"""Generates human-readable explanations for projections and skip recommendations."""

from typing import List

from models.forecast import Projection, SkipRecommendation
from engine.calendar_utils import format_date


def explain_projection(
    held_units: int,
    attended_units: int,
    remaining_units: int,
    projection: Projection,
    current_pct: float,
    best_case_pct: float,
) -> List[str]:
    """Produce step-by-step explanation for a feasibility projection."""
    steps = []

    steps.append(
        f"Step 1 - So far: attended {attended_units} of {held_units} class units "
        f"=> {current_pct:.1f}%"
    )

    steps.append(
        f"Step 2 - Still to come: {remaining_units} class units "
        f"=> {projection.total_units} units by the end of the cycle"
    )

    steps.append(
        f"Step 3 - Target: {projection.target_pct:g}% of {projection.total_units} "
        f"= {projection.units_needed_for_target} units must be attended (rounded up)"
    )

    steps.append(
        f"Step 4 - Need {projection.units_needed} more units; "
        f"{projection.max_absences} of the remaining {remaining_units} can be missed"
    )

    if projection.can_reach_target:
        steps.append(
            f"Result: Target reachable. Attending everything gives {best_case_pct:.1f}%"
        )
    else:
        steps.append(
            f"Result: Target out of reach. Even attending everything gives {best_case_pct:.1f}%"
        )

    return steps


def explain_recommendation(rec: SkipRecommendation, subject_pct: float, target_pct: float) -> str:
    """One-line reason for a single skip recommendation."""
    cls = rec.scheduled_class
    kind = "lab" if cls.is_lab else "class"
    when = f"{format_date(rec.date)} {cls.start_time}-{cls.end_time}"

    if rec.impact == 0:
        return (
            f"{cls.name} ({kind}, {when}): at {subject_pct:.1f}%, already meets the "
            f"{target_pct:g}% target - safe to skip"
        )
    return (
        f"{cls.name} ({kind}, {when}): at {subject_pct:.1f}%, "
        f"{target_pct - subject_pct:.1f} points below target => impact {rec.impact:.1f} "
        f"({rec.priority} priority)"
    )
