"""Tracker pipeline: aggregate, project and recommend over one snapshot."""

import logging
from datetime import date
from typing import List, Optional, Tuple

from models.timetable import ScheduledClass
from models.snapshot import TrackerSnapshot
from models.forecast import TrackerReport
from engine.calendar_utils import (
    DateLike, to_date, cancelled_classes, classes_on_date, is_holiday, remaining_class_days,
    total_units_in_cycle, unit_weight,
)
from engine.attendance_engine import compute_attendance, group_by_subject_name
from engine.projector import project, projected_percentage
from engine.recommender import recommend
from engine.explainer import explain_projection, explain_recommendation

log = logging.getLogger(__name__)


def run_tracker(
    snapshot: TrackerSnapshot,
    as_of_date: Optional[DateLike] = None,
    rule_config: Optional[dict] = None,
) -> TrackerReport:
    """Run the full pipeline for a snapshot and return everything the dashboard shows."""
    as_of = to_date(as_of_date) if as_of_date is not None else date.today()
    cycle = snapshot.cycle

    # Stage 1: what has happened so far
    stats = compute_attendance(
        snapshot.attendance, snapshot.timetable,
        cycle.start_date, cycle.end_date, snapshot.holidays,
        as_of_date=as_of, rule_config=rule_config,
    )
    subject_groups = group_by_subject_name(stats, snapshot.timetable)

    # Stage 2: what is still to come, minus classes cancelled ahead of time
    cancelled = cancelled_classes(snapshot.attendance)
    upcoming = remaining_class_days(
        snapshot.timetable, cycle.end_date, snapshot.holidays, as_of,
        cycle_start=cycle.start_date, cancelled=cancelled,
    )
    remaining_units = sum(
        unit_weight(cls, rule_config) for _, classes in upcoming for cls in classes
    )

    # Stage 3: feasibility
    projection = project(
        stats.held_units, stats.attended_units, remaining_units, snapshot.target_pct,
    )

    # Stage 4: skip recommendations bounded by the slack
    recommendations = recommend(
        upcoming, stats.by_subject, snapshot.target_pct,
        projection.max_absences, rule_config,
    )

    explanation = explain_projection(
        held_units=stats.held_units,
        attended_units=stats.attended_units,
        remaining_units=remaining_units,
        projection=projection,
        current_pct=stats.overall,
        best_case_pct=projected_percentage(
            stats.attended_units, stats.held_units, remaining_units,
        ),
    )
    reasons = [
        explain_recommendation(
            rec, stats.by_subject.get(rec.scheduled_class.class_id, 0.0), snapshot.target_pct,
        )
        for rec in recommendations
    ]

    message = None
    if not cycle.is_valid:
        message = "Cycle end date is before its start date; no classes are counted."
    elif not snapshot.timetable:
        message = "Timetable is empty; add classes to start tracking."

    log.debug(
        "Tracker as of %s: %.1f%% overall, %d remaining units, %d skips recommended",
        as_of, stats.overall, remaining_units, len(recommendations),
    )

    return TrackerReport(
        stats=stats,
        subject_groups=subject_groups,
        projection=projection,
        recommendations=recommendations,
        remaining_units=remaining_units,
        cycle_total_units=total_units_in_cycle(
            cycle.start_date, cycle.end_date, snapshot.timetable,
            snapshot.holidays, rule_config, cancelled,
        ),
        as_of_date=as_of,
        explanation_steps=explanation,
        recommendation_reasons=reasons,
        message=message,
    )


def classes_for_day(
    snapshot: TrackerSnapshot,
    day: DateLike,
) -> List[Tuple[ScheduledClass, Optional[str]]]:
    """Classes scheduled on a calendar day with their recorded status (None if unmarked).

    Holidays return an empty list.
    """
    d = to_date(day)
    if is_holiday(d, snapshot.holidays):
        return []

    statuses = {
        r.class_id: r.status for r in snapshot.attendance if to_date(r.date) == d
    }
    return [(cls, statuses.get(cls.class_id)) for cls in classes_on_date(d, snapshot.timetable)]


def compare_cycles(
    snapshot: TrackerSnapshot,
    other: TrackerSnapshot,
    as_of_date: Optional[DateLike] = None,
    rule_config: Optional[dict] = None,
) -> List[dict]:
    """Per-subject attendance side by side for two snapshots (e.g. two cycles)."""
    a = run_tracker(snapshot, as_of_date, rule_config)
    b = run_tracker(other, as_of_date, rule_config)
    a_map = {g.name: g for g in a.subject_groups}
    b_map = {g.name: g for g in b.subject_groups}

    label_a = snapshot.cycle.label
    label_b = other.cycle.label
    if label_a == label_b:
        label_a, label_b = f"{label_a} (A)", f"{label_b} (B)"

    diffs = []
    for name in sorted(set(a_map) | set(b_map)):
        ga = a_map.get(name)
        gb = b_map.get(name)
        pct_a = ga.percentage if ga else 0.0
        pct_b = gb.percentage if gb else 0.0
        diffs.append({
            "Subject": name,
            f"{label_a} %": round(pct_a, 1),
            f"{label_b} %": round(pct_b, 1),
            "Change": round(pct_b - pct_a, 1),
        })
    return diffs
