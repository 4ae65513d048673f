"""Attendance aggregation and log mutation: lab-weighted held/attended totals."""

import logging
from datetime import date
from typing import Dict, List, Optional

from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord, AttendanceStats, SubjectStats
from engine.calendar_utils import (
    DateLike, to_date, enumerate_dates, classes_on_date, holiday_index, unit_weight,
)
from config.defaults import (
    ATTENDANCE_STATUSES, STATUS_PRESENT, STATUS_ABSENT, STATUS_HOLIDAY,
    COUNT_UNMARKED_AS_ABSENT, DEFAULT_HOLIDAY_NAME,
)

log = logging.getLogger(__name__)


def percentage(attended: int, held: int) -> float:
    """attended / held as a 0-100 percentage; 0 when nothing was held."""
    if held == 0:
        return 0.0
    return attended / held * 100


def compute_attendance(
    attendance: List[AttendanceRecord],
    timetable: List[ScheduledClass],
    cycle_start: DateLike,
    cycle_end: DateLike,
    holidays: List[Holiday],
    as_of_date: Optional[DateLike] = None,
    rule_config: Optional[dict] = None,
) -> AttendanceStats:
    """Compute overall and per-class attendance % over the elapsed part of a cycle."""
    cfg = rule_config or {}
    count_unmarked = cfg.get("count_unmarked_as_absent", COUNT_UNMARKED_AS_ABSENT)

    as_of = to_date(as_of_date) if as_of_date is not None else date.today()
    last_day = min(to_date(cycle_end), as_of)

    # Records for classes no longer in the timetable are ignored
    known_ids = {c.class_id for c in timetable}
    record_map = {}
    for record in attendance:
        if record.class_id in known_ids and record.status is not None:
            record_map[(to_date(record.date), record.class_id)] = record.status

    held_by_class: Dict[str, int] = {c.class_id: 0 for c in timetable}
    attended_by_class: Dict[str, int] = {c.class_id: 0 for c in timetable}
    off_days = holiday_index(holidays)

    for d in enumerate_dates(cycle_start, last_day):
        if d in off_days:
            continue
        for cls in classes_on_date(d, timetable):
            status = record_map.get((d, cls.class_id))
            weight = unit_weight(cls, cfg)

            if status == STATUS_HOLIDAY:
                # Class cancelled on this day only
                continue
            if status in (STATUS_PRESENT, STATUS_ABSENT):
                held_by_class[cls.class_id] += weight
                if status == STATUS_PRESENT:
                    attended_by_class[cls.class_id] += weight
            elif count_unmarked:
                held_by_class[cls.class_id] += weight

    held = sum(held_by_class.values())
    attended = sum(attended_by_class.values())
    by_subject = {
        class_id: percentage(attended_by_class[class_id], held_by_class[class_id])
        for class_id in held_by_class
    }

    log.debug("Attendance as of %s: %d/%d units", as_of, attended, held)

    return AttendanceStats(
        overall=percentage(attended, held),
        by_subject=by_subject,
        held_units=held,
        attended_units=attended,
        held_by_class=held_by_class,
        attended_by_class=attended_by_class,
        as_of_date=as_of,
    )


def group_by_subject_name(
    stats: AttendanceStats,
    timetable: List[ScheduledClass],
) -> List[SubjectStats]:
    """Combine weekly slots sharing a subject name, lowest attendance first."""
    groups: Dict[str, SubjectStats] = {}
    for cls in timetable:
        group = groups.get(cls.name)
        if group is None:
            group = SubjectStats(name=cls.name, class_ids=[], held_units=0,
                                 attended_units=0, percentage=0.0)
            groups[cls.name] = group
        if cls.class_id in group.class_ids:
            continue
        group.class_ids.append(cls.class_id)
        group.held_units += stats.held_by_class.get(cls.class_id, 0)
        group.attended_units += stats.attended_by_class.get(cls.class_id, 0)

    for group in groups.values():
        group.percentage = percentage(group.attended_units, group.held_units)

    return sorted(groups.values(), key=lambda g: g.percentage)


def apply_attendance(
    attendance: List[AttendanceRecord],
    record_date: DateLike,
    class_id: str,
    status: Optional[str],
) -> List[AttendanceRecord]:
    """Upsert (or delete when status is None) the record keyed by (date, class_id).

    Returns a new list; the input log is left untouched.
    """
    if status is not None and status not in ATTENDANCE_STATUSES:
        raise ValueError(
            f"Invalid attendance status: {status!r}. Expected one of {ATTENDANCE_STATUSES} or None."
        )

    d = to_date(record_date)
    new_log = [
        r for r in attendance
        if not (to_date(r.date) == d and r.class_id == class_id)
    ]
    if status is not None:
        new_log.append(AttendanceRecord(date=d, class_id=class_id, status=status))
    return new_log


def apply_holiday(
    holidays: List[Holiday],
    holiday_date: DateLike,
    is_holiday: bool,
    name: str = DEFAULT_HOLIDAY_NAME,
) -> List[Holiday]:
    """Add the date as a holiday if absent, or remove it if present."""
    d = to_date(holiday_date)
    exists = any(to_date(h.date) == d for h in holidays)

    if is_holiday:
        if exists:
            return list(holidays)
        return list(holidays) + [Holiday(date=d, name=name)]

    return [h for h in holidays if to_date(h.date) != d]
