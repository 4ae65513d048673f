"""Date-range enumeration, weekday-to-class mapping and holiday lookup."""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord
from config.defaults import DATE_FORMAT, LAB_UNIT_WEIGHT, REGULAR_UNIT_WEIGHT, STATUS_HOLIDAY

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Normalise a date, datetime or "YYYY-MM-DD" string to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}. Expected YYYY-MM-DD.")
    raise ValueError(f"Invalid date: {value!r}. Expected a date or YYYY-MM-DD string.")


def format_date(value: DateLike) -> str:
    return to_date(value).strftime(DATE_FORMAT)


def day_name(value: DateLike) -> str:
    """Lower-case weekday name, e.g. "monday"."""
    return to_date(value).strftime("%A").lower()


def unit_weight(scheduled_class: ScheduledClass, rule_config: Optional[dict] = None) -> int:
    """Class-units a single session of this class counts for."""
    cfg = rule_config or {}
    if scheduled_class.is_lab:
        return cfg.get("lab_unit_weight", LAB_UNIT_WEIGHT)
    return cfg.get("regular_unit_weight", REGULAR_UNIT_WEIGHT)


def enumerate_dates(start: DateLike, end: DateLike) -> List[date]:
    """Inclusive, ordered list of dates from start to end (empty if end < start)."""
    start_d = to_date(start)
    end_d = to_date(end)
    if end_d < start_d:
        return []
    return [start_d + timedelta(days=i) for i in range((end_d - start_d).days + 1)]


def classes_on_date(value: DateLike, timetable: Iterable[ScheduledClass]) -> List[ScheduledClass]:
    """Classes whose weekday matches the date's weekday, in timetable order."""
    name = day_name(value)
    return [c for c in timetable if c.weekday == name]


def holiday_index(holidays: Iterable[Holiday]) -> Dict[date, Holiday]:
    """Map of date -> Holiday. First entry wins for duplicate dates."""
    index = {}
    for h in holidays:
        index.setdefault(to_date(h.date), h)
    return index


def is_holiday(value: DateLike, holidays: Iterable[Holiday]) -> Optional[Holiday]:
    """Return the holiday falling on this date, else None."""
    d = to_date(value)
    for h in holidays:
        if to_date(h.date) == d:
            return h
    return None


def cancelled_classes(attendance: Iterable[AttendanceRecord]) -> Set[Tuple[date, str]]:
    """(date, class_id) pairs cancelled by a per-class holiday record."""
    return {
        (to_date(r.date), r.class_id) for r in attendance if r.status == STATUS_HOLIDAY
    }


def total_units_in_cycle(
    start: DateLike,
    end: DateLike,
    timetable: List[ScheduledClass],
    holidays: Iterable[Holiday],
    rule_config: Optional[dict] = None,
    cancelled: Optional[Set[Tuple[date, str]]] = None,
) -> int:
    """All weighted class units scheduled in [start, end], holidays and cancelled classes excluded."""
    off_days = holiday_index(holidays)
    skip = cancelled or set()
    total = 0
    for d in enumerate_dates(start, end):
        if d in off_days:
            continue
        total += sum(
            unit_weight(c, rule_config) for c in classes_on_date(d, timetable)
            if (d, c.class_id) not in skip
        )
    return total


def remaining_class_days(
    timetable: List[ScheduledClass],
    cycle_end: DateLike,
    holidays: Iterable[Holiday],
    as_of_date: DateLike,
    cycle_start: Optional[DateLike] = None,
    cancelled: Optional[Set[Tuple[date, str]]] = None,
) -> List[Tuple[date, List[ScheduledClass]]]:
    """Upcoming (date, classes) pairs strictly after as_of_date up to cycle_end.

    Days before cycle_start, holidays and days without classes are skipped.
    Classes in `cancelled` are dropped from their day.
    """
    first = to_date(as_of_date) + timedelta(days=1)
    if cycle_start is not None:
        first = max(first, to_date(cycle_start))

    off_days = holiday_index(holidays)
    skip = cancelled or set()
    days = []
    for d in enumerate_dates(first, cycle_end):
        if d in off_days:
            continue
        classes = [c for c in classes_on_date(d, timetable) if (d, c.class_id) not in skip]
        if classes:
            days.append((d, classes))
    return days
