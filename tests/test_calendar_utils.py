"""Tests for the calendar utilities."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime

import pytest

from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord
from engine.calendar_utils import (
    to_date,
    format_date,
    day_name,
    unit_weight,
    enumerate_dates,
    classes_on_date,
    is_holiday,
    holiday_index,
    cancelled_classes,
    total_units_in_cycle,
    remaining_class_days,
)

# 2025-03-03 is a Monday
MONDAY = date(2025, 3, 3)
WEDNESDAY = date(2025, 3, 5)
SATURDAY = date(2025, 3, 8)
SUNDAY = date(2025, 3, 9)


def make_class(class_id="math", name="Mathematics", day="Monday", is_lab=False):
    return ScheduledClass(class_id, name, "Dr. X", "B4-301", "09:00", "09:50", day, is_lab)


class TestToDate:
    def test_string(self):
        assert to_date("2025-03-03") == MONDAY

    def test_datetime_drops_time(self):
        assert to_date(datetime(2025, 3, 3, 23, 59)) == MONDAY

    def test_date_passthrough(self):
        assert to_date(MONDAY) is MONDAY

    def test_iso_timestamp_string(self):
        assert to_date("2025-03-03T18:30:00Z") == MONDAY

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            to_date("03/03/2025")

    def test_format_and_day_name(self):
        assert format_date(datetime(2025, 3, 5, 8, 0)) == "2025-03-05"
        assert day_name(WEDNESDAY) == "wednesday"


class TestUnitWeight:
    def test_lab_counts_three(self):
        assert unit_weight(make_class(is_lab=True)) == 3

    def test_regular_counts_one(self):
        assert unit_weight(make_class(is_lab=False)) == 1

    def test_lab_weight_configurable(self):
        assert unit_weight(make_class(is_lab=True), {"lab_unit_weight": 2}) == 2


class TestEnumerateDates:
    def test_inclusive_range(self):
        dates = enumerate_dates(MONDAY, SUNDAY)
        assert len(dates) == 7
        assert dates[0] == MONDAY
        assert dates[-1] == SUNDAY

    def test_single_day(self):
        assert enumerate_dates(MONDAY, MONDAY) == [MONDAY]

    def test_end_before_start_is_empty(self):
        assert enumerate_dates(SUNDAY, MONDAY) == []

    def test_restartable(self):
        assert enumerate_dates(MONDAY, SUNDAY) == enumerate_dates(MONDAY, SUNDAY)


class TestClassesOnDate:
    def test_matches_weekday_case_insensitive(self):
        timetable = [make_class("a", day="monday"), make_class("b", day="MONDAY"), make_class("c", day="Tuesday")]
        result = classes_on_date(MONDAY, timetable)
        assert [c.class_id for c in result] == ["a", "b"]

    def test_weekend_is_empty(self):
        timetable = [make_class(day=d) for d in ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]]
        assert classes_on_date(SATURDAY, timetable) == []
        assert classes_on_date(SUNDAY, timetable) == []


class TestIsHoliday:
    def test_found(self):
        holidays = [Holiday(date(2025, 3, 14), "Holi")]
        assert is_holiday(datetime(2025, 3, 14, 10, 0), holidays).name == "Holi"

    def test_not_found(self):
        assert is_holiday(MONDAY, [Holiday(date(2025, 3, 14), "Holi")]) is None

    def test_index_keeps_first_duplicate(self):
        index = holiday_index([Holiday(MONDAY, "First"), Holiday(MONDAY, "Second")])
        assert index[MONDAY].name == "First"


class TestTotalUnitsInCycle:
    def test_counts_weighted_units(self):
        timetable = [make_class("m", day="Monday"), make_class("lab", day="Wednesday", is_lab=True)]
        assert total_units_in_cycle(MONDAY, SUNDAY, timetable, []) == 4

    def test_excludes_holidays(self):
        timetable = [make_class("m", day="Monday"), make_class("lab", day="Wednesday", is_lab=True)]
        holidays = [Holiday(WEDNESDAY, "Break")]
        assert total_units_in_cycle(MONDAY, SUNDAY, timetable, holidays) == 1

    def test_excludes_cancelled_classes(self):
        timetable = [make_class("m", day="Monday"), make_class("lab", day="Wednesday", is_lab=True)]
        cancelled = {(WEDNESDAY, "lab")}
        assert total_units_in_cycle(MONDAY, SUNDAY, timetable, [], cancelled=cancelled) == 1


class TestCancelledClasses:
    def test_only_holiday_records(self):
        log = [
            AttendanceRecord(MONDAY, "m", "present"),
            AttendanceRecord(WEDNESDAY, "lab", "holiday"),
            AttendanceRecord(SUNDAY, "m", "absent"),
        ]
        assert cancelled_classes(log) == {(WEDNESDAY, "lab")}

    def test_empty_log(self):
        assert cancelled_classes([]) == set()


class TestRemainingClassDays:
    def test_drops_cancelled_classes(self):
        timetable = [make_class("m", day="Monday"), make_class("w", day="Wednesday")]
        days = remaining_class_days(
            timetable, SUNDAY, [], as_of_date=date(2025, 3, 2), cancelled={(WEDNESDAY, "w")},
        )
        assert [d for d, _ in days] == [MONDAY]

    def test_starts_after_as_of(self):
        timetable = [make_class("m", day="Monday"), make_class("w", day="Wednesday")]
        days = remaining_class_days(timetable, SUNDAY, [], as_of_date=MONDAY)
        assert [d for d, _ in days] == [WEDNESDAY]

    def test_respects_cycle_start(self):
        timetable = [make_class("m", day="Monday"), make_class("w", day="Wednesday")]
        days = remaining_class_days(timetable, SUNDAY, [], as_of_date=date(2025, 2, 1), cycle_start=MONDAY)
        assert [d for d, _ in days] == [MONDAY, WEDNESDAY]

    def test_skips_holidays(self):
        timetable = [make_class("m", day="Monday"), make_class("w", day="Wednesday")]
        days = remaining_class_days(
            timetable, SUNDAY, [Holiday(WEDNESDAY, "Break")], as_of_date=date(2025, 3, 2),
        )
        assert [d for d, _ in days] == [MONDAY]

    def test_past_cycle_is_empty(self):
        timetable = [make_class("m", day="Monday")]
        assert remaining_class_days(timetable, SUNDAY, [], as_of_date=date(2025, 4, 1)) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
