"""Tests for the skip recommender."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

from models.timetable import ScheduledClass
from engine.recommender import skip_impact, classify_priority, rank_upcoming_classes, recommend

MONDAY = date(2025, 3, 10)
TUESDAY = date(2025, 3, 11)
WEDNESDAY = date(2025, 3, 12)


def make_class(class_id="math", name="Mathematics", day="Monday", is_lab=False):
    return ScheduledClass(class_id, name, "Dr. X", "B4-301", "09:00", "09:50", day, is_lab)


def make_days():
    """Three upcoming classes whose impacts against a 75% target are 0, 8 and 15."""
    return [
        (MONDAY, [make_class("high", "High Subject", "Monday")]),
        (TUESDAY, [make_class("mid", "Mid Subject", "Tuesday")]),
        (WEDNESDAY, [make_class("safe", "Safe Subject", "Wednesday")]),
    ]


SUBJECT_PCT = {"safe": 80.0, "mid": 67.0, "high": 60.0}


class TestSkipImpact:
    def test_above_target_is_zero(self):
        assert skip_impact(make_class(), 90.0, 75.0) == 0

    def test_shortfall_times_weight(self):
        assert skip_impact(make_class(), 70.0, 75.0) == 5.0
        assert skip_impact(make_class(is_lab=True), 70.0, 75.0) == 15.0


class TestClassifyPriority:
    def test_thresholds(self):
        assert classify_priority(0) == "low"
        assert classify_priority(5) == "low"
        assert classify_priority(5.01) == "medium"
        assert classify_priority(10) == "medium"
        assert classify_priority(10.01) == "high"

    def test_configurable_thresholds(self):
        config = {"high_impact_threshold": 20, "medium_impact_threshold": 1}
        assert classify_priority(15, config) == "medium"


class TestRecommend:
    def test_returns_lowest_impacts_in_order(self):
        result = recommend(make_days(), SUBJECT_PCT, 75.0, max_absences=2)
        assert [r.impact for r in result] == [0, 8]
        assert [r.priority for r in result] == ["low", "medium"]
        assert [r.scheduled_class.class_id for r in result] == ["safe", "mid"]

    def test_no_slack_returns_empty(self):
        assert recommend(make_days(), SUBJECT_PCT, 75.0, max_absences=0) == []
        assert recommend(make_days(), SUBJECT_PCT, 75.0, max_absences=-3) == []

    def test_never_exceeds_max_absences(self):
        for n in range(0, 6):
            assert len(recommend(make_days(), SUBJECT_PCT, 75.0, max_absences=n)) <= n

    def test_ties_keep_date_order(self):
        days = [
            (MONDAY, [make_class("a", "A", "Monday"), make_class("b", "B", "Monday")]),
            (TUESDAY, [make_class("c", "C", "Tuesday")]),
        ]
        result = recommend(days, {"a": 90, "b": 90, "c": 90}, 75.0, max_absences=3)
        assert [(r.date, r.scheduled_class.class_id) for r in result] == [
            (MONDAY, "a"), (MONDAY, "b"), (TUESDAY, "c"),
        ]

    def test_lab_weighs_three_times(self):
        days = [(MONDAY, [make_class("lab", "Lab", "Monday", is_lab=True), make_class("lec", "Lecture", "Monday")])]
        result = recommend(days, {"lab": 70.0, "lec": 70.0}, 75.0, max_absences=2)
        assert [r.scheduled_class.class_id for r in result] == ["lec", "lab"]
        assert result[1].impact == 3 * result[0].impact

    def test_missing_subject_pct_treated_as_zero(self):
        days = [(MONDAY, [make_class("new", "New", "Monday")])]
        result = recommend(days, {}, 75.0, max_absences=1)
        assert result[0].impact == 75.0
        assert result[0].priority == "high"


class TestRankUpcomingClasses:
    def test_ranks_everything(self):
        ranked = rank_upcoming_classes(make_days(), SUBJECT_PCT, 75.0)
        assert [r.impact for r in ranked] == [0, 8, 15]
        assert ranked[-1].priority == "high"


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
