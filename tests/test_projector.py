"""Tests for the feasibility projector."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from engine.projector import project, projected_percentage


class TestProject:
    def test_target_out_of_reach(self):
        result = project(overall_held=100, overall_attended=60, remaining_units=20, target_pct=75)
        assert result.units_needed_for_target == 90
        assert result.units_needed == 30
        assert result.max_absences == 0
        assert result.can_reach_target is False

    def test_target_reachable_with_slack(self):
        result = project(overall_held=40, overall_attended=36, remaining_units=60, target_pct=75)
        # ceil(0.75 * 100) = 75 => need 39 more, can miss 21
        assert result.units_needed_for_target == 75
        assert result.units_needed == 39
        assert result.max_absences == 21
        assert result.can_reach_target is True

    def test_ceiling_rounding(self):
        result = project(overall_held=3, overall_attended=0, remaining_units=0, target_pct=65)
        # 0.65 * 3 = 1.95 => 2
        assert result.units_needed_for_target == 2

    def test_exact_percentage_not_over_counted(self):
        result = project(overall_held=100, overall_attended=0, remaining_units=20, target_pct=75)
        assert result.units_needed_for_target == 90

    def test_already_above_target(self):
        result = project(overall_held=10, overall_attended=10, remaining_units=5, target_pct=50)
        assert result.units_needed == 0
        assert result.max_absences == 5
        assert result.can_reach_target is True

    def test_nothing_held_or_remaining(self):
        result = project(0, 0, 0, 75)
        assert result.units_needed_for_target == 0
        assert result.units_needed == 0
        assert result.max_absences == 0
        assert result.can_reach_target is True

    def test_can_reach_is_monotone_in_remaining_units(self):
        for held, attended in [(100, 60), (10, 2), (50, 50), (30, 0)]:
            for target in (50, 65, 75, 90):
                previous = False
                for remaining in range(0, 300):
                    reachable = project(held, attended, remaining, target).can_reach_target
                    assert not (previous and not reachable)
                    previous = reachable

    def test_max_absences_never_exceeds_remaining(self):
        for remaining in range(0, 50, 7):
            result = project(20, 5, remaining, 80)
            assert 0 <= result.max_absences <= remaining


class TestProjectedPercentage:
    def test_best_case(self):
        assert projected_percentage(60, 100, 20) == 80.0

    def test_with_absences(self):
        assert projected_percentage(60, 100, 20, absences=20) == 50.0

    def test_absences_clamped(self):
        assert projected_percentage(60, 100, 20, absences=50) == 50.0

    def test_zero_total(self):
        assert projected_percentage(0, 0, 0) == 0.0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
