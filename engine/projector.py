"""Target feasibility projection over the rest of a cycle."""

import math
from fractions import Fraction

from models.forecast import Projection


def _ceil_pct_of(target_pct: float, units: int) -> int:
    # Exact: 75% of 120 is 90, not 91
    return math.ceil(Fraction(str(target_pct)) * units / 100)


def project(
    overall_held: int,
    overall_attended: int,
    remaining_units: int,
    target_pct: float,
) -> Projection:
    """Decide whether target_pct is still reachable and how much slack remains."""
    total_units = overall_held + remaining_units
    units_needed_for_target = _ceil_pct_of(target_pct, total_units)

    units_needed = max(0, units_needed_for_target - overall_attended)
    max_absences = max(0, remaining_units - units_needed)
    can_reach_target = (overall_attended + remaining_units) >= units_needed_for_target

    return Projection(
        can_reach_target=can_reach_target,
        units_needed=units_needed,
        max_absences=max_absences,
        units_needed_for_target=units_needed_for_target,
        total_units=total_units,
        target_pct=target_pct,
    )


def projected_percentage(
    attended: int,
    held: int,
    remaining_units: int,
    absences: int = 0,
) -> float:
    """Cycle-end attendance % if `absences` of the remaining units are missed."""
    total = held + remaining_units
    if total == 0:
        return 0.0
    absences = min(max(0, absences), remaining_units)
    return (attended + remaining_units - absences) / total * 100
