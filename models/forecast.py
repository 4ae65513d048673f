from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from models.timetable import ScheduledClass
from models.attendance import AttendanceStats, SubjectStats


@dataclass
class Projection:
    can_reach_target: bool
    units_needed: int               # more units that must still be attended
    max_absences: int               # remaining units that may be missed
    units_needed_for_target: int    # attended units required by cycle end
    total_units: int                # held + remaining
    target_pct: float


@dataclass
class SkipRecommendation:
    date: date
    scheduled_class: ScheduledClass
    impact: float
    priority: str  # "low", "medium", "high"


@dataclass
class TrackerReport:
    """Everything the dashboard shows for one snapshot."""
    stats: AttendanceStats
    subject_groups: List[SubjectStats]
    projection: Projection
    recommendations: List[SkipRecommendation]
    remaining_units: int
    cycle_total_units: int
    as_of_date: date
    explanation_steps: List[str] = field(default_factory=list)
    recommendation_reasons: List[str] = field(default_factory=list)
    message: Optional[str] = None
