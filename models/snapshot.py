from dataclasses import dataclass, field
from datetime import date
from typing import List

from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord
from config.defaults import DEFAULT_CYCLE_LABEL, DEFAULT_TARGET_PCT


@dataclass(frozen=True)
class Cycle:
    start_date: date
    end_date: date
    label: str = DEFAULT_CYCLE_LABEL  # "first", "second"

    @property
    def is_valid(self) -> bool:
        return self.end_date >= self.start_date


@dataclass
class TrackerSnapshot:
    """One student's tracker state, passed explicitly into every engine call."""
    cycle: Cycle
    timetable: List[ScheduledClass] = field(default_factory=list)
    holidays: List[Holiday] = field(default_factory=list)
    attendance: List[AttendanceRecord] = field(default_factory=list)
    target_pct: float = DEFAULT_TARGET_PCT
