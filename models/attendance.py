from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class AttendanceRecord:
    date: date
    class_id: str
    status: str    # "present", "absent", "holiday" (None is never stored)

    @property
    def key(self) -> Tuple[date, str]:
        return (self.date, self.class_id)


@dataclass
class AttendanceStats:
    overall: float                      # 0-100
    by_subject: Dict[str, float]        # class_id -> 0-100
    held_units: int
    attended_units: int
    held_by_class: Dict[str, int] = field(default_factory=dict)
    attended_by_class: Dict[str, int] = field(default_factory=dict)
    as_of_date: Optional[date] = None

    @property
    def missed_units(self) -> int:
        return self.held_units - self.attended_units


@dataclass
class SubjectStats:
    """Attendance for one subject, combining all of its weekly slots."""
    name: str
    class_ids: list
    held_units: int
    attended_units: int
    percentage: float
