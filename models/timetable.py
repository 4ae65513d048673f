from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ScheduledClass:
    class_id: str
    name: str
    instructor: str
    room: str
    start_time: str     # "HH:MM"
    end_time: str       # "HH:MM"
    day: str            # "Monday".."Friday", matched case-insensitively
    is_lab: bool = False

    @property
    def weekday(self) -> str:
        return self.day.strip().lower()


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str = "Holiday"
