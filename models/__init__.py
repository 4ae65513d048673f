from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord, AttendanceStats, SubjectStats
from models.snapshot import Cycle, TrackerSnapshot
from models.forecast import Projection, SkipRecommendation, TrackerReport
