"""File parsing: CSV/XLSX into typed model lists, and back out to DataFrames."""

import logging
import pandas as pd
from typing import List, Tuple

from models.timetable import ScheduledClass, Holiday
from models.attendance import AttendanceRecord, SubjectStats
from models.forecast import SkipRecommendation
from engine.calendar_utils import to_date, format_date
from config.defaults import TIME_FORMAT

log = logging.getLogger(__name__)


TIMETABLE_COLUMNS = [
    "Class ID", "Subject", "Instructor", "Room", "Start Time", "End Time", "Day", "Is Lab",
]
HOLIDAY_COLUMNS = ["Date", "Name"]
ATTENDANCE_COLUMNS = ["Date", "Class ID", "Status"]

_TRUE_VALUES = {"true", "yes", "y", "1", "lab"}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if pd.isna(value):
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def _cell_str(row, column: str, default: str = "") -> str:
    value = row.get(column)
    if value is None or pd.isna(value):
        return default
    return str(value).strip()


def _time_str(row, column: str) -> str:
    # Excel hands back datetime.time cells; CSV gives "HH:MM" strings
    value = row.get(column)
    if hasattr(value, "strftime"):
        return value.strftime(TIME_FORMAT)
    return _cell_str(row, column)


def parse_timetable(df: pd.DataFrame) -> List[ScheduledClass]:
    """Convert a timetable DataFrame into ScheduledClass objects."""
    classes = []
    for _, row in df.iterrows():
        classes.append(ScheduledClass(
            class_id=str(row["Class ID"]).strip(),
            name=str(row["Subject"]).strip(),
            instructor=_cell_str(row, "Instructor"),
            room=_cell_str(row, "Room"),
            start_time=_time_str(row, "Start Time"),
            end_time=_time_str(row, "End Time"),
            day=str(row["Day"]).strip().capitalize(),
            is_lab=_parse_bool(row.get("Is Lab", False)),
        ))
    return classes


def parse_holidays(df: pd.DataFrame) -> List[Holiday]:
    """Convert a holidays DataFrame into Holiday objects."""
    holidays = []
    for _, row in df.iterrows():
        holidays.append(Holiday(
            date=to_date(pd.Timestamp(row["Date"]).to_pydatetime()),
            name=_cell_str(row, "Name", default="Holiday"),
        ))
    return holidays


def parse_attendance(df: pd.DataFrame) -> List[AttendanceRecord]:
    """Convert an attendance DataFrame into AttendanceRecord objects.

    Rows with a blank status are dropped; a blank status means "not marked".
    Later rows for the same (date, class) replace earlier ones.
    """
    records = {}
    skipped = 0
    for _, row in df.iterrows():
        status = _cell_str(row, "Status").lower()
        if not status:
            skipped += 1
            continue
        d = to_date(pd.Timestamp(row["Date"]).to_pydatetime())
        class_id = str(row["Class ID"]).strip()
        records[(d, class_id)] = AttendanceRecord(date=d, class_id=class_id, status=status)

    if skipped:
        log.warning("Dropped %d attendance rows without a status", skipped)
    return list(records.values())


def load_file(uploaded_file) -> pd.DataFrame:
    """Load a file (CSV or XLSX) into a DataFrame."""
    name = getattr(uploaded_file, "name", str(uploaded_file)).lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "timetable": ["timetable", "time table", "schedule", "classes", "subjects"],
    "holidays": ["holidays", "holiday", "holiday list", "calendar"],
    "attendance": ["attendance", "attendance log", "log", "records"],
}


def _match_sheet(sheet_names: List[str], category: str) -> str:
    """Find a sheet name matching the given category. Returns the matched name or raises."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(uploaded_file) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Load a single Excel file with 3 tabs: Timetable, Holidays, Attendance.

    Sheet names are matched case-insensitively. Accepted names include:
    - Timetable: 'Timetable', 'Schedule', 'Classes', etc.
    - Holidays: 'Holidays', 'Holiday List', etc.
    - Attendance: 'Attendance', 'Attendance Log', etc.

    An empty attendance DataFrame is returned when there is no attendance sheet.

    Returns (timetable_df, holidays_df, attendance_df).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    timetable_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "timetable"))
    holidays_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "holidays"))
    try:
        attendance_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "attendance"))
    except ValueError:
        attendance_df = pd.DataFrame(columns=ATTENDANCE_COLUMNS)

    log.info("Loaded workbook with sheets %s", sheet_names)
    return timetable_df, holidays_df, attendance_df


# --- Export ---

def timetable_to_df(timetable: List[ScheduledClass]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Class ID": c.class_id,
                "Subject": c.name,
                "Instructor": c.instructor,
                "Room": c.room,
                "Start Time": c.start_time,
                "End Time": c.end_time,
                "Day": c.day,
                "Is Lab": c.is_lab,
            }
            for c in timetable
        ],
        columns=TIMETABLE_COLUMNS,
    )


def holidays_to_df(holidays: List[Holiday]) -> pd.DataFrame:
    rows = [{"Date": format_date(h.date), "Name": h.name} for h in holidays]
    return pd.DataFrame(rows, columns=HOLIDAY_COLUMNS).sort_values("Date", ignore_index=True)


def attendance_to_df(attendance: List[AttendanceRecord]) -> pd.DataFrame:
    rows = [
        {"Date": format_date(r.date), "Class ID": r.class_id, "Status": r.status}
        for r in attendance
    ]
    return pd.DataFrame(rows, columns=ATTENDANCE_COLUMNS).sort_values(
        ["Date", "Class ID"], ignore_index=True,
    )


def subject_stats_to_df(groups: List[SubjectStats]) -> pd.DataFrame:
    """Per-subject summary table, lowest attendance first."""
    return pd.DataFrame(
        [
            {
                "Subject": g.name,
                "Held Units": g.held_units,
                "Attended Units": g.attended_units,
                "Attendance %": round(g.percentage, 1),
            }
            for g in groups
        ],
        columns=["Subject", "Held Units", "Attended Units", "Attendance %"],
    )


def recommendations_to_df(recommendations: List[SkipRecommendation]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Date": format_date(r.date),
                "Day": r.date.strftime("%A"),
                "Subject": r.scheduled_class.name,
                "Time": f"{r.scheduled_class.start_time}-{r.scheduled_class.end_time}",
                "Lab": r.scheduled_class.is_lab,
                "Impact": round(r.impact, 1),
                "Priority": r.priority,
            }
            for r in recommendations
        ],
        columns=["Date", "Day", "Subject", "Time", "Lab", "Impact", "Priority"],
    )


def write_snapshot_excel(path: str, timetable, holidays, attendance):
    """Write timetable, holidays and attendance to a single multi-tab workbook."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        timetable_to_df(timetable).to_excel(writer, sheet_name="Timetable", index=False)
        holidays_to_df(holidays).to_excel(writer, sheet_name="Holidays", index=False)
        attendance_to_df(attendance).to_excel(writer, sheet_name="Attendance", index=False)
    log.info("Wrote snapshot workbook to %s", path)
