"""Schema validation for timetable, holiday and attendance files."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd

from config.defaults import WEEKDAYS, ATTENDANCE_STATUSES


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


TIMETABLE_REQUIRED_COLUMNS = [
    "Class ID",
    "Subject",
    "Start Time",
    "End Time",
    "Day",
]

HOLIDAY_REQUIRED_COLUMNS = [
    "Date",
]

ATTENDANCE_REQUIRED_COLUMNS = [
    "Date",
    "Class ID",
    "Status",
]

_TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


def _check_required_columns(
    df: pd.DataFrame, required: List[str], file_label: str, allow_empty: bool = False,
) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty and not allow_empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _unparseable_dates(series: pd.Series) -> List[str]:
    parsed = pd.to_datetime(series, errors="coerce")
    return series[parsed.isna()].astype(str).tolist()


def validate_timetable(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TIMETABLE_REQUIRED_COLUMNS, "Timetable")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["Class ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(
            f"Timetable: Duplicate class IDs: {df[dupes]['Class ID'].unique().tolist()}"
        )

    days = df["Day"].astype(str).str.strip().str.lower()
    bad_days = sorted(set(df["Day"][~days.isin(WEEKDAYS)].astype(str)))
    if bad_days:
        result.is_valid = False
        result.errors.append(
            f"Timetable: Day must be Monday to Friday. Found: {', '.join(bad_days)}"
        )

    for col in ["Start Time", "End Time"]:
        times = df[col].astype(str).str.strip()
        bad_times = times[~times.str.match(_TIME_PATTERN)].tolist()
        if bad_times:
            result.is_valid = False
            result.errors.append(f"Timetable: {col} must be HH:MM. Found: {bad_times}")

    if result.is_valid:
        start = df["Start Time"].astype(str).str.strip().str.zfill(5)
        end = df["End Time"].astype(str).str.strip().str.zfill(5)
        inverted = df["Class ID"][end <= start].astype(str).tolist()
        if inverted:
            result.warnings.append(
                f"Timetable: End Time is not after Start Time for: {', '.join(inverted)}"
            )

    if "Is Lab" not in df.columns:
        result.warnings.append("Timetable: No 'Is Lab' column. All classes count as regular classes.")

    return result


def validate_holidays(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, HOLIDAY_REQUIRED_COLUMNS, "Holidays", allow_empty=True)
    if not result.is_valid:
        return result

    bad_dates = _unparseable_dates(df["Date"])
    if bad_dates:
        result.is_valid = False
        result.errors.append(f"Holidays: Unparseable dates: {bad_dates}")
        return result

    dates = pd.to_datetime(df["Date"]).dt.date
    dupes = dates.duplicated(keep=False)
    if dupes.any():
        result.warnings.append(
            f"Holidays: Duplicate dates, the first entry is kept: "
            f"{sorted(set(str(d) for d in dates[dupes]))}"
        )

    return result


def validate_attendance(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, ATTENDANCE_REQUIRED_COLUMNS, "Attendance", allow_empty=True)
    if not result.is_valid:
        return result

    bad_dates = _unparseable_dates(df["Date"])
    if bad_dates:
        result.is_valid = False
        result.errors.append(f"Attendance: Unparseable dates: {bad_dates}")

    statuses = df["Status"].dropna().astype(str).str.strip().str.lower()
    statuses = statuses[statuses != ""]
    bad_statuses = sorted(set(statuses[~statuses.isin(ATTENDANCE_STATUSES)]))
    if bad_statuses:
        result.is_valid = False
        result.errors.append(
            f"Attendance: Status must be one of {ATTENDANCE_STATUSES}. Found: {bad_statuses}"
        )

    if result.is_valid:
        keys = pd.DataFrame({
            "Date": pd.to_datetime(df["Date"]).dt.date,
            "Class ID": df["Class ID"].astype(str).str.strip(),
        })
        dupes = keys.duplicated(keep=False)
        if dupes.any():
            result.warnings.append(
                f"Attendance: {int(keys[dupes].drop_duplicates().shape[0])} (date, class) pairs "
                "appear more than once; the last row wins."
            )

    return result


def validate_cross_file(timetable_df: pd.DataFrame, attendance_df: pd.DataFrame) -> ValidationResult:
    """Check that attendance rows reference classes in the timetable."""
    result = ValidationResult()
    class_ids = set(timetable_df["Class ID"].astype(str).str.strip())
    referenced = set(attendance_df["Class ID"].astype(str).str.strip())

    unknown = referenced - class_ids
    unused = class_ids - referenced

    if unknown:
        result.warnings.append(
            f"Attendance for unknown classes: {', '.join(sorted(unknown))}. "
            "These will be ignored."
        )
    if unused and not attendance_df.empty:
        result.warnings.append(
            f"Classes without any attendance marked: {', '.join(sorted(unused))}. "
            "Past sessions count as missed."
        )
    return result
