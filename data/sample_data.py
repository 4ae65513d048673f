"""Sample timetable, holiday list and cycle for the Class Attendance Tracker."""

import pandas as pd
import os
from datetime import date

from models.snapshot import Cycle, TrackerSnapshot
from data.loader import parse_timetable, parse_holidays
from config.defaults import DEFAULT_TARGET_PCT

SAMPLE_CYCLE_START = date(2025, 3, 3)
SAMPLE_CYCLE_END = date(2025, 4, 26)
SAMPLE_TARGET_PCT = 65.0


def generate_timetable_df() -> pd.DataFrame:
    """Weekly timetable: 23 slots Monday to Friday, three of them labs."""
    rows = [
        # Monday
        ("daa-lab", "Design and Analysis of Algorithms Lab", "Dr. P.Aravind / Mr. M.S.N Murthy", "3A Lab", "08:40", "11:10", "Monday", True),
        ("accounting", "Accounting and Economics for Engineers", "Mr. K.Bhaskara Rao", "B4-301", "12:00", "12:50", "Monday", False),
        ("numerical-methods-1", "Numerical Methods", "Mr. K. Satya Murthy", "B4-301", "12:50", "13:40", "Monday", False),
        ("daa-1", "Design and Analysis of Algorithms", "Dr. P.Aravind", "B4-301", "13:40", "14:30", "Monday", False),
        ("dwdm-1", "Data Warehousing and Data Mining", "Ms. M.S.R Pavani", "B4-301", "14:30", "15:20", "Monday", False),
        # Tuesday
        ("dwdm-2", "Data Warehousing and Data Mining", "Ms. M.S.R Pavani", "B4-301", "08:40", "09:30", "Tuesday", False),
        ("dwdm-3", "Data Warehousing and Data Mining", "Ms. M.S.R Pavani", "B4-301", "09:30", "10:20", "Tuesday", False),
        ("daa-2", "Design and Analysis of Algorithms", "Dr. P.Aravind", "B4-301", "10:20", "11:10", "Tuesday", False),
        ("os-lab", "Operating Systems Lab", "Mrs. S.C.K. Mahalakshmi / Mrs. B. Pranalini", "3A Lab", "12:00", "14:30", "Tuesday", True),
        # Wednesday
        ("cpp-lab", "C++ Programming Lab", "Mrs. G. Sathee Lakshmi / Ms. P. Sravya", "MIC", "08:40", "11:10", "Wednesday", True),
        ("accounting-2", "Accounting and Economics for Engineers", "Mr. K.Bhaskara Rao", "B4-301", "12:00", "12:50", "Wednesday", False),
        ("numerical-methods-2", "Numerical Methods", "Mr. K. Satya Murthy", "B4-301", "12:50", "13:40", "Wednesday", False),
        ("os-1", "Operating Systems", "Dr. P. Prapoorna Roja", "B4-301", "13:40", "14:30", "Wednesday", False),
        # Thursday
        ("dwdm-4", "Data Warehousing and Data Mining", "Ms. M.S.R Pavani", "B4-301", "08:40", "09:30", "Thursday", False),
        ("os-2", "Operating Systems", "Dr. P. Prapoorna Roja", "B4-301", "09:30", "10:20", "Thursday", False),
        ("os-3", "Operating Systems", "Dr. P. Prapoorna Roja", "B4-301", "10:20", "11:10", "Thursday", False),
        ("numerical-methods-3", "Numerical Methods", "Mr. K. Satya Murthy", "B4-301", "12:00", "12:50", "Thursday", False),
        ("numerical-methods-4", "Numerical Methods", "Mr. K. Satya Murthy", "B4-301", "12:50", "13:40", "Thursday", False),
        # Friday
        ("accounting-3", "Accounting and Economics for Engineers", "Mr. K.Bhaskara Rao", "B4-301", "08:40", "09:30", "Friday", False),
        ("daa-3", "Design and Analysis of Algorithms", "Dr. P.Aravind", "B4-301", "09:30", "10:20", "Friday", False),
        ("daa-4", "Design and Analysis of Algorithms", "Dr. P.Aravind", "B4-301", "10:20", "11:10", "Friday", False),
        ("os-4", "Operating Systems", "Dr. P. Prapoorna Roja", "B4-301", "11:10", "12:00", "Friday", False),
        ("design-thinking", "Design Thinking and Innovation", "Ms. Lateefa Shaik / Ms. K. Beulah", "B4-301", "12:50", "15:20", "Friday", False),
    ]
    columns = ["Class ID", "Subject", "Instructor", "Room", "Start Time", "End Time", "Day", "Is Lab"]
    return pd.DataFrame(rows, columns=columns)


def generate_holidays_df() -> pd.DataFrame:
    """Public holidays for the 2025 spring term."""
    rows = [
        {"Date": "2025-01-13", "Name": "Bhogi"},
        {"Date": "2025-01-14", "Name": "Makara Sankranti"},
        {"Date": "2025-01-15", "Name": "Kanuma"},
        {"Date": "2025-02-26", "Name": "Maha Sivaratri"},
        {"Date": "2025-03-14", "Name": "Holi"},
        {"Date": "2025-03-31", "Name": "Eid-Ul-Fitr (Ramzan)"},
        {"Date": "2025-04-05", "Name": "Babu Jagjivan Ram's Birthday"},
        {"Date": "2025-04-14", "Name": "Dr. B.R.Ambedkar's Birthday"},
        {"Date": "2025-04-18", "Name": "Good Friday"},
    ]
    return pd.DataFrame(rows)


def generate_sample_snapshot(target_pct: float = SAMPLE_TARGET_PCT) -> TrackerSnapshot:
    """A fresh snapshot: sample timetable and holidays, empty attendance log."""
    return TrackerSnapshot(
        cycle=Cycle(SAMPLE_CYCLE_START, SAMPLE_CYCLE_END, "second"),
        timetable=parse_timetable(generate_timetable_df()),
        holidays=parse_holidays(generate_holidays_df()),
        attendance=[],
        target_pct=target_pct if target_pct is not None else DEFAULT_TARGET_PCT,
    )


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_timetable_df().to_csv(os.path.join(output_dir, "timetable.csv"), index=False)
    generate_holidays_df().to_csv(os.path.join(output_dir, "holidays.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write a single multi-tab Excel file with the timetable and holidays."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_data.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_timetable_df().to_excel(writer, sheet_name="Timetable", index=False)
        generate_holidays_df().to_excel(writer, sheet_name="Holidays", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
