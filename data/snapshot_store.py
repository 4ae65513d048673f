"""Key-value snapshot store and the collaborator-facing tracker actions.

The store only needs a mutable mapping, so a plain dict, a session-state
object or a thin adapter over a document database all work. Every action
loads the current snapshot, applies a pure engine mutation, saves the result
and returns it.
"""

import copy
import logging
from dataclasses import replace
from typing import List, MutableMapping, Optional

from models.timetable import ScheduledClass
from models.snapshot import TrackerSnapshot
from engine.calendar_utils import DateLike, to_date
from engine.attendance_engine import apply_attendance, apply_holiday
from config.defaults import MIN_TARGET_PCT, MAX_TARGET_PCT, DEFAULT_HOLIDAY_NAME, CYCLE_LABELS

log = logging.getLogger(__name__)

KEY_PREFIX = "attendance-tracker"


class SnapshotStore:
    def __init__(self, backend: Optional[MutableMapping] = None):
        self._backend = backend if backend is not None else {}

    def _key(self, user_id: str) -> str:
        return f"{KEY_PREFIX}:{user_id}"

    # --- Load / save ---

    def load_snapshot(self, user_id: str) -> Optional[TrackerSnapshot]:
        snapshot = self._backend.get(self._key(user_id))
        # Callers get their own copy; the stored snapshot only changes via save_snapshot
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def save_snapshot(self, user_id: str, snapshot: TrackerSnapshot):
        self._backend[self._key(user_id)] = copy.deepcopy(snapshot)
        log.info(
            "Saved snapshot for %s (%d classes, %d holidays, %d records)",
            user_id, len(snapshot.timetable), len(snapshot.holidays), len(snapshot.attendance),
        )

    def delete_snapshot(self, user_id: str):
        self._backend.pop(self._key(user_id), None)

    def has_snapshot(self, user_id: str) -> bool:
        return self._key(user_id) in self._backend

    def _require(self, user_id: str) -> TrackerSnapshot:
        snapshot = self.load_snapshot(user_id)
        if snapshot is None:
            raise KeyError(f"No snapshot stored for user {user_id!r}")
        return snapshot

    # --- Actions ---

    def mark_attendance(
        self, user_id: str, record_date: DateLike, class_id: str, status: Optional[str],
    ) -> TrackerSnapshot:
        snapshot = self._require(user_id)
        snapshot.attendance = apply_attendance(snapshot.attendance, record_date, class_id, status)
        self.save_snapshot(user_id, snapshot)
        return snapshot

    def mark_holiday(
        self, user_id: str, holiday_date: DateLike, is_holiday: bool,
        name: str = DEFAULT_HOLIDAY_NAME,
    ) -> TrackerSnapshot:
        snapshot = self._require(user_id)
        snapshot.holidays = apply_holiday(snapshot.holidays, holiday_date, is_holiday, name)
        self.save_snapshot(user_id, snapshot)
        return snapshot

    def update_target(self, user_id: str, target_pct: float) -> TrackerSnapshot:
        if not MIN_TARGET_PCT <= target_pct <= MAX_TARGET_PCT:
            raise ValueError(
                f"Target must be between {MIN_TARGET_PCT:g} and {MAX_TARGET_PCT:g}, got {target_pct}"
            )
        snapshot = self._require(user_id)
        snapshot.target_pct = target_pct
        self.save_snapshot(user_id, snapshot)
        return snapshot

    def update_cycle(
        self, user_id: str, start_date: DateLike, end_date: DateLike, label: Optional[str] = None,
    ) -> TrackerSnapshot:
        start = to_date(start_date)
        end = to_date(end_date)
        if end < start:
            raise ValueError(f"Cycle end {end} is before cycle start {start}")
        if label is not None and label not in CYCLE_LABELS:
            raise ValueError(f"Invalid cycle label: {label!r}. Expected one of {CYCLE_LABELS}.")
        snapshot = self._require(user_id)
        snapshot.cycle = replace(
            snapshot.cycle, start_date=start, end_date=end,
            label=label if label is not None else snapshot.cycle.label,
        )
        self.save_snapshot(user_id, snapshot)
        return snapshot

    def update_timetable(self, user_id: str, timetable: List[ScheduledClass]) -> TrackerSnapshot:
        snapshot = self._require(user_id)
        snapshot.timetable = list(timetable)
        self.save_snapshot(user_id, snapshot)
        return snapshot


def initialize_snapshot(
    store: SnapshotStore, user_id: str, default: TrackerSnapshot,
) -> TrackerSnapshot:
    """Store `default` for a new user; return the existing snapshot otherwise."""
    existing = store.load_snapshot(user_id)
    if existing is not None:
        return existing
    store.save_snapshot(user_id, default)
    return store.load_snapshot(user_id)
