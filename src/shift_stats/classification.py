"""Shift completion classification.

A shift counts toward its worker when it is assigned, not cancelled, and its
end time is at or before the reference time. Classification never raises on
bad record data: anything that cannot be classified as completed is not.
"""

import numbers
from collections.abc import Mapping
from datetime import datetime

import pandas as pd

from src.shift_stats.cleaning import RecordCleaner


class ShiftClassifier:
    """Decides which shifts are completed as of a fixed reference time."""

    @staticmethod
    def to_reference_time(value) -> pd.Timestamp:
        """Normalize a reference time to a UTC Timestamp.

        Accepts a Timestamp/datetime (naive values are read as UTC), an
        ISO-8601 string, or an int/float of epoch milliseconds.

        Raises:
            ValueError: if *value* is not a usable instant.
        """
        if isinstance(value, bool):
            raise ValueError(f"Invalid reference time: {value!r}")
        if isinstance(value, numbers.Real):
            ts = pd.to_datetime(value, unit="ms", utc=True)
        elif isinstance(value, (str, datetime)):
            ts = pd.Timestamp(value)
        else:
            raise ValueError(f"Invalid reference time: {value!r}")

        if pd.isna(ts):
            raise ValueError(f"Invalid reference time: {value!r}")
        if ts.tzinfo is None:
            return ts.tz_localize("UTC")
        return ts.tz_convert("UTC")

    @staticmethod
    def is_completed(shift: Mapping, reference_time) -> bool:
        """Return True if *shift* is completed as of *reference_time*.

        *shift* is any mapping with the wire field names (a dict or a
        DataFrame row).
        """
        if RecordCleaner.is_absent(shift.get("workerId")):
            return False
        if not RecordCleaner.is_absent(shift.get("cancelledAt")):
            return False

        end = RecordCleaner.parse_timestamp(shift.get("endAt"))
        if pd.isna(end):
            return False

        return bool(end <= ShiftClassifier.to_reference_time(reference_time))

    def classify_shifts(self, shifts_df: pd.DataFrame, reference_time) -> pd.Series:
        """Boolean Series (aligned with *shifts_df*) of completed shifts."""
        reference = self.to_reference_time(reference_time)
        cols = shifts_df.reindex(columns=["workerId", "endAt", "cancelledAt"])

        assigned = ~cols["workerId"].map(RecordCleaner.is_absent).astype(bool)
        cancelled = ~cols["cancelledAt"].map(RecordCleaner.is_absent).astype(bool)
        ended = (
            cols["endAt"]
            .map(RecordCleaner.parse_timestamp)
            .map(lambda end: not pd.isna(end) and end <= reference)
            .astype(bool)
        )

        completed = assigned & ~cancelled & ended
        completed.name = "completed"
        return completed
