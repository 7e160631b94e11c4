"""Record normalization for API data.

Handles the value-level quirks of raw JSON records:
- Missing values arrive as None, or as NaN once loaded into a DataFrame
- Integer ids may arrive as integral floats (1.0)
- Timestamps are ISO-8601 strings that may be malformed
- Worker status is an integer enumeration (0 = active)
"""

import logging
import math
import numbers
from typing import Optional

import pandas as pd

from src.shift_stats.config import ACTIVE_STATUS

logger = logging.getLogger(__name__)


class RecordCleaner:
    """Normalizes raw record values and builds the active-worker index."""

    # ------------------------------------------------------------------
    # Value helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_absent(value) -> bool:
        """True for None and the pandas missing-value markers (NaN, NA, NaT)."""
        if value is None or value is pd.NA or value is pd.NaT:
            return True
        return isinstance(value, float) and math.isnan(value)

    @staticmethod
    def normalize_worker_id(value) -> Optional[int]:
        """Normalize a record id to an int.

        Examples:
            7     -> 7
            7.0   -> 7
            7.5   -> None
            "7"   -> None
            True  -> None
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, numbers.Real):
            value = float(value)
            if math.isfinite(value) and value.is_integer():
                return int(value)
        return None

    @staticmethod
    def parse_timestamp(value) -> pd.Timestamp:
        """Parse an ISO-8601 string to a UTC Timestamp.

        Returns NaT for non-strings and unparsable or out-of-range values.
        Strings without an offset are read as UTC.
        """
        if not isinstance(value, str):
            return pd.NaT
        try:
            return pd.to_datetime(
                value.strip(), format="ISO8601", utc=True, errors="coerce"
            )
        except (ValueError, OverflowError):
            return pd.NaT

    @staticmethod
    def is_active_status(value) -> bool:
        """True for the numeric active status only (not bools or strings)."""
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
        return value == ACTIVE_STATUS

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def build_active_index(self, workers_df: pd.DataFrame) -> dict[int, str]:
        """Map worker id -> name for every active worker.

        Inactive workers are left out. Active workers without an integer id
        or a string name are skipped with a warning. When an id repeats,
        the last active record wins.
        """
        index: dict[int, str] = {}
        skipped = 0

        for record in workers_df.to_dict("records"):
            if not self.is_active_status(record.get("status")):
                continue

            worker_id = self.normalize_worker_id(record.get("id"))
            name = record.get("name")
            if worker_id is None or not isinstance(name, str):
                skipped += 1
                continue

            index[worker_id] = name

        if skipped:
            logger.warning("Skipped %d malformed active worker record(s)", skipped)

        logger.info(
            "Active workers: %d of %d", len(index), len(workers_df)
        )
        return index
