"""Completed-shift aggregation.

Folds the shift snapshot into a per-worker count of completed shifts,
restricted to the active-worker index. Shifts that are not completed, are
unassigned, or belong to an inactive or unknown worker add nothing.
"""

import logging
from typing import Optional

import pandas as pd

from src.shift_stats.classification import ShiftClassifier
from src.shift_stats.cleaning import RecordCleaner

logger = logging.getLogger(__name__)


class CompletionAggregator:
    """Counts completed shifts per eligible worker."""

    def __init__(self, classifier: Optional[ShiftClassifier] = None):
        self.classifier = classifier or ShiftClassifier()

    def aggregate(
        self,
        shifts_df: pd.DataFrame,
        eligible_workers: dict[int, str],
        reference_time,
    ) -> dict[int, int]:
        """Return worker id -> number of completed shifts.

        Args:
            shifts_df: Shift records, one row per shift.
            eligible_workers: Active-worker index (worker id -> name).
            reference_time: Instant the shifts are evaluated against.

        Returns:
            Counts keyed by worker id; only ids present in
            *eligible_workers* with at least one completed shift appear.
        """
        completed = self.classifier.classify_shifts(shifts_df, reference_time)
        if not completed.any():
            logger.info("No completed shifts among %d shifts", len(shifts_df))
            return {}

        counts: dict[int, int] = {}
        ineligible = 0
        for value in shifts_df.loc[completed, "workerId"]:
            worker_id = RecordCleaner.normalize_worker_id(value)
            if worker_id is None or worker_id not in eligible_workers:
                ineligible += 1
                continue
            counts[worker_id] = counts.get(worker_id, 0) + 1

        logger.debug(
            "Completed shifts: %d, ineligible worker: %d",
            int(completed.sum()), ineligible,
        )
        logger.info(
            "Aggregated %d completed shift(s) across %d worker(s)",
            sum(counts.values()), len(counts),
        )
        return counts
