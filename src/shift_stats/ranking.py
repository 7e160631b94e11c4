"""Ranking of workers by completed shifts.

Orders workers by completed-shift count (descending). Exact ties are broken
by name: first with accents and case folded away, then case-insensitively,
then by the raw text, so the result never depends on the iteration order of
the counts mapping or on the process locale.
"""

import logging
import unicodedata

from src.shift_stats.config import TOP_N
from src.shift_stats.models import RankedEntry

logger = logging.getLogger(__name__)


def collation_key(name: str) -> str:
    """Fold accents and case: "Émile" -> "emile"."""
    s = unicodedata.normalize("NFKD", name)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return s.casefold()


def _sort_key(entry: RankedEntry):
    name = entry.name
    return (-entry.shifts, collation_key(name), name.casefold(), name)


class WorkerRanker:
    """Produce the top-N report from aggregated counts."""

    def rank(
        self,
        counts: dict[int, int],
        name_of: dict[int, str],
        limit: int = TOP_N,
    ) -> list[RankedEntry]:
        """Return at most *limit* entries, highest count first.

        Every key of *counts* must be present in *name_of*; a missing key
        raises KeyError.
        """
        if limit <= 0:
            return []

        entries = [
            RankedEntry(name=name_of[worker_id], shifts=count)
            for worker_id, count in counts.items()
        ]
        entries.sort(key=_sort_key)
        top = entries[:limit]

        logger.info("Ranked %d worker(s), reporting top %d", len(entries), len(top))
        return top
