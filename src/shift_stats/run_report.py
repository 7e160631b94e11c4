"""Print the top workers by completed shifts.

Usage:
    python -m src.shift_stats.run_report [--base-url URL] [--limit N]
        [--reference-time ISO] [--log-level LEVEL]

Examples:
    python -m src.shift_stats.run_report
    API_BASE_URL=http://api.internal:3000 python -m src.shift_stats.run_report
    python -m src.shift_stats.run_report --reference-time 2024-06-01T00:00:00Z
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional

import pandas as pd
import requests

from src.logging_config import setup_logging
from src.shift_stats.aggregation import CompletionAggregator
from src.shift_stats.classification import ShiftClassifier
from src.shift_stats.cleaning import RecordCleaner
from src.shift_stats.config import API_BASE_URL, TOP_N
from src.shift_stats.ingestion import ShiftApiIngester
from src.shift_stats.models import RankedEntry
from src.shift_stats.ranking import WorkerRanker

logger = logging.getLogger(__name__)


def render_report(entries: list[RankedEntry]) -> str:
    """Render entries as an indented JSON array followed by a newline."""
    return json.dumps([e.as_dict() for e in entries], indent=2) + "\n"


def run_report(
    base_url: Optional[str] = None,
    limit: int = TOP_N,
    reference_time=None,
    session: Optional[requests.Session] = None,
) -> list[RankedEntry]:
    """Fetch workers and shifts, then rank active workers by completed shifts.

    Args:
        base_url: API root. Defaults to ``$API_BASE_URL``.
        limit: Maximum number of entries returned.
        reference_time: Instant shifts are evaluated against.
            Defaults to the current UTC time, fixed once for the run.
        session: HTTP session to use. A new one is created (and closed)
            when omitted.

    Returns:
        Ranked entries, highest count first.

    Raises:
        IngestionError: If either collection cannot be retrieved.
    """
    if reference_time is None:
        reference_time = pd.Timestamp.now(tz="UTC")
    reference_time = ShiftClassifier.to_reference_time(reference_time)

    owns_session = session is None
    if owns_session:
        session = requests.Session()

    logger.info(
        "Starting report (api: %s, reference time: %s)",
        base_url or API_BASE_URL, reference_time.isoformat(),
    )

    # 1. Ingest
    logger.info("Step 1/4: Fetching workers and shifts...")
    try:
        raw = ShiftApiIngester(base_url, session=session).read_all()
    finally:
        if owns_session:
            session.close()
    shifts_df = raw["shifts"]

    # 2. Active workers
    logger.info("Step 2/4: Indexing active workers...")
    active_workers = RecordCleaner().build_active_index(raw["workers"])

    # 3. Aggregate
    logger.info("Step 3/4: Counting completed shifts...")
    counts = CompletionAggregator().aggregate(
        shifts_df, active_workers, reference_time
    )

    # 4. Rank
    logger.info("Step 4/4: Ranking workers...")
    top = WorkerRanker().rank(counts, active_workers, limit=limit)

    logger.info("Report complete: %d worker(s)", len(top))
    return top


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print the most productive active workers as JSON.",
    )
    parser.add_argument(
        "--base-url", default=None,
        help=f"API root (default: $API_BASE_URL or {API_BASE_URL})",
    )
    parser.add_argument(
        "--limit", type=int, default=TOP_N,
        help=f"number of workers to report (default: {TOP_N})",
    )
    parser.add_argument(
        "--reference-time", default=None,
        help="ISO-8601 instant to evaluate shifts against (default: now)",
    )
    parser.add_argument(
        "--log-level", default=os.environ.get("LOG_LEVEL", "INFO"),
        help="console log level (default: INFO)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        entries = run_report(
            base_url=args.base_url,
            limit=args.limit,
            reference_time=args.reference_time,
        )
    except Exception:
        logger.exception("Report failed")
        return 1

    sys.stdout.write(render_report(entries))
    return 0


if __name__ == "__main__":
    sys.exit(main())
