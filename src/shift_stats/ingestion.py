"""HTTP ingestion for the workers and shifts endpoints.

Handles the quirks of the upstream API:
- Responses may be a bare JSON array or an envelope ``{"data": [...]}``
- Collections may contain non-object items, which are dropped
- Records may omit fields, which become missing values in the DataFrame
"""

import logging
from collections.abc import Mapping
from typing import Optional

import pandas as pd
import requests

from src.shift_stats.config import (
    API_BASE_URL,
    ENVELOPE_KEY,
    REQUEST_TIMEOUT_SECONDS,
    SHIFT_COLUMNS,
    SHIFTS_ENDPOINT,
    WORKER_COLUMNS,
    WORKERS_ENDPOINT,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a collection cannot be retrieved or decoded."""


def unwrap_envelope(payload):
    """Return the payload under ``data`` for enveloped responses, else *payload*.

    Examples:
        {"data": [1, 2]} -> [1, 2]
        [1, 2]           -> [1, 2]
    """
    if isinstance(payload, Mapping) and ENVELOPE_KEY in payload:
        return payload[ENVELOPE_KEY]
    return payload


def records_to_frame(records, columns: list[str], label: str) -> pd.DataFrame:
    """Build an object-dtype DataFrame holding the raw JSON values.

    Keeps only mapping items and exactly *columns* (missing fields become NaN).
    """
    if not isinstance(records, list):
        raise IngestionError(
            f"Expected a list of {label}, got {type(records).__name__}"
        )

    rows = [r for r in records if isinstance(r, Mapping)]
    dropped = len(records) - len(rows)
    if dropped:
        logger.warning("Dropping %d non-object %s record(s)", dropped, label)

    df = pd.DataFrame([dict(r) for r in rows], dtype=object)
    return df.reindex(columns=columns).reset_index(drop=True)


class ShiftApiIngester:
    """Reads the workers and shifts collections from the REST API.

    Each read method returns a pandas DataFrame with:
    - One row per record, in response order
    - Columns named exactly as the wire fields
    - Raw JSON values preserved (``dtype=object``)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _resolve_url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def _fetch_json(self, url: str):
        """GET *url* and decode the JSON body, raising IngestionError on failure."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise IngestionError(f"Request failed for {url}: {e}") from e

        if not response.ok:
            raise IngestionError(
                f"Request failed ({response.status_code}) for {url}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise IngestionError(f"Invalid JSON from {url}: {e}") from e

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------
    def read_workers(self) -> pd.DataFrame:
        """Read the worker snapshot.

        Returns DataFrame with columns: id, name, status
        """
        url = self._resolve_url(WORKERS_ENDPOINT)
        logger.info("Fetching workers: %s", url)

        payload = unwrap_envelope(self._fetch_json(url))
        df = records_to_frame(payload, WORKER_COLUMNS, "workers")

        logger.info("Loaded %d workers", len(df))
        return df

    # ------------------------------------------------------------------
    # Shifts
    # ------------------------------------------------------------------
    def read_shifts(self) -> pd.DataFrame:
        """Read the shift snapshot.

        Returns DataFrame with columns:
            id, workplaceId, workerId, startAt, endAt, cancelledAt
        """
        url = self._resolve_url(SHIFTS_ENDPOINT)
        logger.info("Fetching shifts: %s", url)

        payload = unwrap_envelope(self._fetch_json(url))
        df = records_to_frame(payload, SHIFT_COLUMNS, "shifts")

        logger.info("Loaded %d shifts", len(df))
        return df

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read both collections and return them as a dict.

        Returns:
            dict with keys: 'workers', 'shifts'

        Raises:
            IngestionError: if either collection cannot be read.
        """
        try:
            return {
                "workers": self.read_workers(),
                "shifts": self.read_shifts(),
            }
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(f"Failed to read collections: {e}") from e
