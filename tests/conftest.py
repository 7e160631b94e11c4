"""Shared fixtures for the shift-stats test suite."""

import pandas as pd
import pytest
import requests

from src.shift_stats.aggregation import CompletionAggregator
from src.shift_stats.classification import ShiftClassifier
from src.shift_stats.cleaning import RecordCleaner
from src.shift_stats.config import SHIFT_COLUMNS, WORKER_COLUMNS
from src.shift_stats.ranking import WorkerRanker

REFERENCE_TIME = pd.Timestamp("2024-06-01T00:00:00Z")


# ------------------------------------------------------------------
# Synthetic data
# ------------------------------------------------------------------

def make_shift(shift_id: int, worker_id, end_at="2024-01-01T00:00:00Z",
               cancelled_at=None) -> dict:
    """Build a shift record with sensible defaults for unused fields."""
    return {
        "id": shift_id,
        "workplaceId": 1,
        "workerId": worker_id,
        "startAt": "2023-12-31T16:00:00Z",
        "endAt": end_at,
        "cancelledAt": cancelled_at,
    }


def make_worker(worker_id: int, name: str, status: int = 0) -> dict:
    """Build a worker record; status 0 is active."""
    return {"id": worker_id, "name": name, "status": status}


def make_shifts_df(records: list[dict]) -> pd.DataFrame:
    return pd.DataFrame(records, dtype=object).reindex(columns=SHIFT_COLUMNS)


def make_workers_df(records: list[dict]) -> pd.DataFrame:
    return pd.DataFrame(records, dtype=object).reindex(columns=WORKER_COLUMNS)


# ------------------------------------------------------------------
# Fake HTTP session
# ------------------------------------------------------------------

class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=None):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body_error is not None:
            raise self._body_error
        return self._payload


class FakeSession:
    """Stands in for requests.Session, serving canned responses by URL."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.requested: list[str] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def cleaner():
    return RecordCleaner()


@pytest.fixture(scope="module")
def classifier():
    return ShiftClassifier()


@pytest.fixture(scope="module")
def aggregator():
    return CompletionAggregator()


@pytest.fixture(scope="module")
def ranker():
    return WorkerRanker()


@pytest.fixture
def reference_time():
    return REFERENCE_TIME


@pytest.fixture
def scenario_workers():
    """Alice and Bob are active, Cara is not."""
    return [
        make_worker(1, "Alice", 0),
        make_worker(2, "Bob", 0),
        make_worker(3, "Cara", 1),
    ]


@pytest.fixture
def scenario_shifts():
    return [
        make_shift(1, 1, "2024-01-01T00:00:00Z"),
        make_shift(2, 1, "2024-01-02T00:00:00Z"),
        make_shift(3, 2, "2024-01-01T00:00:00Z"),
        make_shift(4, 3, "2024-01-01T00:00:00Z"),
        make_shift(5, 1, "2024-01-03T00:00:00Z", cancelled_at="2024-01-01T00:00:00Z"),
    ]
