import os

# Remote API
DEFAULT_API_BASE_URL = "http://localhost:3000"
API_BASE_URL = os.environ.get("API_BASE_URL", DEFAULT_API_BASE_URL)

WORKERS_ENDPOINT = "/workers"
SHIFTS_ENDPOINT = "/shifts"

# Key under which enveloped responses expose their payload
ENVELOPE_KEY = "data"

REQUEST_TIMEOUT_SECONDS = 30

# Worker status enumeration (only ACTIVE is eligible)
ACTIVE_STATUS = 0

# Number of workers in the report
TOP_N = 3

# Expected wire fields
WORKER_COLUMNS = ["id", "name", "status"]

SHIFT_COLUMNS = [
    "id", "workplaceId", "workerId",
    "startAt", "endAt", "cancelledAt",
]
