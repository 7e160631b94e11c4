import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """Configure root logging for the shift-stats report.

    Writes DEBUG and above to a rotating file and *log_level* and above to
    stderr, keeping stdout free for the report itself. Calling it again once
    handlers exist is a no-op.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, str(log_level).upper(), logging.INFO)

    log_dir = Path(log_dir or os.environ.get("SHIFT_STATS_LOG_DIR", DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "shift_stats.log"

    root_logger.setLevel(logging.DEBUG)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)

    # Console handler on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
