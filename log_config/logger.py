"""Loguru sinks for the obstacle tracker.

Importing this module configures a console sink plus rotating session and
error files. ``OBSTACLE_TRACKER_LOG_LEVEL`` sets the console level and
``OBSTACLE_TRACKER_LOG_DIR`` chooses where the files go.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

_sink_ids: List[int] = []


def configure_logging(
    level: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """(Re)install the tracker's sinks, replacing any installed earlier.

    Args:
        level: Console level; falls back to ``OBSTACLE_TRACKER_LOG_LEVEL`` then INFO
        log_dir: Directory for session and error logs; falls back to
            ``OBSTACLE_TRACKER_LOG_DIR`` then ``logs``

    Returns:
        The directory the file sinks write to
    """
    level = level or os.environ.get("OBSTACLE_TRACKER_LOG_LEVEL", "INFO")
    logs_dir = Path(log_dir or os.environ.get("OBSTACLE_TRACKER_LOG_DIR", "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)

    for sink_id in _sink_ids:
        logger.remove(sink_id)
    _sink_ids.clear()

    _sink_ids.append(logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True))
    # One file per tracking session, at DEBUG so per-frame assignment lines are kept
    _sink_ids.append(
        logger.add(
            logs_dir / "tracking_session_{time}.log",
            rotation="50 MB",
            retention="10 days",
            level="DEBUG",
            format=FILE_FORMAT,
            enqueue=True,
        )
    )
    _sink_ids.append(
        logger.add(
            logs_dir / "tracker_errors_{time}.log",
            rotation="10 MB",
            retention="30 days",
            level="ERROR",
            format=FILE_FORMAT,
            enqueue=True,
        )
    )
    return logs_dir


logger.remove()
logger.configure(extra={"name": "obstacle_tracker"})
configure_logging()


def get_logger(name: Optional[str] = None):
    """Return the shared logger tagged with the calling module's name."""
    if name:
        return logger.bind(name=name)
    return logger


def log_performance(operation: str, duration_ms: float, threshold_ms: float = 33.0) -> bool:
    """Report how long a tracking step took against its frame budget.

    Overruns are logged as warnings, since a pipeline that falls behind its
    camera starts dropping frames; on-budget steps go to DEBUG.

    Returns:
        True when the step ran over budget
    """
    over_budget = duration_ms > threshold_ms
    if over_budget:
        logger.warning(
            f"{operation} overran the frame budget: {duration_ms:.2f}ms > {threshold_ms:.1f}ms"
        )
    else:
        logger.debug(f"{operation} took {duration_ms:.2f}ms of {threshold_ms:.1f}ms budget")
    return over_budget


__all__ = ["logger", "configure_logging", "get_logger", "log_performance"]
