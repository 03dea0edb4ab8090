"""Application-wide constants and logging setup."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Dict

from .models import Priority, Status, ViewMode


@dataclass(frozen=True)
class ViewConfig:
    day_width: float
    label: str
    lookback_days: int = 0
    lookahead_days: int = 0
    lookahead_months: int = 0


VIEW_CONFIG: Dict[ViewMode, ViewConfig] = {
    ViewMode.DAY: ViewConfig(day_width=50, label="Day", lookback_days=3, lookahead_days=7),
    ViewMode.WEEK: ViewConfig(day_width=20, label="Week", lookahead_days=28),
    ViewMode.MONTH: ViewConfig(day_width=6, label="Month", lookahead_months=2),
}

EMPTY_WINDOW_DAYS = 30
EMPTY_WINDOW_LOOKBACK_DAYS = 7
DEFAULT_END_OFFSET_DAYS = 3
FALLBACK_MAX_OFFSET_DAYS = 7
MIN_BAR_WIDTH = 10
BAR_TITLE_MIN_WIDTH = 40
BAR_PROGRESS_MIN_WIDTH = 100

DEFAULT_BAR_COLOR = "#9ca3af"


def status_color(status: Status) -> str:
    """Bar colour of the status's board column, grey for unknown statuses."""
    return status.color or DEFAULT_BAR_COLOR


PRIORITY_COLORS: Dict[Priority, str] = {
    Priority.HIGH: "#ef4444",
    Priority.MEDIUM: "#eab308",
    Priority.LOW: "#14b8a6",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Send application logs to stdout."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
