from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "PCB_SCHEDULER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a Rich handler to the package logger (once) and set its level.
    """
    level_name = (level or default_log_level()).upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger("pcb_scheduler")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level_name)
    return logger
