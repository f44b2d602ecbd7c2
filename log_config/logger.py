"""Logging setup for DepthVis on top of loguru.

Importing this module only installs a stderr sink. File sinks are added by
:func:`configure_logging`, which applications (the demo CLI) call once at
startup; library code never touches the filesystem.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

logger.configure(extra={"name": "depthvis"})


def _add_console_sink(level: str) -> int:
    return logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    level: str = "INFO",
) -> Optional[Path]:
    """Reset sinks to stderr and, if ``log_dir`` is given, add file sinks there.

    Args:
        log_dir: Directory for the rotating session log and the error log
        level: Minimum level for the console sink

    Returns:
        The created log directory, or None when only the console is used
    """
    logger.remove()
    _add_console_sink(level)
    if log_dir is None:
        return None

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "depthvis_{time}.log",
        rotation="50 MB",
        retention="10 days",
        level="DEBUG",
        format=FILE_FORMAT,
        enqueue=True,
    )
    logger.add(
        log_dir / "errors_{time}.log",
        rotation="10 MB",
        retention="30 days",
        level="ERROR",
        format=FILE_FORMAT,
        enqueue=True,
    )
    logger.debug(f"File logging enabled in {log_dir}")
    return log_dir


def get_logger(name: Optional[str] = None):
    """Return the shared logger, bound to ``name`` when one is given."""
    if name:
        return logger.bind(name=name)
    return logger


def log_performance(operation: str, duration_ms: float, threshold_ms: float = 33.0) -> None:
    """Debug-log a frame timing, or warn when it exceeds ``threshold_ms``."""
    if duration_ms > threshold_ms:
        logger.warning(f"Frame over budget: {operation} took {duration_ms:.2f}ms (limit {threshold_ms}ms)")
    else:
        logger.debug(f"Performance: {operation} took {duration_ms:.2f}ms")


logger.remove()
_add_console_sink("INFO")

__all__ = ["logger", "configure_logging", "get_logger", "log_performance"]
