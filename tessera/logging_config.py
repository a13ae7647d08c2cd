"""
Centralized logging configuration for Tessera.

Provides debug logging to file for catalog building, wave stepping,
synthesis runs and storage.
Log file: <data_root>/debug.log (with rotation)

Usage:
    from tessera.logging_config import setup_logging
    setup_logging(data_root)  # Call once at startup

All tessera.* loggers will write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


# Global configuration
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

ROOT_LOGGER_NAME = "tessera"

_logging_initialized = False


def setup_logging(
    data_root: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for Tessera.

    Args:
        data_root: Path to data directory (log file goes here)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    data_path = Path(data_root)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-25s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"Tessera logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the tessera logger
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_catalog(
    logger: logging.Logger,
    radius: int,
    sample_size: tuple[int, int],
    pattern_count: int,
    details: str | None = None,
) -> None:
    """Log a pattern catalog being built."""
    details_str = f" | {details}" if details else ""
    logger.debug(
        f"CATALOG | radius={radius} | sample={sample_size[0]}x{sample_size[1]} "
        f"| patterns={pattern_count}{details_str}"
    )


def log_step(
    logger: logging.Logger,
    step: int,
    position: tuple[int, int],
    outcome: str,
    details: str | None = None,
) -> None:
    """Log one observe/collapse/propagate step of a wave."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STEP {step:06d} | ({position[0]}, {position[1]}) | {outcome}{details_str}")


def log_synthesis(
    logger: logging.Logger,
    attempt: int,
    seed: int,
    status: str,
    duration_ms: int | None = None,
    details: str | None = None,
) -> None:
    """Log a synthesis attempt."""
    duration_str = f" | {duration_ms}ms" if duration_ms else ""
    details_str = f" | {details}" if details else ""
    logger.info(f"SYNTHESIS | attempt={attempt} | seed={seed} | {status}{duration_str}{details_str}")


def log_storage(
    logger: logging.Logger,
    operation: str,
    path: Path | str | None = None,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log storage operations (tile maps, output grids)."""
    status = "OK" if success else "FAILED"
    path_str = f" | {path}" if path else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STORAGE | {operation}{path_str} | {status}{details_str}")


def log_viewer_cmd(
    logger: logging.Logger,
    command: str,
    details: str | None = None,
) -> None:
    """Log viewer and editor commands."""
    details_str = f" | {details}" if details else ""
    logger.info(f"VIEWER_CMD | {command}{details_str}")
