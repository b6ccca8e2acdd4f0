"""
DEALSCOPE Logging Utilities - Session Logging for Extraction Runs

Overview:
---------
Centralised logging configuration for the DEALSCOPE pipelines.  Provides
session-based file logging with unique identifiers, configurable verbosity,
and structured helpers for prompt construction, raw model responses and
extraction outcomes.

Pipeline modules only ever call :func:`get_logger`; nothing is written
anywhere until an entry point (the CLI) calls :func:`setup_logging`.

Log Location:
-------------
- ``<home_dir>/logs`` from :class:`~dealscope.config.DealscopeConfig`
- Each CLI run creates a timestamped log file with session ID
- A symlink 'dealscope.log' always points to the latest session

Log Levels:
-----------
- DEBUG: Full prompts, raw LLM responses
- INFO: Extraction flow, success/failure summaries
- WARNING: Parse and shape failures, defaulted fields
- ERROR: Upstream model failures

Usage:
------
    from dealscope.config import get_config
    from dealscope.utils.logging import get_logger, setup_logging

    # Call once at startup (CLI entry point)
    log_file = setup_logging(level="DEBUG", log_dir=get_config().log_dir)

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Starting extraction...")
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

DEFAULT_LOG_LEVEL = "INFO"
SYMLINK_NAME = "dealscope.log"
ROOT_LOGGER_NAME = "dealscope"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Detailed format for file logging (includes line numbers)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s:%(lineno)d | %(message)s"

_log_file_path: Optional[Path] = None
_session_id: Optional[str] = None

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


# ============================================================================
# Session ID Filter - Adds session_id to all log records
# ============================================================================

class SessionIdFilter(logging.Filter):
    """Add session_id to all log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id  # type: ignore[attr-defined]
        return True


class SessionFormatter(logging.Formatter):
    """Formatter that adds session_id, defaulting to 'N/A' if not present."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id or "N/A"  # type: ignore[attr-defined]
        return super().format(record)


# ============================================================================
# Setup Functions
# ============================================================================

def generate_session_id() -> str:
    """Generate a short unique session ID (6 characters)."""
    return uuid.uuid4().hex[:6]


def generate_log_filename(session_id: str) -> str:
    """Generate a timestamped log filename with session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"dealscope_{timestamp}_{session_id}.log"


def setup_logging(
    level: Optional[str] = None,
    *,
    log_dir: Path,
    console_output: bool = False,
) -> Path:
    """
    Initialise DEALSCOPE logging with a session log file and optional console output.

    Parameters
    ----------
    level : str, optional
        Log level: DEBUG, INFO, WARNING, ERROR. Defaults to INFO.
        Can also be set via DEALSCOPE_LOG_LEVEL environment variable.
    log_dir : Path
        Directory for log files, normally ``DealscopeConfig.log_dir``.
    console_output : bool
        If True, also log to stderr.

    Returns
    -------
    Path
        Path to the log file being written to.
    """
    global _log_file_path, _session_id

    _session_id = generate_session_id()

    if level is None:
        level = os.getenv("DEALSCOPE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / generate_log_filename(_session_id)
    _log_file_path = log_file

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for f in root.filters[:]:
        root.removeFilter(f)

    root.setLevel(log_level)
    root.addFilter(SessionIdFilter(_session_id))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(SessionFormatter(FILE_LOG_FORMAT, LOG_DATE_FORMAT))
    root.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(SessionFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root.addHandler(console_handler)

    # Prevent propagation to root logger (avoid duplicate logs)
    root.propagate = False

    symlink_path = log_dir / SYMLINK_NAME
    try:
        if symlink_path.is_symlink() or symlink_path.exists():
            symlink_path.unlink()
        symlink_path.symlink_to(log_file.name)
    except OSError:
        # Symlink creation may fail on some systems (e.g., Windows without admin)
        pass

    root.info("=" * 80)
    root.info("DEALSCOPE Logging Session Started")
    root.info(f"  Session ID: {_session_id}")
    root.info(f"  Log file: {log_file}")
    root.info(f"  Log level: {level.upper()}")
    root.info("=" * 80)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``dealscope`` namespace.

    Example
    -------
        logger = get_logger(__name__)
        logger.debug("Composing prompt...")
    """
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_current_log_file() -> Optional[Path]:
    """Return the path to the current log file, if logging is initialised."""
    return _log_file_path


def get_session_id() -> Optional[str]:
    """Return the current session ID, if logging is initialised."""
    return _session_id


# ============================================================================
# Logging Helper Functions - Structured Logging
# ============================================================================

def _clip(content: str, truncate_at: int) -> str:
    if len(content) > truncate_at:
        return content[:truncate_at] + f"... [TRUNCATED, {len(content)} chars total]"
    return content


def log_extraction_start(
    logger: logging.Logger,
    pipeline: str,
    document_chars: int,
    catalog_sizes: Optional[dict[str, int]] = None,
) -> None:
    """Log the start of a pipeline call."""
    logger.info("-" * 60)
    logger.info(f"{pipeline.upper()} START")
    logger.info(f"  Input: {document_chars} chars")
    for catalog, size in (catalog_sizes or {}).items():
        logger.info(f"  Catalog {catalog}: {size} entries")
    logger.info("-" * 60)


def log_prompt(
    logger: logging.Logger,
    prompt_type: str,
    prompt_content: str,
    truncate_at: int = 2000,
) -> None:
    """Log a prompt being sent to the LLM (DEBUG, clipped)."""
    logger.debug(f"PROMPT ({prompt_type}):\n{_clip(prompt_content, truncate_at)}")


def log_llm_response(
    logger: logging.Logger,
    response_type: str,
    response_content: str,
    truncate_at: int = 2000,
) -> None:
    """Log an LLM response (DEBUG, clipped)."""
    logger.debug(f"LLM RESPONSE ({response_type}):\n{_clip(response_content, truncate_at)}")


def log_extraction_complete(
    logger: logging.Logger,
    pipeline: str,
    success: bool,
    total_duration: Optional[float] = None,
    warnings: Optional[list[str]] = None,
    error: Optional[str] = None,
) -> None:
    """Log a pipeline completion summary."""
    logger.info("-" * 60)
    status = "SUCCEEDED" if success else "FAILED"
    logger.info(f"{pipeline.upper()} {status}")
    if total_duration is not None:
        logger.info(f"  Duration: {total_duration:.2f}s")
    if error:
        logger.info(f"  Error: {error}")
    if warnings:
        logger.info(f"  Defaulted fields: {len(warnings)}")
        for warning in warnings:
            logger.warning(f"  ! {warning}")
    logger.info("-" * 60)
