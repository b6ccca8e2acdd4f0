"""
DEALSCOPE Utilities Package - Cross-Cutting Helpers

Logging configuration and structured log helpers shared by the pipelines
and the CLI.
"""

from .logging import (
    setup_logging,
    get_logger,
    get_current_log_file,
    get_session_id,
    log_extraction_start,
    log_prompt,
    log_llm_response,
    log_extraction_complete,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_current_log_file",
    "get_session_id",
    "log_extraction_start",
    "log_prompt",
    "log_llm_response",
    "log_extraction_complete",
]
