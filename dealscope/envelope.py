# dealscope/envelope.py
"""
``_dealscope`` metadata envelope for CLI JSON output.

Records written with ``--output`` carry a ``_dealscope`` key holding the
dict returned by :func:`build_envelope`, so a saved file says which
pipeline and model produced it and how many fields were defaulted.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

ENVELOPE_KEY = "_dealscope"


def _get_version() -> str:
    """Return the installed DEALSCOPE version, falling back to the source tree's."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("dealscope")
    except PackageNotFoundError:
        from dealscope import __version__

        return __version__


def build_envelope(
    *,
    pipeline: str,
    model: Optional[str] = None,
    duration_s: Optional[float] = None,
    warnings: Optional[Sequence[str]] = None,
    document: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Build a JSON-serializable metadata envelope.

    Parameters
    ----------
    pipeline:
        Name of the pipeline that produced the output (``memo``,
        ``strategy`` or ``grading``).
    model:
        Model identifier the invoker was built for, or ``None``.
    duration_s:
        Wall-clock processing time in seconds, or ``None``.
    warnings:
        The record's defaulted-field warnings; only the count is stored.
    document:
        Document metadata (filename, characters), or ``None``.
    """
    return {
        "version": _get_version(),
        "pipeline": pipeline,
        "model": model,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "duration_s": round(duration_s, 3) if duration_s is not None else None,
        "warning_count": len(warnings or ()),
        "document": document,
    }


def wrap_payload(payload: dict[str, Any], envelope: dict[str, Any]) -> dict[str, Any]:
    """Return *payload* with *envelope* attached under :data:`ENVELOPE_KEY`."""
    return {**payload, ENVELOPE_KEY: envelope}
