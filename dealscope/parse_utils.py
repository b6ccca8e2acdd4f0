"""Recover the JSON payload from raw LLM text.

Model answers arrive as bare JSON, JSON inside a markdown fence, or JSON
wrapped in prose.  The span from the first ``{`` to the last ``}`` covers
all three, so that is the only candidate tried.  Anything else is a
:class:`~dealscope.errors.ParseFailure`.
"""

from __future__ import annotations

import json
from typing import Any

from dealscope.errors import ParseFailure

_EXCERPT_CHARS = 200


def _excerpt(text: str) -> str:
    text = text.strip()
    if len(text) > _EXCERPT_CHARS:
        return text[:_EXCERPT_CHARS] + "..."
    return text


def _extract_bracket_block(text: str, opener: str = "{", closer: str = "}") -> str | None:
    """Return the substring from first opener to last closer, if present."""
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start:end + 1]


def extract_json_object(raw: str | None) -> Any:
    """Parse the outermost ``{...}`` span of *raw*.

    Raises
    ------
    ParseFailure
        When *raw* is empty, has no brace span, or the span is not valid or
        too deeply nested JSON.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ParseFailure("Model returned an empty response.", raw_text=raw if isinstance(raw, str) else None)

    block = _extract_bracket_block(raw)
    if block is None:
        raise ParseFailure(f"No JSON object found in response: {_excerpt(raw)!r}", raw_text=raw)

    try:
        return json.loads(block)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Response JSON could not be decoded: {exc}", raw_text=raw) from exc
    except RecursionError as exc:
        raise ParseFailure("Response JSON is nested too deeply to decode.", raw_text=raw) from exc
