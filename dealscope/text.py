# dealscope/text.py
"""Deterministic bounding of document text before prompting."""

from __future__ import annotations

MEMO_CHAR_LIMIT: int = 30_000
MEMO_TRUNCATION_MARKER: str = "\n\n[Memo truncated at 30,000 characters]"

STRATEGY_CHAR_LIMIT: int = 60_000
STRATEGY_TRUNCATION_MARKER: str = "\n\n[Document truncated at 60,000 characters]"


def truncate_text(text: str, limit: int, marker: str) -> str:
    """Cut *text* to exactly *limit* characters and append *marker*.

    Text at or below the limit is returned unchanged.
    """
    if len(text) > limit:
        return text[:limit] + marker
    return text


def truncate_memo_text(memo_text: str) -> str:
    """Bound an investment memo to 30,000 characters."""
    return truncate_text(memo_text, MEMO_CHAR_LIMIT, MEMO_TRUNCATION_MARKER)


def truncate_strategy_text(text: str) -> str:
    """Bound a strategy document to 60,000 characters."""
    return truncate_text(text, STRATEGY_CHAR_LIMIT, STRATEGY_TRUNCATION_MARKER)
