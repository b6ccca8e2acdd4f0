"""Catalog membership with a guaranteed non-empty result."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from dealscope.validation.normalize import FieldNormalizer

DEFAULT_MEMBERSHIP_ID = "mackay"


def validate_membership(
    proposed: Any,
    catalog: Sequence[str],
    default_id: str = DEFAULT_MEMBERSHIP_ID,
    normalizer: Optional[FieldNormalizer] = None,
    *,
    field: str = "suggestedLgaIds",
) -> list[str]:
    """Filter *proposed* ids to catalog members, falling back when none survive.

    The fallback is *default_id* when the catalog holds it, otherwise the
    catalog's first id.  With a non-empty catalog the result is never empty;
    with an empty catalog it is always empty.
    """
    known = set(catalog)
    kept: list[str] = []
    if isinstance(proposed, list):
        for value in proposed:
            if isinstance(value, str) and value in known and value not in kept:
                kept.append(value)

    if kept or not catalog:
        return kept

    fallback = default_id if default_id in known else catalog[0]
    if normalizer is not None:
        normalizer.warn(f"{field}: no valid catalog ids in AI response — defaulted to ['{fallback}'].")
    return [fallback]
