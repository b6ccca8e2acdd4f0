"""Open-set category resolution against a caller-supplied catalog.

Decision order, first match wins:

1. a proposed existing id that is in the catalog -> :class:`Matched`
2. a proposed new name plus a valid closest existing id -> :class:`ProposedWithClosest`
3. a proposed new name alone -> :class:`ProposedNew`
4. anything else -> :class:`Unresolved`

Ids that are not in the catalog are treated exactly like absent ids.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from dealscope.schemas.taxonomy import (
    NO_REASONING,
    Matched,
    ProposedNew,
    ProposedWithClosest,
    TaxonomyDecision,
    Unresolved,
)
from dealscope.utils.logging import get_logger
from dealscope.validation.normalize import FieldNormalizer
from dealscope.vocab import CONFIDENCE_LEVELS, DEFAULT_CONFIDENCE

logger = get_logger(__name__)


def _trimmed(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _known_id(value: Any, known: set[str]) -> Optional[str]:
    candidate = _trimmed(value)
    if candidate is not None and candidate in known:
        return candidate
    return None


def resolve_taxonomy(
    payload: Any,
    known_ids: Iterable[str],
    normalizer: Optional[FieldNormalizer] = None,
    *,
    field: str = "suggestedOpportunityType",
) -> TaxonomyDecision:
    """Turn the model's classification payload into a :data:`TaxonomyDecision`.

    Parameters
    ----------
    payload:
        The raw ``suggestedOpportunityType`` object (or anything else).
    known_ids:
        Ids of the caller's catalog.  An empty catalog means nothing can match.
    normalizer:
        Collects a warning when the payload's confidence is not a valid level.
    """
    if not isinstance(payload, dict):
        return Unresolved()

    normalizer = normalizer or FieldNormalizer()
    known = set(known_ids)

    def graded() -> dict[str, str]:
        # Confidence is only audited when it ends up in the decision.
        return {
            "confidence": normalizer.enum(
                f"{field}.confidence", payload.get("confidence"), CONFIDENCE_LEVELS, DEFAULT_CONFIDENCE
            ),
            "reasoning": _trimmed(payload.get("reasoning")) or NO_REASONING,
        }

    existing_id = _known_id(payload.get("existingId"), known)
    if existing_id is not None:
        return Matched(existing_id=existing_id, **graded())

    raw_existing = _trimmed(payload.get("existingId"))
    if raw_existing is not None:
        logger.warning("Ignoring opportunity type id not in catalog: %r", raw_existing)

    proposed_name = _trimmed(payload.get("proposedName"))
    if proposed_name is not None:
        proposed_definition = payload.get("proposedDefinition")
        proposed_definition = proposed_definition.strip() if isinstance(proposed_definition, str) else None

        closest_id = _known_id(payload.get("closestExistingId"), known)
        if closest_id is not None:
            return ProposedWithClosest(
                proposed_name=proposed_name,
                proposed_definition=proposed_definition,
                closest_existing_id=closest_id,
                closest_existing_reasoning=_trimmed(payload.get("closestExistingReasoning")),
                **graded(),
            )
        return ProposedNew(
            proposed_name=proposed_name,
            proposed_definition=proposed_definition,
            **graded(),
        )

    return Unresolved()
