"""Taxonomy classification decision as a tagged union.

Exactly one variant describes the outcome of classifying a deal against the
opportunity-type catalog.  The variants carry only the fields that make
sense for them, so a matched decision cannot also hold a proposed name.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import ConfigDict, Field

from dealscope.schemas.base import WireModel
from dealscope.vocab import DEFAULT_CONFIDENCE, Confidence

UNRESOLVED_REASONING = "Could not determine opportunity type from the document."
NO_REASONING = "No reasoning provided."


class _Decision(WireModel):
    model_config = ConfigDict(frozen=True)

    confidence: Confidence = DEFAULT_CONFIDENCE
    reasoning: str = NO_REASONING


class Matched(_Decision):
    """The deal belongs to an existing catalog category."""

    kind: Literal["matched"] = "matched"
    existing_id: str


class ProposedWithClosest(_Decision):
    """A new category is proposed, with the nearest existing one as alternative."""

    kind: Literal["proposed_with_closest"] = "proposed_with_closest"
    proposed_name: str
    proposed_definition: Optional[str] = None
    closest_existing_id: str
    closest_existing_reasoning: Optional[str] = None


class ProposedNew(_Decision):
    """A new category is proposed and no valid existing alternative was named."""

    kind: Literal["proposed_new"] = "proposed_new"
    proposed_name: str
    proposed_definition: Optional[str] = None


class Unresolved(_Decision):
    """Manual classification required."""

    kind: Literal["unresolved"] = "unresolved"
    confidence: Literal["low"] = "low"
    reasoning: str = UNRESOLVED_REASONING


TaxonomyDecision = Annotated[
    Union[Matched, ProposedWithClosest, ProposedNew, Unresolved],
    Field(discriminator="kind"),
]
