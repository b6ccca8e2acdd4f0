"""Expected shapes of raw model answers.

These models are the structural gate applied right after JSON recovery.
Every field is optional and unknown keys pass through.  A payload that
fails validation here is rejected as a whole: no record is built from it.

Two list policies coexist on purpose:

* Deal answers only require list fields to be arrays.  Malformed entries are
  dropped one by one later, during normalisation.
* Strategy grading and strategy extraction answers type every list entry, so
  one malformed entry invalidates the whole answer.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

from dealscope.schemas.base import PassthroughModel
from dealscope.vocab import ComponentId

# ---------------------------------------------------------------------------
# Deal extraction (lenient list policy, camelCase keys)
# ---------------------------------------------------------------------------


class MemoResponse(PassthroughModel):
    """Shape of an investment-memo analysis answer."""

    name: Optional[StrictStr] = None
    stage: Optional[StrictStr] = None
    readiness_state: Optional[StrictStr] = None
    dominant_constraint: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    next_step: Optional[StrictStr] = None
    investment_value: Optional[StrictStr] = None
    economic_impact: Optional[StrictStr] = None
    suggested_location_text: Optional[StrictStr] = None
    suggested_lga_ids: Optional[list[Any]] = None
    key_stakeholders: Optional[list[Any]] = None
    risks: Optional[list[Any]] = None
    strategic_actions: Optional[list[Any]] = None
    infrastructure_needs: Optional[list[Any]] = None
    skills_implications: Optional[StrictStr] = None
    market_drivers: Optional[StrictStr] = None
    government_programs: Optional[list[Any]] = None
    timeline: Optional[list[Any]] = None
    suggested_opportunity_type: Optional[dict[str, Any]] = None


# ---------------------------------------------------------------------------
# Strategy grading (strict list policy, snake_case keys)
# ---------------------------------------------------------------------------


class MissingElementPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    component_id: ComponentId
    reason: StrictStr


class GradeResponse(BaseModel):
    """Shape of a strategy grading answer."""

    model_config = ConfigDict(extra="allow")

    grade_letter: Optional[StrictStr] = None
    grade_rationale_short: Optional[StrictStr] = None
    evidence_notes_by_component: Optional[dict[str, StrictStr]] = None
    missing_elements: Optional[list[MissingElementPayload]] = None
    scope_discipline_notes: Optional[StrictStr] = None


# ---------------------------------------------------------------------------
# Strategy extraction (strict list policy, camelCase keys)
# ---------------------------------------------------------------------------


class ComponentPayload(PassthroughModel):
    content: Optional[StrictStr] = None
    confidence: Optional[Union[StrictInt, StrictFloat]] = None
    source_excerpt: Optional[StrictStr] = None


class SelectionLogicPayload(PassthroughModel):
    adjacent_definition: Optional[StrictStr] = None
    growth_definition: Optional[StrictStr] = None
    criteria: Optional[list[StrictStr]] = None


class StrategyResponse(PassthroughModel):
    """Shape of a strategy-document extraction answer."""

    title: Optional[StrictStr] = None
    summary: Optional[StrictStr] = None
    components: Optional[dict[str, ComponentPayload]] = None
    selection_logic: Optional[SelectionLogicPayload] = None
    cross_cutting_themes: Optional[list[StrictStr]] = None
    stakeholder_categories: Optional[list[StrictStr]] = None
    priority_sector_names: Optional[list[StrictStr]] = None
