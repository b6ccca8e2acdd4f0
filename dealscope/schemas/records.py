"""Validated output records.

Enumerated attributes are typed with the ``Literal`` aliases from
:mod:`dealscope.vocab`, so a record holding an out-of-set value cannot be
constructed.  Each record exposes ``to_payload()`` which dumps it in the
same key layout the model was asked to answer in; feeding that payload back
through the matching ``parse_*_response`` function yields the same record.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from dealscope.schemas.base import WireModel
from dealscope.schemas.taxonomy import TaxonomyDecision
from dealscope.vocab import (
    COMPONENT_IDS,
    ComponentId,
    Constraint,
    DealStage,
    GradeLetter,
    ReadinessState,
)


def _require_all_components(value: dict[str, Any]) -> dict[str, Any]:
    if set(value) != set(COMPONENT_IDS):
        raise ValueError(f"expected exactly the component keys {list(COMPONENT_IDS)}, got {sorted(value)}")
    return {cid: value[cid] for cid in COMPONENT_IDS}


# ---------------------------------------------------------------------------
# Deal extraction
# ---------------------------------------------------------------------------


class GovernmentProgram(WireModel):
    name: str
    description: Optional[str] = None


class TimelineMilestone(WireModel):
    label: str
    date: Optional[str] = None


class MemoReference(WireModel):
    label: str
    page_ref: Optional[str] = None


class DealExtraction(WireModel):
    """Structured deal fields recovered from an investment memo."""

    name: str
    stage: DealStage
    readiness_state: ReadinessState
    dominant_constraint: Constraint
    summary: str
    description: str
    next_step: str
    investment_value: Optional[str] = None
    economic_impact: Optional[str] = None
    key_stakeholders: Optional[list[str]] = None
    risks: Optional[list[str]] = None
    strategic_actions: Optional[list[str]] = None
    infrastructure_needs: Optional[list[str]] = None
    skills_implications: Optional[str] = None
    market_drivers: Optional[str] = None
    government_programs: Optional[list[GovernmentProgram]] = None
    timeline: Optional[list[TimelineMilestone]] = None
    memo_reference: MemoReference
    suggested_location_text: Optional[str] = None
    suggested_lga_ids: list[str] = Field(default_factory=list)
    suggested_opportunity_type: TaxonomyDecision
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Strategy grading
# ---------------------------------------------------------------------------


class MissingElement(BaseModel):
    component_id: ComponentId
    reason: str


class SelectionLogic(WireModel):
    adjacent_definition: Optional[str] = None
    growth_definition: Optional[str] = None
    criteria: list[str] = Field(default_factory=list)


class GradingContext(WireModel):
    """Auxiliary strategy context shown to the grader next to the components."""

    title: Optional[str] = None
    summary: Optional[str] = None
    selection_logic: Optional[SelectionLogic] = None
    cross_cutting_themes: list[str] = Field(default_factory=list)
    stakeholder_categories: list[str] = Field(default_factory=list)


class GradeResult(BaseModel):
    """A strategy graded against the six-component blueprint."""

    grade_letter: GradeLetter
    grade_rationale_short: str
    evidence_notes_by_component: dict[ComponentId, str]
    missing_elements: list[MissingElement] = Field(default_factory=list)
    scope_discipline_notes: str
    warnings: list[str] = Field(default_factory=list)

    check_components = field_validator("evidence_notes_by_component")(_require_all_components)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Strategy extraction
# ---------------------------------------------------------------------------


class ComponentExtraction(WireModel):
    content: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source_excerpt: str = ""


class StrategyExtraction(WireModel):
    """Blueprint-aligned fields recovered from a strategy document."""

    title: str
    summary: str
    components: dict[ComponentId, ComponentExtraction]
    selection_logic: SelectionLogic = Field(default_factory=SelectionLogic)
    cross_cutting_themes: list[str] = Field(default_factory=list)
    stakeholder_categories: list[str] = Field(default_factory=list)
    priority_sector_names: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    check_components = field_validator("components")(_require_all_components)

    def to_grading_input(self) -> tuple[dict[str, str], GradingContext]:
        """Split into the component bodies and context the grader expects."""
        components = {cid: self.components[cid].content for cid in COMPONENT_IDS}
        context = GradingContext(
            title=self.title,
            summary=self.summary,
            selection_logic=self.selection_logic,
            cross_cutting_themes=list(self.cross_cutting_themes),
            stakeholder_categories=list(self.stakeholder_categories),
        )
        return components, context
