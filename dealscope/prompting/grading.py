"""Rubric prompt for grading a strategy against the six-component blueprint."""

from __future__ import annotations

from typing import Mapping, Optional

from dealscope.prompting.catalog import ComposedPrompt, join_or
from dealscope.schemas.records import GradingContext
from dealscope.vocab import BLUEPRINT_COMPONENTS, GRADE_DESCRIPTIONS, GRADE_LETTERS

NOT_PROVIDED = "(Not provided)"


def build_grading_system_prompt() -> str:
    scale = "\n".join(f"- **{letter}** — {GRADE_DESCRIPTIONS[letter]}" for letter in GRADE_LETTERS)
    components = "\n".join(
        f"{c.id}. **{c.title}** — {c.scope}" for c in BLUEPRINT_COMPONENTS
    )
    letters = ", ".join(GRADE_LETTERS)
    skeleton_letters = " | ".join(GRADE_LETTERS)
    evidence = ",\n".join(
        f'    "{c.id}": "<assessment of component {c.id}>"' for c in BLUEPRINT_COMPONENTS
    )

    return f"""You are an expert evaluator of sector development strategies. Your task is to grade a strategy against the six-component blueprint for sector development.

## Grading Scale

Assign ONE grade letter from the following scale:

{scale}

## Blueprint Components

The six components you must evaluate:

{components}

## Your Evaluation Must Include

1. **grade_letter** — One of: {letters}
2. **grade_rationale_short** — A concise 2–3 sentence rationale for the grade.
3. **evidence_notes_by_component** — For each component (keyed "1" through "6"), a 1–2 sentence assessment of how well the strategy addresses it.
4. **missing_elements** — An array of objects identifying specific gaps: each has a "component_id" (string "1"–"6") and a "reason" explaining what is missing. Only include genuinely missing or weak elements; an empty array is valid for strong strategies.
5. **scope_discipline_notes** — A 1–2 sentence note on whether the strategy stays within appropriate scope (does not overclaim delivery, capital allocation, or outcomes it cannot control).

## Scope Discipline

A well-graded strategy should:
- Position actions as enabling rather than delivering
- Not overclaim capital allocation or market outcomes
- Acknowledge boundaries of influence
- Focus on coordination, facilitation, and capability building

## Output Format

Respond ONLY with a valid JSON object. No markdown fences, no additional text.
The JSON must match this exact schema:

{{
  "grade_letter": "<{skeleton_letters}>",
  "grade_rationale_short": "<2–3 sentence rationale>",
  "evidence_notes_by_component": {{
{evidence}
  }},
  "missing_elements": [
    {{ "component_id": "<1–6>", "reason": "<what is missing>" }}
  ],
  "scope_discipline_notes": "<1–2 sentence scope assessment>"
}}

IMPORTANT:
- Use ONLY the exact grade letters listed above.
- Every component (1–6) MUST have an evidence note, even if the note says the component was not addressed.
- missing_elements may be empty ([]) if no significant gaps exist.
- Be rigorous but fair. Grade based on what the strategy actually contains, not what you think it should contain."""


def build_grading_user_prompt(
    components: Mapping[str, Optional[str]],
    context: Optional[GradingContext] = None,
) -> str:
    """Render the six component bodies and any strategy context.

    Blank or absent components, and absent context fields, appear as
    ``(Not provided)`` so the grader sees the gap explicitly.
    """
    context = context or GradingContext()
    logic = context.selection_logic

    parts = [
        "Grade the following sector development strategy against the six-component blueprint.",
        "",
        "The strategy's extracted blueprint components are provided below. "
        "Evaluate each component and produce a grade.",
        "",
        f"STRATEGY TITLE: {context.title or NOT_PROVIDED}",
        "",
        f"STRATEGY SUMMARY: {context.summary or NOT_PROVIDED}",
        "",
    ]
    for component in BLUEPRINT_COMPONENTS:
        body = components.get(component.id)
        body = body.strip() if isinstance(body, str) else ""
        parts.append(f"COMPONENT {component.id} — {component.title}:")
        parts.append(body or NOT_PROVIDED)
        parts.append("")

    parts.extend(
        [
            "SELECTION LOGIC:",
            f"Adjacent definition: {(logic and logic.adjacent_definition) or NOT_PROVIDED}",
            f"Growth definition: {(logic and logic.growth_definition) or NOT_PROVIDED}",
            f"Criteria: {join_or(logic.criteria if logic else [], NOT_PROVIDED)}",
            "",
            f"CROSS-CUTTING THEMES: {join_or(context.cross_cutting_themes, NOT_PROVIDED)}",
            "",
            f"STAKEHOLDER CATEGORIES: {join_or(context.stakeholder_categories, NOT_PROVIDED)}",
        ]
    )
    return "\n".join(parts)


def compose_grading_prompt(
    components: Mapping[str, Optional[str]],
    context: Optional[GradingContext] = None,
) -> ComposedPrompt:
    return ComposedPrompt(
        system=build_grading_system_prompt(),
        user=build_grading_user_prompt(components, context),
    )
