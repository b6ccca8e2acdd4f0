"""Prompt for investment-memo deal extraction.

The system instruction lists every closed vocabulary verbatim (stages with
their pathway descriptions, readiness ladder, constraints, confidence
levels) and both catalogs, so that in-set answers are the norm.  The
validation stages still assume nothing about what comes back.
"""

from __future__ import annotations

from typing import Optional, Sequence

from dealscope.prompting.catalog import (
    LGAS_EMPTY,
    OPPORTUNITY_TYPES_EMPTY,
    ComposedPrompt,
    render_catalog,
)
from dealscope.schemas.catalog import CatalogEntry
from dealscope.vocab import (
    CONFIDENCE_LEVELS,
    CONSTRAINT_DESCRIPTIONS,
    CONSTRAINTS,
    DEAL_STAGES,
    PATHWAY_STAGES,
    READINESS_DESCRIPTIONS,
    READINESS_STATES,
)


def _stage_descriptions() -> str:
    return "\n\n".join(
        f'Stage {s.number} "{s.id}" — {s.title}: {s.purpose}\n'
        f"  Gate items: {', '.join(s.gate_items)}"
        for s in PATHWAY_STAGES
    )


def _ladder(values: Sequence[str], descriptions: dict[str, str]) -> str:
    return "\n".join(f'- "{v}" — {descriptions[v]}' for v in values)


def build_memo_system_prompt(
    opportunity_types: Optional[Sequence[CatalogEntry]] = None,
    lgas: Optional[Sequence[CatalogEntry]] = None,
    default_lga_id: str = "mackay",
) -> str:
    """System instruction embedding the vocabularies and both catalogs."""
    ot_catalogue = render_catalog(opportunity_types, OPPORTUNITY_TYPES_EMPTY)
    lga_catalogue = render_catalog(lgas, LGAS_EMPTY, with_definitions=False)
    confidence = ", ".join(f'"{c}"' for c in CONFIDENCE_LEVELS)

    lines = [
        "You are an expert infrastructure investment analyst. Your task is to analyse an "
        "investment memo and extract structured deal information.",
        "",
        f"You must classify the deal into one of these {len(DEAL_STAGES)} development pathway stages:",
        "",
        _stage_descriptions(),
        "",
        "You must assign a readiness state from this ladder:",
        _ladder(READINESS_STATES, READINESS_DESCRIPTIONS),
        "",
        "You must identify the dominant binding constraint:",
        _ladder(CONSTRAINTS, CONSTRAINT_DESCRIPTIONS),
        "",
        "You must suggest an opportunity type. Here are the existing opportunity types:",
        ot_catalogue,
        "",
        "For the suggestedOpportunityType field:",
        '- STRONGLY PREFER an existing type. Most deals should fit an existing type. Set "existingId" to its ID.',
        "- Only propose a new type if the deal genuinely does not fit ANY existing type.",
        "- If proposing a new type, keep it BROAD and GENERAL: use sector-level categories "
        '(e.g. "Agriculture", "Advanced manufacturing", "Defence industry") NOT product-specific '
        'labels (e.g. NOT "Wool processing", NOT "Solar panel assembly").',
        '- Set "proposedName" (broad sector label, 1-3 words) and "proposedDefinition" (1-2 sentences '
        'describing the sector opportunity). Do NOT set existingId when proposing new.',
        '- When proposing a new type, you MUST also set "closestExistingId" to the ID of the most '
        'similar existing type, and "closestExistingReasoning" explaining why that type is the '
        "closest but not ideal.",
        f'- Set "confidence" to one of {confidence} based on how well the type matches.',
        '- Always provide "reasoning" explaining your choice.',
        "",
        "You must assign at least one LGA (Local Government Area). Here are the available LGAs:",
        lga_catalogue,
        "",
        'For the "suggestedLgaIds" field:',
        "- This is REQUIRED: you must always return at least one LGA ID.",
        "- If the document explicitly mentions a location, use the corresponding LGA.",
        "- If the document does NOT explicitly mention a location, make your BEST EDUCATED GUESS "
        "based on the project type, stakeholders, and other contextual clues. "
        f'Default to "{default_lga_id}" if truly uncertain.',
        "",
        "LOCATION TEXT FOR GEOCODING:",
        '- "suggestedLocationText": Return a specific place name or address suitable for geocoding '
        'to a map pin, e.g. "Paget Industrial Estate, Mackay, Queensland".',
        "- Be as specific as possible: include suburb/locality, town, and state.",
        "- This field is REQUIRED: always provide a value.",
        "",
        "IMPORTANT:",
        "- Use ONLY the exact enum values shown above for stage, readinessState, and dominantConstraint.",
        "- Extract as much structured information as possible from the memo.",
        "- For other fields, if information is not available in the memo, omit the field (do not invent data).",
        "- Respond ONLY with a valid JSON object, no markdown fences, no additional text.",
    ]
    return "\n".join(lines)


def build_memo_user_prompt(memo_text: str) -> str:
    """User message: the answer skeleton followed by the memo itself."""
    stages = ", ".join(DEAL_STAGES)
    confidence = " | ".join(CONFIDENCE_LEVELS)
    return f"""Analyse the following investment memo and return a JSON object with these fields:

{{
  "name": "<short, descriptive deal/project name, 3-8 words>",
  "stage": "<one of: {stages}>",
  "readinessState": "<one of the readiness states listed above>",
  "dominantConstraint": "<one of the constraints listed above>",
  "summary": "<concise 1-2 sentence deal summary>",
  "description": "<rich 2-3 paragraph description>",
  "nextStep": "<recommended next action>",
  "investmentValue": "<estimated investment amount if mentioned>",
  "economicImpact": "<economic impact summary if mentioned>",
  "suggestedLocationText": "<specific place name for geocoding, REQUIRED>",
  "suggestedLgaIds": ["<at least one LGA id, REQUIRED>"],
  "keyStakeholders": ["<organisation or person names>"],
  "risks": ["<specific risks and challenges>"],
  "strategicActions": ["<recommended strategic actions>"],
  "infrastructureNeeds": ["<supporting infrastructure requirements>"],
  "skillsImplications": "<workforce and skills implications>",
  "marketDrivers": "<market drivers and demand signals>",
  "governmentPrograms": [{{"name": "<program name>", "description": "<brief description>"}}],
  "timeline": [{{"label": "<milestone>", "date": "<date if known>"}}],
  "suggestedOpportunityType": {{
    "existingId": "<id of matching existing type, or omit if none fit>",
    "proposedName": "<broad sector label for new type, or omit if existing type matches>",
    "proposedDefinition": "<1-2 sentence definition for new type, or omit>",
    "closestExistingId": "<when proposing new, the id of the closest existing type>",
    "closestExistingReasoning": "<why the closest existing type is similar but not ideal>",
    "confidence": "<{confidence}>",
    "reasoning": "<1 sentence explaining why this type was chosen>"
  }}
}}

INVESTMENT MEMO:
{memo_text}"""


def compose_memo_prompt(
    memo_text: str,
    opportunity_types: Optional[Sequence[CatalogEntry]] = None,
    lgas: Optional[Sequence[CatalogEntry]] = None,
    default_lga_id: str = "mackay",
) -> ComposedPrompt:
    """Build the full memo-analysis prompt.  *memo_text* should already be truncated."""
    return ComposedPrompt(
        system=build_memo_system_prompt(opportunity_types, lgas, default_lga_id),
        user=build_memo_user_prompt(memo_text),
    )
