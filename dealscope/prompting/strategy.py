"""Prompt for pulling blueprint-aligned fields out of a strategy document."""

from __future__ import annotations

from dealscope.prompting.catalog import ComposedPrompt
from dealscope.vocab import BLUEPRINT_COMPONENTS


def build_strategy_system_prompt() -> str:
    listing = "\n".join(f"{c.id}. {c.short_title}" for c in BLUEPRINT_COMPONENTS)
    component_rows = ",\n".join(
        f'    "{c.id}": {{ "content": "<extracted text for component {c.id}>", '
        f'"confidence": <0.0-1.0>, "sourceExcerpt": "<quote>" }}'
        for c in BLUEPRINT_COMPONENTS
    )
    return f"""You are an expert economic development analyst specialising in sector development strategies.

Your task is to analyse the full text of a sector development strategy document and extract structured fields aligned to the six-component blueprint for sector development strategies.

## Blueprint Components
{listing}

## Output Requirements
Return a single JSON object with the following structure (no markdown, no commentary):

{{
  "title": "<strategy title>",
  "summary": "<1-2 paragraph summary>",
  "components": {{
{component_rows}
  }},
  "selectionLogic": {{
    "adjacentDefinition": "<if specified>",
    "growthDefinition": "<if specified>",
    "criteria": ["<criterion>", "..."]
  }},
  "crossCuttingThemes": ["<theme>", "..."],
  "stakeholderCategories": ["<category>", "..."],
  "prioritySectorNames": ["<sector>", "..."]
}}

## Guidance
- If a field is missing from the document, return an empty string or empty array, but still include the key.
- Confidence should be 0.0–1.0.
- For components, extract the substance: synthesise relevant content into a coherent paragraph.
"""


def build_strategy_user_prompt(document_text: str) -> str:
    return (
        "Analyse the following sector development strategy document and extract structured fields.\n"
        "\n"
        "Document text:\n"
        '"""\n'
        f"{document_text}\n"
        '"""\n'
    )


def compose_strategy_prompt(document_text: str) -> ComposedPrompt:
    """*document_text* should already be truncated to the strategy limit."""
    return ComposedPrompt(
        system=build_strategy_system_prompt(),
        user=build_strategy_user_prompt(document_text),
    )
