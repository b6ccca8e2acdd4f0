"""Strategy document -> :class:`StrategyExtraction`.

The extracted record feeds straight into grading via
:meth:`StrategyExtraction.to_grading_input`.
"""

from __future__ import annotations

import time
from typing import Any

from dealscope.errors import ExtractionError, InsufficientInput
from dealscope.invoker import ModelInvoker, acall_invoker, call_invoker
from dealscope.parse_utils import extract_json_object
from dealscope.prompting.catalog import ComposedPrompt
from dealscope.prompting.strategy import compose_strategy_prompt
from dealscope.schemas.records import ComponentExtraction, SelectionLogic, StrategyExtraction
from dealscope.schemas.responses import ComponentPayload, StrategyResponse
from dealscope.text import truncate_strategy_text
from dealscope.utils.logging import (
    get_logger,
    log_extraction_complete,
    log_extraction_start,
    log_llm_response,
    log_prompt,
)
from dealscope.validation.normalize import FieldNormalizer
from dealscope.validation.shape import validate_shape
from dealscope.vocab import COMPONENT_IDS

logger = get_logger(__name__)

PIPELINE = "strategy"
UNTITLED_STRATEGY = "Untitled Strategy"
NO_SUMMARY = "No summary extracted."


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _component(cid: str, payload: ComponentPayload | None, norm: FieldNormalizer) -> ComponentExtraction:
    if payload is None:
        norm.warn(f"Component {cid} was missing or malformed — defaulted to empty.")
        return ComponentExtraction()

    component = ComponentExtraction(
        content=payload.content or "",
        confidence=_clamp(payload.confidence) if payload.confidence is not None else 0.0,
        source_excerpt=payload.source_excerpt or "",
    )
    if not component.content:
        norm.warn(f"Component {cid} has empty content — may need manual entry.")
    return component


def parse_strategy_response(raw: Any) -> StrategyExtraction:
    """Validate a raw extraction answer into a :class:`StrategyExtraction`.

    Re-parsing ``record.to_payload()`` returns the same fields.  Defaulted
    titles, summaries and selection logic are not warned about again, but
    every component whose content is still empty keeps its "may need manual
    entry" warning, since that describes the record rather than the answer.

    Raises
    ------
    ParseFailure
        No JSON object could be recovered from *raw*.
    InvalidShape
        A field or list entry has the wrong type.
    """
    payload = extract_json_object(raw)
    answer = validate_shape(StrategyResponse, payload)
    norm = FieldNormalizer()

    found = answer.components or {}
    components = {cid: _component(cid, found.get(cid), norm) for cid in COMPONENT_IDS}

    title = norm.text(answer.title, UNTITLED_STRATEGY, strip=True)
    if not (answer.title and answer.title.strip()):
        norm.warn(f"title: missing from AI response — defaulted to '{UNTITLED_STRATEGY}'.")

    summary = answer.summary
    if summary is None:
        norm.warn(f"summary: missing from AI response — defaulted to '{NO_SUMMARY}'.")
        summary = NO_SUMMARY

    logic = answer.selection_logic
    if logic is None:
        norm.warn("selectionLogic: missing from AI response — selection logic fields are empty.")
        selection_logic = SelectionLogic()
    else:
        selection_logic = SelectionLogic(
            adjacent_definition=logic.adjacent_definition,
            growth_definition=logic.growth_definition,
            criteria=list(logic.criteria or ()),
        )

    return StrategyExtraction(
        title=title,
        summary=summary,
        components=components,
        selection_logic=selection_logic,
        cross_cutting_themes=list(answer.cross_cutting_themes or ()),
        stakeholder_categories=list(answer.stakeholder_categories or ()),
        priority_sector_names=list(answer.priority_sector_names or ()),
        warnings=norm.warnings,
    )


def _start(document_text: str) -> ComposedPrompt:
    if not document_text or not document_text.strip():
        raise InsufficientInput("Strategy document has no text to extract from.")

    log_extraction_start(logger, PIPELINE, len(document_text))
    prompt = compose_strategy_prompt(truncate_strategy_text(document_text))
    log_prompt(logger, "strategy user", prompt.user)
    return prompt


def _finish(raw: Any, started: float) -> StrategyExtraction:
    log_llm_response(logger, "strategy", raw if isinstance(raw, str) else repr(raw))
    try:
        record = parse_strategy_response(raw)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    log_extraction_complete(logger, PIPELINE, True, time.perf_counter() - started, warnings=record.warnings)
    return record


def extract_strategy(document_text: str, *, invoker: ModelInvoker) -> StrategyExtraction:
    """Extract blueprint-aligned fields from a strategy document."""
    started = time.perf_counter()
    prompt = _start(document_text)
    try:
        raw = call_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, started)


async def aextract_strategy(document_text: str, *, invoker: ModelInvoker) -> StrategyExtraction:
    """Async twin of :func:`extract_strategy`."""
    started = time.perf_counter()
    prompt = _start(document_text)
    try:
        raw = await acall_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, started)
