"""Strategy components -> :class:`GradeResult`.

Same recover-then-validate sequence as the memo pipeline, against the
grading answer shape.  Here a single malformed ``missing_elements`` entry
rejects the whole answer.
"""

from __future__ import annotations

import time
from typing import Any, Mapping, Optional

from dealscope.errors import ExtractionError, InsufficientInput
from dealscope.invoker import ModelInvoker, acall_invoker, call_invoker
from dealscope.parse_utils import extract_json_object
from dealscope.prompting.catalog import ComposedPrompt
from dealscope.prompting.grading import compose_grading_prompt
from dealscope.schemas.records import GradeResult, GradingContext, MissingElement
from dealscope.schemas.responses import GradeResponse
from dealscope.utils.logging import (
    get_logger,
    log_extraction_complete,
    log_extraction_start,
    log_llm_response,
    log_prompt,
)
from dealscope.validation.normalize import FieldNormalizer
from dealscope.validation.shape import validate_shape
from dealscope.vocab import COMPONENT_IDS, DEFAULT_GRADE, GRADE_LETTERS

logger = get_logger(__name__)

PIPELINE = "grading"
NO_RATIONALE = "No rationale provided."
NO_SCOPE_NOTES = "No scope discipline notes provided."
NO_CONTENT_MESSAGE = "Strategy has no blueprint components to grade. Run AI extraction first."


def normalize_components(components: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Return a body for each of the six component ids; absent ids become ``""``."""
    bodies: dict[str, str] = {}
    for cid in COMPONENT_IDS:
        body = components.get(cid)
        bodies[cid] = body if isinstance(body, str) else ""
    return bodies


def parse_grade_response(raw: Any) -> GradeResult:
    """Validate a raw grading answer into a :class:`GradeResult`.

    Raises
    ------
    ParseFailure
        No JSON object could be recovered from *raw*.
    InvalidShape
        A field is wrongly typed, including any ``missing_elements`` entry.
    """
    payload = extract_json_object(raw)
    answer = validate_shape(GradeResponse, payload)
    norm = FieldNormalizer()

    letter = answer.grade_letter.strip() if answer.grade_letter is not None else None
    grade = norm.enum("grade_letter", letter, GRADE_LETTERS, DEFAULT_GRADE)

    rationale = answer.grade_rationale_short
    if rationale is None:
        norm.warn(f"grade_rationale_short: missing from AI response — defaulted to '{NO_RATIONALE}'.")
        rationale = NO_RATIONALE

    notes = answer.evidence_notes_by_component or {}
    evidence: dict[str, str] = {}
    for cid in COMPONENT_IDS:
        note = notes.get(cid)
        if note is None:
            norm.warn(f"evidence_notes_by_component.{cid}: missing from AI response — defaulted to empty.")
            note = ""
        evidence[cid] = note

    scope_notes = answer.scope_discipline_notes
    if scope_notes is None:
        norm.warn(f"scope_discipline_notes: missing from AI response — defaulted to '{NO_SCOPE_NOTES}'.")
        scope_notes = NO_SCOPE_NOTES

    return GradeResult(
        grade_letter=grade,
        grade_rationale_short=rationale,
        evidence_notes_by_component=evidence,
        missing_elements=[
            MissingElement(component_id=item.component_id, reason=item.reason)
            for item in answer.missing_elements or ()
        ],
        scope_discipline_notes=scope_notes,
        warnings=norm.warnings,
    )


def _start(components: Mapping[str, Optional[str]], context: Optional[GradingContext]) -> ComposedPrompt:
    bodies = normalize_components(components)
    if not any(body.strip() for body in bodies.values()):
        raise InsufficientInput(NO_CONTENT_MESSAGE)

    log_extraction_start(logger, PIPELINE, sum(len(body) for body in bodies.values()))
    prompt = compose_grading_prompt(bodies, context)
    log_prompt(logger, "grading user", prompt.user)
    return prompt


def _finish(raw: Any, started: float) -> GradeResult:
    log_llm_response(logger, "grading", raw if isinstance(raw, str) else repr(raw))
    try:
        result = parse_grade_response(raw)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    logger.info("Strategy graded %s", result.grade_letter)
    log_extraction_complete(logger, PIPELINE, True, time.perf_counter() - started, warnings=result.warnings)
    return result


def grade_strategy(
    components: Mapping[str, Optional[str]],
    context: Optional[GradingContext] = None,
    *,
    invoker: ModelInvoker,
) -> GradeResult:
    """Grade six component bodies against the blueprint rubric.

    Raises ``InsufficientInput`` before any model call when every component
    is blank.
    """
    started = time.perf_counter()
    prompt = _start(components, context)
    try:
        raw = call_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, started)


async def agrade_strategy(
    components: Mapping[str, Optional[str]],
    context: Optional[GradingContext] = None,
    *,
    invoker: ModelInvoker,
) -> GradeResult:
    """Async twin of :func:`grade_strategy`."""
    started = time.perf_counter()
    prompt = _start(components, context)
    try:
        raw = await acall_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, started)
