"""Investment memo -> :class:`DealExtraction`.

Stages::

    truncate -> compose prompt -> invoke model -> recover JSON -> check shape
             -> normalise enums / resolve opportunity type / validate LGAs

Recovery and shape checking are terminal on failure.  Everything after the
shape gate degrades field by field and records what it defaulted.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from dealscope.errors import ExtractionError
from dealscope.invoker import ModelInvoker, acall_invoker, call_invoker
from dealscope.parse_utils import extract_json_object
from dealscope.prompting.catalog import ComposedPrompt
from dealscope.prompting.memo import compose_memo_prompt
from dealscope.schemas.catalog import ExtractionRequest
from dealscope.schemas.records import (
    DealExtraction,
    GovernmentProgram,
    MemoReference,
    TimelineMilestone,
)
from dealscope.schemas.responses import MemoResponse
from dealscope.text import truncate_memo_text
from dealscope.utils.logging import (
    get_logger,
    log_extraction_complete,
    log_extraction_start,
    log_llm_response,
    log_prompt,
)
from dealscope.validation.membership import DEFAULT_MEMBERSHIP_ID, validate_membership
from dealscope.validation.normalize import FieldNormalizer
from dealscope.validation.resolver import resolve_taxonomy
from dealscope.validation.shape import validate_shape
from dealscope.vocab import (
    CONSTRAINTS,
    DEAL_STAGES,
    DEFAULT_CONSTRAINT,
    DEFAULT_READINESS,
    DEFAULT_STAGE,
    READINESS_STATES,
)

logger = get_logger(__name__)

PIPELINE = "memo"
UNTITLED_DEAL = "Untitled Deal"
NO_SUMMARY = "No summary extracted."
DEFAULT_MEMO_LABEL = "Investment Memo"


def memo_reference(label: Optional[str]) -> MemoReference:
    return MemoReference(label=f"Investment Memo: {label or DEFAULT_MEMO_LABEL}")


def build_memo_prompt(
    request: ExtractionRequest,
    default_lga_id: str = DEFAULT_MEMBERSHIP_ID,
) -> ComposedPrompt:
    """Truncate the memo and compose the analysis prompt for *request*."""
    return compose_memo_prompt(
        truncate_memo_text(request.document_text),
        opportunity_types=request.opportunity_types,
        lgas=request.lgas,
        default_lga_id=default_lga_id,
    )


def parse_memo_response(
    raw: Any,
    request: ExtractionRequest,
    default_lga_id: str = DEFAULT_MEMBERSHIP_ID,
) -> DealExtraction:
    """Validate a raw model answer into a :class:`DealExtraction`.

    Pure: no model call, no I/O.  Feeding ``record.to_payload()`` back in with
    the same *request* reproduces *record* with an empty ``warnings`` list.

    Raises
    ------
    ParseFailure
        No JSON object could be recovered from *raw*.
    InvalidShape
        The JSON is not an object, or a field has the wrong container type.
    """
    payload = extract_json_object(raw)
    answer = validate_shape(MemoResponse, payload)
    norm = FieldNormalizer()

    stage = norm.enum("stage", answer.stage, DEAL_STAGES, DEFAULT_STAGE)
    readiness = norm.enum("readinessState", answer.readiness_state, READINESS_STATES, DEFAULT_READINESS)
    constraint = norm.enum("dominantConstraint", answer.dominant_constraint, CONSTRAINTS, DEFAULT_CONSTRAINT)

    opportunity_type = resolve_taxonomy(
        answer.suggested_opportunity_type,
        request.opportunity_type_ids,
        norm,
    )
    lga_ids = validate_membership(
        answer.suggested_lga_ids,
        request.lga_ids,
        default_lga_id,
        norm,
    )

    return DealExtraction(
        name=norm.text(answer.name, UNTITLED_DEAL, strip=True),
        stage=stage,
        readiness_state=readiness,
        dominant_constraint=constraint,
        summary=norm.text(answer.summary, NO_SUMMARY),
        description=norm.text(answer.description, ""),
        next_step=norm.text(answer.next_step, ""),
        investment_value=norm.optional_text(answer.investment_value),
        economic_impact=norm.optional_text(answer.economic_impact),
        key_stakeholders=norm.string_list(answer.key_stakeholders),
        risks=norm.string_list(answer.risks),
        strategic_actions=norm.string_list(answer.strategic_actions),
        infrastructure_needs=norm.string_list(answer.infrastructure_needs),
        skills_implications=norm.optional_text(answer.skills_implications),
        market_drivers=norm.optional_text(answer.market_drivers),
        government_programs=norm.object_list(answer.government_programs, GovernmentProgram),
        timeline=norm.object_list(answer.timeline, TimelineMilestone),
        memo_reference=memo_reference(request.label),
        suggested_location_text=norm.optional_text(answer.suggested_location_text, strip=True),
        suggested_lga_ids=lga_ids,
        suggested_opportunity_type=opportunity_type,
        warnings=norm.warnings,
    )


def _start(request: ExtractionRequest, default_lga_id: str) -> ComposedPrompt:
    log_extraction_start(
        logger,
        PIPELINE,
        len(request.document_text),
        catalog_sizes={
            "opportunity_types": len(request.opportunity_types or ()),
            "lgas": len(request.lgas or ()),
        },
    )
    prompt = build_memo_prompt(request, default_lga_id)
    log_prompt(logger, "memo system", prompt.system)
    log_prompt(logger, "memo user", prompt.user)
    return prompt


def _finish(
    raw: Any,
    request: ExtractionRequest,
    default_lga_id: str,
    started: float,
) -> DealExtraction:
    log_llm_response(logger, "memo", raw if isinstance(raw, str) else repr(raw))
    try:
        record = parse_memo_response(raw, request, default_lga_id)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    log_extraction_complete(logger, PIPELINE, True, time.perf_counter() - started, warnings=record.warnings)
    return record


def extract_deal(
    request: ExtractionRequest,
    *,
    invoker: ModelInvoker,
    default_lga_id: str = DEFAULT_MEMBERSHIP_ID,
) -> DealExtraction:
    """Analyse an investment memo with a synchronous *invoker*.

    Raises ``UpstreamFailure`` when the invoker fails, ``ParseFailure`` or
    ``InvalidShape`` when its answer cannot be trusted, and ``TypeError``
    when *invoker* returns an awaitable.
    """
    started = time.perf_counter()
    prompt = _start(request, default_lga_id)
    try:
        raw = call_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, request, default_lga_id, started)


async def aextract_deal(
    request: ExtractionRequest,
    *,
    invoker: ModelInvoker,
    default_lga_id: str = DEFAULT_MEMBERSHIP_ID,
) -> DealExtraction:
    """Async twin of :func:`extract_deal`; *invoker* may be sync or async."""
    started = time.perf_counter()
    prompt = _start(request, default_lga_id)
    try:
        raw = await acall_invoker(invoker, prompt)
    except ExtractionError as exc:
        log_extraction_complete(logger, PIPELINE, False, time.perf_counter() - started, error=exc.detail)
        raise
    return _finish(raw, request, default_lga_id, started)
