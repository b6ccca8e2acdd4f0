"""
DEALSCOPE - structured deal extraction and strategy grading.

Turns investment memos into validated deal records and grades sector
development strategies against a six-component blueprint, treating every
language model answer as untrusted input.

Main Components:
    - dealscope.pipelines: extract_deal, grade_strategy, extract_strategy
    - dealscope.invoker: OpenAI and DSPy model adapters
    - dealscope.schemas: request, answer-shape and record models
    - dealscope.errors: typed pipeline failures
"""

__version__ = "0.3.0"

from dealscope.errors import (
    ExtractionError,
    InsufficientInput,
    InvalidShape,
    ParseFailure,
    UpstreamFailure,
)
from dealscope.invoker import DSPyInvoker, ModelInvoker, OpenAIInvoker, build_invoker
from dealscope.pipelines import (
    aextract_deal,
    aextract_strategy,
    agrade_strategy,
    extract_deal,
    extract_strategy,
    grade_strategy,
    parse_grade_response,
    parse_memo_response,
    parse_strategy_response,
)
from dealscope.prompting import ComposedPrompt
from dealscope.schemas import (
    CatalogEntry,
    DealExtraction,
    ExtractionRequest,
    GradeResult,
    GradingContext,
    StrategyExtraction,
)

__all__ = [
    "__version__",
    "CatalogEntry",
    "ComposedPrompt",
    "DSPyInvoker",
    "DealExtraction",
    "ExtractionError",
    "ExtractionRequest",
    "GradeResult",
    "GradingContext",
    "InsufficientInput",
    "InvalidShape",
    "ModelInvoker",
    "OpenAIInvoker",
    "ParseFailure",
    "StrategyExtraction",
    "UpstreamFailure",
    "aextract_deal",
    "aextract_strategy",
    "agrade_strategy",
    "build_invoker",
    "extract_deal",
    "extract_strategy",
    "grade_strategy",
    "parse_grade_response",
    "parse_memo_response",
    "parse_strategy_response",
]
