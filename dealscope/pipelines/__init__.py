"""Extraction and grading pipelines."""

from dealscope.pipelines.grading import agrade_strategy, grade_strategy, parse_grade_response
from dealscope.pipelines.memo import aextract_deal, extract_deal, parse_memo_response
from dealscope.pipelines.strategy import aextract_strategy, extract_strategy, parse_strategy_response

__all__ = [
    "aextract_deal",
    "aextract_strategy",
    "agrade_strategy",
    "extract_deal",
    "extract_strategy",
    "grade_strategy",
    "parse_grade_response",
    "parse_memo_response",
    "parse_strategy_response",
]
