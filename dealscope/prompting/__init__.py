"""Prompt composition for the extraction and grading pipelines."""

from dealscope.prompting.catalog import ComposedPrompt, render_catalog
from dealscope.prompting.grading import compose_grading_prompt
from dealscope.prompting.memo import compose_memo_prompt
from dealscope.prompting.strategy import compose_strategy_prompt

__all__ = [
    "ComposedPrompt",
    "compose_grading_prompt",
    "compose_memo_prompt",
    "compose_strategy_prompt",
    "render_catalog",
]
