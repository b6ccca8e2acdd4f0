"""Model invocation adapters.

A pipeline only needs something callable that takes a
:class:`~dealscope.prompting.ComposedPrompt` and returns the raw answer
text, or an awaitable of it.  Plain functions work, which is how the tests
drive the pipelines; the adapters below wrap the ``openai`` client and a
``dspy.LM`` for real use.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Optional, Protocol, Union

from dealscope.errors import UpstreamFailure
from dealscope.prompting.catalog import ComposedPrompt
from dealscope.utils.logging import get_logger

logger = get_logger(__name__)

InvokerResult = Union[str, Awaitable[str]]


class ModelInvoker(Protocol):
    def __call__(self, prompt: ComposedPrompt) -> InvokerResult: ...


def _message_text(completion: Any) -> str:
    message = completion.choices[0].message
    return message.content or ""


class OpenAIInvoker:
    """Chat-completion adapter for ``openai.OpenAI`` or ``openai.AsyncOpenAI``.

    With an async client the call returns a coroutine, so the same adapter
    serves both the sync and async pipeline entry points.
    """

    def __init__(
        self,
        client: Any,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def __call__(self, prompt: ComposedPrompt) -> InvokerResult:
        completion = self.client.chat.completions.create(
            model=self.model,
            messages=prompt.as_messages(),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if inspect.isawaitable(completion):
            return self._finish(completion)
        return _message_text(completion)

    @staticmethod
    async def _finish(pending: Awaitable[Any]) -> str:
        return _message_text(await pending)

    def __repr__(self) -> str:
        return f"OpenAIInvoker(model={self.model!r})"


class DSPyInvoker:
    """Adapter around a configured ``dspy.LM``."""

    def __init__(self, lm: Any) -> None:
        self.lm = lm

    def __call__(self, prompt: ComposedPrompt) -> str:
        outputs = self.lm(messages=prompt.as_messages())
        if not outputs:
            return ""
        first = outputs[0]
        # Newer DSPy releases return dicts when the LM emits reasoning.
        if isinstance(first, dict):
            return str(first.get("text") or "")
        return str(first)

    def __repr__(self) -> str:
        return f"DSPyInvoker(model={getattr(self.lm, 'model', '?')!r})"


def build_invoker(config: Optional[Any] = None, *, use_async: bool = False) -> OpenAIInvoker:
    """Build an OpenAI-compatible invoker from a :class:`DealscopeConfig`."""
    import openai

    if config is None:
        from dealscope.config import get_config

        config = get_config()

    client_cls = openai.AsyncOpenAI if use_async else openai.OpenAI
    kwargs: dict[str, Any] = {"api_key": config.api_key or None}
    if config.api_base:
        kwargs["base_url"] = config.api_base
    client = client_cls(**kwargs)
    return OpenAIInvoker(
        client,
        config.lm,
        temperature=config.lm_temperature,
        max_tokens=config.max_tokens,
    )


def build_dspy_invoker(config: Optional[Any] = None) -> DSPyInvoker:
    """Build a :class:`DSPyInvoker` over ``dspy.LM`` from a :class:`DealscopeConfig`."""
    import dspy

    if config is None:
        from dealscope.config import get_config

        config = get_config()

    lm = dspy.LM(
        config.lm,
        api_key=config.api_key or None,
        api_base=config.api_base,
        temperature=config.lm_temperature,
        max_tokens=config.max_tokens,
        cache=False,
    )
    return DSPyInvoker(lm)


# ---------------------------------------------------------------------------
# Call helpers used by the pipelines
# ---------------------------------------------------------------------------


def call_invoker(invoker: ModelInvoker, prompt: ComposedPrompt) -> str:
    """Invoke synchronously, wrapping any failure as :class:`UpstreamFailure`.

    Raises ``TypeError`` when *invoker* hands back an awaitable; use the
    async pipeline entry points for coroutine invokers.
    """
    try:
        result = invoker(prompt)
    except Exception as exc:
        logger.warning("Model invocation failed: %s", exc)
        raise UpstreamFailure(str(exc)) from exc

    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise TypeError(
            "invoker returned an awaitable; use the async entry point "
            "(aextract_deal, agrade_strategy, aextract_strategy) instead"
        )
    return result


async def acall_invoker(invoker: ModelInvoker, prompt: ComposedPrompt) -> str:
    """Invoke, awaiting the result when needed.  Failures become :class:`UpstreamFailure`."""
    try:
        result = invoker(prompt)
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:
        logger.warning("Model invocation failed: %s", exc)
        raise UpstreamFailure(str(exc)) from exc
    return result
