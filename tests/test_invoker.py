# tests/test_invoker.py
"""Tests for the model invoker adapters and call helpers."""

import asyncio
from types import SimpleNamespace

import pytest


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class _FakeCompletions:
    def __init__(self, content, is_async=False):
        self.content = content
        self.is_async = is_async
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.is_async:
            async def pending():
                return _completion(self.content)

            return pending()
        return _completion(self.content)


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestOpenAIInvoker:

    def test_sends_system_and_user_messages(self):
        from dealscope.invoker import OpenAIInvoker
        from dealscope.prompting import ComposedPrompt

        completions = _FakeCompletions('{"ok": true}')
        invoker = OpenAIInvoker(_client(completions), "gpt-4o")
        assert invoker(ComposedPrompt(system="S", user="U")) == '{"ok": true}'

        call = completions.calls[0]
        assert call["model"] == "gpt-4o"
        assert call["temperature"] == 0.3
        assert call["max_tokens"] == 4000
        assert [m["role"] for m in call["messages"]] == ["system", "user"]

    def test_empty_content_becomes_empty_string(self):
        from dealscope.invoker import OpenAIInvoker
        from dealscope.prompting import ComposedPrompt

        invoker = OpenAIInvoker(_client(_FakeCompletions(None)), "gpt-4o")
        assert invoker(ComposedPrompt(system="S", user="U")) == ""

    def test_async_client_returns_awaitable(self):
        from dealscope.invoker import OpenAIInvoker, acall_invoker
        from dealscope.prompting import ComposedPrompt

        invoker = OpenAIInvoker(_client(_FakeCompletions("{}", is_async=True)), "gpt-4o")
        assert asyncio.run(acall_invoker(invoker, ComposedPrompt(system="S", user="U"))) == "{}"


class TestDSPyInvoker:

    def test_first_output_returned(self):
        from dealscope.invoker import DSPyInvoker
        from dealscope.prompting import ComposedPrompt

        seen = {}

        def lm(messages):
            seen["messages"] = messages
            return ['{"a": 1}', "ignored"]

        assert DSPyInvoker(lm)(ComposedPrompt(system="S", user="U")) == '{"a": 1}'
        assert seen["messages"][1] == {"role": "user", "content": "U"}

    def test_dict_outputs_use_text(self):
        from dealscope.invoker import DSPyInvoker
        from dealscope.prompting import ComposedPrompt

        invoker = DSPyInvoker(lambda messages: [{"text": "{}", "reasoning_content": "..."}])
        assert invoker(ComposedPrompt(system="S", user="U")) == "{}"


class TestBuildInvoker:

    def test_uses_config_values(self):
        from dealscope.config import DealscopeConfig
        from dealscope.invoker import OpenAIInvoker, build_invoker

        cfg = DealscopeConfig(lm="gpt-4o-mini", api_key="sk-test", api_base="http://localhost:8000/v1", max_tokens=1234)
        invoker = build_invoker(cfg)
        assert isinstance(invoker, OpenAIInvoker)
        assert invoker.model == "gpt-4o-mini"
        assert invoker.max_tokens == 1234
        assert str(invoker.client.base_url).startswith("http://localhost:8000/v1")

    def test_async_client_requested(self):
        import openai

        from dealscope.config import DealscopeConfig
        from dealscope.invoker import build_invoker

        cfg = DealscopeConfig(api_key="sk-test", _env_file=None)
        invoker = build_invoker(cfg, use_async=True)
        assert isinstance(invoker.client, openai.AsyncOpenAI)
        assert invoker.model == "gpt-4o"

    def test_async_invoker_drives_async_pipeline(self, memo_request, full_memo_answer):
        import json

        from dealscope import aextract_deal
        from dealscope.config import DealscopeConfig
        from dealscope.invoker import build_invoker

        invoker = build_invoker(DealscopeConfig(api_key="sk-test", _env_file=None), use_async=True)
        completions = _FakeCompletions(json.dumps(full_memo_answer), is_async=True)
        invoker.client = _client(completions)

        record = asyncio.run(aextract_deal(memo_request, invoker=invoker))
        assert record.name == "Racecourse Bio-refinery"
        assert completions.calls[0]["model"] == "gpt-4o"


class TestBuildDSPyInvoker:

    def test_lm_configured_from_config(self, monkeypatch):
        import dspy

        from dealscope.config import DealscopeConfig
        from dealscope.invoker import DSPyInvoker, build_dspy_invoker
        from dealscope.prompting import ComposedPrompt

        created = []

        class FakeLM:
            def __init__(self, model, **kwargs):
                self.model = model
                self.kwargs = kwargs
                created.append(self)

            def __call__(self, messages):
                return ['{"ok": true}']

        monkeypatch.setattr(dspy, "LM", FakeLM)
        cfg = DealscopeConfig(
            backend="dspy",
            lm="openai/gpt-4o-mini",
            api_key="sk-test",
            api_base="http://localhost:8000/v1",
            lm_temperature=0.1,
            max_tokens=900,
            _env_file=None,
        )
        invoker = build_dspy_invoker(cfg)

        assert isinstance(invoker, DSPyInvoker)
        lm = created[0]
        assert lm.model == "openai/gpt-4o-mini"
        assert lm.kwargs["api_key"] == "sk-test"
        assert lm.kwargs["api_base"] == "http://localhost:8000/v1"
        assert lm.kwargs["temperature"] == 0.1
        assert lm.kwargs["max_tokens"] == 900
        assert lm.kwargs["cache"] is False
        assert invoker(ComposedPrompt(system="S", user="U")) == '{"ok": true}'


class TestCallHelpers:

    def test_exceptions_wrapped_with_cause(self):
        from dealscope.errors import UpstreamFailure
        from dealscope.invoker import call_invoker
        from dealscope.prompting import ComposedPrompt

        def broken(prompt):
            raise ValueError("boom")

        with pytest.raises(UpstreamFailure) as excinfo:
            call_invoker(broken, ComposedPrompt(system="S", user="U"))
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert excinfo.value.user_message == "The language model call failed. Please try again."

    def test_awaitable_rejected_in_sync_path(self):
        from dealscope.invoker import call_invoker
        from dealscope.prompting import ComposedPrompt

        async def invoker(prompt):
            return "{}"

        with pytest.raises(TypeError):
            call_invoker(invoker, ComposedPrompt(system="S", user="U"))

    def test_async_helper_accepts_sync_invoker(self):
        from dealscope.invoker import acall_invoker
        from dealscope.prompting import ComposedPrompt

        assert asyncio.run(acall_invoker(lambda p: "{}", ComposedPrompt(system="S", user="U"))) == "{}"
