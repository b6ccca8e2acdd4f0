# tests/test_text.py
"""Tests for document truncation before prompting."""


class TestTruncateMemoText:

    def test_short_text_unchanged(self):
        from dealscope.text import truncate_memo_text

        assert truncate_memo_text("short memo") == "short memo"

    def test_text_at_limit_unchanged(self):
        from dealscope.text import MEMO_CHAR_LIMIT, truncate_memo_text

        text = "a" * MEMO_CHAR_LIMIT
        assert truncate_memo_text(text) == text

    def test_long_text_cut_and_marked(self):
        from dealscope.text import MEMO_CHAR_LIMIT, MEMO_TRUNCATION_MARKER, truncate_memo_text

        text = "a" * MEMO_CHAR_LIMIT + "TAIL"
        out = truncate_memo_text(text)
        assert out == "a" * MEMO_CHAR_LIMIT + MEMO_TRUNCATION_MARKER
        assert "TAIL" not in out
        assert out.endswith("[Memo truncated at 30,000 characters]")

    def test_deterministic(self):
        from dealscope.text import truncate_memo_text

        text = "xyz" * 20_000
        assert truncate_memo_text(text) == truncate_memo_text(text)


class TestTruncateStrategyText:

    def test_strategy_limit_is_larger(self):
        from dealscope.text import MEMO_CHAR_LIMIT, truncate_strategy_text

        text = "b" * (MEMO_CHAR_LIMIT + 1)
        assert truncate_strategy_text(text) == text

    def test_long_strategy_cut_and_marked(self):
        from dealscope.text import STRATEGY_CHAR_LIMIT, truncate_strategy_text

        out = truncate_strategy_text("b" * (STRATEGY_CHAR_LIMIT + 10))
        assert out.startswith("b" * STRATEGY_CHAR_LIMIT)
        assert out.endswith("[Document truncated at 60,000 characters]")
        assert out.count("b") == STRATEGY_CHAR_LIMIT
