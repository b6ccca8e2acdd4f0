# tests/test_strategy_extraction.py
"""Tests for strategy document extraction."""

import asyncio
import json

import pytest


@pytest.fixture
def strategy_answer():
    return {
        "title": "Greater Whitsunday Manufacturing Strategy",
        "summary": "A ten-year plan for METS and bio-manufacturing.",
        "components": {
            cid: {"content": f"Component {cid} text.", "confidence": 0.8, "sourceExcerpt": f"p.{cid}"}
            for cid in "123456"
        },
        "selectionLogic": {"adjacentDefinition": "Shares supply chains", "criteria": ["scale", "export"]},
        "crossCuttingThemes": ["net zero"],
        "stakeholderCategories": ["industry", "government"],
        "prioritySectorNames": ["METS", "Bio-futures"],
    }


class TestParseStrategyResponse:

    def test_complete_answer(self, strategy_answer):
        from dealscope import parse_strategy_response

        record = parse_strategy_response(json.dumps(strategy_answer))
        assert record.title == "Greater Whitsunday Manufacturing Strategy"
        assert record.components["3"].content == "Component 3 text."
        assert record.components["3"].source_excerpt == "p.3"
        assert record.selection_logic.adjacent_definition == "Shares supply chains"
        assert record.selection_logic.growth_definition is None
        assert record.priority_sector_names == ["METS", "Bio-futures"]
        assert record.warnings == []

    def test_confidence_clamped(self, strategy_answer):
        from dealscope import parse_strategy_response

        strategy_answer["components"]["1"]["confidence"] = 1.7
        strategy_answer["components"]["2"]["confidence"] = -3
        record = parse_strategy_response(json.dumps(strategy_answer))
        assert record.components["1"].confidence == 1.0
        assert record.components["2"].confidence == 0.0

    def test_missing_and_empty_components_warned(self, strategy_answer):
        from dealscope import parse_strategy_response

        del strategy_answer["components"]["4"]
        strategy_answer["components"]["5"]["content"] = ""
        record = parse_strategy_response(json.dumps(strategy_answer))
        assert record.components["4"].content == ""
        assert record.components["4"].confidence == 0.0
        assert any("Component 4" in w and "missing" in w for w in record.warnings)
        assert any("Component 5" in w and "manual entry" in w for w in record.warnings)
        assert len(record.warnings) == 2

    def test_reparse_of_complete_record_is_identical(self, strategy_answer):
        from dealscope import parse_strategy_response

        record = parse_strategy_response(json.dumps(strategy_answer))
        assert parse_strategy_response(json.dumps(record.to_payload())) == record

    def test_reparse_keeps_only_empty_content_warnings(self, strategy_answer):
        from dealscope import parse_strategy_response

        del strategy_answer["components"]["4"]
        strategy_answer["components"]["5"]["content"] = ""
        del strategy_answer["title"]
        del strategy_answer["summary"]
        record = parse_strategy_response(json.dumps(strategy_answer))

        again = parse_strategy_response(json.dumps(record.to_payload()))
        assert again.model_dump(exclude={"warnings"}) == record.model_dump(exclude={"warnings"})
        assert again.warnings == [
            "Component 4 has empty content — may need manual entry.",
            "Component 5 has empty content — may need manual entry.",
        ]

    def test_defaults_for_empty_object(self):
        from dealscope import parse_strategy_response

        record = parse_strategy_response("{}")
        assert record.title == "Untitled Strategy"
        assert record.summary == "No summary extracted."
        assert record.selection_logic.criteria == []
        assert set(record.components) == {"1", "2", "3", "4", "5", "6"}
        # six components, title, summary, selection logic
        assert len(record.warnings) == 9

    def test_strict_string_arrays(self, strategy_answer):
        from dealscope import InvalidShape, parse_strategy_response

        strategy_answer["crossCuttingThemes"] = ["net zero", 42]
        with pytest.raises(InvalidShape):
            parse_strategy_response(json.dumps(strategy_answer))

    def test_component_of_wrong_type_rejected(self, strategy_answer):
        from dealscope import InvalidShape, parse_strategy_response

        strategy_answer["components"]["2"] = "just text"
        with pytest.raises(InvalidShape):
            parse_strategy_response(json.dumps(strategy_answer))

    def test_to_grading_input(self, strategy_answer):
        from dealscope import parse_strategy_response

        components, context = parse_strategy_response(json.dumps(strategy_answer)).to_grading_input()
        assert components["6"] == "Component 6 text."
        assert context.title == "Greater Whitsunday Manufacturing Strategy"
        assert context.selection_logic.criteria == ["scale", "export"]


class TestExtractStrategy:

    def test_long_document_truncated(self, strategy_answer):
        from dealscope import extract_strategy

        seen = []

        def invoker(prompt):
            seen.append(prompt)
            return json.dumps(strategy_answer)

        extract_strategy("s" * 70_000, invoker=invoker)
        assert "[Document truncated at 60,000 characters]" in seen[0].user
        assert "Sector Culture & Norms" in seen[0].system

    def test_blank_document_rejected(self):
        from dealscope import InsufficientInput, extract_strategy

        with pytest.raises(InsufficientInput):
            extract_strategy("   ", invoker=lambda prompt: "{}")

    def test_async_twin(self, strategy_answer):
        from dealscope import aextract_strategy

        async def invoker(prompt):
            return json.dumps(strategy_answer)

        record = asyncio.run(aextract_strategy("Strategy text", invoker=invoker))
        assert record.stakeholder_categories == ["industry", "government"]

    def test_extract_then_grade(self, strategy_answer, full_grade_answer):
        from dealscope import extract_strategy, grade_strategy

        record = extract_strategy("Strategy text", invoker=lambda prompt: json.dumps(strategy_answer))
        components, context = record.to_grading_input()
        result = grade_strategy(components, context, invoker=lambda prompt: json.dumps(full_grade_answer))
        assert result.grade_letter == "B"
