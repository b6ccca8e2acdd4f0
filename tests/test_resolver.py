# tests/test_resolver.py
"""Tests for opportunity-type resolution against a catalog."""

CATALOG = ["ot-agri", "ot-mfg"]


class TestResolveTaxonomy:

    def test_existing_id_matches(self):
        from dealscope.schemas import Matched
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy(
            {"existingId": "ot-agri", "confidence": "high", "reasoning": "Cane processing."},
            CATALOG,
        )
        assert isinstance(decision, Matched)
        assert decision.existing_id == "ot-agri"
        assert decision.confidence == "high"
        assert decision.reasoning == "Cane processing."

    def test_existing_id_wins_over_proposal(self):
        from dealscope.schemas import Matched
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy(
            {"existingId": "ot-mfg", "proposedName": "Bio-manufacturing", "closestExistingId": "ot-agri"},
            CATALOG,
        )
        assert isinstance(decision, Matched)
        assert decision.existing_id == "ot-mfg"

    def test_ids_are_trimmed(self):
        from dealscope.schemas import Matched
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy({"existingId": "  ot-agri \n"}, CATALOG)
        assert isinstance(decision, Matched)
        assert decision.existing_id == "ot-agri"

    def test_hallucinated_id_treated_as_absent(self):
        from dealscope.schemas import ProposedWithClosest
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy(
            {
                "existingId": "ot-space",
                "proposedName": "  Space industry ",
                "proposedDefinition": "Launch services.",
                "closestExistingId": "ot-mfg",
                "closestExistingReasoning": "Both are high-tech manufacturing.",
            },
            CATALOG,
        )
        assert isinstance(decision, ProposedWithClosest)
        assert decision.proposed_name == "Space industry"
        assert decision.closest_existing_id == "ot-mfg"
        assert decision.closest_existing_reasoning == "Both are high-tech manufacturing."

    def test_invalid_closest_id_gives_proposed_new(self):
        from dealscope.schemas import ProposedNew
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy(
            {"proposedName": "Hydrogen", "closestExistingId": "ot-energy"},
            CATALOG,
        )
        assert isinstance(decision, ProposedNew)
        assert decision.proposed_name == "Hydrogen"
        assert decision.proposed_definition is None

    def test_blank_proposal_is_unresolved(self):
        from dealscope.schemas import Unresolved
        from dealscope.validation import resolve_taxonomy

        decision = resolve_taxonomy({"proposedName": "   ", "reasoning": "unsure"}, CATALOG)
        assert isinstance(decision, Unresolved)
        assert decision.confidence == "low"
        assert decision.reasoning == "Could not determine opportunity type from the document."

    def test_missing_or_non_object_payload_unresolved_without_warning(self):
        from dealscope.schemas import Unresolved
        from dealscope.validation import FieldNormalizer, resolve_taxonomy

        for payload in (None, "ot-agri", ["ot-agri"], {}):
            norm = FieldNormalizer()
            assert isinstance(resolve_taxonomy(payload, CATALOG, norm), Unresolved)
            assert norm.warnings == []

    def test_empty_catalog_never_matches(self):
        from dealscope.schemas import ProposedNew, Unresolved
        from dealscope.validation import resolve_taxonomy

        assert isinstance(resolve_taxonomy({"existingId": "ot-agri"}, []), Unresolved)
        decision = resolve_taxonomy({"existingId": "ot-agri", "proposedName": "Agri"}, [])
        assert isinstance(decision, ProposedNew)

    def test_invalid_confidence_defaults_low_with_warning(self):
        from dealscope.validation import FieldNormalizer, resolve_taxonomy

        norm = FieldNormalizer()
        decision = resolve_taxonomy({"existingId": "ot-agri", "confidence": "very high"}, CATALOG, norm)
        assert decision.confidence == "low"
        assert len(norm.warnings) == 1
        assert norm.warnings[0].startswith("suggestedOpportunityType.confidence")

    def test_missing_reasoning_placeholder_without_warning(self):
        from dealscope.validation import FieldNormalizer, resolve_taxonomy

        norm = FieldNormalizer()
        decision = resolve_taxonomy({"existingId": "ot-agri", "confidence": "medium"}, CATALOG, norm)
        assert decision.reasoning == "No reasoning provided."
        assert norm.warnings == []

    def test_decision_payload_is_tagged(self):
        from dealscope.validation import resolve_taxonomy

        payload = resolve_taxonomy({"existingId": "ot-agri", "confidence": "high"}, CATALOG).to_payload()
        assert payload["kind"] == "matched"
        assert payload["existingId"] == "ot-agri"
        assert "proposedName" not in payload
