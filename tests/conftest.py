# tests/conftest.py
"""Shared fixtures: catalogs, canned model answers and logger cleanup."""

import json
import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_dealscope_logger():
    """Undo any setup_logging() a CLI test performed."""
    yield
    root = logging.getLogger("dealscope")
    for handler in root.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
            handler.close()
    for f in root.filters[:]:
        root.removeFilter(f)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def opportunity_types():
    from dealscope.schemas import CatalogEntry

    return [
        CatalogEntry(id="ot-agri", name="Agriculture", definition="Primary production and agri-processing."),
        CatalogEntry(id="ot-mfg", name="Advanced manufacturing", definition="High-value manufacturing."),
    ]


@pytest.fixture
def lgas():
    from dealscope.schemas import CatalogEntry

    return [
        CatalogEntry(id="mackay", name="Mackay"),
        CatalogEntry(id="isaac", name="Isaac"),
        CatalogEntry(id="whitsunday", name="Whitsunday"),
    ]


@pytest.fixture
def memo_request(opportunity_types, lgas):
    from dealscope.schemas import ExtractionRequest

    return ExtractionRequest(
        document_text="Proposal for a bio-refinery at Racecourse near Mackay.",
        label="Bio-refinery memo",
        opportunity_types=opportunity_types,
        lgas=lgas,
    )


@pytest.fixture
def full_memo_answer():
    """A well-formed memo answer using only in-catalog values."""
    return {
        "name": "Racecourse Bio-refinery",
        "stage": "pre-feasibility",
        "readinessState": "feasibility-underway",
        "dominantConstraint": "early-risk-capital",
        "summary": "A sugar-cane bio-refinery co-located with the Racecourse mill.",
        "description": "Longer description.",
        "nextStep": "Commission the detailed feasibility study.",
        "investmentValue": "$350m",
        "suggestedLocationText": "Racecourse, Mackay, Queensland",
        "suggestedLgaIds": ["mackay"],
        "keyStakeholders": ["Mackay Sugar", "QUT"],
        "risks": ["Feedstock price volatility"],
        "governmentPrograms": [{"name": "Industry Growth Fund", "description": "Federal co-funding"}],
        "timeline": [{"label": "FID", "date": "2027"}],
        "suggestedOpportunityType": {
            "existingId": "ot-agri",
            "confidence": "high",
            "reasoning": "Agri-processing of cane.",
        },
    }


@pytest.fixture
def full_grade_answer():
    return {
        "grade_letter": "B",
        "grade_rationale_short": "Solid diagnostics, thin on culture.",
        "evidence_notes_by_component": {cid: f"Note {cid}" for cid in "123456"},
        "missing_elements": [{"component_id": "6", "reason": "No cultural analysis."}],
        "scope_discipline_notes": "Stays within its remit.",
    }


@pytest.fixture
def components():
    return {cid: f"Body of component {cid}." for cid in "123456"}


@pytest.fixture
def as_answer():
    """Wrap a payload the way models often do: fenced and with chatter."""

    def wrap(payload) -> str:
        return "Here is the analysis:\n```json\n" + json.dumps(payload) + "\n```\nLet me know!"

    return wrap
