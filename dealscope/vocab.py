# dealscope/vocab.py
"""Closed vocabularies shared by every pipeline.

Each enumerated field of a validated record draws its value from one of the
tuples below.  The ``Literal`` aliases are used on the record models so a
value outside the set cannot be constructed, and the ``DEFAULT_*``
constants are what the normaliser substitutes when the model answers with
something else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

# ---------------------------------------------------------------------------
# Deal pathway stages
# ---------------------------------------------------------------------------

DealStage = Literal[
    "definition",
    "pre-feasibility",
    "feasibility",
    "structuring",
    "transaction-close",
]
DEAL_STAGES: tuple[str, ...] = get_args(DealStage)
DEFAULT_STAGE: DealStage = "definition"

# ---------------------------------------------------------------------------
# Readiness ladder (ordered, least to most mature)
# ---------------------------------------------------------------------------

ReadinessState = Literal[
    "no-viable-projects",
    "conceptual-interest",
    "feasibility-underway",
    "structurable-but-stalled",
    "investable-with-minor-intervention",
    "scaled-and-replicable",
]
READINESS_STATES: tuple[str, ...] = get_args(ReadinessState)
DEFAULT_READINESS: ReadinessState = "conceptual-interest"

READINESS_DESCRIPTIONS: dict[str, str] = {
    "no-viable-projects": "No visible projects",
    "conceptual-interest": "Conceptual interest from stakeholders",
    "feasibility-underway": "Active feasibility studies",
    "structurable-but-stalled": "Could be structured but is blocked",
    "investable-with-minor-intervention": "Nearly investable, needs small push",
    "scaled-and-replicable": "Proven model, ready for scale",
}

# ---------------------------------------------------------------------------
# Dominant constraints
# ---------------------------------------------------------------------------

Constraint = Literal[
    "revenue-certainty",
    "offtake-demand-aggregation",
    "planning-and-approvals",
    "sponsor-capability",
    "early-risk-capital",
    "balance-sheet-constraints",
    "technology-risk",
    "coordination-failure",
    "skills-and-workforce-constraint",
    "common-user-infrastructure-gap",
]
CONSTRAINTS: tuple[str, ...] = get_args(Constraint)
DEFAULT_CONSTRAINT: Constraint = "coordination-failure"

CONSTRAINT_DESCRIPTIONS: dict[str, str] = {
    "revenue-certainty": "Uncertain revenue streams",
    "offtake-demand-aggregation": "No committed buyers/demand",
    "planning-and-approvals": "Regulatory/planning bottlenecks",
    "sponsor-capability": "Sponsor lacks capacity",
    "early-risk-capital": "Needs seed/development capital",
    "balance-sheet-constraints": "Entity cannot borrow more",
    "technology-risk": "Unproven technology",
    "coordination-failure": "Multiple parties cannot align",
    "skills-and-workforce-constraint": "Workforce gaps",
    "common-user-infrastructure-gap": "Shared infrastructure missing",
}

# ---------------------------------------------------------------------------
# Classification confidence
# ---------------------------------------------------------------------------

Confidence = Literal["high", "medium", "low"]
CONFIDENCE_LEVELS: tuple[str, ...] = get_args(Confidence)
DEFAULT_CONFIDENCE: Confidence = "low"

# ---------------------------------------------------------------------------
# Strategy grading
# ---------------------------------------------------------------------------

GradeLetter = Literal["A", "A-", "B", "B-", "C", "D", "F"]
GRADE_LETTERS: tuple[str, ...] = get_args(GradeLetter)
# Mid-scale on purpose: a failed answer must never read as a best or worst grade.
DEFAULT_GRADE: GradeLetter = "C"

GRADE_DESCRIPTIONS: dict[str, str] = {
    "A": "Comprehensive: all six components are explicitly and thoroughly addressed "
    "with strong empirical evidence, clear logic, and operational detail.",
    "A-": "Strong: most components are explicitly addressed with good evidence and "
    "logic; minor gaps in one or two components that do not undermine the overall "
    "coherence.",
    "B": "Solid: the majority of components are addressed with adequate evidence; "
    "some components may be implicit or underdeveloped but the strategy is functional.",
    "B-": "Adequate: core components are present but several have limited depth; "
    "the strategy covers the basics but lacks rigour in places.",
    "C": "Partial: significant gaps in two or more components; the strategy addresses "
    "some aspects well but is incomplete as a framework.",
    "D": "Weak: most components are poorly addressed or absent; the strategy lacks "
    "coherence and analytical depth.",
    "F": "Insufficient: the document does not function as a sector development "
    "strategy; most components are missing or superficial.",
}

ComponentId = Literal["1", "2", "3", "4", "5", "6"]
COMPONENT_IDS: tuple[str, ...] = get_args(ComponentId)


@dataclass(frozen=True, slots=True)
class BlueprintComponent:
    """One of the six fixed rubric dimensions."""

    id: str
    title: str
    short_title: str
    scope: str


BLUEPRINT_COMPONENTS: tuple[BlueprintComponent, ...] = (
    BlueprintComponent(
        "1",
        "Sector Diagnostics and Comparative Advantage",
        "Sector Diagnostics & Comparative Advantage",
        "Empirical baseline, sector identification logic, adjacency and growth "
        "analysis, justification for sector focus.",
    ),
    BlueprintComponent(
        "2",
        "Economic Geography and Places of Production",
        "Economic Geography & Places of Production",
        "Places, regions, industrial precincts, enabling infrastructure linked to "
        "sector activity.",
    ),
    BlueprintComponent(
        "3",
        "Regulatory and Enabling Environment",
        "Regulatory & Enabling Environment",
        "Policy frameworks, planning barriers, regulatory reform pathways, enabling "
        "conditions.",
    ),
    BlueprintComponent(
        "4",
        "Value Chain and Market Integration",
        "Value Chain & Market Integration",
        "Demand drivers, supply chain positioning, market access, value chain mapping.",
    ),
    BlueprintComponent(
        "5",
        "Workforce and Skills Alignment",
        "Workforce & Skills Alignment",
        "Skills gaps, training alignment, transferability, workforce development.",
    ),
    BlueprintComponent(
        "6",
        "Sector Culture and Norms",
        "Sector Culture & Norms",
        "Cultural factors, behavioural norms, innovation disposition, collaboration "
        "readiness.",
    ),
)


# ---------------------------------------------------------------------------
# Development pathway reference content (embedded in the memo prompt)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathwayStage:
    """Prompt-facing summary of one development pathway stage."""

    id: str
    number: int
    title: str
    purpose: str
    gate_items: tuple[str, ...]


PATHWAY_STAGES: tuple[PathwayStage, ...] = (
    PathwayStage(
        id="definition",
        number=1,
        title="Enabling Environment and Project Definition",
        purpose=(
            "This stage resolves strategic alignment and regulatory viability, "
            "ensuring the project is situated within a legal and institutional "
            "framework that supports private participation before significant "
            "resources are committed."
        ),
        gate_items=("Strategic Suitability", "Legal Viability", "Government Commitment"),
    ),
    PathwayStage(
        id="pre-feasibility",
        number=2,
        title="Pre-feasibility and Prioritisation",
        purpose=(
            'This stage resolves the "fatal flaw" uncertainty by determining if the '
            "project is technically plausible and financially reasonable before "
            "incurring high preparation costs."
        ),
        gate_items=("Preliminary Feasibility", "Clearance in Principle", "Additionality"),
    ),
    PathwayStage(
        id="feasibility",
        number=3,
        title="Detailed Feasibility and Investment Appraisal",
        purpose=(
            "This stage resolves the core investment uncertainties by producing the "
            "detailed technical, economic, and ESG evidence required for a final "
            "investment decision."
        ),
        gate_items=("Commercial Viability", "ESG Compliance", "Fiscal Affordability"),
    ),
    PathwayStage(
        id="structuring",
        number=4,
        title="Project Structuring and Risk Allocation",
        purpose=(
            "This stage resolves the commercial structure and risk allocation to "
            "ensure the project presents an acceptable risk-return profile to the "
            "market."
        ),
        gate_items=("Market Appetite", "Creditworthiness", "Endorsement"),
    ),
    PathwayStage(
        id="transaction-close",
        number=5,
        title="Transaction Implementation and Financial Close",
        purpose=(
            "This stage resolves the final funding and contractual uncertainties, "
            "moving the project from a structured proposal to a funded asset ready "
            "for construction."
        ),
        gate_items=("Commercial Close", "Financial Close"),
    ),
)
