"""Pydantic models for requests, raw answer shapes and validated records."""

from dealscope.schemas.catalog import CatalogEntry, ExtractionRequest, catalog_ids, coerce_catalog
from dealscope.schemas.records import (
    ComponentExtraction,
    DealExtraction,
    GovernmentProgram,
    GradeResult,
    GradingContext,
    MemoReference,
    MissingElement,
    SelectionLogic,
    StrategyExtraction,
    TimelineMilestone,
)
from dealscope.schemas.taxonomy import (
    Matched,
    ProposedNew,
    ProposedWithClosest,
    TaxonomyDecision,
    Unresolved,
)

__all__ = [
    "CatalogEntry",
    "ExtractionRequest",
    "catalog_ids",
    "coerce_catalog",
    "ComponentExtraction",
    "DealExtraction",
    "GovernmentProgram",
    "GradeResult",
    "GradingContext",
    "MemoReference",
    "MissingElement",
    "SelectionLogic",
    "StrategyExtraction",
    "TimelineMilestone",
    "Matched",
    "ProposedNew",
    "ProposedWithClosest",
    "TaxonomyDecision",
    "Unresolved",
]
