"""Caller-supplied catalogs and the per-call extraction request."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogEntry(BaseModel):
    """One known category or place (opportunity type, LGA, ...)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str = ""
    definition: Optional[str] = None


def coerce_catalog(entries: Optional[Iterable[Any]]) -> Optional[list[CatalogEntry]]:
    """Validate a catalog given as dicts or entries; ``None`` stays ``None``."""
    if entries is None:
        return None
    return [
        entry if isinstance(entry, CatalogEntry) else CatalogEntry.model_validate(entry)
        for entry in entries
    ]


def catalog_ids(entries: Optional[Iterable[CatalogEntry]]) -> list[str]:
    """Return the ids of *entries* in catalog order."""
    return [entry.id for entry in entries or ()]


class ExtractionRequest(BaseModel):
    """Everything a deal extraction call needs, fixed for the call's lifetime.

    ``None`` for a catalog means the caller did not supply one; an empty list
    means the caller supplied a catalog that has no entries.  The two render
    differently in the prompt.
    """

    model_config = ConfigDict(frozen=True)

    document_text: str
    label: Optional[str] = None
    opportunity_types: Optional[list[CatalogEntry]] = Field(default=None)
    lgas: Optional[list[CatalogEntry]] = Field(default=None)

    @property
    def opportunity_type_ids(self) -> list[str]:
        return catalog_ids(self.opportunity_types)

    @property
    def lga_ids(self) -> list[str]:
        return catalog_ids(self.lgas)
