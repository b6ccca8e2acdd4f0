"""Prompt container and catalog rendering shared by every prompt builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from dealscope.schemas.catalog import CatalogEntry

OPPORTUNITY_TYPES_EMPTY = "(no existing types)"
LGAS_EMPTY = "(no LGAs)"
CATALOG_NOT_SUPPLIED = " [catalog not supplied]"


@dataclass(frozen=True, slots=True)
class ComposedPrompt:
    """A system instruction plus the user message carrying the document."""

    system: str
    user: str

    @property
    def text(self) -> str:
        return f"{self.system}\n\n{self.user}"

    def as_messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def render_catalog(
    entries: Optional[Sequence[CatalogEntry]],
    empty_placeholder: str,
    *,
    with_definitions: bool = True,
) -> str:
    """Render one line per entry, or a sentinel when there is nothing to list.

    An omitted catalog (``None``) and an empty one render differently, since
    they lead to different resolver behaviour downstream.
    """
    if entries is None:
        return empty_placeholder + CATALOG_NOT_SUPPLIED
    if not entries:
        return empty_placeholder

    lines = []
    for entry in entries:
        line = f'- "{entry.id}" — {entry.name}'
        if with_definitions and entry.definition:
            line += f": {entry.definition}"
        lines.append(line)
    return "\n".join(lines)


def join_or(values: Sequence[str], placeholder: str) -> str:
    """Comma-join *values*, or return *placeholder* when there are none."""
    return ", ".join(values) if values else placeholder
