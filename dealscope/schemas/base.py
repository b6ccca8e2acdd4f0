"""Shared pydantic base classes for wire-facing models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Model whose JSON keys are camelCase while attributes stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Dump to the camelCase JSON shape the model was asked to produce."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PassthroughModel(BaseModel):
    """Response-shape model: unknown keys are kept, never rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )
