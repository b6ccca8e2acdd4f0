"""Structural gate between JSON recovery and field normalisation."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from dealscope.errors import InvalidShape

M = TypeVar("M", bound=BaseModel)

_MAX_REPORTED_ERRORS = 5


def _summarise(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors()[:_MAX_REPORTED_ERRORS]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    more = exc.error_count() - _MAX_REPORTED_ERRORS
    if more > 0:
        parts.append(f"... and {more} more")
    return "; ".join(parts)


def validate_shape(model_cls: type[M], payload: Any) -> M:
    """Validate *payload* against *model_cls* or raise :class:`InvalidShape`.

    Nothing is defaulted here: a payload either passes as a whole or is
    rejected as a whole.
    """
    if not isinstance(payload, dict):
        raise InvalidShape(
            f"Expected a JSON object at the top level, got {type(payload).__name__}."
        )
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise InvalidShape(f"{model_cls.__name__} rejected: {_summarise(exc)}") from exc
