"""Field-level normalisation with an audit trail.

A :class:`FieldNormalizer` lives for one pipeline call.  Enumerated fields
that fall outside their closed set are replaced by a documented default and
each replacement is recorded in ``warnings``.  The pipelines log that list
once, when the call completes.  Free-text and list fields are
filled or filtered silently because their absence is routine.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


class FieldNormalizer:
    """Coerce raw answer values into well-typed field values."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    # -- enumerated fields --------------------------------------------------

    def enum(self, field: str, value: Any, allowed: Iterable[str], default: str) -> str:
        """Return *value* if it is a member of *allowed*, else *default* with a warning."""
        allowed = tuple(allowed)
        if isinstance(value, str) and value in allowed:
            return value
        if value is None:
            self.warn(f"{field}: missing from AI response — defaulted to '{default}'.")
        else:
            self.warn(f"{field}: invalid value {value!r} from AI — defaulted to '{default}'.")
        return default

    # -- free text ------------------------------------------------------------

    @staticmethod
    def text(value: Any, placeholder: str, *, strip: bool = False) -> str:
        """Return a string field, or *placeholder* when absent or wrong-typed.

        With ``strip=True`` the value is trimmed and a blank value also falls
        back to the placeholder.
        """
        if not isinstance(value, str):
            return placeholder
        if strip:
            return value.strip() or placeholder
        return value

    @staticmethod
    def optional_text(value: Any, *, strip: bool = False) -> Optional[str]:
        if not isinstance(value, str):
            return None
        if strip:
            return value.strip() or None
        return value

    # -- lists ----------------------------------------------------------------

    @staticmethod
    def string_list(value: Any) -> Optional[list[str]]:
        """Keep the string entries of a list; a non-list becomes ``None``."""
        if not isinstance(value, list):
            return None
        return [v for v in value if isinstance(v, str)]

    @staticmethod
    def object_list(value: Any, item_model: type[M]) -> Optional[list[M]]:
        """Keep the entries of a list that form a valid *item_model*.

        Non-string sub-values are discarded first, so an optional sub-field of
        the wrong type is simply left unset while a missing or wrong-typed
        required sub-field drops the whole entry.
        """
        if not isinstance(value, list):
            return None
        items: list[M] = []
        for entry in value:
            if not isinstance(entry, dict):
                continue
            cleaned = {k: v for k, v in entry.items() if isinstance(v, str)}
            try:
                items.append(item_model.model_validate(cleaned))
            except ValidationError:
                continue
        return items
