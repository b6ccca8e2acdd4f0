# dealscope/errors.py
"""Typed failures raised by the extraction and grading pipelines.

Every terminal outcome of a pipeline call is an :class:`ExtractionError`
subclass, so ``except ExtractionError`` is the complete failure branch.
Recoverable field problems are never raised; they are reported through the
``warnings`` list of the returned record.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for pipeline failures."""

    default_message = "An unexpected error occurred."

    def __init__(self, detail: str = "", *, raw_text: str | None = None) -> None:
        self.detail = detail or self.default_message
        self.raw_text = raw_text
        super().__init__(self.detail)

    @property
    def user_message(self) -> str:
        """Short message suitable for showing to an end user."""
        return self.default_message


class ParseFailure(ExtractionError):
    """The model answer contained no parseable JSON object."""

    default_message = "Failed to parse AI response. Please try again."


class InvalidShape(ExtractionError):
    """The model answer parsed as JSON but its structure cannot be trusted."""

    default_message = "Invalid AI response shape. Please try again."


class UpstreamFailure(ExtractionError):
    """The model invocation itself raised or rejected."""

    default_message = "The language model call failed. Please try again."


class InsufficientInput(ExtractionError, ValueError):
    """The caller supplied nothing the pipeline could work on."""

    default_message = "Nothing to process: the input has no usable content."

    @property
    def user_message(self) -> str:
        return self.detail
