"""Validation stages applied to recovered model answers."""

from dealscope.validation.membership import DEFAULT_MEMBERSHIP_ID, validate_membership
from dealscope.validation.normalize import FieldNormalizer
from dealscope.validation.resolver import resolve_taxonomy
from dealscope.validation.shape import validate_shape

__all__ = [
    "DEFAULT_MEMBERSHIP_ID",
    "FieldNormalizer",
    "resolve_taxonomy",
    "validate_membership",
    "validate_shape",
]
