"""Validation of raw optional package declarations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from versioning.parser import is_parseable

REQUIRED_FIELDS = ("name", "constraint")
BOOLEAN_FIELDS = ("dev", "module")


def _is_package_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and not any(ch.isspace() for ch in value)


def is_valid_spec(declaration: Any) -> bool:
    """Return True if ``declaration`` is a well-formed optional package entry.

    Requires a whitespace-free ``name`` and a parseable ``constraint``.
    ``dev``/``module`` must be booleans and ``prompt`` a string; a null value
    counts as absent, and an empty prompt falls back to the default question.
    Never raises.
    """
    if not isinstance(declaration, Mapping):
        return False
    if not _is_package_name(declaration.get("name")):
        return False
    constraint = declaration.get("constraint")
    if not isinstance(constraint, str) or not constraint.strip():
        return False
    if not is_parseable(constraint):
        return False
    for key in BOOLEAN_FIELDS:
        value = declaration.get(key)
        if value is not None and not isinstance(value, bool):
            return False
    prompt = declaration.get("prompt")
    if prompt is not None and not isinstance(prompt, str):
        return False
    return True
