"""Version constraint parsing for optional package declarations."""

from .models import ConstraintKind, ConstraintSpec
from .parser import is_parseable, parse_constraint

__all__ = [
    "ConstraintKind",
    "ConstraintSpec",
    "is_parseable",
    "parse_constraint",
]
