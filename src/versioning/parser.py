"""Constraint parsing utilities for optional package declarations.

Composer-style constraints are rewritten into npm range syntax and handed to
``semantic_version.NpmSpec``; constraints that grammar cannot express fall
back to PEP 440 via ``packaging.specifiers.SpecifierSet``.
"""

import re

import semantic_version
from packaging.specifiers import InvalidSpecifier, SpecifierSet

from .models import ConstraintKind, ConstraintSpec

_STABILITY_FLAG = re.compile(r"@(?:dev|alpha|beta|rc|RC|stable)\b")
_BRANCH = re.compile(r"^(?:dev-\S+|\S+-dev)$")
_SINGLE_PIPE = re.compile(r"(?<!\|)\|(?!\|)")
_OPERATOR_GAP = re.compile(r"(<=|>=|!=|<|>|=|\^|~)\s+")
_COMPOSER_TILDE = re.compile(r"(?<![\w.])~[vV]?(\d+)\.(\d+)(?![\w.])")
_BARE_VERSION = re.compile(r"^[vV]?\d+(?:\.\d+)*(?:[-.]?[A-Za-z]+\d*)?$")
_ALTERNATIVES = re.compile(r"\s*\|\|?\s*")
_INLINE_ALIAS = re.compile(r"\s+as\s+\S+$")


def _strip_stability(raw: str) -> str:
    return _STABILITY_FLAG.sub("", raw).strip()


def _expand_tilde(match) -> str:
    major, minor = int(match.group(1)), int(match.group(2))
    return f">={major}.{minor}.0 <{major + 1}.0.0"


def to_npm_range(raw: str) -> str:
    """Rewrite a Composer constraint into npm range syntax.

    ``|`` becomes ``||``, ``,`` conjunctions become spaces, a two-part tilde
    (``~1.2``) is expanded to ``>=1.2.0 <2.0.0`` and operators are glued to
    their versions.
    """
    expr = _SINGLE_PIPE.sub("||", raw)
    expr = expr.replace(",", " ")
    expr = _OPERATOR_GAP.sub(r"\1", expr)
    expr = _COMPOSER_TILDE.sub(_expand_tilde, expr)
    alternatives = [" ".join(part.split()) for part in expr.split("||")]
    return " || ".join(alternatives)


def _to_pep440(raw: str) -> str:
    if _BARE_VERSION.match(raw):
        return "==" + raw.lstrip("vV")
    return raw


def _strip_alias(text: str) -> str:
    return _INLINE_ALIAS.sub("", text).strip()


def _parse_alternative(raw: str, text: str) -> ConstraintSpec:
    if text == "*":
        return ConstraintSpec(raw=raw, kind=ConstraintKind.ANY, normalized="*")
    if _BRANCH.match(text):
        return ConstraintSpec(raw=raw, kind=ConstraintKind.BRANCH, normalized=text)

    npm_range = to_npm_range(text)
    try:
        return ConstraintSpec(
            raw=raw,
            kind=ConstraintKind.SEMVER,
            normalized=npm_range,
            spec=semantic_version.NpmSpec(npm_range),
        )
    except ValueError:
        pass

    pep440 = _to_pep440(text)
    try:
        return ConstraintSpec(
            raw=raw,
            kind=ConstraintKind.PEP440,
            normalized=pep440,
            spec=SpecifierSet(pep440),
        )
    except InvalidSpecifier as exc:
        raise ValueError(f"Unsupported version constraint: {raw!r}") from exc


def parse_constraint(raw: str) -> ConstraintSpec:
    """Parse a version constraint expression.

    An inline alias (``dev-main as 1.0.x-dev``) is read as its left-hand
    side. Alternatives that one grammar cannot express together, such as
    ``^1.0 || dev-master``, become a UNION of separately parsed parts.

    Raises:
        ValueError: If the constraint is empty or matches no supported grammar.
    """
    if not isinstance(raw, str):
        raise ValueError(f"Constraint must be a string, got {type(raw).__name__}")
    text = _strip_stability(raw)
    if not text:
        raise ValueError("Constraint is empty")

    alternatives = [_strip_alias(part) for part in _ALTERNATIVES.split(text)]
    if not all(alternatives):
        raise ValueError(f"Empty alternative in constraint: {raw!r}")
    if len(alternatives) == 1:
        return _parse_alternative(raw, alternatives[0])

    try:
        return _parse_alternative(raw, " || ".join(alternatives))
    except ValueError:
        parts = tuple(_parse_alternative(part, part) for part in alternatives)
    return ConstraintSpec(
        raw=raw,
        kind=ConstraintKind.UNION,
        normalized=" || ".join(part.normalized for part in parts),
        spec=parts,
    )


def is_parseable(raw) -> bool:
    """Return True when ``raw`` is a constraint ``parse_constraint`` accepts."""
    try:
        parse_constraint(raw)
    except ValueError:
        return False
    return True
