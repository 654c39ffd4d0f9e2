"""Data models for version constraints."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import semantic_version
from packaging.version import InvalidVersion, Version as Pep440Version


class ConstraintKind(Enum):
    """How a constraint was understood by the parser."""
    SEMVER = "semver"
    PEP440 = "pep440"
    BRANCH = "branch"
    ANY = "any"
    UNION = "union"


_INSTALLED_VERSION = re.compile(r"^[vV]?(\d+(?:\.\d+)*)(.*)$")


def coerce_semver(text: str) -> Optional[semantic_version.Version]:
    """Coerce an installed version string (``v1.2``, ``1.2.3.0``) to semver.

    Build metadata is dropped; returns None for branch names and garbage.
    """
    match = _INSTALLED_VERSION.match(text.strip())
    if not match:
        return None
    numbers = match.group(1).split(".")[:3]
    try:
        version = semantic_version.Version.coerce(".".join(numbers) + match.group(2))
    except ValueError:
        return None
    return version.truncate("prerelease")


@dataclass(frozen=True)
class ConstraintSpec:
    """Parsed version constraint.

    ``raw`` is the declaration text as written; ``normalized`` is what was fed
    to the backing library (``spec``), or the branch name for BRANCH. A UNION
    keeps its parsed alternatives in ``spec``.
    """
    raw: str
    kind: ConstraintKind
    normalized: str
    spec: Any = None

    def allows(self, version: str) -> bool:
        """Return True when an installed ``version`` satisfies this constraint."""
        if not version:
            return False
        if self.kind == ConstraintKind.ANY:
            return True
        if self.kind == ConstraintKind.UNION:
            return any(part.allows(version) for part in self.spec)
        if self.kind == ConstraintKind.BRANCH:
            return version.strip().lower() == self.normalized.lower()
        if self.kind == ConstraintKind.SEMVER:
            candidate = coerce_semver(version)
            return candidate is not None and self.spec.match(candidate)
        try:
            return self.spec.contains(Pep440Version(version), prereleases=True)
        except InvalidVersion:
            return False
