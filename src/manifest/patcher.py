"""Merge selected optional packages into a manifest document."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Iterable, List

from common.collection import Collection
from constants import Constants, RequirementSections

logger = logging.getLogger(__name__)

EXTRA_KEY = "extra"


class ManifestPatcher:
    """Pure transformations over a decoded manifest (a JSON object).

    Nothing here touches the filesystem; inputs are never mutated.
    """

    def __init__(self, tool_key: str = Constants.TOOL_KEY):
        self.tool_key = tool_key

    def declarations(self, manifest: Dict[str, Any]) -> List[Any]:
        """Return the raw ``extra.<tool-key>`` list, or [] if absent or not a list."""
        extra = manifest.get(EXTRA_KEY)
        if not isinstance(extra, dict):
            return []
        entries = extra.get(self.tool_key)
        return list(entries) if isinstance(entries, list) else []

    def patch(self, manifest: Dict[str, Any], packages: Iterable) -> Dict[str, Any]:
        """Add ``packages`` to require/require-dev and strip the declarations.

        A name that is already required is overwritten in place. The
        ``extra.<tool-key>`` node is removed even when ``packages`` is empty,
        and ``extra`` itself is dropped once nothing else remains in it.
        """
        document = Collection.create(packages).reduce(_add_requirement, copy.deepcopy(manifest))

        extra = document.get(EXTRA_KEY)
        if isinstance(extra, dict) and self.tool_key in extra:
            del extra[self.tool_key]
            if not extra:
                del document[EXTRA_KEY]
        return document

    def requirements(self, manifest: Dict[str, Any], packages: Iterable) -> Dict[str, Dict[str, str]]:
        """Return the updated ``require``/``require-dev`` requirement set."""
        patched = Collection.create(packages).reduce(_add_requirement, {
            section.value: dict(manifest.get(section.value) or {})
            for section in RequirementSections
        })
        return {section.value: patched.get(section.value, {}) for section in RequirementSections}


def _add_requirement(document: Dict[str, Any], package) -> Dict[str, Any]:
    key = package.requirement_section
    section = document.get(key)
    if not isinstance(section, dict):
        section = {}
        document[key] = section
    previous = section.get(package.name)
    if previous is not None and previous != package.constraint:
        logger.debug("Replacing %s constraint %s for %s with %s",
                     key, previous, package.name, package.constraint)
    section[package.name] = package.constraint
    return document
