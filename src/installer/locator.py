"""Lookup of installed packages in the vendor directory."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from constants import Constants
from selection.models import InstalledPackage
from versioning.parser import parse_constraint

logger = logging.getLogger(__name__)


class InstalledPackageLocator:
    """Reads ``<vendor>/composer/installed.json``.

    Both the Composer 1 layout (a bare list) and the Composer 2 layout
    (``{"packages": [...]}`` with ``install-path``) are understood.
    """

    def __init__(self, vendor_dir: str):
        self.vendor_dir = vendor_dir

    @property
    def installed_json(self) -> str:
        return os.path.join(self.vendor_dir, Constants.INSTALLED_JSON)

    def _load(self) -> List[Dict[str, Any]]:
        try:
            with open(self.installed_json, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.debug("No installed packages file at %s", self.installed_json)
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self.installed_json, e)
            return []
        if isinstance(data, dict):
            data = data.get("packages", [])
        return [p for p in data if isinstance(p, dict)] if isinstance(data, list) else []

    def _install_path(self, entry: Dict[str, Any]) -> str:
        relative = entry.get("install-path")
        if isinstance(relative, str) and relative:
            base = os.path.dirname(self.installed_json)
            return os.path.normpath(os.path.join(base, relative))
        return os.path.join(self.vendor_dir, *entry["name"].split("/"))

    def find(self, name: str, constraint: str) -> Optional[InstalledPackage]:
        """Return the installed package matching ``name`` and ``constraint``."""
        try:
            spec = parse_constraint(constraint)
        except ValueError:
            logger.debug("Cannot look up %s: unsupported constraint %s", name, constraint)
            return None

        wanted = name.lower()
        for entry in self._load():
            if str(entry.get("name", "")).lower() != wanted:
                continue
            versions = [v for v in (entry.get("version"), entry.get("version_normalized"))
                        if isinstance(v, str)]
            if any(spec.allows(v) for v in versions):
                return InstalledPackage(
                    name=entry["name"],
                    version=versions[0],
                    install_path=self._install_path(entry),
                )
            logger.debug("Installed %s %s does not satisfy %s", name, versions, constraint)
        return None
