"""Reading and atomically writing the project manifest (composer.json)."""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from typing import Any, Dict

from constants import Constants
from selection.errors import ManifestError

logger = logging.getLogger(__name__)

_INDENT = re.compile(r"^\{\s*\n([ \t]+)\S", re.MULTILINE)


def detect_indent(content: str, default: int = Constants.JSON_INDENT):
    """Return the indentation used by a pretty-printed JSON object."""
    match = _INDENT.match(content)
    if not match:
        return default
    indent = match.group(1)
    if "\t" in indent:
        return "\t"
    return len(indent)


class ManifestFile:
    """A JSON manifest on disk.

    Key order is preserved on read and write; writes go through a temporary
    file in the same directory followed by ``os.replace``.
    """

    def __init__(self, path: str):
        self.path = path
        self._indent = Constants.JSON_INDENT

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        return os.path.dirname(os.path.abspath(self.path))

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def read(self) -> Dict[str, Any]:
        """Decode the manifest.

        Raises:
            ManifestError: If the file is missing, unreadable or not a JSON object.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                content = fh.read()
        except FileNotFoundError as e:
            raise ManifestError(self.path, "file not found") from e
        except OSError as e:
            raise ManifestError(self.path, f"cannot read file: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ManifestError(self.path, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ManifestError(self.path, "top-level value is not an object")

        self._indent = detect_indent(content)
        return data

    def dumps(self, document: Dict[str, Any]) -> str:
        return json.dumps(document, indent=self._indent, ensure_ascii=False) + "\n"

    def write(self, document: Dict[str, Any]) -> None:
        """Replace the manifest with ``document`` in one step.

        Raises:
            ManifestError: If the temporary file cannot be written or moved.
        """
        content = self.dumps(document)
        fd, tmp_path = tempfile.mkstemp(prefix=".depselect-", suffix=".json", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ManifestError(self.path, f"cannot write file: {e}") from e
        logger.debug("Wrote %s (%d bytes)", self.path, len(content))
