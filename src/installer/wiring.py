"""Configuration wiring collaborators.

A wirer is told about each freshly installed package so it can register it as
an application module or config source. Failures are reported, never raised.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Optional, Protocol

from selection.models import InstalledPackage

logger = logging.getLogger(__name__)


class ConfigWirer(Protocol):
    def wire(self, package: InstalledPackage) -> None:
        ...


class NullConfigWirer:
    """Used when no wiring command is configured."""

    def wire(self, package: InstalledPackage) -> None:
        logger.info("No wiring command configured; skipping configuration for %s", package.name)


class CommandConfigWirer:
    """Runs a command template once per package.

    ``{name}``, ``{version}`` and ``{path}`` in the template are replaced with
    the installed package's fields. The command runs without a shell.
    """

    def __init__(self, template: str, cwd: Optional[str] = None):
        self.template = template
        self.cwd = cwd

    def command_for(self, package: InstalledPackage) -> list:
        return [
            token.format(name=package.name, version=package.version, path=package.install_path)
            for token in shlex.split(self.template)
        ]

    def wire(self, package: InstalledPackage) -> None:
        cmd = self.command_for(package)
        logger.debug("Wiring %s: %s", package.name, " ".join(cmd))
        try:
            result = subprocess.run(cmd, cwd=self.cwd, check=False)  # noqa: S603
        except OSError as e:
            logger.warning("Failed to run wiring command for %s: %s", package.name, e)
            return
        if result.returncode != 0:
            logger.warning("Wiring command for %s exited with status %d",
                           package.name, result.returncode)
