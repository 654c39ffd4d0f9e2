"""Prompt for and install optional packages declared in the project manifest."""

from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from installer.command import Installer
from installer.locator import InstalledPackageLocator
from installer.notifier import DownstreamNotifier
from installer.wiring import ConfigWirer
from manifest.file import ManifestFile
from manifest.patcher import ManifestPatcher
from selection.engine import SelectionEngine
from selection.models import Selection, SelectionState
from selection.prompts import InteractionPort

logger = logging.getLogger(__name__)


class OptionalPackagesInstaller:
    """Runs one selection/installation pass over a manifest.

    The manifest is written last: a failed install propagates
    :class:`~selection.errors.InstallError` and leaves it untouched.
    """

    def __init__(
        self,
        manifest_file: ManifestFile,
        port: InteractionPort,
        installer: Installer,
        wirer: ConfigWirer,
        locator: InstalledPackageLocator,
        tool_key: str = Constants.TOOL_KEY,
        patcher: Optional[ManifestPatcher] = None,
        dry_run: bool = False,
    ):
        self.manifest_file = manifest_file
        self.port = port
        self.installer = installer
        self.wirer = wirer
        self.locator = locator
        self.patcher = patcher or ManifestPatcher(tool_key)
        self.dry_run = dry_run

    def run(self) -> Selection:
        manifest = self.manifest_file.read()
        selection = SelectionEngine(self.port).select(self.patcher.declarations(manifest))

        if selection.state == SelectionState.EMPTY:
            logger.debug("No optional packages declared under extra.%s", self.patcher.tool_key)
            return selection

        if selection.state in (SelectionState.MINIMAL, SelectionState.NONE_SELECTED):
            self.port.write(f"    Removing optional packages from {self.manifest_file.name}")
            self._write(self.patcher.patch(manifest, ()))
            return selection

        self.port.write("Updating root package")
        for package in selection.packages:
            logger.info("%s %s %s (%s)", Constants.ROOT_PACKAGE, package.link_description,
                        package.name, package.constraint)
        requirements = self.patcher.requirements(manifest, selection.packages)

        if self.dry_run:
            self.port.write(f"    Dry run: would install {', '.join(selection.names)}")
            return selection

        self.port.write("    Running an update to install optional packages")
        notifier = DownstreamNotifier(self.installer, self.wirer, self.locator, requirements)
        notifier.notify(selection)

        self.port.write(f"    Updating {self.manifest_file.name}")
        self._write(self.patcher.patch(manifest, selection.packages))
        return selection

    def _write(self, document) -> None:
        if self.dry_run:
            logger.info("Dry run: %s left unchanged", self.manifest_file.name)
            return
        self.manifest_file.write(document)
