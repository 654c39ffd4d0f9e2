"""Hands a finished selection to the installer and the configuration wirer."""

from __future__ import annotations

import logging
from typing import Dict

from selection.errors import InstallError
from selection.models import Selection

from .command import Installer
from .locator import InstalledPackageLocator
from .wiring import ConfigWirer

logger = logging.getLogger(__name__)


class DownstreamNotifier:
    """Install the selected packages, then wire each one into the application.

    Args:
        installer: Receives the updated requirement set and the whitelist.
        wirer: Called once per package found in the vendor directory.
        locator: Resolves a selected package to its installed location.
        requirements: Updated ``require``/``require-dev`` mapping.
    """

    def __init__(self, installer: Installer, wirer: ConfigWirer,
                 locator: InstalledPackageLocator, requirements: Dict[str, Dict[str, str]]):
        self.installer = installer
        self.wirer = wirer
        self.locator = locator
        self.requirements = requirements

    def notify(self, selection: Selection) -> None:
        """Run the installer and the wirer for ``selection``.

        Raises:
            InstallError: If the installer returns a non-zero status; the
                wirer is not called in that case.
        """
        whitelist = selection.names
        status = self.installer.install(self.requirements, whitelist)
        if status != 0:
            raise InstallError(status, whitelist)

        logger.info("Updating application configuration...")
        for package in selection.packages:
            installed = self.locator.find(package.name, package.constraint)
            if installed is None:
                logger.debug("%s (%s) not found after install; skipping configuration",
                             package.name, package.constraint)
                continue
            self.wirer.wire(installed)
