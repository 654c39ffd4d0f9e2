"""Downstream collaborators: package installation and configuration wiring."""

from .command import CommandInstaller, Installer, Invocation
from .locator import InstalledPackageLocator
from .notifier import DownstreamNotifier
from .wiring import CommandConfigWirer, ConfigWirer, NullConfigWirer

__all__ = [
    "CommandInstaller",
    "Installer",
    "Invocation",
    "InstalledPackageLocator",
    "DownstreamNotifier",
    "CommandConfigWirer",
    "ConfigWirer",
    "NullConfigWirer",
]
