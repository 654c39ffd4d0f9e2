"""Installer collaborator that drives the host package manager's CLI.

The updated requirement set is written to a temporary copy of the manifest
and the package manager is pointed at it through the ``COMPOSER`` environment
variable, so the real manifest is only touched once the whole run succeeded.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from manifest.file import ManifestFile

logger = logging.getLogger(__name__)

UPDATE_ARGS = ["update", "--no-plugins", "--no-interaction"]


class Installer(Protocol):
    """Fetches and locks the whitelisted packages; returns an exit status."""

    def install(self, requirements: Dict[str, Dict[str, str]], whitelist: Sequence[str]) -> int:
        ...


@dataclass
class Invocation:
    """Everything needed to run the package manager once."""

    args: List[str] = field(default_factory=list)
    env_vars: Dict[str, str] = field(default_factory=dict)
    temp_files: List[str] = field(default_factory=list)
    lock_file: str = ""
    temp_lock_file: str = ""


class CommandInstaller:
    """Runs ``<command> update --no-plugins --no-interaction <packages...>``.

    Args:
        command: Package manager executable, possibly with leading arguments.
        manifest_file: The project manifest; read but never written here.
        lock_name: Lock file name next to the manifest.
    """

    def __init__(self, command: str, manifest_file: ManifestFile,
                 lock_name: str = Constants.LOCK_FILE):
        self.command = command
        self.manifest_file = manifest_file
        self.lock_name = lock_name

    def prepare(self, requirements: Dict[str, Dict[str, str]], whitelist: Sequence[str]) -> Invocation:
        """Write the temporary manifest/lock pair and build the command line."""
        directory = self.manifest_file.directory
        document = self.manifest_file.read()
        for section, entries in requirements.items():
            document[section] = dict(entries)

        fd, manifest_path = tempfile.mkstemp(prefix="depselect-", suffix=".json", dir=directory)

        invocation = Invocation(
            args=shlex.split(self.command) + UPDATE_ARGS + list(whitelist),
            env_vars={Constants.ENV_MANIFEST: manifest_path},
            temp_files=[manifest_path],
            lock_file=os.path.join(directory, self.lock_name),
            temp_lock_file=manifest_path[: -len(".json")] + ".lock",
        )
        # The package manager derives the lock name from COMPOSER; seed it so
        # the update stays restricted to the whitelist.
        invocation.temp_files.append(invocation.temp_lock_file)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(self.manifest_file.dumps(document))
            if os.path.isfile(invocation.lock_file):
                shutil.copyfile(invocation.lock_file, invocation.temp_lock_file)
        except Exception:
            _remove_temp_files(invocation.temp_files)
            raise
        return invocation

    def install(self, requirements: Dict[str, Dict[str, str]], whitelist: Sequence[str]) -> int:
        try:
            invocation = self.prepare(requirements, whitelist)
        except OSError as e:
            logger.error("Could not prepare installer files: %s", e)
            return Constants.PREPARE_FAILED
        env = os.environ.copy()
        env.update(invocation.env_vars)

        logger.info("Running: %s", " ".join(invocation.args))
        try:
            with Timer() as t:
                try:
                    result = subprocess.run(  # noqa: S603
                        invocation.args,
                        cwd=self.manifest_file.directory,
                        env=env,
                        check=False,
                    )
                except FileNotFoundError:
                    logger.error("Installer command not found: %s", invocation.args[0])
                    return Constants.COMMAND_NOT_FOUND
            if is_debug_enabled(logger):
                logger.debug(
                    "Installer finished",
                    extra=extra_context(
                        event="installer_done",
                        component="command_installer",
                        status=result.returncode,
                        duration_ms=t.duration_ms(),
                        packages=list(whitelist),
                    ),
                )
            if result.returncode == 0 and os.path.isfile(invocation.temp_lock_file):
                shutil.copyfile(invocation.temp_lock_file, invocation.lock_file)
            return result.returncode
        finally:
            _remove_temp_files(invocation.temp_files)


def _remove_temp_files(paths: Sequence[str]) -> None:
    for temp_file in paths:
        try:
            os.unlink(temp_file)
        except FileNotFoundError:
            pass
        except OSError:
            logger.debug("Failed to remove temp file: %s", temp_file)
