"""Exceptions raised while selecting and installing optional packages."""

from __future__ import annotations

from typing import Any, Optional


class DepselectError(Exception):
    """Base class for all depselect errors."""


class InvalidSpecError(DepselectError):
    """An optional package declaration is malformed."""

    def __init__(self, declaration: Any, message: Optional[str] = None):
        self.declaration = declaration
        super().__init__(message or f"Invalid optional package declaration: {declaration!r}")


class ExhaustedInputError(DepselectError):
    """The answer source ran out before a valid answer was given."""

    def __init__(self, prompt: Optional[str] = None):
        self.prompt = prompt
        message = "No more answers available"
        if prompt:
            message = f"{message} for prompt: {prompt.strip()}"
        super().__init__(message)


class InstallError(DepselectError):
    """The downstream installer reported a non-zero status."""

    def __init__(self, status: int, packages: Optional[list] = None):
        self.status = status
        self.packages = list(packages or [])
        super().__init__(f"Installer exited with status {status}")


class ManifestError(DepselectError):
    """The project manifest could not be read or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigError(DepselectError):
    """The depselect configuration file could not be loaded."""
