"""Manifest access and patching."""

from .file import ManifestFile, detect_indent
from .patcher import ManifestPatcher

__all__ = ["ManifestFile", "ManifestPatcher", "detect_indent"]
