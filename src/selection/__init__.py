"""Optional package validation, prompting and selection."""

from .engine import SelectionEngine
from .errors import (
    ConfigError,
    DepselectError,
    ExhaustedInputError,
    InstallError,
    InvalidSpecError,
    ManifestError,
)
from .models import InstalledPackage, OptionalPackage, Selection, SelectionState
from .prompts import ConsolePort, InteractionPort, NonInteractivePort, ScriptedPort, ask_yes_no
from .validator import is_valid_spec

__all__ = [
    "SelectionEngine",
    "ConfigError",
    "DepselectError",
    "ExhaustedInputError",
    "InstallError",
    "InvalidSpecError",
    "ManifestError",
    "InstalledPackage",
    "OptionalPackage",
    "Selection",
    "SelectionState",
    "ConsolePort",
    "InteractionPort",
    "NonInteractivePort",
    "ScriptedPort",
    "ask_yes_no",
    "is_valid_spec",
]
