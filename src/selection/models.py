"""Data models for optional package selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from constants import Constants, RequirementSections

from .errors import InvalidSpecError
from .validator import is_valid_spec


@dataclass(frozen=True)
class OptionalPackage:
    """A validated optional package declaration."""
    name: str
    constraint: str
    dev: bool = False
    module: bool = False
    explicit_prompt: Optional[str] = None

    def __post_init__(self):
        declaration = {"name": self.name, "constraint": self.constraint,
                       "dev": self.dev, "module": self.module}
        if self.explicit_prompt is not None:
            declaration["prompt"] = self.explicit_prompt
        if not is_valid_spec(declaration):
            raise InvalidSpecError(declaration)

    @classmethod
    def from_spec(cls, declaration: Mapping[str, Any]) -> "OptionalPackage":
        """Build a package from a raw declaration.

        Raises:
            InvalidSpecError: If the declaration fails validation.
        """
        if not is_valid_spec(declaration):
            raise InvalidSpecError(declaration)
        return cls(
            name=declaration["name"],
            constraint=declaration["constraint"],
            dev=declaration.get("dev") or False,
            module=declaration.get("module") or False,
            explicit_prompt=declaration.get("prompt") or None,
        )

    @property
    def prompt(self) -> str:
        if self.explicit_prompt and self.explicit_prompt.strip():
            return self.explicit_prompt
        return Constants.PROMPT_TEMPLATE.format(name=self.name, constraint=self.constraint)

    @property
    def requirement_section(self) -> str:
        """Manifest section the package is added to."""
        if self.dev:
            return RequirementSections.REQUIRE_DEV.value
        return RequirementSections.REQUIRE.value

    @property
    def link_description(self) -> str:
        return "requires for development" if self.dev else "requires"


class SelectionState(Enum):
    """Terminal states of a selection run."""
    EMPTY = "empty"  # nothing valid was declared; no prompts, no manifest write
    MINIMAL = "minimal"
    NONE_SELECTED = "none_selected"
    SELECTED = "selected"


@dataclass(frozen=True)
class Selection:
    """Outcome of the prompt loop, packages in declaration order."""
    state: SelectionState
    packages: Tuple[OptionalPackage, ...] = ()

    @property
    def runtime(self) -> Tuple[OptionalPackage, ...]:
        return tuple(p for p in self.packages if not p.dev)

    @property
    def development(self) -> Tuple[OptionalPackage, ...]:
        return tuple(p for p in self.packages if p.dev)

    @property
    def names(self) -> list:
        return [p.name for p in self.packages]

    @property
    def strips_metadata(self) -> bool:
        """True when the declarations must be removed from the manifest."""
        return self.state != SelectionState.EMPTY

    def is_empty(self) -> bool:
        return not self.packages


@dataclass(frozen=True)
class InstalledPackage:
    """Descriptor handed to the configuration wiring tool."""
    name: str
    version: str
    install_path: str
