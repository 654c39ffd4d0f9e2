"""Interactive selection of optional packages."""

from __future__ import annotations

import logging
from typing import Any

from common.collection import Collection
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .models import OptionalPackage, Selection, SelectionState
from .prompts import InteractionPort, ask_yes_no
from .validator import is_valid_spec

logger = logging.getLogger(__name__)


class SelectionEngine:
    """Decides between a minimal and a custom install and runs the prompts.

    States: start -> minimal prompt -> (done | per-package prompts) -> done.
    Packages are prompted in declaration order.
    """

    def __init__(self, port: InteractionPort):
        self.port = port

    def select(self, declarations: Any) -> Selection:
        """Run the prompt loop over raw ``declarations``.

        Invalid declarations are dropped silently before anything is asked.

        Returns:
            Selection: the terminal state and the chosen packages.
        """
        if not isinstance(declarations, list):
            declarations = []
        valid = Collection.create(declarations).filter(is_valid_spec)
        skipped = len(declarations) - len(valid)
        if skipped:
            logger.debug("Ignoring %d invalid optional package declaration(s)", skipped)

        if valid.is_empty():
            return Selection(SelectionState.EMPTY)

        if self._request_minimal_install():
            return Selection(SelectionState.MINIMAL)

        selected = valid.map(OptionalPackage.from_spec).filter(self._prompt_for_package)

        if selected.is_empty():
            self.port.write(Constants.NONE_SELECTED)
            return Selection(SelectionState.NONE_SELECTED)

        if is_debug_enabled(logger):
            logger.debug(
                "Optional packages selected",
                extra=extra_context(
                    event="selection_done",
                    component="selection_engine",
                    count=len(selected),
                    packages=[p.name for p in selected],
                ),
            )
        return Selection(SelectionState.SELECTED, tuple(selected))

    def _request_minimal_install(self) -> bool:
        return ask_yes_no(self.port, Constants.MINIMAL_QUESTION, "y")

    def _prompt_for_package(self, package: OptionalPackage) -> bool:
        if not ask_yes_no(self.port, package.prompt, "n"):
            return False

        self.port.write(Constants.WILL_INSTALL.format(
            name=package.name, constraint=package.constraint))
        if package.module:
            self.port.write(Constants.PACKAGE_CONFIG_PROMPTS[package.requirement_section])
        return True
