"""Prompt channels used to ask the user about optional packages.

Every channel implements :class:`InteractionPort`. The engine never reads
answers directly; it goes through :func:`ask_yes_no`, which normalises the
answer and re-asks until it gets ``y`` or ``n``.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from typing import Iterable, List, Optional, Protocol, TextIO

from constants import Constants

from .errors import ExhaustedInputError

logger = logging.getLogger(__name__)


class InteractionPort(Protocol):
    """A blocking question/answer channel plus an output stream for notices."""

    def ask(self, prompt: str, default: str) -> str:
        ...

    def write(self, message: str) -> None:
        ...


class ConsolePort:
    """Terminal channel; an empty line answers with the default."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def ask(self, prompt: str, default: str) -> str:
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise ExhaustedInputError(prompt)
        answer = line.strip()
        return answer if answer else default

    def write(self, message: str) -> None:
        self._stdout.write(message + "\n")
        self._stdout.flush()


class NonInteractivePort:
    """Answers every question with its default, like ``--no-interaction``."""

    def __init__(self, stdout: Optional[TextIO] = None):
        self._stdout = stdout or sys.stdout

    def ask(self, prompt: str, default: str) -> str:
        logger.debug("Non-interactive mode, answering %r to: %s", default, prompt.strip())
        return default

    def write(self, message: str) -> None:
        self._stdout.write(message + "\n")


class ScriptedPort:
    """Finite answer queue for tests and ``--answers``.

    A ``None`` entry answers with the question's default. Prompts and written
    messages are recorded in order, and echoed to ``stdout`` when one is given.
    """

    def __init__(self, answers: Iterable[Optional[str]], stdout: Optional[TextIO] = None):
        self._answers = deque(answers)
        self._stdout = stdout
        self.prompts: List[str] = []
        self.messages: List[str] = []

    def ask(self, prompt: str, default: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise ExhaustedInputError(prompt)
        answer = self._answers.popleft()
        answer = default if answer is None else answer
        if self._stdout is not None:
            self._stdout.write(f"{prompt}{answer}\n")
        return answer

    def write(self, message: str) -> None:
        self.messages.append(message)
        if self._stdout is not None:
            self._stdout.write(message + "\n")

    @property
    def remaining(self) -> int:
        return len(self._answers)


def format_question(question: str, hint: str) -> str:
    return f"\n    {question} {hint}\n"


def ask_yes_no(port: InteractionPort, question: str, default: str) -> bool:
    """Ask until the answer is ``y`` or ``n`` (case-insensitive).

    The hint shown next to the question capitalises the default. An empty
    answer counts as the default. Anything else writes an invalid-answer
    notice and asks again.
    """
    hint = "Y/n" if default.lower() == "y" else "y/N"
    prompt = format_question(question, hint)
    while True:
        answer = (port.ask(prompt, default) or default).strip().lower()
        if answer == "n":
            return False
        if answer == "y":
            return True
        port.write(Constants.INVALID_ANSWER)
