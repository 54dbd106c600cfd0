"""Interactive prompt collection.

Asks for the project name and one yes/no answer per catalog entry.  Answers
come from an injected :class:`AnswerProvider` so runs can be scripted without
a real terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from react_setup.config import QUERY_PACKAGE, ROUTER_PACKAGE, LibraryOption
from react_setup.utils import console as default_console

logger = logging.getLogger(__name__)

PROJECT_NAME_PROMPT = "Enter the name of your project: "


class InvalidProjectName(ValueError):
    """Raised when a project name cannot be used as a directory name."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class UserSelection(BaseModel):
    """Answers collected for a single run."""

    project_name: str = Field(..., description="Directory and package name of the new project")
    libraries: list[str] = Field(
        default_factory=list, description="Chosen npm packages, in catalog order"
    )

    @property
    def wants_router(self) -> bool:
        return ROUTER_PACKAGE in self.libraries

    @property
    def wants_query(self) -> bool:
        return QUERY_PACKAGE in self.libraries

    def check_catalog(self, catalog: Iterable[LibraryOption]) -> None:
        """Raise ``ValueError`` if a chosen library is not in *catalog*."""
        known = {option.package for option in catalog}
        unknown = [lib for lib in self.libraries if lib not in known]
        if unknown:
            raise ValueError(f"Unknown libraries: {', '.join(unknown)}")


# ---------------------------------------------------------------------------
# Answer providers
# ---------------------------------------------------------------------------


class AnswerProvider(Protocol):
    def ask(self, prompt: str) -> str: ...


class ConsoleAnswerProvider:
    """Reads answers line by line from the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def ask(self, prompt: str) -> str:
        style = "yellow" if prompt == PROJECT_NAME_PROMPT else "cyan"
        return self.console.input(f"[{style}]{escape(prompt)}[/{style}]")


class ScriptedAnswerProvider:
    """Answers prompts from a prepared script.

    *answers* is either a sequence consumed in order or a mapping from prompt
    text to answer.  Missing answers are returned as ``""``, which counts as
    "no" for library prompts.
    """

    def __init__(self, answers: Sequence[str] | Mapping[str, str]) -> None:
        self._mapping = dict(answers) if isinstance(answers, Mapping) else None
        self._queue = list(answers) if self._mapping is None else []
        self.asked: list[str] = []

    def ask(self, prompt: str) -> str:
        self.asked.append(prompt)
        if self._mapping is not None:
            return self._mapping.get(prompt, "")
        if self._queue:
            return self._queue.pop(0)
        return ""


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


def validate_project_name(name: str) -> str:
    """Return the trimmed *name* or raise :class:`InvalidProjectName`.

    The name becomes both a directory under the current location and an
    argument to ``create-vite``, so it must be a single, non-option path
    component.
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidProjectName("Project name must not be empty")
    if cleaned in {".", ".."}:
        raise InvalidProjectName(f"Project name cannot be '{cleaned}'")
    if "/" in cleaned or "\\" in cleaned:
        raise InvalidProjectName(f"Project name must not contain path separators: {cleaned!r}")
    if cleaned.startswith("-"):
        raise InvalidProjectName(f"Project name must not start with '-': {cleaned!r}")
    return cleaned


def is_yes(answer: str) -> bool:
    """Only a literal ``y`` (any case, surrounding spaces ignored) selects."""
    return answer.strip().lower() == "y"


def collect_selection(
    catalog: Sequence[LibraryOption],
    answers: AnswerProvider,
    project_name: str | None = None,
) -> UserSelection:
    """Ask every question once and build a :class:`UserSelection`.

    Args:
        catalog: Library options, asked in this order.
        answers: Source of answers.
        project_name: Skip the name prompt and use this value instead.

    Raises:
        InvalidProjectName: If the name is unusable.
    """
    if project_name is None:
        project_name = answers.ask(PROJECT_NAME_PROMPT)
    name = validate_project_name(project_name)

    chosen: list[str] = []
    for option in catalog:
        if is_yes(answers.ask(option.prompt)):
            chosen.append(option.package)

    logger.debug("Selected libraries for %s: %s", name, chosen)
    return UserSelection(project_name=name, libraries=chosen)
