"""Base project creation and dependency installation.

Runs ``create-vite`` in the parent directory, then installs the lint plugin
and any chosen libraries inside the new project.  The project root is
returned and passed explicitly to later steps; the process working directory
is never changed.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from pathlib import Path

from react_setup.config import Config
from react_setup.prompts import UserSelection
from react_setup.scaffolder.runner import CommandRunner
from react_setup.utils import print_info, print_success

logger = logging.getLogger(__name__)


class ScaffoldError(Exception):
    """Raised when the generator did not produce the expected project."""


# ---------------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------------


def scaffold_command(config: Config, project_name: str) -> str:
    """Return the project generator command for *project_name*."""
    return config.scaffold_command.format(
        name=shlex.quote(project_name),
        template=shlex.quote(config.template),
    )


def lint_install_command(config: Config) -> str:
    return f"npm install {shlex.quote(config.lint_package)} --save-dev"


def install_command(libraries: Sequence[str], config: Config) -> str | None:
    """Return the single install command for *libraries*, or ``None``.

    Each package is suffixed with ``@<version_tag>``.  No command is built
    for an empty selection.
    """
    if not libraries:
        return None
    specs = " ".join(shlex.quote(f"{lib}@{config.version_tag}") for lib in libraries)
    flags = " ".join(config.install_flags)
    return f"npm install {specs} {flags}".rstrip()


def companion_install_command(libraries: Sequence[str], config: Config) -> str | None:
    """Return the dev-dependency install for companions of *libraries*, or ``None``.

    Companions are packages that the generated files import next to a
    selected library, such as the React Query devtools.
    """
    companions = [pkg for lib in libraries for pkg in config.companion_packages.get(lib, [])]
    if not companions:
        return None
    specs = " ".join(shlex.quote(f"{pkg}@{config.version_tag}") for pkg in companions)
    flags = " ".join(config.install_flags)
    return f"npm install {specs} --save-dev {flags}".rstrip()


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """Creates the base Vite project and installs its dependencies."""

    def __init__(self, config: Config, runner: CommandRunner | None = None) -> None:
        self.config = config
        self.runner = runner or CommandRunner()

    def _run(self, command: str, cwd: Path) -> None:
        print_info(f"\nRunning: {command}...")
        self.runner.run(command, cwd=cwd)
        print_success(f"✔ Completed: {command}\n")

    def create(self, selection: UserSelection, parent_dir: str | Path) -> Path:
        """Run the generator and return the new project root.

        Raises:
            CommandFailed: If the generator command fails.
            ScaffoldError: If the project directory was not created.
        """
        parent = Path(parent_dir)
        self._run(scaffold_command(self.config, selection.project_name), parent)

        project_root = parent / selection.project_name
        if not project_root.is_dir():
            raise ScaffoldError(
                f"Project directory not found after scaffolding: {project_root}"
            )
        logger.debug("Project root is %s", project_root)
        return project_root

    def install(self, selection: UserSelection, project_root: Path) -> list[str]:
        """Install the lint plugin, the chosen libraries and their companions.

        Returns:
            The install commands that were run, in order.
        """
        commands = [lint_install_command(self.config)]
        extra = install_command(selection.libraries, self.config)
        if extra is not None:
            commands.append(extra)
        else:
            logger.debug("No optional libraries selected; skipping install")
        companions = companion_install_command(selection.libraries, self.config)
        if companions is not None:
            commands.append(companions)

        for command in commands:
            self._run(command, project_root)
        return commands
