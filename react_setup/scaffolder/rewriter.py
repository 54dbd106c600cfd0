"""Rewrites the files generated by ``create-vite`` to the house layout.

Overwrites the ESLint and Vite configs, removes the default stylesheet and
assets, creates the standard ``src/`` subdirectories, writes ``App.jsx`` from
the routing/data-fetching selection table and replaces ``index.css`` with a
reset.  Every step is idempotent.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from react_setup.config import Config
from react_setup.prompts import UserSelection
from react_setup.scaffolder.runner import CommandFailed, CommandRunner
from react_setup.scaffolder.templates import TemplateRenderer
from react_setup.utils import (
    ensure_dir,
    print_command_failure,
    print_info,
    print_success,
    print_warning,
    remove_path,
)

logger = logging.getLogger(__name__)

ESLINT_CONFIG = ".eslintrc.cjs"
VITE_CONFIG = "vite.config.js"
APP_FILE = "App.jsx"
BASE_STYLESHEET = "index.css"
DEFAULT_STYLESHEET = "app.css"
DEFAULT_ASSETS = "assets"

# (routing selected, data-fetching selected) -> App.jsx template
APP_TEMPLATES: dict[tuple[bool, bool], str] = {
    (False, False): "app/App.minimal.jsx.j2",
    (False, True): "app/App.query.jsx.j2",
    (True, False): "app/App.router.jsx.j2",
    (True, True): "app/App.router_query.jsx.j2",
}


def select_app_template(routing: bool, data_fetching: bool) -> str:
    """Return the ``App.jsx`` template for the given pair of choices."""
    return APP_TEMPLATES[(bool(routing), bool(data_fetching))]


class FileRewriter:
    """Applies the fixed layout to a freshly generated project."""

    def __init__(
        self,
        config: Config,
        renderer: TemplateRenderer | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.runner = runner or CommandRunner()

    # -- Public API --------------------------------------------------------

    def rewrite(self, selection: UserSelection, project_root: str | Path) -> list[Path]:
        """Rewrite the project at *project_root* for *selection*.

        Returns:
            The files that were written, in order.
        """
        root = Path(project_root)
        src = root / self.config.source_dir
        context = self._build_context(selection)

        written = [
            self.renderer.render_to_file("eslintrc.cjs.j2", root / ESLINT_CONFIG, context),
            self.renderer.render_to_file("vite.config.js.j2", root / VITE_CONFIG, context),
        ]

        self.remove_defaults(src)
        self.create_directories(src)

        template = select_app_template(selection.wants_router, selection.wants_query)
        written.append(self.renderer.render_to_file(template, src / APP_FILE, context))
        written.append(
            self.renderer.render_to_file("index.css.j2", src / BASE_STYLESHEET, context)
        )

        for path in written:
            logger.debug("Wrote %s", path)
        return written

    def remove_defaults(self, src: Path) -> list[Path]:
        """Delete the default stylesheet and assets directory if present."""
        removed = []
        for path in (src / DEFAULT_STYLESHEET, src / DEFAULT_ASSETS):
            if remove_path(path):
                removed.append(path)
        return removed

    def create_directories(self, src: Path) -> list[Path]:
        """Create the standard subdirectories under *src*."""
        return [ensure_dir(src / name) for name in self.config.source_subdirs]

    def open_editor(self, project_root: str | Path) -> bool:
        """Launch the editor in *project_root*.

        Best effort: a failure is reported as a warning and ``False`` is
        returned instead of aborting the run.
        """
        command = self.config.editor_command
        print_info(f"\nRunning: {command}...")
        try:
            self.runner.run(command, cwd=Path(project_root), capture=True)
        except CommandFailed as exc:
            print_command_failure(exc)
            print_warning("Could not open the editor; open the project manually.")
            return False
        print_success(f"✔ Completed: {command}\n")
        return True

    # -- Context building --------------------------------------------------

    def _build_context(self, selection: UserSelection) -> dict[str, Any]:
        return {
            "project_name": selection.project_name,
            "lint_package": self.config.lint_package,
            "react_version": self.config.react_version,
            "libraries": list(selection.libraries),
        }
