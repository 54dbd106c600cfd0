"""React Setup pipeline orchestrator.

Runs the setup steps strictly in order:

Step 1: PROMPT     -- Ask for the project name and optional libraries.
Step 2: SCAFFOLD   -- Run ``create-vite`` with the React template.
Step 3: INSTALL    -- Install the lint plugin and the chosen libraries.
Step 4: CONFIGURE  -- Rewrite configs, ``App.jsx`` and ``index.css``.
Step 5: EDITOR     -- Open the project in the editor (best effort).

The first failure stops the run.  :meth:`SetupPipeline.run` reports it through
the returned :class:`SetupResult`; only :func:`main` turns it into an exit
code.

Usage::

    react-setup
    react-setup my-app --yes react-router-dom --yes axios --no-editor
    python -m react_setup my-app --answers answers.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, TypeVar

from jinja2 import TemplateError
from pydantic import BaseModel, Field, ValidationError
from rich.logging import RichHandler

from react_setup.config import Config
from react_setup.prompts import (
    AnswerProvider,
    ConsoleAnswerProvider,
    ScriptedAnswerProvider,
    UserSelection,
    collect_selection,
)
from react_setup.scaffolder.generator import ScaffoldError, ScaffoldGenerator, scaffold_command
from react_setup.scaffolder.rewriter import FileRewriter
from react_setup.scaffolder.runner import CommandFailed, CommandRunner
from react_setup.utils import (
    STEP_NAMES,
    err_console,
    format_duration,
    print_banner,
    print_command_failure,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Exceptions & results
# ---------------------------------------------------------------------------


class SetupError(Exception):
    """Raised when a setup step fails irrecoverably."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


class SetupResult(BaseModel):
    """Outcome of one run."""

    success: bool = Field(default=False)
    project_root: Optional[Path] = Field(default=None)
    selection: Optional[UserSelection] = Field(default=None)
    failed_step: Optional[str] = Field(default=None, description="Name of the step that failed")
    error: str = Field(default="")
    commands: list[str] = Field(default_factory=list, description="Commands issued, in order")
    files_written: list[Path] = Field(default_factory=list)
    editor_opened: bool = Field(default=False)
    duration_seconds: float = Field(default=0.0, ge=0.0)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class SetupPipeline:
    """Drives the prompt, scaffold, install and rewrite steps.

    Attributes:
        config: Run configuration.
        answers: Source of prompt answers.
        runner: Executes external commands; shared by every step.
        parent_dir: Directory in which the project folder is created.
    """

    def __init__(
        self,
        config: Config,
        answers: AnswerProvider | None = None,
        runner: CommandRunner | None = None,
        parent_dir: str | Path = ".",
    ) -> None:
        self.config = config
        self.answers = answers or ConsoleAnswerProvider()
        self.runner = runner or CommandRunner()
        self.parent_dir = Path(parent_dir)
        self.generator = ScaffoldGenerator(config, runner=self.runner)
        self.rewriter = FileRewriter(config, runner=self.runner)

    def run(self, project_name: str | None = None) -> SetupResult:
        """Execute every step and return the outcome.

        Args:
            project_name: Use this name instead of prompting for one.
        """
        started = time.monotonic()
        result = SetupResult()
        try:
            self._run_steps(result, project_name)
            result.success = True
        except SetupError as exc:
            result.failed_step = STEP_NAMES.get(exc.step, str(exc.step))
            result.error = str(exc)
            print_error(str(exc))
        result.duration_seconds = time.monotonic() - started

        if result.success:
            print_summary_table(
                {
                    "Project": result.selection.project_name,
                    "Location": str(result.project_root),
                    "Libraries": ", ".join(result.selection.libraries) or "(none)",
                    "Duration": format_duration(result.duration_seconds),
                },
                title="React Setup",
            )
        return result

    def _run_steps(self, result: SetupResult, project_name: str | None) -> None:
        print_banner()

        # Step 1
        selection = self._step(1, lambda: self._collect(project_name))
        result.selection = selection

        # Step 2
        print_step_header(2, STEP_NAMES[2])
        project_root = self._step(2, lambda: self._scaffold(selection, result))
        result.project_root = project_root

        # Step 3
        print_step_header(3, STEP_NAMES[3])
        result.commands.extend(self._step(3, lambda: self.generator.install(selection, project_root)))

        # Step 4
        print_step_header(4, STEP_NAMES[4])
        result.files_written = self._step(4, lambda: self.rewriter.rewrite(selection, project_root))
        print_success("\nAll set! Your React project has been configured.\n")

        # Step 5
        if self.config.open_editor:
            print_step_header(5, STEP_NAMES[5])
            result.commands.append(self.config.editor_command)
            result.editor_opened = self.rewriter.open_editor(project_root)

    def _collect(self, project_name: str | None) -> UserSelection:
        selection = collect_selection(self.config.catalog, self.answers, project_name)
        selection.check_catalog(self.config.catalog)
        logger.debug("Selected libraries: %s", selection.libraries or "none")
        return selection

    def _scaffold(self, selection: UserSelection, result: SetupResult) -> Path:
        result.commands.append(scaffold_command(self.config, selection.project_name))
        return self.generator.create(selection, self.parent_dir)

    def _step(self, step: int, action: Callable[[], T]) -> T:
        """Run *action*, converting known failures into :class:`SetupError`."""
        try:
            return action()
        except CommandFailed as exc:
            print_command_failure(exc)
            raise SetupError(step, f"{exc.command}: {exc}") from exc
        except (ValueError, KeyError, ScaffoldError, TemplateError, OSError) as exc:
            raise SetupError(step, str(exc)) from exc


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _read_answers(path: Path) -> ScriptedAnswerProvider:
    """Load one answer per line from *path*.

    Raises:
        OSError: If the file is missing or unreadable.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Answers file not found: {path}")
    return ScriptedAnswerProvider(path.read_text(encoding="utf-8").splitlines())


def _build_answers(args: argparse.Namespace, config: Config, parser: argparse.ArgumentParser) -> AnswerProvider:
    if args.answers and args.yes:
        parser.error("--answers cannot be combined with --yes")

    if args.answers:
        return _read_answers(Path(args.answers))

    if args.yes:
        if not args.name:
            parser.error("--yes requires NAME")
        unknown = [pkg for pkg in args.yes if pkg not in config.catalog_packages]
        if unknown:
            parser.error(f"unknown library: {', '.join(unknown)}")
        prompts = {option.package: option.prompt for option in config.catalog}
        return ScriptedAnswerProvider({prompts[pkg]: "y" for pkg in args.yes})

    return ConsoleAnswerProvider()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="react-setup",
        description="Bootstrap a React + Vite project with an opinionated layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  react-setup\n"
            "  react-setup my-app --yes react-router-dom --yes axios\n"
            "  react-setup my-app --answers answers.txt --no-editor\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Project name (prompted for if omitted)")
    parser.add_argument(
        "--directory", "-C",
        default=".",
        help="Directory in which to create the project (default: .)",
    )
    parser.add_argument(
        "--yes",
        action="append",
        default=[],
        metavar="LIBRARY",
        help="Select LIBRARY without prompting; all others are skipped (repeatable)",
    )
    parser.add_argument(
        "--answers",
        default=None,
        help=(
            "File with one prompt answer per line; when NAME is given the "
            "first line answers the first library prompt"
        ),
    )
    parser.add_argument("--no-editor", action="store_true", help="Do not open the editor")
    parser.add_argument("--config", default=None, help="Load configuration from a JSON file")
    parser.add_argument(
        "--save-config",
        default=None,
        help="Write the effective configuration to a JSON file",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``react-setup`` and ``python -m react_setup``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
    except (OSError, ValidationError) as exc:
        print_error(f"Error: Invalid configuration: {exc}")
        return 1
    if args.no_editor:
        config.open_editor = False
    if args.save_config:
        config.save(Path(args.save_config))

    try:
        answers = _build_answers(args, config, parser)
    except OSError as exc:
        print_error(f"Error: {exc}")
        return 1
    pipeline = SetupPipeline(config, answers=answers, parent_dir=args.directory)

    try:
        result = pipeline.run(project_name=args.name)
    except (KeyboardInterrupt, EOFError):
        print_error("\nAborted.")
        return 130

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
