"""Shared terminal and file-system helpers for React Setup.

Provides Rich-based progress reporting (banner, step headers, status lines,
summary tables), duration formatting, and the small idempotent file-system
helpers used by the rewriter.  Rich only emits colour when the target stream
is a terminal, and honours ``NO_COLOR``.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

if TYPE_CHECKING:
    from react_setup.scaffolder.runner import CommandFailed

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def remove_path(path: str | Path) -> bool:
    """Delete a file or a directory tree if it exists.

    Returns:
        ``True`` if something was removed, ``False`` if the path was absent.
    """
    target = Path(path)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
        return True
    if target.exists() or target.is_symlink():
        target.unlink()
        return True
    return False


def write_text(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content* to *path*."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Render a run duration for the summary table.

    Under a minute keeps one decimal (``"42.5s"``); longer runs, typically
    slow npm installs, drop the fraction (``"2m 7s"``, ``"1h 0m 3s"``).
    Negative input is clamped to zero.
    """
    seconds = max(seconds, 0.0)
    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STEP_NAMES: dict[int, str] = {
    1: "PROMPT",
    2: "SCAFFOLD",
    3: "INSTALL",
    4: "CONFIGURE",
    5: "EDITOR",
}

STEP_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_yellow",
    4: "bright_magenta",
    5: "bright_blue",
}


def print_banner(title: str = "Welcome to React Setup CLI") -> None:
    """Print the welcome banner shown before the first prompt."""
    console.print()
    console.print(Panel.fit(f"[bold cyan]{title}[/bold cyan]", border_style="cyan"))
    console.print()


def print_step_header(step: int, name: str) -> None:
    """Print a full-width rule announcing a pipeline step."""
    color = STEP_COLORS.get(step, "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Step {step}: {name.upper()} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{escape(message)}[/blue]", highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", highlight=False)


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)


def print_command_failure(error: CommandFailed) -> None:
    """Render a failed external command with any captured output."""
    print_error(f"✖ Command failed: {error.command}")
    print_error(f"Error: {error}")
    for label, text in (("stdout", error.stdout), ("stderr", error.stderr)):
        if text.strip():
            err_console.print(
                Panel(escape(text.rstrip()), title=label, border_style="red"),
                highlight=False,
            )
