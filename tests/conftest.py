"""Shared pytest fixtures for the React Setup test suite.

Provides reusable fixtures for:
- A recording fake command runner that can inject failures
- A fake ``create-vite`` output tree
- Default configuration with the editor disabled
"""

from __future__ import annotations

from pathlib import Path

import pytest

from react_setup.config import Config
from react_setup.scaffolder.runner import CommandFailed, CommandResult


# ---------------------------------------------------------------------------
# Fake create-vite output
# ---------------------------------------------------------------------------

def make_vite_project(root: Path) -> Path:
    """Create the subset of the ``create-vite`` React template we rewrite."""
    src = root / "src"
    (src / "assets").mkdir(parents=True, exist_ok=True)
    (src / "assets" / "react.svg").write_text("<svg />", encoding="utf-8")
    (src / "app.css").write_text("#root { max-width: 1280px; }\n", encoding="utf-8")
    (src / "App.jsx").write_text("export default function App() {}\n", encoding="utf-8")
    (src / "index.css").write_text(":root { color: red; }\n", encoding="utf-8")
    (src / "main.jsx").write_text("import App from './App.jsx'\n", encoding="utf-8")
    (root / "vite.config.js").write_text("export default {}\n", encoding="utf-8")
    (root / "package.json").write_text('{"name": "%s"}\n' % root.name, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Recording runner
# ---------------------------------------------------------------------------

class RecordingRunner:
    """Stands in for :class:`CommandRunner` without spawning processes.

    Every call is recorded as ``(command, cwd)``.  Commands run with
    ``capture=True`` are also listed in ``captured``.  A command containing
    *fail_on* raises :class:`CommandFailed`.  ``create-vite`` commands
    materialise a fake project under ``cwd`` unless *create_project* is
    ``False``.
    """

    def __init__(
        self,
        fail_on: str | None = None,
        create_project: bool = True,
        stderr: str = "",
    ) -> None:
        self.fail_on = fail_on
        self.create_project = create_project
        self.stderr = stderr
        self.calls: list[tuple[str, Path | None]] = []
        self.captured: list[str] = []

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def run(self, command: str, cwd: str | Path | None = None, capture: bool = False) -> CommandResult:
        self.calls.append((command, Path(cwd) if cwd is not None else None))
        if capture:
            self.captured.append(command)
        if self.fail_on is not None and self.fail_on in command:
            raise CommandFailed(
                "Command exited with status 1",
                command=command,
                returncode=1,
                stderr=self.stderr,
            )
        if self.create_project and "create-vite" in command:
            name = command.split()[2]
            make_vite_project(Path(cwd or ".") / name)
        return CommandResult(command=command)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration with the editor launch disabled."""
    return Config(open_editor=False)


@pytest.fixture
def fake_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def vite_project(tmp_path: Path) -> Path:
    """A directory shaped like fresh ``create-vite`` output."""
    return make_vite_project(tmp_path / "demo-app")


@pytest.fixture(autouse=True)
def _clean_react_setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of ``Config.from_env``."""
    for var in (
        "REACT_SETUP_TEMPLATE",
        "REACT_SETUP_EDITOR",
        "REACT_SETUP_OPEN_EDITOR",
        "REACT_SETUP_VERSION_TAG",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def runner_factory() -> type[RecordingRunner]:
    """The :class:`RecordingRunner` class, for tests that need custom failures."""
    return RecordingRunner
