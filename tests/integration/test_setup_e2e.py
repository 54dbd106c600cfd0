"""Integration tests for a full prompt-to-rewrite run.

These tests drive the real prompt collection, generator, rewriter and
templates end-to-end.  Only the external commands are replaced by the
recording runner, which materialises a fake ``create-vite`` project.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from react_setup.config import Config
from react_setup.pipeline import SetupPipeline
from react_setup.prompts import ScriptedAnswerProvider


pytestmark = pytest.mark.integration


def _script(name: str, config: Config, selected: set[str]) -> ScriptedAnswerProvider:
    return ScriptedAnswerProvider(
        [name] + ["y" if option.package in selected else "n" for option in config.catalog]
    )


class TestRouterOnlyProject:
    """Project "foo" with routing selected and data fetching not selected."""

    @pytest.fixture
    def run(self, fake_runner, tmp_path: Path):
        config = Config(open_editor=False)
        answers = _script("foo", config, {"react-router-dom"})
        result = SetupPipeline(config, answers=answers, runner=fake_runner, parent_dir=tmp_path).run()
        return result, fake_runner, tmp_path / "foo"

    def test_succeeds(self, run):
        result, _, root = run
        assert result.success is True
        assert result.project_root == root

    def test_install_includes_router(self, run):
        _, runner, _ = run
        install = runner.commands[-1]
        assert install == "npm install react-router-dom@latest --legacy-peer-deps"

    def test_app_has_router_with_empty_routes(self, run):
        _, _, root = run
        app = (root / "src" / "App.jsx").read_text(encoding="utf-8")
        assert "<BrowserRouter>" in app
        assert "<Routes>\n      </Routes>" in app
        assert "QueryClientProvider" not in app
        assert "ReactQueryDevtools" not in app

    def test_layout(self, run):
        _, _, root = run
        src = root / "src"
        assert (root / ".eslintrc.cjs").exists()
        assert "vite-plugin-eslint" in (root / "vite.config.js").read_text(encoding="utf-8")
        assert not (src / "app.css").exists()
        assert not (src / "assets").exists()
        for name in ("components", "hooks", "context", "pages", "utils", "services", "UI"):
            assert (src / name).is_dir()


class TestFullStackProject:
    def test_router_and_query_nested(self, fake_runner, tmp_path: Path):
        config = Config(open_editor=False)
        selected = {"react-router-dom", "@tanstack/react-query", "tailwindcss"}
        result = SetupPipeline(
            config, answers=_script("full", config, selected), runner=fake_runner, parent_dir=tmp_path
        ).run()

        assert result.success is True
        assert fake_runner.commands[-2:] == [
            "npm install react-router-dom@latest @tanstack/react-query@latest "
            "tailwindcss@latest --legacy-peer-deps",
            "npm install @tanstack/react-query-devtools@latest --save-dev --legacy-peer-deps",
        ]
        app = (tmp_path / "full" / "src" / "App.jsx").read_text(encoding="utf-8")
        provider = app.index("<QueryClientProvider client={queryClient}>")
        router = app.index("<BrowserRouter>")
        closing = app.index("</QueryClientProvider>")
        assert provider < router < closing

    def test_second_run_in_same_directory(self, fake_runner, tmp_path: Path):
        config = Config(open_editor=False)
        for _ in range(2):
            result = SetupPipeline(
                config, answers=_script("again", config, set()), runner=fake_runner, parent_dir=tmp_path
            ).run()
            assert result.success is True
        src_dirs = [p for p in (tmp_path / "again" / "src").iterdir() if p.is_dir()]
        assert len(src_dirs) == len(config.source_subdirs)
