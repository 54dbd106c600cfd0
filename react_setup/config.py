"""React Setup configuration.

Typed configuration for the whole run. All settings use Pydantic v2 models so
they are validated at construction time and can be serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class LibraryOption(BaseModel):
    """One optional library the user may opt into."""

    package: str = Field(..., min_length=1, description="npm package identifier")
    prompt: str = Field(..., description="Question shown to the user")


ROUTER_PACKAGE = "react-router-dom"
QUERY_PACKAGE = "@tanstack/react-query"
QUERY_DEVTOOLS_PACKAGE = "@tanstack/react-query-devtools"


def _default_catalog() -> list[LibraryOption]:
    labels = [
        (ROUTER_PACKAGE, "React Router"),
        (QUERY_PACKAGE, "React Query"),
        ("tailwindcss", "Tailwind CSS"),
        ("framer-motion", "Framer Motion"),
        ("gsap", "GSAP"),
        ("react-toastify", "React Toastify"),
        ("axios", "Axios"),
        ("date-fns", "Date Fns"),
        ("react-hook-form", "React Hook Form"),
    ]
    return [
        LibraryOption(package=package, prompt=f"Install {label}? (y/n): ")
        for package, label in labels
    ]


class Config(BaseModel):
    """Global React Setup configuration.

    Holds the external commands, the generated layout and the library catalog.
    Instances are created once by the CLI entry point and passed through the
    rest of the system.
    """

    template: str = Field(default="react", description="create-vite template identifier")
    scaffold_command: str = Field(
        default="npx create-vite@latest {name} -- --template {template}",
        description="Project generator command; {name} and {template} are substituted",
    )
    lint_package: str = Field(default="vite-plugin-eslint")
    react_version: str = Field(default="18.2", description="React version pinned in the ESLint settings")
    install_flags: list[str] = Field(default=["--legacy-peer-deps"])
    version_tag: str = Field(default="latest")
    source_dir: str = Field(default="src")
    source_subdirs: list[str] = Field(
        default=["components", "hooks", "context", "pages", "utils", "services", "UI"]
    )
    editor_command: str = Field(default="code .")
    open_editor: bool = Field(default=True)
    catalog: list[LibraryOption] = Field(default_factory=_default_catalog)
    companion_packages: dict[str, list[str]] = Field(
        default_factory=lambda: {QUERY_PACKAGE: [QUERY_DEVTOOLS_PACKAGE]},
        description="Dev dependencies installed when the keyed library is selected",
    )

    @field_validator("template", "version_tag")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    # ------------------------------------------------------------------
    # Catalog helpers
    # ------------------------------------------------------------------

    @property
    def catalog_packages(self) -> list[str]:
        """Package identifiers in catalog order."""
        return [option.package for option in self.catalog]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            REACT_SETUP_TEMPLATE, REACT_SETUP_EDITOR,
            REACT_SETUP_OPEN_EDITOR, REACT_SETUP_VERSION_TAG.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("REACT_SETUP_TEMPLATE"):
            kwargs["template"] = os.environ["REACT_SETUP_TEMPLATE"]
        if os.environ.get("REACT_SETUP_EDITOR"):
            kwargs["editor_command"] = os.environ["REACT_SETUP_EDITOR"]
        if os.environ.get("REACT_SETUP_VERSION_TAG"):
            kwargs["version_tag"] = os.environ["REACT_SETUP_VERSION_TAG"]

        open_editor = os.environ.get("REACT_SETUP_OPEN_EDITOR")
        if open_editor is not None:
            kwargs["open_editor"] = open_editor.strip().lower() not in {"0", "false", "no", "off"}

        return cls(**kwargs)
