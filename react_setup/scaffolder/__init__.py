"""React Setup scaffolder -- creates and customises a Vite React project.

Quick usage::

    from react_setup.config import Config
    from react_setup.prompts import UserSelection
    from react_setup.scaffolder import FileRewriter, ScaffoldGenerator

    config = Config()
    selection = UserSelection(project_name="my-app", libraries=["axios"])
    root = ScaffoldGenerator(config).create(selection, ".")
    ScaffoldGenerator(config).install(selection, root)
    FileRewriter(config).rewrite(selection, root)
"""

from react_setup.scaffolder.generator import (
    ScaffoldError,
    ScaffoldGenerator,
    companion_install_command,
    install_command,
)
from react_setup.scaffolder.rewriter import FileRewriter, select_app_template
from react_setup.scaffolder.runner import CommandFailed, CommandResult, CommandRunner
from react_setup.scaffolder.templates import TemplateRenderer

__all__ = [
    "CommandFailed",
    "CommandResult",
    "CommandRunner",
    "FileRewriter",
    "ScaffoldError",
    "ScaffoldGenerator",
    "TemplateRenderer",
    "companion_install_command",
    "install_command",
    "select_app_template",
]
