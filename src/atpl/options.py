"""Command-line argument resolution.

Turns the raw ``<template-name> [project-name]`` pair into a frozen
:class:`CliOptions` record. Defaults the project name to the template
name and folds every spelling of "the current directory" into ``"."``.
"""

import os
from dataclasses import dataclass
from pathlib import Path

LIST_KEYWORD = "list"
CURRENT_DIR = "."
_CURRENT_DIR_ALIASES = {"", ".", "./"}


@dataclass(frozen=True)
class CliOptions:
    """Parsed scaffolder arguments.

    Attributes:
        template_name: Template to copy; None when no argument was given
        project_name: Destination name, or ``"."`` for the current directory
        is_current_dir: True when the destination is the working directory
        list_only: True for the ``list`` command and for a missing template name
    """

    template_name: str | None
    project_name: str
    is_current_dir: bool = False
    list_only: bool = False


def is_current_dir_alias(value: str, cwd: Path | None = None) -> bool:
    """Return True if ``value`` names the current working directory.

    Examples:
        >>> is_current_dir_alias("./")
        True
        >>> is_current_dir_alias("my-app")
        False
    """
    if value.strip() in _CURRENT_DIR_ALIASES:
        return True

    cwd = cwd or Path.cwd()
    candidate = Path(value)
    if not candidate.is_absolute():
        return False
    return os.path.normpath(candidate) == os.path.normpath(cwd)


def resolve_options(
    template_name: str | None, project_name: str | None = None, cwd: Path | None = None
) -> CliOptions:
    """Build :class:`CliOptions` from positional arguments.

    Args:
        template_name: First argument; None or ``"list"`` selects listing mode
        project_name: Second argument; defaults to the template name
        cwd: Working directory used to recognize an absolute current-dir path

    Returns:
        Resolved, immutable options

    Examples:
        >>> resolve_options("react").project_name
        'react'
        >>> resolve_options("react", ".").is_current_dir
        True
    """
    if not template_name or template_name == LIST_KEYWORD:
        return CliOptions(
            template_name=template_name or None,
            project_name="",
            list_only=True,
        )

    name = template_name if project_name is None else project_name
    if is_current_dir_alias(name, cwd):
        return CliOptions(
            template_name=template_name, project_name=CURRENT_DIR, is_current_dir=True
        )

    return CliOptions(template_name=template_name, project_name=name)


def project_path(options: CliOptions, cwd: Path | None = None) -> Path:
    """Absolute destination directory for the resolved options."""
    cwd = cwd or Path.cwd()
    if options.is_current_dir:
        return cwd.resolve()
    return (cwd / options.project_name).resolve()
