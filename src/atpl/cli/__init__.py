"""Command-line interface for atpl.

Commands:
    - atpl list: Show available templates
    - atpl <template-name> [project-name]: Create a project from a template

Architecture:
    A single Click command. Business modules raise typed errors and return
    results; this package prints them and chooses the exit code.
"""

from .main import cli, main

__all__ = ["cli", "main"]
