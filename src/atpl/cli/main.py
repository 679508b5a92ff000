"""Main CLI entry point for atpl.

Usage:
    atpl list                               List available templates
    atpl <template-name> [project-name]     Create a project from a template

This is the only place that turns results and errors into process exit
codes: 0 for success or a declined overwrite, 1 for any usage, resolution
or copy failure, 130 for Ctrl-C.
"""

import sys

import click
from rich.markup import escape

from atpl import __version__
from atpl.errors import AtplError
from atpl.locator import SOURCE_MODES, select_source
from atpl.options import CliOptions, resolve_options
from atpl.reconciler import PlannedFile, is_affirmative
from atpl.scaffold import ScaffoldStatus, scaffold
from atpl.sources.base import TemplateSource
from atpl.utils.config import get_config_value, use_config
from atpl.utils.logger import configure_logging, get_logger

from .styles import Messages, Styles, console, error_console, initialize_theme_from_config

logger = get_logger("cli")

USAGE = "Usage: atpl <template-name> [project-name]"
OVERWRITE_PROMPT = "Do you want to overwrite existing files? (y/N)"


def render_plan(plan: list[PlannedFile]) -> None:
    """Print which template files are new and which will be backed up."""
    collisions = sum(1 for item in plan if item.exists)
    console.print(
        Messages.warning(
            f"Destination is not empty: {collisions} of {len(plan)} file(s) already exist."
        )
    )
    for item in plan:
        path = escape(str(item.relative_path))
        if item.exists:
            console.print(f"  [warning]~ {path}[/warning] (will be backed up)", soft_wrap=True)
        else:
            console.print(f"  [success]+ {path}[/success]", soft_wrap=True)


def prompt_overwrite(plan: list[PlannedFile]) -> bool:
    """Show the plan and ask for consent. Anything but y/yes declines."""
    render_plan(plan)
    try:
        answer = click.prompt(OVERWRITE_PROMPT, default="", show_default=False, prompt_suffix=" ")
    except click.Abort:
        # end of input
        return False
    return is_affirmative(answer)


def _assume_yes(plan: list[PlannedFile]) -> bool:
    render_plan(plan)
    console.print("Overwriting without prompting (--yes).", style=Styles.DIM)
    return True


def show_usage(source: TemplateSource) -> None:
    """Usage line plus the available template names, on stderr."""
    error_console.print(USAGE, markup=False, highlight=False)
    try:
        names = source.list_templates()
    except AtplError as e:
        logger.warning(f"Could not list templates: {e.message}")
        return
    error_console.print("Available templates:")
    for name in names:
        error_console.print(f"- {escape(name)}", highlight=False)


def list_templates(source: TemplateSource) -> None:
    for name in source.list_templates():
        click.echo(name)


def run_scaffold(
    options: CliOptions, source: TemplateSource, *, assume_yes: bool, strict: bool
) -> int:
    name = escape(options.project_name)
    template = escape(options.template_name or "")
    console.print(
        f'Copying template "[accent]{template}[/accent]" to "[accent]{name}[/accent]"...',
        soft_wrap=True,
    )

    result = scaffold(
        options,
        source,
        _assume_yes if assume_yes else prompt_overwrite,
        strict=strict,
    )

    if result.status is ScaffoldStatus.ABORTED:
        console.print("Aborting.")
        return 0

    if result.backups:
        count = len(result.backups)
        console.print(Messages.warning(f"Backed up {count} existing file(s) as *.backup"))
    console.print(Messages.success(f'Project "{name}" created successfully!'), soft_wrap=True)
    if not options.is_current_dir:
        console.print(f"Navigate to the project: {Messages.command(f'cd {name}')}", soft_wrap=True)
    return 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("template_name", required=False)
@click.argument("project_name", required=False)
@click.option(
    "--source",
    "source_mode",
    type=click.Choice(SOURCE_MODES, case_sensitive=False),
    default=None,
    help="Where templates come from: auto (local checkout if present), local, or remote",
)
@click.option(
    "--templates-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Local templates directory (default: templates/ next to the installation)",
)
@click.option("--repo", default=None, help="GitHub repository holding the templates (owner/name)")
@click.option("--branch", default=None, help="Branch or tag to fetch remote templates from")
@click.option(
    "--strict",
    is_flag=True,
    help="Fail when a nested remote directory cannot be listed instead of skipping it",
)
@click.option(
    "--yes", "-y", "assume_yes", is_flag=True, help="Overwrite existing files without asking"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: ./atpl.yml or ~/.config/atpl/config.yml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(version=__version__, prog_name="atpl")
@click.pass_context
def cli(
    ctx,
    template_name: str | None,
    project_name: str | None,
    source_mode: str | None,
    templates_dir: str | None,
    repo: str | None,
    branch: str | None,
    strict: bool,
    assume_yes: bool,
    config_path: str | None,
    verbose: bool,
):
    """Create a project from a template.

    TEMPLATE_NAME: Template to copy, or 'list' to show available templates

    PROJECT_NAME: Destination directory (default: the template name;
    use '.' for the current directory)

    Examples:

    \b
      atpl list                       Show available templates
      atpl react-app                  Create ./react-app
      atpl react-app my-site          Create ./my-site
      atpl react-app .                Copy into the current directory
      atpl react-app --source remote  Always fetch from GitHub
    """
    try:
        use_config(config_path)
        configure_logging("DEBUG" if verbose else None)
        initialize_theme_from_config()

        options = resolve_options(template_name, project_name)
        strict = strict or bool(get_config_value("remote.strict", False))

        source = select_source(source_mode, templates_dir=templates_dir, repo=repo, branch=branch)
        with source:
            if options.list_only and options.template_name is None:
                show_usage(source)
                exit_code = 1
            elif options.list_only:
                list_templates(source)
                exit_code = 0
            else:
                exit_code = run_scaffold(options, source, assume_yes=assume_yes, strict=strict)
    except AtplError as e:
        error_console.print(f"Error: {escape(e.message)}", style=Styles.ERROR, soft_wrap=True)
        exit_code = e.exit_code
    except ValueError as e:
        error_console.print(f"Error: {escape(str(e))}", style=Styles.ERROR, soft_wrap=True)
        exit_code = 1

    ctx.exit(exit_code)


def main():
    """Entry point for the atpl CLI."""
    try:
        exit_code = cli.main(prog_name="atpl", standalone_mode=False)
    except click.Abort:
        # Ctrl-C; at the overwrite prompt it counts as declining instead
        click.echo("\nInterrupted.", err=True)
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
