"""The scaffolding pipeline.

acquire template -> inspect destination -> (plan + confirm) -> copy -> cleanup

:func:`scaffold` never exits the process. It returns a
:class:`ScaffoldResult` for the created and the declined cases and raises
an :class:`~atpl.errors.AtplError` subclass for everything else.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

from atpl.copier import copy_template
from atpl.fetcher import acquire_template
from atpl.options import CliOptions, project_path
from atpl.reconciler import DestinationState, PlannedFile, inspect_destination, plan_copy
from atpl.sources.base import TemplateSource
from atpl.utils.logger import get_logger

logger = get_logger("reconciler")

ConfirmOverwrite = Callable[[list[PlannedFile]], bool]


class ScaffoldStatus(Enum):
    CREATED = "created"
    ABORTED = "aborted"


@dataclass
class ScaffoldResult:
    """Outcome of one scaffold run.

    Attributes:
        status: CREATED, or ABORTED when the user declined the overwrite
        project_path: Absolute destination directory
        plan: Overwrite plan shown to the user (empty for fresh destinations)
        files_written: Relative paths written into the destination
        backups: ``.backup`` files created for overwritten paths
    """

    status: ScaffoldStatus
    project_path: Path
    plan: list[PlannedFile] = field(default_factory=list)
    files_written: list[PurePosixPath] = field(default_factory=list)
    backups: list[Path] = field(default_factory=list)


def scaffold(
    options: CliOptions,
    source: TemplateSource,
    confirm: ConfirmOverwrite,
    *,
    cwd: Path | None = None,
    strict: bool = False,
) -> ScaffoldResult:
    """Copy the template named in ``options`` into its project directory.

    The template is resolved (and downloaded, for remote sources) before
    the destination is touched, so an unknown template leaves the
    filesystem alone.

    Args:
        options: Resolved command-line options (not in listing mode)
        source: Template source to read from
        confirm: Called with the overwrite plan when the destination is not
            empty; returning False aborts without writing anything
        cwd: Directory the project name is relative to
        strict: Make nested remote listing failures fatal

    Returns:
        ScaffoldResult describing what happened

    Raises:
        TemplateNotFoundError: Unknown template
        RemoteFetchError: Remote template could not be downloaded
        CopyError: Destination could not be written
    """
    if options.list_only or not options.template_name:
        raise ValueError("scaffold() needs a template name")

    destination = project_path(options, cwd)

    with acquire_template(source, options.template_name, strict=strict) as template_dir:
        state = inspect_destination(destination)
        logger.debug(f"Destination {destination} is {state.value}")

        plan: list[PlannedFile] = []
        if state is DestinationState.POPULATED:
            plan = plan_copy(template_dir, destination)
            if not confirm(plan):
                logger.info("Overwrite declined")
                return ScaffoldResult(ScaffoldStatus.ABORTED, destination, plan=plan)

        report = copy_template(template_dir, destination)

    return ScaffoldResult(
        ScaffoldStatus.CREATED,
        destination,
        plan=plan,
        files_written=report.files_written,
        backups=report.backups,
    )
