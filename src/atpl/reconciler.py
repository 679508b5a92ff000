"""Destination inspection and overwrite planning.

Before anything is written the destination is classified as missing,
empty or populated. A populated destination gets a per-file plan showing
which template files will replace (and back up) existing ones, and the
user has to agree before the copy runs.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from atpl.errors import CopyError
from atpl.sources.local import LocalTemplateSource
from atpl.tree import walk_tree


class DestinationState(Enum):
    MISSING = "missing"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class PlannedFile:
    """One template file and whether it collides with an existing file.

    Attributes:
        relative_path: Path inside the template and the destination
        exists: True when a file is already there and will be backed up
    """

    relative_path: PurePosixPath
    exists: bool


def inspect_destination(destination: Path) -> DestinationState:
    """Classify the destination directory.

    Raises:
        CopyError: If the destination exists but is not a directory
    """
    if not destination.exists():
        return DestinationState.MISSING
    if not destination.is_dir():
        raise CopyError(f"Destination '{destination}' exists and is not a directory")
    if any(destination.iterdir()):
        return DestinationState.POPULATED
    return DestinationState.EMPTY


def plan_copy(template_dir: Path, destination: Path) -> list[PlannedFile]:
    """List every template file and whether it would overwrite something."""
    plan = []
    for entry, relative in walk_tree(LocalTemplateSource(template_dir), ""):
        if entry.is_dir:
            continue
        target = destination.joinpath(*relative.parts)
        plan.append(PlannedFile(relative_path=relative, exists=target.is_file()))
    return plan


def is_affirmative(answer: str | None) -> bool:
    """Only an explicit yes counts; empty or anything else is a no."""
    return (answer or "").strip().lower() in ("y", "yes")
