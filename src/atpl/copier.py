"""Template-to-destination copying with backups.

Walks the template depth-first. Directories are created as they are
reached. A file that already exists at the destination is first copied to
``<path>.backup`` and then replaced, so every overwrite leaves the previous
content next to the new one. Backups are not versioned: a later run
replaces an earlier ``.backup``.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from atpl.errors import CopyError, ListingError
from atpl.sources.local import LocalTemplateSource
from atpl.tree import walk_tree
from atpl.utils.logger import get_logger

logger = get_logger("copier")

BACKUP_SUFFIX = ".backup"


@dataclass
class CopyReport:
    """What a copy run changed.

    Attributes:
        files_written: Relative paths of every file written
        backups: Backup files created, as absolute paths
        failed_backups: Relative paths whose backup could not be written
    """

    files_written: list[PurePosixPath] = field(default_factory=list)
    backups: list[Path] = field(default_factory=list)
    failed_backups: list[PurePosixPath] = field(default_factory=list)


def backup_path(path: Path) -> Path:
    """``some/file.txt`` -> ``some/file.txt.backup``."""
    return path.with_name(path.name + BACKUP_SUFFIX)


def copy_template(template_dir: Path, destination: Path) -> CopyReport:
    """Copy every entry of ``template_dir`` into ``destination``.

    Args:
        template_dir: Local directory holding the template tree
        destination: Project directory; created if missing

    Returns:
        CopyReport describing written files and backups

    Raises:
        CopyError: If a directory or file cannot be written. Backup
            failures are only logged.
    """
    report = CopyReport()

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(f"Cannot create destination '{destination}': {e}") from e

    try:
        for entry, relative in walk_tree(LocalTemplateSource(template_dir), ""):
            target = destination.joinpath(*relative.parts)
            if entry.is_dir:
                _make_dir(target)
            else:
                _replace_file(template_dir.joinpath(*relative.parts), target, relative, report)
    except ListingError as e:
        raise CopyError(f"Cannot read template directory: {e.message}") from e

    return report


def _make_dir(target: Path) -> None:
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(f"Cannot create directory '{target}': {e}") from e


def _replace_file(
    source_path: Path, target: Path, relative: PurePosixPath, report: CopyReport
) -> None:
    if target.is_file():
        backup = _backup(target, relative, report)
        if backup is not None:
            report.backups.append(backup)

    try:
        if target.exists() or target.is_symlink():
            target.unlink()
        shutil.copy2(source_path, target)
    except OSError as e:
        raise CopyError(f"Cannot write '{target}': {e}") from e

    logger.debug(f"Wrote {relative}")
    report.files_written.append(relative)


def _backup(target: Path, relative: PurePosixPath, report: CopyReport) -> Path | None:
    backup = backup_path(target)
    try:
        shutil.copy2(target, backup)
    except OSError as e:
        logger.warning(f"Could not back up {relative}: {e}")
        report.failed_backups.append(relative)
        return None
    logger.info(f"Backed up {relative} -> {backup.name}")
    return backup
