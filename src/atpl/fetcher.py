"""Template acquisition.

:func:`acquire_template` hands the rest of the pipeline a local directory
holding the template, whatever the source. Local templates are used in
place; remote ones are downloaded into a temporary directory that is
removed when the ``with`` block exits.

Failure policy for remote downloads:
    - the template's top-level listing failing is fatal (404 means "not found")
    - a nested directory failing to list is logged and its subtree skipped,
      unless ``strict`` is set
    - any file failing to download is fatal
"""

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

from atpl.errors import DownloadError, ListingError, RemoteFetchError, TemplateNotFoundError
from atpl.sources.base import TemplateSource
from atpl.tree import walk_tree
from atpl.utils.logger import get_logger

logger = get_logger("fetcher")

TEMP_PREFIX = "atpl-"


@contextmanager
def acquire_template(
    source: TemplateSource, template_name: str, *, strict: bool = False
) -> Iterator[Path]:
    """Make ``template_name`` available as a local directory.

    Args:
        source: Where the template lives
        template_name: Name of the template directory
        strict: Treat nested listing failures as fatal

    Yields:
        Directory whose contents are the template's file tree

    Raises:
        TemplateNotFoundError: If the source has no such template
        RemoteFetchError: If a remote template cannot be downloaded completely
    """
    local = source.local_path(template_name)
    if local is not None:
        if not local.is_dir():
            raise TemplateNotFoundError(template_name, source.describe())
        yield local
        return

    download_dir = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
    try:
        download_template(source, template_name, download_dir, strict=strict)
        yield download_dir
    finally:
        cleanup_download(download_dir)


def download_template(
    source: TemplateSource, template_name: str, destination: Path, *, strict: bool = False
) -> int:
    """Download a template's tree into ``destination``.

    Returns:
        Number of files written
    """

    def on_nested_error(relative: PurePosixPath, error: ListingError) -> None:
        if strict:
            raise RemoteFetchError(f"Failed to list {template_name}/{relative}: {error.message}")
        logger.error(f"Skipping {template_name}/{relative}: {error.message}")

    logger.info(f"Downloading template '{template_name}' from {source.describe()}")
    files = 0
    try:
        for entry, relative in walk_tree(source, template_name, on_error=on_nested_error):
            target = destination.joinpath(*relative.parts)
            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(source.read_bytes(entry))
            logger.debug(f"Fetched {relative}")
            files += 1
    except ListingError as e:
        # Only the template's own listing reaches here; nested ones go to on_nested_error
        if e.not_found:
            raise TemplateNotFoundError(template_name, source.describe()) from e
        raise RemoteFetchError(f"Failed to list template '{template_name}': {e.message}") from e
    except DownloadError as e:
        raise RemoteFetchError(e.message) from e
    except OSError as e:
        raise RemoteFetchError(f"Cannot write downloaded file: {e}") from e

    logger.success(f"Downloaded {files} file(s) for '{template_name}'")
    return files


def cleanup_download(download_dir: Path) -> None:
    """Remove a temporary download directory, warning instead of failing."""
    try:
        shutil.rmtree(download_dir)
        logger.debug(f"Removed temporary directory {download_dir}")
    except OSError as e:
        logger.warning(f"Could not remove temporary directory {download_dir}: {e}")
