"""Template tree entries and the shared depth-first walk.

Both the remote download and the local copy are the same traversal over
a :class:`~atpl.sources.base.TemplateSource`; they only differ in what
they do with each entry. :func:`walk_tree` yields every entry together
with its path relative to the walk root, parents before children.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from atpl.errors import ListingError

if TYPE_CHECKING:
    from atpl.sources.base import TemplateSource

FILE = "file"
DIR = "dir"


@dataclass(frozen=True)
class TreeEntry:
    """One row of a directory listing.

    Attributes:
        name: Final path component
        path: Posix path relative to the source root
        kind: ``"file"`` or ``"dir"``
        download_url: Where a remote file's raw content lives (remote sources only)
    """

    name: str
    path: str
    kind: str
    download_url: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == DIR

    @property
    def is_file(self) -> bool:
        return self.kind == FILE


ListingErrorHandler = Callable[[PurePosixPath, ListingError], None]


def walk_tree(
    source: "TemplateSource",
    root: str,
    *,
    on_error: ListingErrorHandler | None = None,
) -> Iterator[tuple[TreeEntry, PurePosixPath]]:
    """Walk a source depth-first starting at ``root``.

    Listing ``root`` itself is never guarded: a failure there propagates
    to the caller. Failures listing a nested directory go to ``on_error``
    (which may re-raise) and the walk moves on to the next sibling. Without
    a handler every listing failure propagates.

    Args:
        source: Template source to list
        root: Source-relative directory to start from
        on_error: Called with the relative path and error of a nested
            directory that could not be listed

    Yields:
        ``(entry, relative_path)`` pairs, directories before their contents
    """
    yield from _walk(source, PurePosixPath(root), PurePosixPath(), on_error)


def _walk(
    source: "TemplateSource",
    root: PurePosixPath,
    relative: PurePosixPath,
    on_error: ListingErrorHandler | None,
) -> Iterator[tuple[TreeEntry, PurePosixPath]]:
    for entry in source.list_entries(str(root / relative)):
        child = relative / entry.name
        yield entry, child
        if not entry.is_dir:
            continue
        try:
            yield from _walk(source, root, child, on_error)
        except ListingError as exc:
            if on_error is None:
                raise
            on_error(child, exc)
