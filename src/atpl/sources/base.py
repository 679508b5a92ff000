"""Template source contract.

A template source is anything that can list the entries of a directory
and hand back the bytes of a file. The fetcher and copier only talk to
this interface, so local checkouts and hosted repositories are
interchangeable.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from atpl.tree import TreeEntry


class TemplateSource(ABC):
    """Base class for template sources.

    Paths are posix strings relative to the source's templates root;
    ``"template-name"`` is the top of a template and ``""`` or ``"."``
    is the templates root itself.
    """

    @abstractmethod
    def list_entries(self, path: str) -> list[TreeEntry]:
        """List the direct children of ``path``.

        Raises:
            ListingError: If the directory cannot be listed; ``not_found``
                is set when the source reports it missing
        """

    @abstractmethod
    def read_bytes(self, entry: TreeEntry) -> bytes:
        """Return the raw content of a file entry.

        Raises:
            DownloadError: If the content cannot be read
        """

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable location, used in messages."""

    def list_templates(self) -> list[str]:
        """Names of the templates available from this source, sorted.

        Only directories count; files at the templates root and hidden
        directories (names starting with ``.``) are skipped.
        """
        return sorted(
            entry.name
            for entry in self.list_entries("")
            if entry.is_dir and not entry.name.startswith(".")
        )

    def local_path(self, path: str) -> Path | None:
        """Filesystem path backing ``path``, or None for sources that must be downloaded."""
        return None

    def close(self) -> None:
        """Release any held resources (HTTP connections, ...)."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
