"""Filesystem-backed template source."""

from pathlib import Path

from atpl.errors import DownloadError, ListingError
from atpl.sources.base import TemplateSource
from atpl.tree import DIR, FILE, TreeEntry


class LocalTemplateSource(TemplateSource):
    """Templates stored as plain directories under ``root``.

    Attributes:
        root: The templates directory (``<installation-base>/templates``)
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def describe(self) -> str:
        return str(self.root)

    def _resolve(self, path: str) -> Path:
        return self.root / path if path else self.root

    def local_path(self, path: str) -> Path:
        return self._resolve(path)

    def list_entries(self, path: str) -> list[TreeEntry]:
        directory = self._resolve(path)
        if not directory.is_dir():
            raise ListingError(path, f"Not a directory: {directory}", not_found=True)

        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ListingError(path, f"Cannot list {directory}: {e}") from e

        entries = []
        for child in children:
            relative = child.relative_to(self.root).as_posix()
            kind = DIR if child.is_dir() else FILE
            entries.append(TreeEntry(name=child.name, path=relative, kind=kind))
        return entries

    def list_templates(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return super().list_templates()

    def read_bytes(self, entry: TreeEntry) -> bytes:
        try:
            return self._resolve(entry.path).read_bytes()
        except OSError as e:
            raise DownloadError(entry.path, f"Cannot read {entry.path}: {e}") from e
