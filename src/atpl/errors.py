"""Exception hierarchy for atpl.

Every failure the scaffolder can report is an :class:`AtplError`. Each
class carries the process exit code it deserves, so business code only
raises and the CLI entry point is the single place that turns an
exception into an exit status.

Hierarchy::

    AtplError
    ├── ConfigError
    ├── TemplateNotFoundError
    ├── SourceError
    │   ├── ListingError
    │   └── DownloadError
    ├── RemoteFetchError
    └── CopyError
"""


class AtplError(Exception):
    """Base class for all scaffolder errors."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(AtplError):
    """Configuration file could not be read or parsed."""


class TemplateNotFoundError(AtplError):
    """The requested template does not exist in the selected source."""

    def __init__(self, template_name: str, source_description: str):
        super().__init__(f'Template "{template_name}" not found ({source_description})')
        self.template_name = template_name
        self.source_description = source_description


class SourceError(AtplError):
    """A template source failed to list or read an entry."""


class ListingError(SourceError):
    """Listing a directory in a template source failed.

    Attributes:
        path: Source-relative path that was being listed
        not_found: True when the source reported the path as missing
    """

    def __init__(self, path: str, message: str, *, not_found: bool = False):
        super().__init__(message)
        self.path = path
        self.not_found = not_found


class DownloadError(SourceError):
    """Reading a single file from a template source failed."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class RemoteFetchError(AtplError):
    """A remote template could not be downloaded completely."""


class CopyError(AtplError):
    """Writing the template into the destination failed."""
