"""atpl project scaffolder.

Copies a named template's file tree into a new or existing project
directory. Templates come from a local ``templates/`` checkout or are
fetched file by file from a hosted repository.

This package contains:
- Argument resolution and template source selection
- Local and remote (GitHub) template sources
- Destination reconciliation with backup-on-overwrite copying
- Configuration and logging utilities
"""

# Version information
__version__ = "0.3.0"

__all__ = ["__version__"]
