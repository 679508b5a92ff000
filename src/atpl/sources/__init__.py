"""Template sources.

Sources:
    - LocalTemplateSource: templates in a directory on disk
    - GitHubTemplateSource: templates in a GitHub repository, fetched per file
"""

from .base import TemplateSource
from .github import GitHubTemplateSource
from .local import LocalTemplateSource

__all__ = ["TemplateSource", "LocalTemplateSource", "GitHubTemplateSource"]
