"""Template source selection.

Picks the local ``templates/`` directory when the tool runs from a
checkout that has one, and the hosted repository otherwise. Config
(``templates.source``) and command-line flags can force either side.
"""

from pathlib import Path

from atpl.sources import GitHubTemplateSource, LocalTemplateSource, TemplateSource
from atpl.utils.config import get_config_value
from atpl.utils.logger import get_logger

logger = get_logger("locator")

SOURCE_AUTO = "auto"
SOURCE_LOCAL = "local"
SOURCE_REMOTE = "remote"
SOURCE_MODES = (SOURCE_AUTO, SOURCE_LOCAL, SOURCE_REMOTE)


def installation_base() -> Path:
    """Directory holding the ``src/`` checkout this package was loaded from.

    For an installed wheel this is a site-packages parent with no
    ``templates/`` directory next to it, which is what sends ``auto`` mode
    to the remote source.
    """
    return Path(__file__).resolve().parents[2]


def default_local_root() -> Path:
    """Local templates root from config, or ``<installation-base>/templates``."""
    configured = get_config_value("templates.local_root")
    if configured:
        return Path(configured).expanduser()
    return installation_base() / "templates"


def select_source(
    mode: str | None = None,
    *,
    templates_dir: str | Path | None = None,
    repo: str | None = None,
    branch: str | None = None,
) -> TemplateSource:
    """Build the template source for this invocation.

    Args:
        mode: ``auto``, ``local`` or ``remote``; defaults to ``templates.source``
        templates_dir: Explicit local templates root (implies local in auto mode)
        repo: Override ``remote.repo``
        branch: Override ``remote.branch``

    Returns:
        A ready-to-use template source; close it when done

    Raises:
        ValueError: If ``mode`` is not one of the known modes
    """
    mode = (mode or get_config_value("templates.source", SOURCE_AUTO)).lower()
    if mode not in SOURCE_MODES:
        choices = ", ".join(SOURCE_MODES)
        raise ValueError(f"Unknown template source '{mode}'. Choose from: {choices}")

    local_root = Path(templates_dir).expanduser() if templates_dir else default_local_root()

    if mode == SOURCE_AUTO:
        mode = SOURCE_LOCAL if templates_dir or local_root.is_dir() else SOURCE_REMOTE
        logger.debug(f"Auto-selected {mode} templates (local root: {local_root})")

    if mode == SOURCE_LOCAL:
        logger.info(f"Using local templates from {local_root}")
        return LocalTemplateSource(local_root)

    source = GitHubTemplateSource(
        repo=repo or get_config_value("remote.repo"),
        branch=branch or get_config_value("remote.branch"),
        base_path=get_config_value("remote.path", "templates"),
        api_url=get_config_value("remote.api_url"),
        token=get_config_value("remote.token"),
        timeout=float(get_config_value("remote.timeout", 30)),
    )
    logger.info(f"Using remote templates from {source.describe()} ({source.branch})")
    return source
