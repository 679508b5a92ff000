"""
Component Logger

Provides colored logging for scaffolder components with:
- Rich terminal output on stderr, leaving stdout for command output
- Component-prefixed messages with per-message-type styling
- Graceful fallbacks when configuration is unavailable

Usage:
    logger = get_logger("fetcher")
    logger.info("Listing templates/react")
    logger.debug("GET https://api.github.com/...")
    logger.success("Downloaded 12 files")
    logger.warning("Could not remove temporary directory")
    logger.error("Skipping templates/react/docs: HTTP 500")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from atpl.utils.config import get_config_value

COMPONENT_COLORS = {
    "cli": "magenta",
    "locator": "cyan",
    "fetcher": "blue",
    "github": "blue",
    "copier": "green",
    "reconciler": "yellow",
}


class ComponentLogger:
    """
    Rich-formatted logger for scaffolder components.

    Message Types:
    - info: Normal operational messages
    - debug: Detailed tracing information
    - warning: Warning messages
    - error: Error messages
    - success: Success messages
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        """
        Initialize component logger.

        Args:
            base_logger: Underlying Python logger
            component_name: Name of the component (e.g., 'fetcher', 'copier')
            color: Rich color name for this component
        """
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix."""
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def info(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, self.color))

    def debug(self, message: str) -> None:
        style = f"dim {self.color}" if self.color != "white" else "dim white"
        self.base_logger.debug(self._format_message(message, style, "🔍 "))

    def warning(self, message: str) -> None:
        self.base_logger.warning(self._format_message(message, "bold yellow", "⚠️  "))

    def error(self, message: str) -> None:
        self.base_logger.error(self._format_message(message, "bold red", "❌ "))

    def success(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, "bold green", "✅ "))


def _find_rich_handler(root_logger: logging.Logger) -> RichHandler | None:
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            return handler
    return None


def _setup_rich_logging() -> None:
    """Attach a stderr RichHandler to the root logger (called once)."""
    root_logger = logging.getLogger()
    if _find_rich_handler(root_logger) is not None:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=True,
        show_path=False,
        show_time=False,
        show_level=True,
        tracebacks_show_locals=False,
    )
    root_logger.addHandler(handler)

    for lib in ["httpx", "httpcore"]:
        logging.getLogger(lib).setLevel(logging.WARNING)


def configure_logging(level: int | str | None = None) -> None:
    """Set the scaffolder's log level.

    Args:
        level: Explicit level (name or number). Defaults to the
            ``logging.level`` config value.
    """
    _setup_rich_logging()

    if level is None:
        try:
            level = get_config_value("logging.level", "WARNING")
        except Exception:
            level = "WARNING"
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.getLogger("atpl").setLevel(level)


def get_logger(component_name: str, *, color: str | None = None) -> ComponentLogger:
    """
    Get a component logger under the ``atpl`` logger hierarchy.

    Args:
        component_name: Component name (e.g., 'fetcher', 'copier')
        color: Explicit Rich color; defaults to the component's registered color

    Returns:
        ComponentLogger instance

    Examples:
        logger = get_logger("copier")
        logger.info("Creating src/")
    """
    _setup_rich_logging()

    base_logger = logging.getLogger(f"atpl.{component_name}")
    actual_color = color or COMPONENT_COLORS.get(component_name, "white")
    return ComponentLogger(base_logger, component_name, actual_color)
