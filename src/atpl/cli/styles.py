"""Centralized color and style management for the atpl CLI.

Semantic style names (success, error, warning, accent, command) map to the
colors of the active theme, so command code never hard-codes colors.
Two consoles share the theme: ``console`` for normal output on stdout
and ``error_console`` for usage errors and failures on stderr.
"""

import sys
from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from atpl.utils.logger import get_logger

logger = get_logger("cli")


# ============================================================================
# THEME CONFIGURATION
# ============================================================================


@dataclass
class ColorTheme:
    """Defines a complete color theme for the CLI.

    Fixed standard colors (error, warning) follow UI conventions; the
    remaining colors define the tool's look and can be customized.
    """

    # === FIXED STANDARD COLORS ===
    error: str = "#ff0000"
    warning: str = "#ffaa00"

    # === CONFIGURABLE THEME COLORS ===
    success: str = "#5FB878"
    accent: str = "#E0B450"
    command: str = "#9988A1"

    text_dim: str = "#666666"


DEFAULT_THEME = ColorTheme()

# Plain terminal colors for terminals without truecolor support
BASIC_THEME = ColorTheme(
    success="#00af00",
    accent="#d7af00",
    command="#af87af",
)

THEME_REGISTRY = {
    "default": DEFAULT_THEME,
    "basic": BASIC_THEME,
}


def _build_rich_theme(theme: ColorTheme) -> Theme:
    """Build a Rich Theme from a ColorTheme."""
    return Theme(
        {
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "dim": theme.text_dim,
            "command": theme.command,
            "accent": theme.accent,
        }
    )


# ============================================================================
# CONSOLE INSTANCES
# ============================================================================

_active_theme = DEFAULT_THEME

if sys.platform == "win32":
    console = Console(theme=_build_rich_theme(_active_theme), legacy_windows=False)
    error_console = Console(
        theme=_build_rich_theme(_active_theme), stderr=True, legacy_windows=False
    )
else:
    console = Console(theme=_build_rich_theme(_active_theme))
    error_console = Console(theme=_build_rich_theme(_active_theme), stderr=True)


def get_active_theme() -> ColorTheme:
    """Get the currently active color theme."""
    return _active_theme


def set_theme(theme: ColorTheme) -> None:
    """Activate a theme on both consoles.

    The console objects stay the same, so modules that imported them
    pick up the new colors too.
    """
    global _active_theme
    _active_theme = theme
    rich_theme = _build_rich_theme(theme)
    console.push_theme(rich_theme)
    error_console.push_theme(rich_theme)


def load_theme(theme_name: str | None) -> ColorTheme:
    """Look up a theme by name, falling back to the default."""
    theme = THEME_REGISTRY.get((theme_name or "default").lower())
    if theme is None:
        logger.warning(f"Unknown theme '{theme_name}', using default")
        return DEFAULT_THEME
    return theme


def initialize_theme_from_config() -> None:
    """Apply the ``cli.theme`` configured theme."""
    from atpl.utils.config import get_config_value

    set_theme(load_theme(get_config_value("cli.theme", "default")))


# ============================================================================
# STYLE HELPERS
# ============================================================================


class Styles:
    """Reusable style names defined in the Rich theme."""

    ERROR = "error"
    DIM = "dim"


class Messages:
    """Pre-formatted message helpers for common patterns."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def command(text: str) -> str:
        return f"[command]{text}[/command]"


__all__ = [
    "ColorTheme",
    "DEFAULT_THEME",
    "BASIC_THEME",
    "THEME_REGISTRY",
    "get_active_theme",
    "set_theme",
    "load_theme",
    "initialize_theme_from_config",
    "console",
    "error_console",
    "Styles",
    "Messages",
]
