"""Configuration and logging utilities for atpl.

Modules:
    config: YAML configuration loading and dotted-path access
    logger: Rich-formatted component loggers
"""

from . import config, logger

__all__ = ["config", "logger"]
