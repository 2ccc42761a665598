"""Core utilities shared across :mod:`vno` modules.

The core namespace provides seams for configuration loading, logging setup,
and project path resolution so the compiler stays focused on components.

Example:
    >>> from vno.core import get_logger
    >>> logger = get_logger(__name__)
    >>> isinstance(logger, object)
    True
"""

from __future__ import annotations

from .config import BuildSettings, VnoConfig, load_config
from .logging import configure_logging, get_logger
from .paths import ProjectPaths, reset_output_dir, resolve_project

__all__ = [
    "BuildSettings",
    "VnoConfig",
    "configure_logging",
    "get_logger",
    "load_config",
    "ProjectPaths",
    "reset_output_dir",
    "resolve_project",
]
