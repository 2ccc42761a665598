"""Helpers for the ``vno init`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from vno.core.config import (
    VnoConfig,
    load_config,
    load_packaged_defaults,
    render_user_config,
)
from vno.core.paths import ProjectPaths, resolve_project


class ProjectConfigExistsError(FileExistsError):
    """Raised when ``vno.toml`` exists and overwriting was not requested."""


def init_project(
    *,
    root: Path,
    force: bool = False,
    cli_overrides: Mapping[str, Any] | None = None,
) -> tuple[VnoConfig, ProjectPaths]:
    """Seed ``vno.toml`` in the project ``root``.

    Example:
        >>> from pathlib import Path
        >>> config, paths = init_project(root=Path("/tmp/vno-example"), force=True)
        >>> paths.config_file.name
        'vno.toml'

    Args:
        root: Project directory receiving the configuration file.
        force: Overwrite an existing ``vno.toml``.
        cli_overrides: Values layered over the packaged defaults.

    Returns:
        The rendered configuration and the resolved project paths.

    Raises:
        ProjectConfigExistsError: If ``vno.toml`` exists and ``force`` is off.
    """

    config = load_config(
        defaults=load_packaged_defaults(),
        cli_overrides=cli_overrides,
    )
    paths = resolve_project(root_override=root, settings=config.build)

    if paths.config_file.exists() and not force:
        raise ProjectConfigExistsError(str(paths.config_file))

    paths.root.mkdir(parents=True, exist_ok=True)
    paths.config_file.write_text(render_user_config(config), encoding="utf-8")
    return config, paths


__all__ = ["ProjectConfigExistsError", "init_project"]
