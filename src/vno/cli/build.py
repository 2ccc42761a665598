"""Helpers for the ``vno build`` command."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from vno.compiler import BuildResult, CompilerService
from vno.core.config import (
    USER_CONFIG_FILENAME,
    VnoConfig,
    env_overrides,
    load_config,
    load_packaged_defaults,
    read_user_config,
)
from vno.core.logging import Logger
from vno.core.paths import ProjectPaths, reset_output_dir, resolve_project


def build_cli_overrides(
    *,
    label: str | None = None,
    entry: str | None = None,
    output_dir: str | None = None,
    output_file: str | None = None,
    runtime: str | None = None,
    clean: bool | None = None,
    log_level: str | None = None,
) -> dict[str, Any]:
    """Translate CLI flags into a config layer, skipping unset values.

    Example:
        >>> build_cli_overrides(label="Main", clean=False)
        {'build': {'root_label': 'Main', 'clean': False}}
    """

    build: dict[str, Any] = {}
    for key, value in (
        ("root_label", label),
        ("entry", entry),
        ("output_dir", output_dir),
        ("output_file", output_file),
        ("runtime", runtime),
        ("clean", clean),
    ):
        if value is not None:
            build[key] = value

    overrides: dict[str, Any] = {}
    if log_level:
        overrides["log_level"] = log_level
    if build:
        overrides["build"] = build
    return overrides


def load_project_config(
    *,
    root: Path,
    config_file: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> VnoConfig:
    """Load defaults, ``vno.toml``, ``VNO_*`` variables and CLI flags."""

    user_path = config_file or root / USER_CONFIG_FILENAME
    return load_config(
        defaults=load_packaged_defaults(),
        user_config=read_user_config(user_path),
        env_config=env_overrides(os.environ if environ is None else environ),
        cli_overrides=cli_overrides,
    )


def run_build(
    *,
    config: VnoConfig,
    paths: ProjectPaths | None = None,
    root: Path | None = None,
    logger: Logger | None = None,
) -> BuildResult:
    """Reset the output directory when configured, then compile the project."""

    paths = paths or resolve_project(root_override=root, settings=config.build)

    if config.build.clean:
        reset_output_dir(paths)

    service = CompilerService(
        project_root=paths.root,
        settings=config.build,
        logger=logger,
    )
    return service.compile(
        path=paths.entry_path(config.build.entry),
        output_dir=paths.output_dir,
    )


__all__ = ["build_cli_overrides", "load_project_config", "run_build"]
