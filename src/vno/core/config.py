"""Configuration models and loaders for :mod:`vno`."""

from __future__ import annotations

import os
from collections.abc import Mapping as MappingABC
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any, Mapping

import tomllib
import tomlkit
from pydantic import BaseModel, Field, field_validator, model_validator

from vno.resources import get_resource

SECTION_NAMES: tuple[str, ...] = ("template", "script", "style")

DEFAULTS_RESOURCE_NAME = "vno.defaults.toml"
USER_CONFIG_FILENAME = "vno.toml"

_ENV_KEYS: Mapping[str, tuple[str, ...]] = {
    "VNO_LOG_LEVEL": ("log_level",),
    "VNO_OUTPUT_DIR": ("build", "output_dir"),
    "VNO_ROOT_LABEL": ("build", "root_label"),
}


class BuildSettings(BaseModel):
    """Compiler settings applied to a single build invocation."""

    root_label: str = Field(
        default="App",
        description="Label bound to the entry component (root instance).",
    )
    entry: str = Field(
        default="App.vue",
        description="Entry component path relative to the project root.",
    )
    output_dir: str = Field(
        default="vno-build",
        description="Directory receiving the bundle, relative to the root.",
    )
    output_file: str = Field(
        default="build.js",
        description="Bundle file name written inside ``output_dir``.",
    )
    runtime: str = Field(
        default="Vue",
        description="Global identifier of the component runtime.",
    )
    clean: bool = Field(
        default=True,
        description="Whether the output directory is reset before a build.",
    )
    optional_sections: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Sections that may be absent from a component file.",
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("root_label", "entry", "output_dir", "output_file", "runtime")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value:
            raise ValueError("Build settings cannot be blank.")
        return value

    @field_validator("output_dir")
    @classmethod
    def _contain_output_dir(cls, value: str) -> str:
        if value.startswith("~") or PurePosixPath(value).is_absolute() or (
            PureWindowsPath(value).is_absolute()
        ):
            raise ValueError(
                f"output_dir must be relative to the project root: {value!r}"
            )
        normalized = os.path.normpath(value.replace("\\", "/"))
        if normalized == ".." or normalized.startswith("../"):
            raise ValueError(
                f"output_dir must stay inside the project root: {value!r}"
            )
        return value

    @field_validator("optional_sections")
    @classmethod
    def _validate_sections(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        normalized = tuple(dict.fromkeys(item.strip().lower() for item in value))
        unknown = sorted(set(normalized) - set(SECTION_NAMES))
        if unknown:
            raise ValueError(
                "Unknown component sections: " + ", ".join(unknown)
            )
        return normalized


class VnoConfig(BaseModel):
    """Root configuration for the :mod:`vno` compiler."""

    log_level: str = Field(
        default="INFO",
        description="Default logging level for the compiler runtime.",
    )
    build: BuildSettings = Field(
        default_factory=BuildSettings,
        description="Compiler settings for the build command.",
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @model_validator(mode="after")
    def _post_process(self) -> "VnoConfig":
        object.__setattr__(self, "log_level", self.log_level.upper())
        return self


def read_packaged_defaults_text() -> str:
    """Return the raw packaged defaults TOML content.

    Example:
        >>> read_packaged_defaults_text().startswith("#")
        True
    """

    resource = get_resource(DEFAULTS_RESOURCE_NAME)
    return resource.read_text(encoding="utf-8")


def load_packaged_defaults() -> dict[str, Any]:
    """Load the packaged defaults as a plain dictionary.

    Example:
        >>> load_packaged_defaults()["build"]["root_label"]
        'App'
    """

    return tomllib.loads(read_packaged_defaults_text())


def read_user_config(path: Path) -> dict[str, Any]:
    """Parse a project ``vno.toml``; a missing file yields an empty mapping."""

    if not path.exists():
        return {}
    with path.open("rb") as stream:
        return tomllib.load(stream)


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Translate ``VNO_*`` environment variables into a config layer.

    Example:
        >>> env_overrides({"VNO_OUTPUT_DIR": "dist"})
        {'build': {'output_dir': 'dist'}}
    """

    layer: dict[str, Any] = {}
    for variable, keys in _ENV_KEYS.items():
        value = environ.get(variable)
        if not value:
            continue
        target = layer
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value
    return layer


def _deep_merge(
    base: Mapping[str, Any],
    overlay: Mapping[str, Any],
) -> dict[str, Any]:
    """Recursively merge ``overlay`` into ``base`` returning a new dict."""

    merged: dict[str, Any] = dict(base)
    for key, value in overlay.items():
        if (
            key in merged
            and isinstance(merged[key], MappingABC)
            and isinstance(value, MappingABC)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    *,
    defaults: Mapping[str, Any],
    user_config: Mapping[str, Any] | None = None,
    env_config: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> VnoConfig:
    """Load configuration according to the precedence stack.

    Args:
        defaults: Packaged defaults shipped with the compiler.
        user_config: Parsed project ``vno.toml`` content.
        env_config: Settings derived from environment variables.
        cli_overrides: Settings supplied via CLI flags.

    Returns:
        A validated :class:`VnoConfig` instance.

    Raises:
        TypeError: If the ``build`` layer is not a table.
    """

    stack = dict(defaults)
    for layer in (user_config, env_config, cli_overrides):
        if layer:
            stack = _deep_merge(stack, layer)

    build_raw = stack.pop("build", None)
    if isinstance(build_raw, BuildSettings):
        build = build_raw
    elif isinstance(build_raw, MappingABC):
        build = BuildSettings(**build_raw)
    elif build_raw is None:
        build = BuildSettings()
    else:
        raise TypeError(f"Unsupported build configuration payload: {build_raw!r}")
    stack["build"] = build

    return VnoConfig(**stack)


def render_user_config(
    config: VnoConfig,
    *,
    include_comments: bool = True,
) -> str:
    """Render a ``vno.toml`` document for users to customize."""

    document = tomlkit.document()

    if include_comments:
        document.add(tomlkit.comment("Generated by vno init"))
        document.add(
            tomlkit.comment(
                "Precedence: CLI flags > env vars > vno.toml > defaults"
            )
        )
        document.add(tomlkit.comment("Environment overrides:"))
        for variable in _ENV_KEYS:
            document.add(tomlkit.comment(f"  {variable}"))
        document.add(tomlkit.nl())

    document["log_level"] = config.log_level

    build = config.build
    build_table = tomlkit.table()
    build_table["root_label"] = build.root_label
    build_table["entry"] = build.entry
    build_table["output_dir"] = build.output_dir
    build_table["output_file"] = build.output_file
    build_table["runtime"] = build.runtime
    build_table["clean"] = build.clean
    build_table["optional_sections"] = list(build.optional_sections)
    document["build"] = build_table

    return tomlkit.dumps(document)


__all__ = [
    "BuildSettings",
    "VnoConfig",
    "SECTION_NAMES",
    "DEFAULTS_RESOURCE_NAME",
    "USER_CONFIG_FILENAME",
    "env_overrides",
    "load_config",
    "load_packaged_defaults",
    "read_packaged_defaults_text",
    "read_user_config",
    "render_user_config",
]
